"""Bootcamp CRUD routes."""

import logging

from fastapi import APIRouter, Depends, Query, status

from api.dependencies import get_bootcamp_repo
from api.models import (
    BootcampCreateRequest,
    BootcampEnvelope,
    BootcampListResponse,
    BootcampResponse,
    BootcampUpdateRequest,
    EmptyDataResponse,
)
from api.security import authorize
from domain.model.user import ROLE_ADMIN, ROLE_PUBLISHER, User
from port.bootcamp_repository import BootcampRepository
from services import bootcamp_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/bootcamps", tags=["bootcamps"])

_publisher_or_admin = authorize(ROLE_PUBLISHER, ROLE_ADMIN)


@router.get("", response_model=BootcampListResponse)
def get_bootcamps(
    skip: int = Query(0, ge=0),
    limit: int = Query(25, ge=1, le=bootcamp_service.MAX_PAGE_SIZE),
    repo: BootcampRepository = Depends(get_bootcamp_repo),
):
    bootcamps, total = bootcamp_service.list_bootcamps(repo, skip=skip, limit=limit)
    return BootcampListResponse(
        count=len(bootcamps),
        total=total,
        skip=skip,
        limit=limit,
        data=[BootcampResponse.from_domain(b) for b in bootcamps],
    )


@router.get("/{bootcamp_id}", response_model=BootcampEnvelope)
def get_bootcamp(bootcamp_id: str, repo: BootcampRepository = Depends(get_bootcamp_repo)):
    bootcamp = bootcamp_service.get_bootcamp(repo, bootcamp_id)
    return BootcampEnvelope(data=BootcampResponse.from_domain(bootcamp))


@router.post("", response_model=BootcampEnvelope, status_code=status.HTTP_201_CREATED)
def create_bootcamp(
    body: BootcampCreateRequest,
    current_user: User = Depends(_publisher_or_admin),
    repo: BootcampRepository = Depends(get_bootcamp_repo),
):
    bootcamp = bootcamp_service.create_bootcamp(repo, current_user, body.model_dump())
    return BootcampEnvelope(data=BootcampResponse.from_domain(bootcamp))


@router.put("/{bootcamp_id}", response_model=BootcampEnvelope)
def update_bootcamp(
    bootcamp_id: str,
    body: BootcampUpdateRequest,
    current_user: User = Depends(_publisher_or_admin),
    repo: BootcampRepository = Depends(get_bootcamp_repo),
):
    fields = body.model_dump(exclude_unset=True, exclude_none=True)
    bootcamp = bootcamp_service.update_bootcamp(repo, current_user, bootcamp_id, fields)
    return BootcampEnvelope(data=BootcampResponse.from_domain(bootcamp))


@router.delete("/{bootcamp_id}", response_model=EmptyDataResponse)
def delete_bootcamp(
    bootcamp_id: str,
    current_user: User = Depends(_publisher_or_admin),
    repo: BootcampRepository = Depends(get_bootcamp_repo),
):
    bootcamp_service.delete_bootcamp(repo, current_user, bootcamp_id)
    return EmptyDataResponse()
