from dataclasses import dataclass, field
from datetime import datetime

CAREERS = (
    'Web Development',
    'Mobile Development',
    'UI/UX',
    'Data Science',
    'Business',
    'Other',
)


@dataclass
class Bootcamp:
    """Domain model representing a bootcamp listing."""
    id: str
    name: str
    description: str
    user_id: str
    created_at: datetime
    updated_at: datetime
    website: str | None = None
    phone: str | None = None
    email: str | None = None
    address: str | None = None
    careers: list[str] = field(default_factory=list)
    average_cost: float | None = None
    housing: bool = False
    job_assistance: bool = False
    job_guarantee: bool = False
    accept_gi: bool = False
