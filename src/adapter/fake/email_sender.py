"""In-memory EmailSender that records outgoing messages for tests."""

from dataclasses import dataclass

from domain.model.errors import EmailDeliveryError


@dataclass
class SentEmail:
    to: str
    subject: str
    message: str


class FakeEmailSender:
    def __init__(self, fail: bool = False):
        self.fail = fail
        self.outbox: list[SentEmail] = []

    def send(self, to: str, subject: str, message: str) -> None:
        if self.fail:
            raise EmailDeliveryError(f"Simulated delivery failure to {to}")
        self.outbox.append(SentEmail(to=to, subject=subject, message=message))
