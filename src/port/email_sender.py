from typing import Protocol


class EmailSender(Protocol):
    """Port for outbound email delivery."""
    def send(self, to: str, subject: str, message: str) -> None:
        """Send a plain-text email. Raise EmailDeliveryError on failure."""
        ...
