import logging
from typing import Optional

from clubmanager.config import config

logger = logging.getLogger(__name__)


class EmailDeliveryError(Exception):
    """Raised by an email sender when a message could not be handed off."""
    pass


class EmailSender:
    """
    Outgoing email collaborator. This implementation only writes the message
    to the log; a delivering sender subclasses it and overrides ``send``.
    """

    def __init__(self, sender_address: Optional[str] = None):
        self.sender_address = sender_address or config.EMAIL_FROM

    def send(self, to: str, subject: str, body: str) -> None:
        if not to:
            raise EmailDeliveryError("No recipient address")
        logger.info(f"Email from {self.sender_address} to {to}: {subject}")
        logger.debug(body)


def absence_alert_message(athlete_name: str, absence_count: int, window_days: int) -> tuple[str, str]:
    subject = f"Absence notice: {athlete_name}"
    body = (
        f"{athlete_name} has missed {absence_count} training sessions without notice "
        f"in the last {window_days} days.\n\n"
        f"Please cancel sessions in advance when you cannot attend."
    )
    return subject, body
