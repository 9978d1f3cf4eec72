"""Outbound mail seam. Delivery itself lives outside this service."""

import logging

logger = logging.getLogger(__name__)


class LoggingMailer:
    """Hands the reset link to the log pipeline instead of an SMTP relay."""

    async def send_password_reset(self, email: str, reset_url: str) -> None:
        logger.info(
            "password_reset_email",
            extra={"to": email, "reset_url": reset_url},
        )
