"""Amazon SES email delivery."""

import logging
from typing import Any

from botocore.exceptions import BotoCoreError, ClientError

from common.errors import IntegrationError
from common.models import DeliveryResult

logger = logging.getLogger(__name__)

SERVICE = "ses"


class SesDeliverer:
    def __init__(self, client: Any, from_email: str) -> None:
        if not from_email:
            raise IntegrationError(SERVICE, "sender address (FROM_EMAIL) is not set")
        self.client = client
        self.from_email = from_email

    def send(
        self, recipients: list[str], subject: str, body: str, is_html: bool = True
    ) -> DeliveryResult:
        """Send one message addressed to all recipients."""
        if not recipients:
            raise ValueError("At least one recipient is required")

        logger.info("Sending email to %d recipients: %r", len(recipients), subject)
        body_part = {"Html" if is_html else "Text": {"Charset": "UTF-8", "Data": body}}
        try:
            response = self.client.send_email(
                Source=self.from_email,
                Destination={"ToAddresses": list(recipients)},
                Message={
                    "Subject": {"Charset": "UTF-8", "Data": subject},
                    "Body": body_part,
                },
            )
        except (BotoCoreError, ClientError) as e:
            logger.error("Error sending email via SES to %d recipients: %s", len(recipients), e)
            raise IntegrationError(SERVICE, f"send_email failed: {e}") from e

        message_id = response.get("MessageId") or "unknown"
        logger.info("Email sent (message_id=%s)", message_id)
        return DeliveryResult(message_id=message_id, recipient_count=len(recipients))
