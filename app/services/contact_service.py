"""
ContactService Module

The contact form pipeline: rate limiting, sanitization, validation and
delivery, applied in that order. Each stage can end the pipeline by raising
a ContactError, which the HTTP layer turns into a JSON error response.
"""

import logging
import re
from typing import Any, Dict, Optional, Protocol

from app.core.config import ContactPipelineConfig, settings
from app.models.contact import (
    ContactFormRequest,
    ContactFormResponse,
    ContactSubmission,
    OutboundEmail,
)
from app.services.mail_service import mail_service
from app.services.rate_limit_service import RateLimitStore, build_rate_limit_store

logger = logging.getLogger(__name__)

CONTACT_FIELDS = ("name", "email", "subject", "message")
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
MAX_NAME_LENGTH = 100
MAX_SUBJECT_LENGTH = 200
MAX_MESSAGE_LENGTH = 1000

SUCCESS_MESSAGE = "Thank you for your message! I will get back to you soon."


class ContactError(Exception):
    """Base class for contact pipeline rejections."""
    kind = "internal-error"
    status_code = 500
    default_message = "Failed to send message. Please try again later."

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ThrottledError(ContactError):
    kind = "throttled"
    status_code = 429
    default_message = "Too many contact form submissions, please try again later."

    def __init__(self, message: Optional[str] = None, retry_after_seconds: Optional[int] = None):
        super().__init__(message)
        self.retry_after_seconds = retry_after_seconds


class MissingFieldsError(ContactError):
    kind = "missing-fields"
    status_code = 400
    default_message = "All fields are required: name, email, subject, message"


class InvalidEmailError(ContactError):
    kind = "invalid-email"
    status_code = 400
    default_message = "Please provide a valid email address"


class InputTooLongError(ContactError):
    kind = "input-too-long"
    status_code = 400
    default_message = "Input length exceeds maximum allowed"


class DeliveryUnavailableError(ContactError):
    kind = "delivery-unavailable"
    status_code = 502
    default_message = "Email service temporarily unavailable. Please try again later."


class InternalContactError(ContactError):
    kind = "internal-error"
    status_code = 500


class MailTransport(Protocol):
    async def deliver(self, message: OutboundEmail) -> Dict[str, Any]: ...


class ContactEmailRenderer(Protocol):
    async def build_contact_email(
        self, submission: ContactSubmission, destination: str, sender: str
    ) -> OutboundEmail: ...


def parse_contact_payload(payload: Any) -> ContactFormRequest:
    """Build the raw form from a decoded request body.

    Anything other than a JSON object is treated as an empty form.
    """
    if isinstance(payload, ContactFormRequest):
        return payload
    return ContactFormRequest.model_validate(payload if isinstance(payload, dict) else {})


def text_length(value: str) -> int:
    """Length in UTF-16 code units, the unit browsers use for maxlength."""
    return len(value.encode("utf-16-le")) // 2


def sanitize_contact_fields(raw: ContactFormRequest) -> Dict[str, str]:
    """Trim the four contact fields, treating missing values as empty."""
    return {field: (getattr(raw, field) or "").strip() for field in CONTACT_FIELDS}


def validate_contact_fields(fields: Dict[str, str]) -> Dict[str, str]:
    """Check presence, email format and lengths of already trimmed fields.

    Args:
        fields: Mapping of the four contact fields

    Returns:
        The same mapping, unchanged

    Raises:
        MissingFieldsError: If any field is empty
        InvalidEmailError: If the email does not look like local@domain.tld
        InputTooLongError: If name, subject or message is too long
    """
    if not all(fields.get(field) for field in CONTACT_FIELDS):
        raise MissingFieldsError()

    if not EMAIL_PATTERN.match(fields["email"]):
        raise InvalidEmailError()

    if (
        text_length(fields["name"]) > MAX_NAME_LENGTH
        or text_length(fields["subject"]) > MAX_SUBJECT_LENGTH
        or text_length(fields["message"]) > MAX_MESSAGE_LENGTH
    ):
        raise InputTooLongError()

    return fields


class ContactService:
    """Contact form submission pipeline.

    Args:
        config: Delivery switches (credentials present, production mode, addresses)
        rate_limit_store: Counter store keyed by source address
        transport: Mail transport used when credentials are configured
        renderer: Builds the outbound text and HTML email for a submission
    """

    def __init__(
        self,
        config: ContactPipelineConfig,
        rate_limit_store: RateLimitStore,
        transport: MailTransport,
        renderer: ContactEmailRenderer,
    ):
        self.config = config
        self.rate_limit_store = rate_limit_store
        self.transport = transport
        self.renderer = renderer

    async def submit(self, raw: Any, source_address: str) -> ContactFormResponse:
        """
        Run a contact form submission through the pipeline.

        Args:
            raw: Untrusted form payload, either a ContactFormRequest or the
                decoded JSON body (None when the body was empty or unreadable)
            source_address: Caller address used for rate limiting

        Returns:
            ContactFormResponse acknowledging the message

        Raises:
            ContactError: A subclass describing why the submission was rejected
        """
        self._check_rate_limit(source_address)

        try:
            fields = validate_contact_fields(sanitize_contact_fields(parse_contact_payload(raw)))
            submission = ContactSubmission(**fields, source_address=source_address)
            await self._deliver(submission)
        except ContactError as e:
            logger.info(f"Contact submission from {source_address} rejected: {e.kind}")
            raise
        except Exception as e:
            logger.error(f"Contact form error for {source_address}: {str(e)}", exc_info=True)
            raise InternalContactError() from e

        logger.info(f"Contact submission from {source_address} accepted")
        return ContactFormResponse(success=True, message=SUCCESS_MESSAGE)

    def _check_rate_limit(self, source_address: str) -> None:
        result = self.rate_limit_store.hit(source_address)
        if not result.allowed:
            logger.warning(
                f"Rate limit exceeded for {source_address}: "
                f"{result.count} submissions, limit {result.limit}"
            )
            raise ThrottledError(retry_after_seconds=result.retry_after_seconds)

    async def _deliver(self, submission: ContactSubmission) -> None:
        message = await self.renderer.build_contact_email(
            submission,
            destination=self.config.destination_address,
            sender=self.config.sender_address,
        )

        if not self.config.has_credentials:
            logger.info("Contact form submission (email not configured):")
            logger.info(message.text)
            return

        try:
            result = await self.transport.deliver(message)
            if not result.get("status"):
                raise RuntimeError(result.get("message", "mail transport reported failure"))
        except Exception as e:
            logger.error(f"Email send failed: {str(e)}")
            if self.config.is_production:
                raise DeliveryUnavailableError() from e
            logger.warning("Dev fallback: logging message and returning success.")
            logger.info(message.text)
            return

        logger.info(f"Contact email for {submission.email} sent to {', '.join(message.recipients)}")


contact_service = ContactService(
    config=settings.contact_pipeline_config(),
    rate_limit_store=build_rate_limit_store(settings),
    transport=mail_service,
    renderer=mail_service,
)


def get_contact_service() -> ContactService:
    """FastAPI dependency returning the process-wide contact service."""
    return contact_service
