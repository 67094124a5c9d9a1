"""Contact form models for the portfolio API.

This module contains the Pydantic models for contact form functionality.
"""

from typing import Any, List, Optional
from typing_extensions import Annotated
from pydantic import BaseModel, Field, ConfigDict, field_validator


class ContactFormRequest(BaseModel):
    """Raw contact form payload as sent by the browser.

    Presence, format and length rules are enforced by the contact pipeline,
    not here, so that rejections carry the pipeline's error messages.

    Attributes:
        name: Name of the person sending the message
        email: Address replies should go to
        subject: Subject line of the message
        message: Message body
    """
    name: Annotated[Optional[str], Field(None, description="Name of the person sending the message")]
    email: Annotated[Optional[str], Field(None, description="Address replies should go to")]
    subject: Annotated[Optional[str], Field(None, description="Subject line of the message")]
    message: Annotated[Optional[str], Field(None, description="Message body")]

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @field_validator("name", "email", "subject", "message", mode="before")
    @classmethod
    def coerce_to_text(cls, value: Any) -> Optional[str]:
        if value is None or isinstance(value, str):
            return value
        if isinstance(value, (dict, list)):
            return ""
        return str(value)


class ContactSubmission(BaseModel):
    """A sanitized, validated contact form submission.

    Attributes:
        name: Trimmed sender name
        email: Trimmed sender email address
        subject: Trimmed subject line
        message: Trimmed message body
        source_address: Network address the submission came from
    """
    name: str
    email: str
    subject: str
    message: str
    source_address: Optional[str] = None


class ContactFormResponse(BaseModel):
    """Response model for accepted contact form submissions.

    Attributes:
        success: Whether the contact form was submitted successfully
        message: Acknowledgement shown to the user
    """
    success: bool = Field(..., description="Whether the contact form was submitted successfully")
    message: str = Field(..., description="Acknowledgement shown to the user")


class ContactErrorResponse(BaseModel):
    error: str = Field(..., description="Reason the submission was rejected")


class ContactInfo(BaseModel):
    """Public contact details shown on the contact page."""
    email: str
    phone: Optional[str] = None
    location: Optional[str] = None
    linkedin: Optional[str] = None
    github: Optional[str] = None
    availability: str


class OutboundEmail(BaseModel):
    """Email message handed to the mail transport.

    Attributes:
        sender: Mail account identity used in the From header
        sender_name: Display name for the From header
        recipients: Destination mailboxes
        reply_to: Address replies should go to
        subject: Subject line
        text: Plain-text rendering
        html: HTML rendering
    """
    sender: Optional[str] = None
    sender_name: Optional[str] = None
    recipients: List[str] = Field(default_factory=list)
    reply_to: Optional[str] = None
    subject: str
    text: str
    html: str
