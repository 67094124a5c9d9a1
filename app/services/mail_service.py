"""
MailService Module

This module renders contact form emails with Jinja2 and delivers them
through Amazon SES.
"""

import boto3
import os
import datetime
from jinja2 import Environment, FileSystemLoader, select_autoescape
from markupsafe import Markup, escape
from botocore.exceptions import BotoCoreError, ClientError
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formataddr
from fastapi.concurrency import run_in_threadpool
from app.core.config import settings
from app.models.contact import ContactSubmission, OutboundEmail
from typing import Dict, Any, List, Optional

import logging

logger = logging.getLogger(__name__)

CONTACT_SUBJECT_PREFIX = "Portfolio Contact: "


def nl2br(value: Any) -> Markup:
    """Escape a value and turn its newlines into <br> tags."""
    lines = str(value).replace("\r\n", "\n").split("\n")
    return Markup("<br>").join(escape(line) for line in lines)


# HTML templates are auto-escaped, plain-text ones are not
template_dir = os.path.join(os.path.dirname(os.path.dirname(__file__)), "templates")
jinja_env = Environment(
    loader=FileSystemLoader(template_dir),
    autoescape=select_autoescape(['html', 'xml']),
    enable_async=True
)
jinja_env.filters["nl2br"] = nl2br


class MailService:
    """Mail transport with template rendering capabilities."""

    def __init__(self, region_name: Optional[str] = None):
        self.region_name = region_name or settings.AWS_REGION
        self._ses_client = None

    @property
    def ses_client(self):
        if self._ses_client is None:
            self._ses_client = boto3.client(
                "ses",
                aws_access_key_id=settings.AWS_ACCESS_KEY_ID,
                aws_secret_access_key=settings.AWS_SECRET_ACCESS_KEY,
                region_name=self.region_name,
            )
        return self._ses_client

    async def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """
        Asynchronously render a Jinja template with the given context.

        Args:
            template_name: The name of the template file to render
            context: Dictionary of variables to pass to the template

        Returns:
            The rendered template as a string
        """
        try:
            template = jinja_env.get_template(template_name)
            return await template.render_async(**context)
        except Exception as e:
            logger.error(f"Error rendering template {template_name}: {str(e)}")
            raise ValueError(f"Error rendering template: {str(e)}")

    async def build_contact_email(
        self,
        submission: ContactSubmission,
        destination: Optional[str],
        sender: Optional[str],
    ) -> OutboundEmail:
        """
        Build the notification email for a contact form submission.

        Args:
            submission: The validated submission
            destination: Mailbox that should receive the message
            sender: Mail account identity used in the From header

        Returns:
            OutboundEmail with plain-text and HTML renderings
        """
        context = {
            "name": submission.name,
            "email": submission.email,
            "subject": submission.subject,
            "message": submission.message,
            "submission_time": datetime.datetime.now(datetime.timezone.utc).strftime(
                "%B %d, %Y at %I:%M %p UTC"
            ),
        }
        text = await self.render_template("contact_form_notification.txt", context)
        html = await self.render_template("contact_form_notification.html", context)

        # headers must stay on one line
        header_name = " ".join(submission.name.split())
        header_subject = " ".join(submission.subject.split())

        return OutboundEmail(
            sender=sender,
            sender_name=header_name,
            recipients=[destination] if destination else [],
            reply_to=submission.email,
            subject=f"{CONTACT_SUBJECT_PREFIX}{header_subject}",
            text=text,
            html=html,
        )

    async def deliver(self, message: OutboundEmail) -> Dict[str, Any]:
        """
        Deliver an outbound email without blocking the event loop.

        Returns:
            Dictionary containing the status and response from SES
        """
        return await run_in_threadpool(
            self.send_mail,
            sender=message.sender,
            sender_name=message.sender_name,
            recipients=message.recipients,
            title=message.subject,
            text=message.text,
            body=message.html,
            reply_to=message.reply_to,
        )

    def create_email_multipart_message(
        self,
        sender: str,
        sender_name: Optional[str],
        recipients: List[str],
        title: str,
        text: Optional[str] = None,
        body: Optional[str] = None,
        reply_to: Optional[str] = None,
    ) -> MIMEMultipart:
        """
        Creates a MIME multipart email message with optional plain text and HTML content.

        The method constructs a MIME message of type `multipart/alternative` if both `text` and `body`
        are provided (for clients that support plain text or HTML), otherwise it defaults to `multipart/mixed`.

        Args:
            sender (str): The sender's email address.
            sender_name (str, optional): Display name of the sender.
            recipients (list): List of primary recipient email addresses.
            title (str): Subject of the email.
            text (str, optional): Plain text version of the email body.
            body (str, optional): HTML version of the email body.
            reply_to (str, optional): Address replies should be sent to.

        Returns:
            MIMEMultipart: The constructed email message ready to be sent.
        """
        if text and body:
            content_subtype = "alternative"
        else:
            content_subtype = "mixed"

        message = MIMEMultipart(content_subtype)
        message["Subject"] = title

        # if sender_name is provided, the format will be 'Sender Name <email@example.com>'
        if sender_name is None:
            message["From"] = f"{sender}"
        else:
            message["From"] = formataddr((sender_name, sender))

        message["To"] = ", ".join(recipients)

        if reply_to:
            message["Reply-To"] = reply_to

        # Record the MIME types of both parts, the last part is preferred
        if text:
            message.attach(MIMEText(text, "plain", "utf-8"))

        if body:
            message.attach(MIMEText(body, "html", "utf-8"))

        return message

    def send_mail(
        self,
        sender: str,
        sender_name: Optional[str],
        recipients: List[str],
        title: str,
        text: Optional[str] = None,
        body: Optional[str] = None,
        reply_to: Optional[str] = None,
    ) -> dict:
        """
        Sends an email using AWS SES with optional plain text and HTML content.

        Constructs a multipart email using `create_email_multipart_message()` and sends it via Amazon SES.

        Returns:
            dict: A dictionary containing the status, message, SES message ID, and raw SES response.
                  If an error occurs, the message ID will be "undefined".
        """
        try:
            msg = self.create_email_multipart_message(
                sender, sender_name, recipients, title, text, body, reply_to
            )

            logger.info(f"Sending email to SES for {len(recipients)} recipient(s)")

            ses_response = self.ses_client.send_raw_email(
                Source=sender,
                Destinations=list(recipients),
                RawMessage={"Data": msg.as_string()},
            )

        except ClientError as e:
            logger.error(f"Failed to send mail with error: {str(e)}")
            return {
                "status": False,
                "message": e.response["Error"]["Message"],
                "message_id": "undefined",
                "response": e.response,
            }
        except BotoCoreError as e:
            logger.error(f"Failed to send mail with error: {str(e)}")
            return {
                "status": False,
                "message": str(e),
                "message_id": "undefined",
            }
        else:
            return {
                "status": True,
                "message": "Email Successfully Sent.",
                "message_id": ses_response["MessageId"],
                "response": ses_response,
            }


mail_service = MailService()
