"""Contact form endpoints for the portfolio API.

This module contains FastAPI routes for contact form submissions and the
public contact details shown next to the form.
"""

import logging
from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from app.core.config import settings
from app.models.contact import (
    ContactErrorResponse,
    ContactFormRequest,
    ContactFormResponse,
    ContactInfo,
)
from app.services.contact_service import (
    ContactError,
    ContactService,
    ThrottledError,
    get_contact_service,
)
from app.services.portfolio_service import portfolio_service
from app.utils.helper_functions import get_client_address, read_json_body

logger = logging.getLogger(__name__)

router = APIRouter()

AVAILABILITY = "Available for freelance projects and full-time opportunities"


@router.post(
    "",
    response_model=ContactFormResponse,
    status_code=status.HTTP_200_OK,
    summary="Submit contact form",
    description="Send a message through the portfolio contact form. Limited to 5 submissions per 15 minutes per address.",
    responses={
        400: {"model": ContactErrorResponse},
        429: {"model": ContactErrorResponse},
        500: {"model": ContactErrorResponse},
        502: {"model": ContactErrorResponse},
    },
    openapi_extra={
        "requestBody": {
            "required": False,
            "content": {"application/json": {"schema": ContactFormRequest.model_json_schema()}},
        }
    },
)
async def submit_contact_form(
    http_request: Request,
    contact_service: ContactService = Depends(get_contact_service),
):
    """
    Submit a contact form message.

    The body is read here rather than declared as a model so that empty or
    malformed bodies still reach the rate limiter and count against it.

    Args:
        http_request: FastAPI request object carrying the JSON body and the caller's address
        contact_service: The contact pipeline (injected)

    Returns:
        Confirmation response, or a JSON error body with the matching status code
    """
    source_address = get_client_address(http_request, settings.TRUST_PROXY_HEADERS)
    payload = await read_json_body(http_request)

    try:
        return await contact_service.submit(payload, source_address)
    except ContactError as e:
        headers = None
        if isinstance(e, ThrottledError) and e.retry_after_seconds:
            headers = {"Retry-After": str(e.retry_after_seconds)}
        return JSONResponse(
            status_code=e.status_code,
            content={"error": e.message},
            headers=headers,
        )


@router.get(
    "/info",
    response_model=ContactInfo,
    status_code=status.HTTP_200_OK,
    summary="Get contact information",
    description="Public contact details. Not rate limited.",
)
async def get_contact_info() -> ContactInfo:
    personal = portfolio_service.portfolio.personal
    return ContactInfo(
        email=personal.email,
        phone=personal.phone,
        location=personal.location,
        linkedin=personal.linkedin,
        github=personal.github,
        availability=AVAILABILITY,
    )
