"""Read-only endpoints for the portfolio data set."""

import logging
from typing import Any

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from app.models.portfolio import Portfolio, SectionNotFoundResponse, SkillsSummary
from app.services.portfolio_service import (
    PortfolioSectionNotFoundError,
    portfolio_service,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "",
    response_model=Portfolio,
    status_code=status.HTTP_200_OK,
    summary="Get the full portfolio",
)
async def get_portfolio() -> Any:
    return portfolio_service.get_portfolio()


@router.get(
    "/skills",
    response_model=SkillsSummary,
    status_code=status.HTTP_200_OK,
    summary="Get skills",
    description="Skills grouped as programmingLanguages, frameworks, databases and tools.",
)
async def get_skills() -> SkillsSummary:
    return portfolio_service.get_skills()


@router.get(
    "/{section}",
    status_code=status.HTTP_200_OK,
    summary="Get one portfolio section",
    description="Return a single top-level section such as personal, education or projects.",
    responses={404: {"model": SectionNotFoundResponse}},
)
async def get_portfolio_section(section: str) -> Any:
    """Return the requested section, or 404 when it does not exist."""
    try:
        return portfolio_service.get_section(section)
    except PortfolioSectionNotFoundError as e:
        logger.info(f"Unknown portfolio section requested: {section}")
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"message": str(e)},
        )
