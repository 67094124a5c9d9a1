"""
PortfolioService Module

Read-only access to the static portfolio data set. The data is loaded and
validated once when the service is created and never mutated afterwards.
"""

import json
import logging
from typing import Any, Dict, List

from app.core.config import settings
from app.models.portfolio import Portfolio, SkillsSummary

logger = logging.getLogger(__name__)


class PortfolioSectionNotFoundError(KeyError):
    """Raised when a portfolio section name does not exist."""

    def __init__(self, section: str):
        super().__init__(section)
        self.section = section

    def __str__(self) -> str:
        return f"Section '{self.section}' not found"


class PortfolioService:
    """Service exposing the portfolio record and its sections."""

    def __init__(self, portfolio: Portfolio):
        self.portfolio = portfolio
        self._data: Dict[str, Any] = portfolio.model_dump(mode="json", by_alias=True)

    @classmethod
    def from_file(cls, path: str) -> "PortfolioService":
        """Load and validate the portfolio data set from a JSON file.

        Args:
            path: Location of the JSON data file

        Returns:
            A PortfolioService serving the file's contents

        Raises:
            OSError: If the file cannot be read
            pydantic.ValidationError: If the data does not match the Portfolio model
        """
        with open(path, "r", encoding="utf-8") as file:
            raw = json.load(file)

        portfolio = Portfolio.model_validate(raw)
        logger.info(
            f"Loaded portfolio data from {path}: "
            f"{len(portfolio.projects)} projects, {len(portfolio.experience)} experience entries"
        )
        return cls(portfolio)

    @property
    def sections(self) -> List[str]:
        return list(self._data.keys())

    def get_portfolio(self) -> Dict[str, Any]:
        return self._data

    def get_section(self, section: str) -> Any:
        """Return one top-level section of the portfolio.

        Raises:
            PortfolioSectionNotFoundError: If the section does not exist
        """
        if section not in self._data:
            raise PortfolioSectionNotFoundError(section)
        return self._data[section]

    def get_skills(self) -> SkillsSummary:
        """Recombine the stored skill groupings into the four-key summary.

        Frameworks include front-end technologies; tools include
        fundamentals.
        """
        groups = self.portfolio.skills
        return SkillsSummary(
            programming_languages=list(groups.programming_languages),
            frameworks=groups.frameworks_libraries + groups.frontend,
            databases=list(groups.databases),
            tools=groups.tools_platforms + groups.fundamentals,
        )


portfolio_service = PortfolioService.from_file(settings.PORTFOLIO_DATA_FILE)
