"""Data models for the portfolio API.

This module contains Pydantic models that describe the static portfolio data
set and the shapes returned by the portfolio endpoints. JSON keys are
camelCase to match what the front-end consumes.
"""

from typing import List, Optional
from typing_extensions import Annotated
from pydantic import BaseModel, Field, ConfigDict
from pydantic.alias_generators import to_camel


class PortfolioModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PersonalInfo(PortfolioModel):
    name: str
    title: Optional[str] = None
    summary: Optional[str] = None
    location: Optional[str] = None
    email: str
    phone: Optional[str] = None
    linkedin: Optional[str] = None
    github: Optional[str] = None


class Education(PortfolioModel):
    degree: str
    institution: str
    location: Optional[str] = None
    period: Optional[str] = None
    cgpa: Optional[str] = None


class Experience(PortfolioModel):
    title: str
    company: str
    location: Optional[str] = None
    period: Optional[str] = None
    description: Optional[str] = None


class SkillGroups(PortfolioModel):
    """Skill groupings as stored in the data set."""
    programming_languages: Annotated[List[str], Field(default_factory=list)]
    frameworks_libraries: Annotated[List[str], Field(default_factory=list)]
    frontend: Annotated[List[str], Field(default_factory=list)]
    databases: Annotated[List[str], Field(default_factory=list)]
    tools_platforms: Annotated[List[str], Field(default_factory=list)]
    fundamentals: Annotated[List[str], Field(default_factory=list)]


class SkillsSummary(PortfolioModel):
    """Fixed four-key skills shape served by ``GET /api/portfolio/skills``."""
    programming_languages: List[str]
    frameworks: List[str]
    databases: List[str]
    tools: List[str]


class Project(PortfolioModel):
    title: str
    category: Optional[str] = None
    description: str
    technologies: Annotated[List[str], Field(default_factory=list)]
    image_url: Optional[str] = None
    live_url: Optional[str] = None
    github_url: Optional[str] = None


class Portfolio(PortfolioModel):
    """The complete portfolio record.

    Attributes:
        personal: Biography and contact details
        education: Education history, most recent first
        experience: Work experience, most recent first
        skills: Skill groupings
        projects: Showcase projects
        achievements: Certifications and courses
        honors: Awards and recognitions
    """
    personal: PersonalInfo
    education: List[Education]
    experience: List[Experience]
    skills: SkillGroups
    projects: List[Project]
    achievements: List[str]
    honors: List[str]


class SectionNotFoundResponse(BaseModel):
    message: str
