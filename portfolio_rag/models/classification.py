"""
Chunk classification schemas.

Heuristic content tags attached to every stored chunk.

Dependencies: pydantic
System role: Classification result types
"""

from enum import Enum

from pydantic import BaseModel, Field


class ContentType(str, Enum):
    """What kind of portfolio information a chunk describes."""

    SKILL = "skill"
    PROJECT = "project"
    EXPERIENCE = "experience"
    CONTACT = "contact"
    EDUCATION = "education"
    GENERAL = "general"


class Category(str, Enum):
    """Technology area a chunk belongs to."""

    BLOCKCHAIN = "blockchain"
    FRONTEND = "frontend"
    BACKEND = "backend"
    AI = "ai"
    DATABASE = "database"
    DEVOPS = "devops"
    GENERAL = "general"


class Importance(str, Enum):
    """Relative weight of a chunk for answering questions."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class Classification(BaseModel):
    """Classifier output for a single chunk."""

    content_type: ContentType = ContentType.GENERAL
    category: Category = Category.GENERAL
    importance: Importance = Importance.MEDIUM
    tags: list[str] = Field(default_factory=list)
