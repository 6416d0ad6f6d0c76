"""
Repository layer for Sitecraft.

All SQL lives here and ONLY here. No database access outside this module.
An empty DATABASE_URL selects the in-memory implementations.
"""

from functools import cache

from backend.config import settings
from backend.repos.ai_content_repo import AIContentRepo, MemoryAIContentRepo, PostgresAIContentRepo
from backend.repos.project_repo import MemoryProjectRepo, PostgresProjectRepo, ProjectRepo

__all__ = [
    "ProjectRepo",
    "MemoryProjectRepo",
    "PostgresProjectRepo",
    "AIContentRepo",
    "MemoryAIContentRepo",
    "PostgresAIContentRepo",
    "get_project_repo",
    "get_ai_content_repo",
]


@cache
def get_project_repo() -> ProjectRepo:
    """Process-wide project repository, shared by routes and services."""
    return MemoryProjectRepo() if settings.USE_MEMORY_STORAGE else PostgresProjectRepo()


@cache
def get_ai_content_repo() -> AIContentRepo:
    return MemoryAIContentRepo() if settings.USE_MEMORY_STORAGE else PostgresAIContentRepo()
