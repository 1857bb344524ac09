"""
Core Package - Hackathon Scoring Dashboard
hackboard/core/__init__.py

Core infrastructure: exceptions, admin password check. Import the
repository provider from hackboard.core.dependencies directly.
"""

from hackboard.core.exceptions import (
    BackendUnavailableException,
    DuplicateEntityException,
    EntityNotFoundException,
    RepositoryException,
    ValidationRejectedException,
)
from hackboard.core.security import verify_password

__all__ = [
    # Exceptions
    "BackendUnavailableException",
    "DuplicateEntityException",
    "EntityNotFoundException",
    "RepositoryException",
    "ValidationRejectedException",
    # Security
    "verify_password",
]
