"""
Custom Exceptions - Hackathon Scoring Dashboard
hackboard/core/exceptions.py

Exception classes for storage, repository and admin operations.
"""


class RepositoryException(Exception):
    """Base exception for repository operations."""

    pass


class EntityNotFoundException(RepositoryException):
    """Entity not found in the registry or in a loaded dataset."""

    def __init__(self, entity_type: str, entity_id: str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with ID {entity_id} not found")


class DuplicateEntityException(RepositoryException):
    """Derived id collides with an existing entity."""

    def __init__(self, entity_type: str, entity_id: str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        self.message = f"{entity_type} with ID {entity_id} already exists"
        super().__init__(self.message)


class BackendUnavailableException(RepositoryException):
    """Storage backend connection or I/O failure."""

    def __init__(self, message: str = "Storage backend unavailable"):
        self.message = message
        super().__init__(message)


class ValidationRejectedException(RepositoryException):
    """Malformed admin input, rejected before any mutation is applied."""

    def __init__(self, message: str = "Invalid input"):
        self.message = message
        super().__init__(message)
