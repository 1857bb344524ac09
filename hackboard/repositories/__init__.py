"""
Repositories Package - Hackathon Scoring Dashboard
hackboard/repositories/__init__.py

Data access layer over the storage backends.
"""

from hackboard.repositories.hackathon_repository import HackathonRepository

__all__ = [
    "HackathonRepository",
]
