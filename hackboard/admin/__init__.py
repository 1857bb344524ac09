"""
Admin Package - Hackathon Scoring Dashboard
hackboard/admin/__init__.py

Dataset mutations and the operator session that drives them.
"""

from hackboard.admin.session import AdminSession

__all__ = [
    "AdminSession",
]
