"""Hackathon scoring dashboard: scoring engine, storage and admin mutations."""

__version__ = "1.0.0"
