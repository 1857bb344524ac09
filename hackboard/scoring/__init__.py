"""
Scoring Package - Hackathon Scoring Dashboard
hackboard/scoring/__init__.py

Score obfuscation and weighted aggregation. Import the submodules directly:
hackboard.models depends on obfuscation, and aggregator depends on models.
"""
