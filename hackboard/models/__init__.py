from hackboard.models.hackathon import (
    Category,
    Config,
    EncodedScores,
    HackathonData,
    HackathonInfo,
    HackathonsList,
    Link,
    LiveScores,
    Project,
    SpecialAward,
    StoredHackathonData,
    StoredProject,
    StoredScores,
    Team,
    classify_scores,
)

__all__ = [
    "Category",
    "Config",
    "EncodedScores",
    "HackathonData",
    "HackathonInfo",
    "HackathonsList",
    "Link",
    "LiveScores",
    "Project",
    "SpecialAward",
    "StoredHackathonData",
    "StoredProject",
    "StoredScores",
    "Team",
    "classify_scores",
]
