"""
Hackathon Models - Hackathon Scoring Dashboard
hackboard/models/hackathon.py

Pydantic models for the registry and the per-hackathon dataset.

Attributes are snake_case in Python; persisted JSON uses the camelCase keys
(teamId, judgesNotes, specialAwards, resultsPublished, dataFile). Dump with
``by_alias=True`` to get the stored form.
"""

from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator
from pydantic.alias_generators import to_camel

from hackboard.scoring.obfuscation import DEFAULT_CATEGORY_IDS, decode_scores, encode_scores


class CamelModel(BaseModel):
    """Base model accepting both snake_case and camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


# Registry


class HackathonInfo(CamelModel):
    id: str = Field(..., min_length=1, description="Stable external key")
    name: str
    date: str = ""
    description: str = ""
    emoji: str = "🏆"
    results_published: bool = Field(default=False, description="Expose the top-3 ranking publicly")
    data_file: str = Field(..., min_length=1, description="Dataset file name inside the data directory")


class HackathonsList(CamelModel):
    hackathons: List[HackathonInfo] = Field(default_factory=list)

    def find(self, hackathon_id: str) -> Optional[HackathonInfo]:
        return next((h for h in self.hackathons if h.id == hackathon_id), None)


# Dataset


class Team(CamelModel):
    id: str
    name: str
    members: List[str] = Field(default_factory=list)
    projects: List[str] = Field(default_factory=list)


class Category(CamelModel):
    id: str
    label: str
    weight: float = Field(default=1.0, ge=0, allow_inf_nan=False)


class SpecialAward(CamelModel):
    id: str
    name: str
    emoji: str = "🏆"


class Link(CamelModel):
    label: str
    url: str


class Config(CamelModel):
    categories: List[Category] = Field(default_factory=list)
    special_awards: List[SpecialAward] = Field(default_factory=list)


class ProjectBase(CamelModel):
    id: str
    team_id: str
    title: str
    description: str = ""
    judges_notes: Optional[str] = None
    images: List[str] = Field(default_factory=list)
    links: List[Link] = Field(default_factory=list)
    special_awards: List[str] = Field(default_factory=list)


class Project(ProjectBase):
    """Project with live (decoded) scores."""

    scores: Dict[str, int] = Field(default_factory=dict)


class HackathonData(CamelModel):
    """Full mutable dataset for one hackathon, scores decoded."""

    teams: List[Team] = Field(default_factory=list)
    projects: List[Project] = Field(default_factory=list)
    config: Config = Field(default_factory=Config)

    def find_team(self, team_id: str) -> Optional[Team]:
        return next((t for t in self.teams if t.id == team_id), None)

    def find_project(self, project_id: str) -> Optional[Project]:
        return next((p for p in self.projects if p.id == project_id), None)

    def find_category(self, category_id: str) -> Optional[Category]:
        return next((c for c in self.config.categories if c.id == category_id), None)

    def find_award(self, award_id: str) -> Optional[SpecialAward]:
        return next((a for a in self.config.special_awards if a.id == award_id), None)

    def team_projects(self, team_id: str) -> List[Project]:
        """Projects owned by a team, derived from Project.team_id."""
        return [p for p in self.projects if p.team_id == team_id]

    def category_ids(self) -> List[str]:
        if self.config.categories:
            return [c.id for c in self.config.categories]
        return list(DEFAULT_CATEGORY_IDS)


# Stored form: scores are either the encoded string or a live object


class EncodedScores(BaseModel):
    kind: Literal["encoded"] = "encoded"
    text: str

    def to_live(self) -> Dict[str, int]:
        return decode_scores(self.text)


class LiveScores(BaseModel):
    kind: Literal["live"] = "live"
    values: Dict[str, int] = Field(default_factory=dict)

    def to_live(self) -> Dict[str, int]:
        return dict(self.values)


StoredScores = Union[EncodedScores, LiveScores]


def classify_scores(value: Any) -> Any:
    """Map a persisted ``scores`` value onto the tagged union."""
    if isinstance(value, (EncodedScores, LiveScores)):
        return value
    if isinstance(value, str):
        return EncodedScores(text=value)
    if isinstance(value, dict):
        return LiveScores(values=value)
    return value


class StoredProject(ProjectBase):
    scores: StoredScores = Field(default_factory=LiveScores)

    @field_validator("scores", mode="before")
    @classmethod
    def tag_scores(cls, value: Any) -> Any:
        return classify_scores(value)

    @field_serializer("scores")
    def untag_scores(self, scores: StoredScores) -> Union[str, Dict[str, int]]:
        if isinstance(scores, EncodedScores):
            return scores.text
        return scores.values

    def to_project(self) -> Project:
        fields = self.model_dump(exclude={"scores"})
        return Project(**fields, scores=self.scores.to_live())

    @classmethod
    def from_project(cls, project: Project, encode: bool) -> "StoredProject":
        fields = project.model_dump(exclude={"scores"})
        scores: StoredScores = (
            EncodedScores(text=encode_scores(project.scores))
            if encode
            else LiveScores(values=dict(project.scores))
        )
        return cls(**fields, scores=scores)


class StoredHackathonData(CamelModel):
    """Dataset as held by a storage backend."""

    teams: List[Team] = Field(default_factory=list)
    projects: List[StoredProject] = Field(default_factory=list)
    config: Config = Field(default_factory=Config)

    def decode(self) -> HackathonData:
        return HackathonData(
            teams=[t.model_copy(deep=True) for t in self.teams],
            projects=[p.to_project() for p in self.projects],
            config=self.config.model_copy(deep=True),
        )

    @classmethod
    def from_data(cls, data: HackathonData, encode: bool) -> "StoredHackathonData":
        return cls(
            teams=[t.model_copy(deep=True) for t in data.teams],
            projects=[StoredProject.from_project(p, encode) for p in data.projects],
            config=data.config.model_copy(deep=True),
        )
