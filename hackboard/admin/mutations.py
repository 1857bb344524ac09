"""
Admin Mutations - Hackathon Scoring Dashboard
hackboard/admin/mutations.py

Edits to a hackathon dataset. Every function takes a HackathonData and
returns a new one; the input is never modified, and invalid input raises
before anything changes.

Project.team_id is the ground truth for ownership. Team.projects is rebuilt
from it by reindex_team_projects() at the end of every structural edit.
"""

import math
import re
from typing import Any, Iterable, List, Optional, Union

from hackboard.core.exceptions import (
    DuplicateEntityException,
    EntityNotFoundException,
    ValidationRejectedException,
)
from hackboard.models.hackathon import (
    HackathonData,
    HackathonsList,
    Project,
    SpecialAward,
    Team,
)

SCORE_MIN = 0
SCORE_MAX = 5
DEFAULT_AWARD_EMOJI = "🏆"

EDITABLE_HACKATHON_FIELDS = {"name", "date", "description", "emoji", "results_published"}

_WHITESPACE_RE = re.compile(r"\s+")
_INVALID_ID_CHARS_RE = re.compile(r"[^a-z0-9-]")


# Id derivation


def award_id_from_name(name: str) -> str:
    """'Best UI Design' -> 'best-ui-design'."""
    return _WHITESPACE_RE.sub("-", name.strip().lower())


def slug_id(name: str) -> str:
    """Like award_id_from_name, also dropping anything outside [a-z0-9-]."""
    return _INVALID_ID_CHARS_RE.sub("", award_id_from_name(name))


# Helpers


def _copy(data: HackathonData) -> HackathonData:
    return data.model_copy(deep=True)


def _require_text(value: Any, field: str) -> str:
    if not isinstance(value, str):
        raise ValidationRejectedException(f"{field} must be text")
    return value


def _require_name(value: Any, field: str) -> str:
    text = _require_text(value, field).strip()
    if not text:
        raise ValidationRejectedException(f"{field} cannot be empty")
    return text


def _project(data: HackathonData, project_id: str) -> Project:
    project = data.find_project(project_id)
    if project is None:
        raise EntityNotFoundException("Project", project_id)
    return project


def _team(data: HackathonData, team_id: str) -> Team:
    team = data.find_team(team_id)
    if team is None:
        raise EntityNotFoundException("Team", team_id)
    return team


def _award(data: HackathonData, award_id: str) -> SpecialAward:
    award = data.find_award(award_id)
    if award is None:
        raise EntityNotFoundException("SpecialAward", award_id)
    return award


def _clean_members(members: Union[str, Iterable[str]]) -> List[str]:
    if isinstance(members, str):
        members = members.split(",")
    return [m.strip() for m in members if isinstance(m, str) and m.strip()]


def clamp_score(value: Any) -> int:
    """
    Scores outside 0..5, or not numeric at all, become 0 (unscored).

    Numeric text is truncated before the range check, so "3.5" scores 3.
    """
    if isinstance(value, str):
        try:
            value = int(float(value.strip()))
        except (ValueError, OverflowError):
            return SCORE_MIN
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return SCORE_MIN
    if isinstance(value, float) and math.isnan(value):
        return SCORE_MIN
    if value < SCORE_MIN or value > SCORE_MAX:
        return SCORE_MIN
    return int(value)


# Integrity


def reindex_team_projects(data: HackathonData) -> HackathonData:
    """
    Rebuild every Team.projects from Project.team_id, in place.

    Ids already listed keep their order; newly owned ids are appended in
    collection order.
    """
    for team in data.teams:
        owned = [p.id for p in data.projects if p.team_id == team.id]
        owned_set = set(owned)
        kept: List[str] = []
        for project_id in team.projects:
            if project_id in owned_set and project_id not in kept:
                kept.append(project_id)
        team.projects = kept + [pid for pid in owned if pid not in kept]
    return data


def check_integrity(data: HackathonData) -> List[str]:
    """Human-readable list of referential problems; empty when consistent."""
    problems = []
    team_ids = {t.id for t in data.teams}
    award_ids = {a.id for a in data.config.special_awards}

    for project in data.projects:
        if project.team_id not in team_ids:
            problems.append(f"project {project.id} references missing team {project.team_id}")
        for award_id in project.special_awards:
            if award_id not in award_ids:
                problems.append(f"project {project.id} references missing award {award_id}")

    for team in data.teams:
        expected = {p.id for p in data.projects if p.team_id == team.id}
        if set(team.projects) != expected or len(team.projects) != len(expected):
            problems.append(f"team {team.id} lists {sorted(team.projects)}, owns {sorted(expected)}")

    return problems


# Project fields


def set_score(data: HackathonData, project_id: str, category_id: str, value: Any) -> HackathonData:
    _project(data, project_id)
    if data.find_category(category_id) is None:
        raise EntityNotFoundException("Category", category_id)

    updated = _copy(data)
    project = updated.find_project(project_id)
    project.scores = {**project.scores, category_id: clamp_score(value)}
    return updated


def set_description(data: HackathonData, project_id: str, description: str) -> HackathonData:
    _require_text(description, "Description")
    _project(data, project_id)
    updated = _copy(data)
    updated.find_project(project_id).description = description
    return updated


def set_judges_notes(data: HackathonData, project_id: str, judges_notes: str) -> HackathonData:
    _require_text(judges_notes, "Judges notes")
    _project(data, project_id)
    updated = _copy(data)
    updated.find_project(project_id).judges_notes = judges_notes
    return updated


def set_title(data: HackathonData, project_id: str, title: str) -> HackathonData:
    _require_text(title, "Title")
    _project(data, project_id)
    updated = _copy(data)
    updated.find_project(project_id).title = title
    return updated


# Special awards


def toggle_award(data: HackathonData, project_id: str, award_id: str) -> HackathonData:
    """
    Add the award if the project lacks it, remove it otherwise. Only
    configured awards can be added; a stale id can always be removed.
    """
    project = _project(data, project_id)
    if award_id not in project.special_awards:
        _award(data, award_id)

    updated = _copy(data)
    project = updated.find_project(project_id)
    if award_id in project.special_awards:
        project.special_awards = [a for a in project.special_awards if a != award_id]
    else:
        project.special_awards = project.special_awards + [award_id]
    return updated


def add_award(data: HackathonData, name: str, emoji: str = DEFAULT_AWARD_EMOJI) -> HackathonData:
    name = _require_name(name, "Award name")
    award_id = award_id_from_name(name)
    if data.find_award(award_id) is not None:
        raise DuplicateEntityException("SpecialAward", award_id)

    updated = _copy(data)
    updated.config.special_awards.append(
        SpecialAward(id=award_id, name=name, emoji=emoji or DEFAULT_AWARD_EMOJI)
    )
    return updated


def update_award(data: HackathonData, award_id: str, name: str, emoji: str) -> HackathonData:
    _require_text(name, "Award name")
    _require_text(emoji, "Award emoji")
    _award(data, award_id)
    updated = _copy(data)
    award = updated.find_award(award_id)
    award.name = name
    award.emoji = emoji
    return updated


def delete_award(data: HackathonData, award_id: str) -> HackathonData:
    """Remove the award from config and from every project holding it."""
    _award(data, award_id)
    updated = _copy(data)
    updated.config.special_awards = [a for a in updated.config.special_awards if a.id != award_id]
    for project in updated.projects:
        if award_id in project.special_awards:
            project.special_awards = [a for a in project.special_awards if a != award_id]
    return updated


# Teams


def add_team(data: HackathonData, name: str, members: Union[str, Iterable[str]] = ()) -> HackathonData:
    name = _require_name(name, "Team name")
    team_id = slug_id(name)
    if not team_id:
        raise ValidationRejectedException(f"Team name {name!r} does not produce a valid id")
    if data.find_team(team_id) is not None:
        raise DuplicateEntityException("Team", team_id)

    updated = _copy(data)
    updated.teams.append(Team(id=team_id, name=name, members=_clean_members(members), projects=[]))
    return reindex_team_projects(updated)


def update_team(data: HackathonData, team_id: str, name: str, members: Union[str, Iterable[str]]) -> HackathonData:
    _require_text(name, "Team name")
    _team(data, team_id)
    updated = _copy(data)
    team = updated.find_team(team_id)
    team.name = name
    team.members = _clean_members(members)
    return updated


def delete_team(data: HackathonData, team_id: str) -> HackathonData:
    """Remove the team and every project it owns."""
    _team(data, team_id)
    updated = _copy(data)
    updated.teams = [t for t in updated.teams if t.id != team_id]
    updated.projects = [p for p in updated.projects if p.team_id != team_id]
    return reindex_team_projects(updated)


# Projects


def add_project(data: HackathonData, title: str, team_id: Optional[str]) -> HackathonData:
    title = _require_name(title, "Project title")
    if not team_id:
        raise ValidationRejectedException("Select a team for the project")
    if data.find_team(team_id) is None:
        raise ValidationRejectedException(f"Team {team_id} does not exist")

    project_id = slug_id(title)
    if not project_id:
        raise ValidationRejectedException(f"Project title {title!r} does not produce a valid id")
    if data.find_project(project_id) is not None:
        raise DuplicateEntityException("Project", project_id)

    updated = _copy(data)
    updated.projects.append(
        Project(
            id=project_id,
            team_id=team_id,
            title=title,
            description="",
            judges_notes="",
            images=[],
            links=[],
            scores={cid: 0 for cid in updated.category_ids()},
            special_awards=[],
        )
    )
    return reindex_team_projects(updated)


def delete_project(data: HackathonData, project_id: str) -> HackathonData:
    _project(data, project_id)
    updated = _copy(data)
    updated.projects = [p for p in updated.projects if p.id != project_id]
    return reindex_team_projects(updated)


def reassign_project_team(data: HackathonData, project_id: str, new_team_id: str) -> HackathonData:
    """Move a project to another team; both teams' lists follow."""
    project = _project(data, project_id)
    if data.find_team(new_team_id) is None:
        raise ValidationRejectedException(f"Team {new_team_id} does not exist")
    if project.team_id == new_team_id:
        return _copy(data)

    updated = _copy(data)
    updated.find_project(project_id).team_id = new_team_id
    return reindex_team_projects(updated)


# Categories


def set_category_weight(data: HackathonData, category_id: str, weight: float) -> HackathonData:
    if isinstance(weight, bool) or not isinstance(weight, (int, float)) or not math.isfinite(weight):
        raise ValidationRejectedException("Weight must be a finite number")
    if weight < 0:
        raise ValidationRejectedException("Weight cannot be negative")
    if data.find_category(category_id) is None:
        raise EntityNotFoundException("Category", category_id)

    updated = _copy(data)
    updated.find_category(category_id).weight = float(weight)
    return updated


# Registry


def update_hackathon_info(registry: HackathonsList, hackathon_id: str, **fields: Any) -> HackathonsList:
    """Replace editable fields on one registry entry."""
    unknown = set(fields) - EDITABLE_HACKATHON_FIELDS
    if unknown:
        raise ValidationRejectedException(f"Cannot edit field(s): {', '.join(sorted(unknown))}")
    if registry.find(hackathon_id) is None:
        raise EntityNotFoundException("Hackathon", hackathon_id)

    updated = registry.model_copy(deep=True)
    info = updated.find(hackathon_id)
    for field, value in fields.items():
        if field == "results_published":
            if not isinstance(value, bool):
                raise ValidationRejectedException("results_published must be true or false")
        else:
            _require_text(value, field)
        setattr(info, field, value)
    return updated
