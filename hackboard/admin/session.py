"""
Admin Session - Hackathon Scoring Dashboard
hackboard/admin/session.py

One operator's working copy of a hackathon. Edits stay local until save().
Destructive operations ask the confirm callable first; a declined
confirmation changes nothing.
"""

import logging
from typing import Any, Callable, Iterable, Optional, Union

from hackboard.admin import mutations
from hackboard.core.exceptions import RepositoryException
from hackboard.models.hackathon import HackathonData, HackathonsList, Project
from hackboard.repositories.hackathon_repository import HackathonRepository

logger = logging.getLogger(__name__)

ConfirmCallback = Callable[[str], bool]

MSG_SAVED = "✓ Changes saved successfully!"
MSG_SAVE_FAILED = "✗ Error saving changes"
MSG_SETTINGS_SAVED = "✓ Hackathon settings saved!"
MSG_SETTINGS_FAILED = "✗ Error saving settings"
MSG_UNSAVED = "Remember to save changes."


def _decline(message: str) -> bool:
    return False


class AdminSession:
    """
    Holds the dataset, the registry and the selected project for one operator.

    Args:
        repository: Repository used to load and save.
        hackathon_id: Hackathon being edited.
        confirm: Called with a warning before destructive operations. Defaults
            to declining, so nothing is deleted without an explicit callback.
    """

    def __init__(
        self,
        repository: HackathonRepository,
        hackathon_id: str,
        confirm: Optional[ConfirmCallback] = None,
    ):
        self.repository = repository
        self.hackathon_id = hackathon_id
        self.confirm = confirm or _decline
        self.data: HackathonData = repository.get_data(hackathon_id)
        self.registry: HackathonsList = repository.get_hackathons_list()
        self.selected_project_id: Optional[str] = None
        self.message = ""

    @property
    def selected_project(self) -> Optional[Project]:
        if self.selected_project_id is None:
            return None
        return self.data.find_project(self.selected_project_id)

    def select_project(self, project_id: Optional[str]) -> Optional[Project]:
        self.selected_project_id = project_id
        return self.selected_project

    def _apply(self, data: HackathonData, message: str = "") -> HackathonData:
        self.data = data
        if self.selected_project_id and data.find_project(self.selected_project_id) is None:
            self.selected_project_id = None
        if message:
            self.message = message
        return data

    # Project edits

    def set_score(self, project_id: str, category_id: str, value: Any) -> HackathonData:
        return self._apply(mutations.set_score(self.data, project_id, category_id, value))

    def set_description(self, project_id: str, description: str) -> HackathonData:
        return self._apply(mutations.set_description(self.data, project_id, description))

    def set_judges_notes(self, project_id: str, judges_notes: str) -> HackathonData:
        return self._apply(mutations.set_judges_notes(self.data, project_id, judges_notes))

    def set_title(self, project_id: str, title: str) -> HackathonData:
        return self._apply(mutations.set_title(self.data, project_id, title))

    def toggle_award(self, project_id: str, award_id: str) -> HackathonData:
        return self._apply(mutations.toggle_award(self.data, project_id, award_id))

    # Awards

    def add_award(self, name: str, emoji: str = mutations.DEFAULT_AWARD_EMOJI) -> HackathonData:
        return self._apply(mutations.add_award(self.data, name, emoji), f"✓ Award added! {MSG_UNSAVED}")

    def update_award(self, award_id: str, name: str, emoji: str) -> HackathonData:
        return self._apply(mutations.update_award(self.data, award_id, name, emoji))

    def delete_award(self, award_id: str) -> bool:
        if not self.confirm("Are you sure you want to delete this award? It will be removed from all projects."):
            return False
        self._apply(mutations.delete_award(self.data, award_id), f"✓ Award deleted! {MSG_UNSAVED}")
        return True

    # Teams

    def add_team(self, name: str, members: Union[str, Iterable[str]] = ()) -> HackathonData:
        return self._apply(mutations.add_team(self.data, name, members), f"✓ Team added! {MSG_UNSAVED}")

    def update_team(self, team_id: str, name: str, members: Union[str, Iterable[str]]) -> HackathonData:
        return self._apply(mutations.update_team(self.data, team_id, name, members))

    def delete_team(self, team_id: str) -> bool:
        owned = self.data.team_projects(team_id)
        if owned:
            warning = (
                f"This team has {len(owned)} project(s). Deleting the team will also delete "
                f"these projects. Are you sure?"
            )
        else:
            warning = "Are you sure you want to delete this team?"
        if not self.confirm(warning):
            return False
        self._apply(mutations.delete_team(self.data, team_id), f"✓ Team deleted! {MSG_UNSAVED}")
        return True

    # Projects

    def add_project(self, title: str, team_id: Optional[str]) -> HackathonData:
        return self._apply(mutations.add_project(self.data, title, team_id), f"✓ Project added! {MSG_UNSAVED}")

    def delete_project(self, project_id: str) -> bool:
        if not self.confirm("Are you sure you want to delete this project?"):
            return False
        self._apply(mutations.delete_project(self.data, project_id), f"✓ Project deleted! {MSG_UNSAVED}")
        return True

    def reassign_project_team(self, project_id: str, new_team_id: str) -> HackathonData:
        return self._apply(mutations.reassign_project_team(self.data, project_id, new_team_id))

    def set_category_weight(self, category_id: str, weight: float) -> HackathonData:
        return self._apply(mutations.set_category_weight(self.data, category_id, weight))

    # Registry

    def update_hackathon_info(self, **fields: Any) -> HackathonsList:
        self.registry = mutations.update_hackathon_info(self.registry, self.hackathon_id, **fields)
        return self.registry

    # Persistence

    def save(self) -> bool:
        """Write the whole dataset. Returns False (and sets the message) on failure."""
        try:
            self.repository.save_data(self.hackathon_id, self.data)
        except RepositoryException as e:
            logger.error(f"Failed to save hackathon {self.hackathon_id}: {e}")
            self.message = MSG_SAVE_FAILED
            return False
        self.message = MSG_SAVED
        return True

    def save_settings(self) -> bool:
        try:
            self.repository.save_hackathons_list(self.registry)
        except RepositoryException as e:
            logger.error(f"Failed to save hackathons list: {e}")
            self.message = MSG_SETTINGS_FAILED
            return False
        self.message = MSG_SETTINGS_SAVED
        return True
