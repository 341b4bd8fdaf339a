from typing import Any, Dict, Optional

from pydantic import ValidationError as PydanticValidationError

from research_navigator.core.errors import NavigatorError
from research_navigator.core.session import SessionContext
from research_navigator.modules.profiles.schemas import ProfileResponse, ProfileUpdate
from research_navigator.modules.profiles.service import ProfileService
from research_navigator.views.base import PageView, serialized
from research_navigator.views.notifications import Notifier

EDITABLE_FIELDS = ("name", "phone", "dob", "currently_pursuing", "interests")


class ProfileEditor(PageView):
    """Settings screen. Loads with fetch-or-create; a new profile opens in edit mode."""

    def __init__(
        self,
        session: SessionContext,
        profiles: ProfileService,
        notifier: Optional[Notifier] = None
    ):
        super().__init__(session, notifier)
        self.profiles = profiles
        self.profile: Optional[ProfileResponse] = None
        self.draft: Dict[str, Any] = {}
        self.editing = False

    def clear(self) -> None:
        self.profile = None
        self.draft = {}
        self.editing = False

    @serialized
    async def load(self) -> None:
        user_id = self.session.user_id
        if user_id is None:
            return
        try:
            profile, created = await self._remote(self.profiles.get_or_create_profile, user_id)
        except NavigatorError:
            self.notifier.error("Failed to load profile")
            return
        self.profile = profile
        self.draft = {}
        if created:
            self.editing = True
            self.notifier.success("New profile created! Please fill in your details.")

    def start_editing(self) -> None:
        if self.profile is not None:
            self.editing = True

    def edit(self, **fields: Any) -> None:
        unknown = set(fields) - set(EDITABLE_FIELDS)
        if unknown:
            raise TypeError(f"Not editable: {', '.join(sorted(unknown))}")
        self.draft.update(fields)

    @serialized
    async def save(self) -> None:
        user_id = self.session.user_id
        if self.profile is None or user_id is None:
            return
        current = self.profile.model_dump()
        try:
            update = ProfileUpdate(**{f: self.draft.get(f, current[f]) for f in EDITABLE_FIELDS})
        except PydanticValidationError:
            self.notifier.error("Failed to update profile")
            return
        try:
            updated = await self._remote(self.profiles.update_profile, user_id, update)
        except NavigatorError:
            self.notifier.error("Failed to update profile")
            return
        self.profile = updated
        self.draft = {}
        self.editing = False
        self.notifier.success("Profile updated successfully")
