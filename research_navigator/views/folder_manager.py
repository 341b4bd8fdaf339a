from typing import List, Optional

from research_navigator.core.errors import NavigatorError
from research_navigator.core.session import SessionContext
from research_navigator.modules.folders.schemas import FolderCreate, FolderResponse, FolderUpdate
from research_navigator.modules.folders.service import FolderService
from research_navigator.views.base import PageView, serialized
from research_navigator.views.notifications import Notifier


class FolderManager(PageView):
    """Tagged pages screen."""

    def __init__(
        self,
        session: SessionContext,
        folders: FolderService,
        notifier: Optional[Notifier] = None
    ):
        super().__init__(session, notifier)
        self.service = folders
        self.folders: List[FolderResponse] = []

    def clear(self) -> None:
        self.folders = []

    @serialized
    async def load(self) -> None:
        user_id = self.session.user_id
        if user_id is None:
            return
        try:
            self.folders = await self._remote(self.service.get_folders, user_id)
        except NavigatorError:
            self.notifier.error("Failed to load folders")

    @serialized
    async def create(self, name: str, description: str = "") -> Optional[FolderResponse]:
        user_id = self.session.user_id
        if user_id is None:
            return None
        try:
            folder = await self._remote(
                self.service.create_folder, user_id, FolderCreate(name=name, description=description)
            )
        except NavigatorError:
            self.notifier.error("Failed to create folder")
            return None
        self.folders = [folder] + self.folders
        self.notifier.success("Folder created successfully")
        return folder

    @serialized
    async def update(
        self,
        folder_id: str,
        name: Optional[str] = None,
        description: Optional[str] = None
    ) -> Optional[FolderResponse]:
        user_id = self.session.user_id
        if user_id is None:
            return None
        changes = {}
        if name is not None:
            changes["name"] = name
        if description is not None:
            changes["description"] = description
        try:
            folder = await self._remote(
                self.service.update_folder, user_id, folder_id, FolderUpdate(**changes)
            )
        except NavigatorError:
            self.notifier.error("Failed to update folder")
            return None
        self.folders = [folder if f.id == folder_id else f for f in self.folders]
        self.notifier.success("Folder updated successfully")
        return folder

    @serialized
    async def delete(self, folder_id: str) -> bool:
        user_id = self.session.user_id
        if user_id is None:
            return False
        try:
            await self._remote(self.service.delete_folder, user_id, folder_id)
        except NavigatorError:
            self.notifier.error("Failed to delete folder")
            return False
        self.folders = [f for f in self.folders if f.id != folder_id]
        self.notifier.success("Folder deleted successfully")
        return True
