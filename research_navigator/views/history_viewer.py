from datetime import datetime
from typing import List, Optional

from research_navigator.core.errors import NavigatorError
from research_navigator.core.session import SessionContext
from research_navigator.modules.search_history.schemas import SearchHistoryResponse
from research_navigator.modules.search_history.service import SearchHistoryService
from research_navigator.views.base import PageView, serialized
from research_navigator.views.notifications import Notifier


def format_timestamp(value: Optional[datetime]) -> str:
    if value is None:
        return ""
    return value.strftime("%B %d, %Y, %I:%M %p")


class HistoryViewer(PageView):
    def __init__(
        self,
        session: SessionContext,
        history: SearchHistoryService,
        notifier: Optional[Notifier] = None
    ):
        super().__init__(session, notifier)
        self.service = history
        self.entries: List[SearchHistoryResponse] = []

    def clear(self) -> None:
        self.entries = []

    @serialized
    async def load(self) -> None:
        user_id = self.session.user_id
        if user_id is None:
            return
        try:
            self.entries = await self._remote(self.service.get_search_history, user_id)
        except NavigatorError:
            self.notifier.error("Error fetching search history")
