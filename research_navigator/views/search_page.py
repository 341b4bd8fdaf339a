import logging
from typing import Any, Dict, List, Optional

from research_navigator.config import settings
from research_navigator.core.debounce import Debouncer
from research_navigator.core.errors import NavigatorError, ValidationError
from research_navigator.core.session import SessionContext
from research_navigator.modules.papers.schemas import AdvancedSearchParams
from research_navigator.modules.papers.service import PaperSearchService
from research_navigator.modules.search_history.service import SearchHistoryService
from research_navigator.views.base import PageView, serialized
from research_navigator.views.notifications import Notifier

logger = logging.getLogger(__name__)


def history_filters(advanced: Optional[AdvancedSearchParams]) -> Dict[str, str]:
    if advanced is None:
        return {}
    filters = {}
    for name, value in advanced.to_query_params().items():
        filters[name] = ", ".join(value) if isinstance(value, list) else str(value)
    return filters


class SearchPage(PageView):
    """Home screen: free-text search with a debounced auto-search and an advanced form."""

    def __init__(
        self,
        session: SessionContext,
        search_service: PaperSearchService,
        notifier: Optional[Notifier] = None,
        history: Optional[SearchHistoryService] = None,
        debouncer: Optional[Debouncer] = None,
        record_history: Optional[bool] = None,
    ):
        super().__init__(session, notifier)
        self.search_service = search_service
        self.history = history
        self.debouncer = debouncer or Debouncer(settings.search_debounce_seconds)
        self.record_history = settings.record_search_history if record_history is None else record_history
        self.query = ""
        self.show_advanced = False
        self.advanced = AdvancedSearchParams()
        self.papers: List[Dict[str, Any]] = []
        self.loading = False
        self.error = ""
        self._generation = 0

    def on_query_input(self, text: str) -> None:
        """Each keystroke restarts the debounce timer"""
        self.query = text
        self.debouncer.schedule(self._auto_search)

    async def _auto_search(self) -> None:
        # not serialized: a query typed while a search is running still gets its own search
        if self.query.strip():
            await self._search()

    def toggle_advanced(self) -> bool:
        self.show_advanced = not self.show_advanced
        return self.show_advanced

    def set_advanced(self, **fields: Any) -> None:
        keywords = fields.get("keywords")
        if isinstance(keywords, str):
            fields["keywords"] = AdvancedSearchParams.parse_keywords(keywords)
        values = self.advanced.model_dump()
        values.update(fields)
        self.advanced = AdvancedSearchParams(**values)

    def reset_advanced(self) -> None:
        self.advanced = AdvancedSearchParams()

    @serialized
    async def search(self) -> None:
        await self._search()

    async def _search(self) -> None:
        self._generation += 1
        generation = self._generation
        query = self.query
        advanced = self.advanced if self.show_advanced else None
        self.loading = True
        self.error = ""
        try:
            result = await self.search_service.search(query, advanced)
        except ValidationError as e:
            if generation == self._generation:
                self.error = e.message
            return
        except NavigatorError as e:
            logger.error(f"Paper search failed: {e.message}")
            if generation == self._generation:
                self.notifier.error("Failed to fetch papers")
            return
        finally:
            if generation == self._generation:
                self.loading = False

        if generation != self._generation:
            logger.debug(f"Dropping results for superseded query {query!r}")
            return
        self.papers = result.data
        if self.record_history:
            await self._record(query, advanced)

    async def _record(self, query: str, advanced: Optional[AdvancedSearchParams]) -> None:
        user_id = self.session.user_id
        if self.history is None or user_id is None:
            return
        try:
            await self._remote(
                self.history.add_search_history, user_id, query, history_filters(advanced)
            )
        except NavigatorError:
            self.notifier.error("Failed to save search history")
