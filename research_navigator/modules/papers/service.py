"""
Thin client for the external paper search API (Semantic Scholar graph API).

Results are returned as-is: no normalization, pagination or caching.
"""

import logging
from typing import Any, Dict, Optional

import httpx

from research_navigator.config import settings
from research_navigator.core.errors import RemoteReadError, ValidationError
from research_navigator.modules.papers.schemas import (
    ADVANCED_REQUIRED_MESSAGE, AdvancedSearchParams, PaperSearchResponse
)

logger = logging.getLogger(__name__)


class PaperSearchService:
    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        base_url: Optional[str] = None,
        limit: Optional[int] = None,
        fields: Optional[str] = None,
    ):
        self._client = client
        self.base_url = base_url or settings.paper_search_url
        self.limit = limit or settings.paper_search_limit
        self.fields = fields or settings.paper_search_fields

    def build_params(self, query: str, advanced: Optional[AdvancedSearchParams] = None) -> Dict[str, Any]:
        params: Dict[str, Any] = {
            "query": query,
            "limit": self.limit,
            "fields": self.fields,
        }
        if advanced is not None:
            params.update(advanced.to_query_params())
        return params

    async def search(
        self,
        query: str,
        advanced: Optional[AdvancedSearchParams] = None
    ) -> PaperSearchResponse:
        """Search papers. Passing ``advanced`` means advanced mode is active."""
        if advanced is not None and not advanced.has_any_field():
            raise ValidationError(ADVANCED_REQUIRED_MESSAGE)

        params = self.build_params(query, advanced)
        try:
            if self._client is not None:
                resp = await self._client.get(self.base_url, params=params)
            else:
                client_kwargs = {}
                if settings.paper_search_timeout is not None:
                    client_kwargs["timeout"] = settings.paper_search_timeout
                async with httpx.AsyncClient(**client_kwargs) as client:
                    resp = await client.get(self.base_url, params=params)
            resp.raise_for_status()
            payload = resp.json()
        except httpx.HTTPStatusError as e:
            logger.error(f"Paper search returned {e.response.status_code}: {e.response.text[:200]}")
            raise RemoteReadError(f"Paper search failed with status {e.response.status_code}") from e
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Paper search request failed: {e}")
            raise RemoteReadError(f"Paper search failed: {e}") from e

        if not isinstance(payload, dict):
            logger.error(f"Paper search returned a non-object body: {str(payload)[:200]}")
            raise RemoteReadError("Paper search returned an unexpected response")
        return PaperSearchResponse(data=payload.get("data") or [], total=payload.get("total"))
