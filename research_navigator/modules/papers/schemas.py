from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Any, Dict, List, Literal, Optional

ADVANCED_REQUIRED_MESSAGE = "Please fill in at least one advanced search field."


class AdvancedSearchParams(BaseModel):
    """Advanced search form. Field aliases are the query parameter names sent upstream."""
    model_config = ConfigDict(populate_by_name=True)

    paper_id: str = Field("", alias="paperId")
    paper_name: str = Field("", alias="paperName")
    paper_author: str = Field("", alias="paperAuthor")
    paper_topic: str = Field("", alias="paperTopic")
    paper_year: str = Field("", alias="paperYear")
    publication_type: Literal["journal", "conference"] = Field("journal", alias="publicationType")
    field: str = ""
    keywords: List[str] = []

    @field_validator("keywords")
    @classmethod
    def drop_blank_keywords(cls, v):
        return [k.strip() for k in v if k and k.strip()]

    def has_any_field(self) -> bool:
        # publication_type always has a value, so it does not count
        text_fields = (
            self.paper_id, self.paper_name, self.paper_author,
            self.paper_topic, self.paper_year, self.field,
        )
        return any(v.strip() for v in text_fields) or bool(self.keywords)

    def to_query_params(self) -> Dict[str, Any]:
        params = {}
        for name, value in self.model_dump(by_alias=True).items():
            if isinstance(value, str):
                value = value.strip()
            if value:
                params[name] = value
        return params

    @classmethod
    def parse_keywords(cls, raw: str) -> List[str]:
        """Split the comma-separated keywords input"""
        return [k.strip() for k in raw.split(",") if k.strip()]


class PaperSearchRequest(BaseModel):
    query: str = ""
    advanced: Optional[AdvancedSearchParams] = None


class PaperSearchResponse(BaseModel):
    # items are passed through exactly as the search API returns them
    data: List[Dict[str, Any]]
    total: Optional[int] = None
