"""Lifecycle event schemas published by the mentions listener."""

from typing import Any
from typing import Literal

from pydantic import BaseModel
from pydantic import Field


class MentionAdded(BaseModel):
    """A search was finalized into a tracked mention."""

    type: Literal["mention_added"] = "mention_added"
    id: Any = Field(description="Mention identifier")
    display_name: str = Field(description="Mention display text")
    location: int = Field(description="Offset of the mention in the text")
    length: int = Field(description="Length of the mention")


class MentionRemoved(BaseModel):
    """A tracked mention was invalidated by an edit or removed explicitly."""

    type: Literal["mention_removed"] = "mention_removed"
    id: Any = Field(description="Mention identifier")
    display_name: str = Field(description="Mention display text")
    location: int = Field(description="Offset of the mention before removal")
    length: int = Field(description="Length of the mention before removal")


class SearchShown(BaseModel):
    """A trigger character opened a mention search."""

    type: Literal["search_shown"] = "search_shown"
    trigger: str = Field(description="Trigger character")
    query: str = Field(description="Query typed so far")


class SearchUpdated(BaseModel):
    """The query of the active search changed."""

    type: Literal["search_updated"] = "search_updated"
    query: str = Field(description="Current query")


class SearchHidden(BaseModel):
    """The active search ended."""

    type: Literal["search_hidden"] = "search_hidden"


MentionEvent = MentionAdded | MentionRemoved | SearchShown | SearchUpdated | SearchHidden
