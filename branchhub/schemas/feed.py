"""Schemas for the upstream bank location feed."""

from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator


class RawFeedLocation(BaseModel):
    """One location entry as published by the bank (repeated per language)."""

    id: str
    title: str = ""
    address: str = ""
    service_names: str = Field("", alias="serviceNames")
    location: str = ""
    slug: Optional[str] = None
    language: str = ""

    model_config = {"populate_by_name": True}

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_string(cls, value: Any) -> Any:
        if isinstance(value, bool):
            return value
        if isinstance(value, int):
            return str(value)
        if isinstance(value, float):
            # 42.0 -> "42", 42.5 -> "42.5"
            return str(int(value)) if value.is_integer() else str(value)
        return value

    @field_validator("title", "address", "service_names", "location", "language", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        return "" if value is None else value


class FeedPayload(BaseModel):
    # Entries are validated one at a time by the synchronizer.
    contents: list[Any]
    position_order: Optional[int] = Field(None, alias="positionOrder")
    page_type: Optional[str] = Field(None, alias="pageType")
    site_mode: Optional[str] = Field(None, alias="siteMode")
    category_type: Optional[str] = Field(None, alias="categoryType")

    model_config = {"populate_by_name": True}


class FeedResponse(BaseModel):
    status_code: Optional[int] = Field(None, alias="statusCode")
    messages: Any = None
    payload: FeedPayload

    model_config = {"populate_by_name": True}
