# -*- coding: utf-8 -*-
"""
Data Models
============
Pydantic models for blog entries (write and read side) and for
recruiting form submissions.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ---------------------------------------------------------------------------
# Write side
# ---------------------------------------------------------------------------


class DerivedMetadata(BaseModel):
    """Title, category and lead text derived from a document body."""

    title: str
    category: str
    description: str = ""

    model_config = ConfigDict(frozen=True)


class PublishRecord(BaseModel):
    """The entry sent to the microCMS blogs endpoint."""

    title: str
    content: str
    category: list[str]  # single-element list for the multi-select schema
    description: str = ""
    is_featured: bool = False
    writer: Optional[str] = None
    eyecatch: Optional[str] = None

    model_config = ConfigDict(frozen=True)

    def to_payload(self) -> dict:
        """Serialize for the API, omitting unset optional fields."""
        return self.model_dump(exclude_none=True)


# ---------------------------------------------------------------------------
# Read side
# ---------------------------------------------------------------------------


class Eyecatch(BaseModel):
    url: str
    width: Optional[int] = None
    height: Optional[int] = None


class Blog(BaseModel):
    """A blog entry as returned by the content API."""

    id: str
    title: str
    content: str = ""
    eyecatch: Optional[Eyecatch] = None
    category: list[str] = Field(default_factory=list)
    description: Optional[str] = None
    is_featured: bool = False
    writer: Optional[str] = None
    published_at: Optional[datetime] = Field(default=None, alias="publishedAt")
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")
    updated_at: Optional[datetime] = Field(default=None, alias="updatedAt")

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("category", mode="before")
    @classmethod
    def _category_as_list(cls, value):
        # Single-select schemas return a bare string
        if value is None:
            return []
        if isinstance(value, str):
            return [value]
        return value


class BlogResponse(BaseModel):
    """One page of blog entries."""

    total_count: int = Field(alias="totalCount")
    offset: int = 0
    limit: int = 10
    contents: list[Blog] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True)


# ---------------------------------------------------------------------------
# Notification
# ---------------------------------------------------------------------------


class FormField(BaseModel):
    label: str
    value: Optional[Union[str, int, float, bool]] = None


class FormSubmission(BaseModel):
    """A recruiting form submission forwarded to Slack."""

    type: str
    fields: list[FormField] = Field(default_factory=list)
