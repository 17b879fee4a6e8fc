"""Pydantic models for Adaptive Card templates."""

from datetime import datetime
from typing import Any, ClassVar

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
)


class TemplateInstance(BaseModel):
    """One published version of a template's card payload."""

    model_config = ConfigDict(
        populate_by_name=True,
        extra="ignore",
    )

    version: str | None = None
    json_payload: dict[str, Any] | None = Field(
        default=None,
        alias="json",
        description="Adaptive Card template body",
    )
    created_at: datetime | None = Field(default=None, alias="createdAt")
    updated_at: datetime | None = Field(default=None, alias="updatedAt")


class Template(BaseModel):
    """
    An Adaptive Card template.

    As with User, all fields are optional so the model doubles as a
    partial filter and update payload.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        extra="ignore",
    )

    contains_all_fields: ClassVar[frozenset[str]] = frozenset({"tags"})

    id: str | None = Field(
        default=None,
        description="Template identifier",
    )
    name: str | None = None
    owner: str | None = Field(
        default=None,
        description="Id of the owning user",
    )
    description: str | None = None
    tags: list[str] | None = Field(
        default=None,
        description="Free-form tags used for discovery",
    )
    is_live: bool | None = Field(default=None, alias="isLive")
    is_shareable: bool | None = Field(default=None, alias="isShareable")
    instances: list[TemplateInstance] | None = None
    created_at: datetime | None = Field(default=None, alias="createdAt")
    updated_at: datetime | None = Field(default=None, alias="updatedAt")
