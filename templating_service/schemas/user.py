"""Pydantic model for templating service users."""

from typing import ClassVar

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
)


class User(BaseModel):
    """
    A templating service user.

    Every field is optional so the same model serves as a stored record,
    a partial filter and a partial update payload. Only fields that were
    explicitly set take part in filters and updates.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        extra="ignore",
    )

    # Stored list fields matched with "contains all" semantics
    contains_all_fields: ClassVar[frozenset[str]] = frozenset({"team", "org"})

    id: str | None = Field(
        default=None,
        description="User identifier",
    )
    auth_id: str | None = Field(
        default=None,
        alias="authId",
        description="Identifier issued by the authentication provider",
    )
    issuer: str | None = Field(
        default=None,
        description="Authentication provider that issued auth_id",
    )
    team: list[str] | None = Field(
        default=None,
        description="Teams the user belongs to",
    )
    org: list[str] | None = Field(
        default=None,
        description="Organizations the user belongs to",
    )
