"""
Result envelope returned by every storage operation.

A response is either a success carrying an optional result, or a failure
carrying a human-readable error message. Driver errors and empty lookups are
reported as failures instead of raised exceptions.
"""

import logging
from typing import Generic, TypeVar

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    model_validator,
)

logger = logging.getLogger(__name__)


T = TypeVar("T")


class StorageResponse(BaseModel, Generic[T]):
    """Success/failure envelope for storage operations."""

    model_config = ConfigDict(
        populate_by_name=True,
    )

    success: bool = Field(
        ...,
        description="Whether the operation succeeded",
    )
    result: T | None = Field(
        default=None,
        description="Operation payload, only set on success",
    )
    error_message: str | None = Field(
        default=None,
        alias="errorMessage",
        description="Human-readable failure reason, only set on failure",
    )

    @model_validator(mode="after")
    def _check_outcome(self) -> "StorageResponse[T]":
        """Exactly one of success or error message must hold."""
        if self.success and self.error_message is not None:
            raise ValueError("Successful response cannot carry an error message")
        if not self.success:
            if not self.error_message:
                raise ValueError("Failed response requires an error message")
            if self.result is not None:
                raise ValueError("Failed response cannot carry a result")
        return self

    @classmethod
    def ok(
        cls,
        result: T | None = None,
    ) -> "StorageResponse[T]":
        """Build a successful response."""
        return cls(success=True, result=result)

    @classmethod
    def fail(
        cls,
        message: str,
    ) -> "StorageResponse[T]":
        """Build a failed response."""
        return cls(success=False, error_message=message)

    @classmethod
    def from_exception(
        cls,
        error: BaseException,
    ) -> "StorageResponse[T]":
        """Build a failed response from a raised error."""
        return cls.fail(str(error) or error.__class__.__name__)
