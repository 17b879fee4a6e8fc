"""Models for the templating service storage layer."""

from .response import StorageResponse
from .template import Template, TemplateInstance
from .user import User

__all__ = [
    "StorageResponse",
    "Template",
    "TemplateInstance",
    "User",
]
