"""
ClickUp Tools
=============
Catálogo de tools para agentes de IA sobre a API do ClickUp:
- Hierarquia, busca e membros do workspace
- CRUD de tasks, tags, anexos e comentários
- Time tracking, lists e folders
- Chat e documentos (API v3)
"""

from .client import ApiVersion, ClickUpClient
from .config import Credentials, Settings
from .errors import (
    ClickUpAPIError,
    ClickUpError,
    ConfigurationError,
    ErrorKind,
    TransportError,
    UnknownActionError,
    ValidationError,
)
from .registry import ClickUpToolProvider, ToolCatalog, ToolDescriptor, ToolKind, build_catalog

__version__ = "1.0.0"

__all__ = [
    "ApiVersion",
    "ClickUpAPIError",
    "ClickUpClient",
    "ClickUpError",
    "ClickUpToolProvider",
    "ConfigurationError",
    "Credentials",
    "ErrorKind",
    "Settings",
    "ToolCatalog",
    "ToolDescriptor",
    "ToolKind",
    "TransportError",
    "UnknownActionError",
    "ValidationError",
    "build_catalog",
]
