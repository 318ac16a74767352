"""
Catálogo de tools e metadados da integração.

O catálogo é um valor explícito, construído uma vez no startup por
build_catalog() e passado adiante; não há registro global.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple, Type, Union

from loguru import logger
from pydantic import ValidationError as PydanticValidationError

from .client import ClickUpClient
from .config import CONNECTION_TEST_TIMEOUT, Credentials
from .errors import ClickUpError
from .formatting import pluck, pluck_list
from .tools import (
    AttachFile,
    Chat,
    CreateTask,
    DeleteTask,
    GetHierarchy,
    GetTask,
    GetTasks,
    ManageComments,
    ManageDocument,
    ManageDocumentPages,
    ManageFolder,
    ManageList,
    ManageTags,
    Members,
    SearchTasks,
    TimeTracking,
    UpdateTask,
)
from .tools.base import ToolHandler, describe_validation_error


class ToolKind(str, Enum):
    READ = "read"
    WRITE = "write"


@dataclass(frozen=True)
class ToolDescriptor:
    """Entrada do catálogo: nome único, handler e metadados de exibição."""
    name: str
    handler: Type[ToolHandler]
    kind: ToolKind
    label: str
    icon: str
    destructive: bool = False

    @property
    def description(self) -> str:
        return self.handler.description

    @property
    def read_only(self) -> bool:
        return self.kind is ToolKind.READ


class ToolCatalog:
    """
    Conjunto imutável de ToolDescriptor indexado por nome.

    Raises:
        ValueError: Se dois descritores tiverem o mesmo nome
    """

    def __init__(self, descriptors: Iterable[ToolDescriptor]):
        self._descriptors: Tuple[ToolDescriptor, ...] = tuple(descriptors)
        self._by_name: Dict[str, ToolDescriptor] = {}
        for descriptor in self._descriptors:
            if descriptor.name in self._by_name:
                raise ValueError(f"Nome de tool duplicado no catálogo: {descriptor.name}")
            self._by_name[descriptor.name] = descriptor

    def __iter__(self) -> Iterator[ToolDescriptor]:
        return iter(self._descriptors)

    def __len__(self) -> int:
        return len(self._descriptors)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def get(self, name: str) -> Optional[ToolDescriptor]:
        return self._by_name.get(name)

    def names(self) -> List[str]:
        return [d.name for d in self._descriptors]

    def read_only(self) -> "ToolCatalog":
        """Novo catálogo apenas com tools de leitura."""
        return ToolCatalog(d for d in self._descriptors if d.read_only)

    def instantiate(self, tool: Union[str, ToolDescriptor], client: ClickUpClient) -> ToolHandler:
        """
        Cria o handler ligado ao cliente compartilhado.

        Raises:
            KeyError: Se o nome não estiver no catálogo
        """
        descriptor = tool if isinstance(tool, ToolDescriptor) else self._by_name.get(tool)
        if descriptor is None or self._by_name.get(descriptor.name) is not descriptor:
            raise KeyError(tool if isinstance(tool, str) else tool.name)
        return descriptor.handler(client)


def build_catalog() -> ToolCatalog:
    """Catálogo completo de tools do ClickUp."""
    read, write = ToolKind.READ, ToolKind.WRITE
    return ToolCatalog([
        # Navegação e busca
        ToolDescriptor("clickup_get_hierarchy", GetHierarchy, read, "Get hierarchy", "ph:tree-structure"),
        ToolDescriptor("clickup_search", SearchTasks, read, "Search tasks", "ph:magnifying-glass"),
        ToolDescriptor("clickup_members", Members, read, "Workspace members", "ph:users"),
        # Tasks
        ToolDescriptor("clickup_get_tasks", GetTasks, read, "List tasks", "ph:list-checks"),
        ToolDescriptor("clickup_get_task", GetTask, read, "Get task", "ph:check-square"),
        ToolDescriptor("clickup_create_task", CreateTask, write, "Create task", "ph:plus-square"),
        ToolDescriptor("clickup_update_task", UpdateTask, write, "Update task", "ph:pencil-simple"),
        ToolDescriptor("clickup_delete_task", DeleteTask, write, "Delete task", "ph:trash", destructive=True),
        ToolDescriptor("clickup_attach_file", AttachFile, write, "Attach file", "ph:paperclip"),
        ToolDescriptor("clickup_manage_tags", ManageTags, write, "Manage tags", "ph:tag"),
        ToolDescriptor("clickup_manage_comments", ManageComments, write, "Comments", "ph:chat-text"),
        # Time tracking
        ToolDescriptor("clickup_time_tracking", TimeTracking, write, "Time tracking", "ph:timer"),
        # Estrutura
        ToolDescriptor("clickup_manage_list", ManageList, write, "Manage list", "ph:list"),
        ToolDescriptor("clickup_manage_folder", ManageFolder, write, "Manage folder", "ph:folder"),
        # Chat e docs (v3)
        ToolDescriptor("clickup_chat", Chat, write, "Chat", "ph:chats-circle"),
        ToolDescriptor("clickup_manage_document", ManageDocument, write, "Create document", "ph:file-text"),
        ToolDescriptor(
            "clickup_manage_document_pages", ManageDocumentPages, write, "Document pages", "ph:files"
        ),
    ])


# ============================================================================
# INTEGRAÇÃO
# ============================================================================

class ClickUpToolProvider:
    """Metadados da integração, schema de configuração e teste de conexão."""

    app_name = "clickup"

    integration_meta: Dict[str, str] = {
        "name": "ClickUp",
        "description": "Project management, tasks, docs, and time tracking",
        "icon": "ph:kanban",
        "logo": "simple-icons:clickup",
        "category": "productivity",
        "badge": "verified",
        "docs_url": "https://clickup.com/api",
    }

    def __init__(self, catalog: Optional[ToolCatalog] = None):
        self.catalog = catalog if catalog is not None else build_catalog()

    def app_meta(self) -> Dict[str, Any]:
        return {
            "label": "tasks, lists, docs, chat, time tracking",
            "description": "ClickUp project management",
            "icon": self.integration_meta["icon"],
            "logo": self.integration_meta["logo"],
        }

    def config_schema(self) -> List[Dict[str, Any]]:
        return [
            {
                "key": "api_token",
                "type": "secret",
                "label": "Personal API Token",
                "placeholder": "pk_...",
                "hint": "Generate one at ClickUp → Settings → Apps → API Token.",
                "required": True,
            },
            {
                "key": "workspace_id",
                "type": "text",
                "label": "Workspace ID",
                "placeholder": "12345678",
                "hint": "The number after app.clickup.com/ in your browser URL. "
                        "Used as default for search, time tracking, chat and docs.",
                "required": False,
            },
        ]

    def validation_rules(self) -> Dict[str, str]:
        return {
            "api_token": "nullable|string",
            "workspace_id": "nullable|string",
        }

    def validate_config(self, config: Optional[Mapping[str, Any]]) -> Credentials:
        """
        Valida o mapping de configuração do host.

        Raises:
            pydantic.ValidationError: Se algum campo não for string
        """
        return Credentials.from_mapping(config)

    def tools(self) -> List[Dict[str, Any]]:
        """Descrição do catálogo para o host."""
        return [
            {
                "name": d.name,
                "type": d.kind.value,
                "label": d.label,
                "description": d.description,
                "icon": d.icon,
            }
            for d in self.catalog
        ]

    def create_tool(self, name: str, credentials: Credentials) -> ToolHandler:
        return self.catalog.instantiate(name, ClickUpClient(credentials))

    async def test_connection(self, config: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
        """
        Faz uma única leitura (GET /team) para validar o token.

        Returns:
            {"success": True, "message": ...} ou {"success": False, "error": ...}
        """
        try:
            credentials = self.validate_config(config)
        except PydanticValidationError as e:
            return {"success": False, "error": describe_validation_error(e)}

        if not credentials.api_token:
            return {
                "success": False,
                "error": "No API token provided. Generate one at ClickUp → Settings → Apps.",
            }

        client = ClickUpClient(credentials, timeout=CONNECTION_TEST_TIMEOUT)
        try:
            teams = pluck_list(await client.get_teams(), "teams")
        except ClickUpError as e:
            logger.warning(f"Teste de conexão falhou: {e}")
            return {"success": False, "error": str(e)}

        names = ", ".join(str(pluck(t, "name", default="")) for t in teams)
        return {
            "success": True,
            "message": f"Connected to ClickUp. Found {len(teams)} workspace(s): {names}",
        }
