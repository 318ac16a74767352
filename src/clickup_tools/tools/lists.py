"""
Gerenciamento de lists e folders.
"""

from enum import Enum
from typing import Any, Dict, Optional

from pydantic import Field

from ..formatting import pluck, pluck_list, render, to_json
from .base import ActionToolHandler, ToolInput


def id_and_name(data: Dict[str, Any]) -> Dict[str, Any]:
    return {"id": pluck(data, "id", default=""), "name": pluck(data, "name", default="")}


# ============================================================================
# LISTS
# ============================================================================

class ListAction(str, Enum):
    CREATE = "create"
    CREATE_IN_FOLDER = "create_in_folder"
    GET = "get"
    UPDATE = "update"


class ManageListInput(ToolInput):
    """Input da tool de lists."""
    action: Optional[str] = Field(default=None, description="create, create_in_folder, get, or update")
    space_id: Optional[str] = Field(default=None, description="create: space ID")
    folder_id: Optional[str] = Field(default=None, description="create_in_folder: folder ID")
    list_id: Optional[str] = Field(default=None, description="get/update: list ID")
    name: Optional[str] = Field(default=None, description="List name")
    content: Optional[str] = Field(default=None, description="List description")
    status: Optional[str] = Field(default=None, description="List status (color label)")


class ManageList(ActionToolHandler):
    description = "Create, read or update ClickUp lists (in a space or inside a folder)."
    input_model = ManageListInput
    error_context = "managing list"
    actions = ListAction
    required_fields = {
        ListAction.CREATE: ("space_id", "name"),
        ListAction.CREATE_IN_FOLDER: ("folder_id", "name"),
        ListAction.GET: ("list_id",),
        ListAction.UPDATE: ("list_id",),
    }

    def _fields(self, params: ManageListInput) -> Dict[str, Any]:
        data: Dict[str, Any] = {}
        for field in ("name", "content", "status"):
            value = getattr(params, field)
            if value is not None:
                data[field] = value
        return data

    async def do_create(self, params: ManageListInput) -> str:
        result = await self.client.create_list(params.space_id, self._fields(params))
        return render(f"List '{params.name}' created successfully.", id_and_name(result))

    async def do_create_in_folder(self, params: ManageListInput) -> str:
        result = await self.client.create_list_in_folder(params.folder_id, self._fields(params))
        return render(f"List '{params.name}' created in folder successfully.", id_and_name(result))

    async def do_get(self, params: ManageListInput) -> str:
        result = await self.client.get_list(params.list_id)
        return to_json({
            **id_and_name(result),
            "content": pluck(result, "content", default=""),
            "status": pluck(result, "status"),
            "task_count": pluck(result, "task_count", default=0),
            "space": id_and_name(pluck(result, "space", default={})),
            "folder": id_and_name(pluck(result, "folder", default={})),
        })

    async def do_update(self, params: ManageListInput) -> str:
        data = self._fields(params)
        if not data:
            return "Error: At least one field to update (name, content, status) is required."
        result = await self.client.update_list(params.list_id, data)
        return render("List updated successfully.", id_and_name(result))


# ============================================================================
# FOLDERS
# ============================================================================

class FolderAction(str, Enum):
    CREATE = "create"
    GET = "get"
    UPDATE = "update"


class ManageFolderInput(ToolInput):
    """Input da tool de folders."""
    action: Optional[str] = Field(default=None, description="create, get, or update")
    space_id: Optional[str] = Field(default=None, description="create: space ID")
    folder_id: Optional[str] = Field(default=None, description="get/update: folder ID")
    name: Optional[str] = Field(default=None, description="Folder name")


class ManageFolder(ActionToolHandler):
    description = "Create, read or rename ClickUp folders."
    input_model = ManageFolderInput
    error_context = "managing folder"
    actions = FolderAction
    required_fields = {
        FolderAction.CREATE: ("space_id", "name"),
        FolderAction.GET: ("folder_id",),
        FolderAction.UPDATE: ("folder_id", "name"),
    }

    async def do_create(self, params: ManageFolderInput) -> str:
        result = await self.client.create_folder(params.space_id, {"name": params.name})
        return render(f"Folder '{params.name}' created successfully.", id_and_name(result))

    async def do_get(self, params: ManageFolderInput) -> str:
        result = await self.client.get_folder(params.folder_id)
        return to_json({
            **id_and_name(result),
            "space": id_and_name(pluck(result, "space", default={})),
            "lists": [id_and_name(lst) for lst in pluck_list(result, "lists")],
        })

    async def do_update(self, params: ManageFolderInput) -> str:
        result = await self.client.update_folder(params.folder_id, {"name": params.name})
        return render("Folder updated successfully.", id_and_name(result))
