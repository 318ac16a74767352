"""
Docs do ClickUp (API v3): criação de documentos e gestão de páginas.
"""

from enum import Enum
from typing import Any, Dict, Optional

from pydantic import Field

from ..formatting import pluck, pluck_list, render, to_json
from .base import ActionToolHandler, CsvList, ToolHandler, ToolInput

# Tipos de parent aceitos pela API de docs
PARENT_TYPES = {
    "space": "4",
    "folder": "5",
    "list": "6",
    "everything": "7",
    "workspace": "12",
}

DEFAULT_CONTENT_FORMAT = "text/md"


# ============================================================================
# DOCUMENTOS
# ============================================================================

class ManageDocumentInput(ToolInput):
    """Input para criar um documento."""
    name: str = Field(..., min_length=1, description="Document name")
    parent_id: str = Field(..., min_length=1, description="ID of the space, folder or list that will contain the doc")
    parent_type: str = Field(..., min_length=1, description="space, folder, list, everything, or workspace")
    workspace_id: Optional[str] = Field(default=None, description="Workspace ID. Uses configured default if omitted.")
    visibility: str = Field(default="PUBLIC", description="PUBLIC, PRIVATE, PERSONAL or HIDDEN")
    create_page: bool = Field(default=True, description="Create an initial empty page")


class ManageDocument(ToolHandler):
    description = "Create a ClickUp document inside a space, folder, list or the workspace."
    input_model = ManageDocumentInput
    error_context = "creating document"

    async def run(self, params: ManageDocumentInput) -> str:
        workspace_id = self.workspace(params, "documents")
        data = {
            "name": params.name,
            "parent": {
                "id": params.parent_id,
                "type": PARENT_TYPES.get(params.parent_type.lower(), params.parent_type),
            },
            "visibility": params.visibility,
            "create_page": params.create_page,
        }
        result = await self.client.create_doc(workspace_id, data)
        return render(f"Document '{params.name}' created successfully.", {
            "id": pluck(result, "id", default=""),
            "name": pluck(result, "name", default=""),
        })


# ============================================================================
# PÁGINAS
# ============================================================================

class PageAction(str, Enum):
    LIST = "list"
    GET = "get"
    CREATE = "create"
    UPDATE = "update"


class EditMode(str, Enum):
    REPLACE = "replace"
    APPEND = "append"
    PREPEND = "prepend"


class ManageDocumentPagesInput(ToolInput):
    """Input da tool de páginas de documento."""
    action: Optional[str] = Field(default=None, description="list, get, create, or update")
    document_id: str = Field(..., min_length=1, description="Document ID")
    workspace_id: Optional[str] = Field(default=None, description="Workspace ID. Uses configured default if omitted.")
    max_depth: Optional[int] = Field(default=None, ge=0, description="list: maximum page depth")
    page_ids: CsvList = Field(default=None, description="get: comma-separated page IDs")
    page_id: Optional[str] = Field(default=None, description="update: page ID")
    parent_page_id: Optional[str] = Field(default=None, description="create: parent page ID for a sub-page")
    name: Optional[str] = Field(default=None, description="create/update: page name")
    sub_title: Optional[str] = Field(default=None, description="create/update: page subtitle")
    content: Optional[str] = Field(default=None, description="create/update: page content")
    content_format: str = Field(default=DEFAULT_CONTENT_FORMAT, description="text/md or text/plain")
    edit_mode: EditMode = Field(default=EditMode.REPLACE, description="update: replace, append, or prepend")


class ManageDocumentPages(ActionToolHandler):
    description = (
        "Manage pages of a ClickUp document: list pages, read page content, "
        "create a page, or update a page (replace, append or prepend content)."
    )
    input_model = ManageDocumentPagesInput
    error_context = "with document pages"
    actions = PageAction
    required_fields = {
        PageAction.GET: ("page_ids",),
        PageAction.CREATE: ("name",),
        PageAction.UPDATE: ("page_id",),
    }

    async def before_dispatch(self, params: ManageDocumentPagesInput, action: PageAction) -> None:
        self.workspace(params, "documents")

    async def do_list(self, params: ManageDocumentPagesInput) -> str:
        query = {"max_page_depth": params.max_depth} if params.max_depth is not None else None
        result = await self.client.get_doc_pages(self.workspace(params), params.document_id, query)

        pages = pluck_list(result, "pages")
        if not pages:
            return "No pages found in this document."

        output = [
            {
                "id": pluck(p, "id", default=""),
                "name": pluck(p, "name", default=""),
                "sub_title": pluck(p, "sub_title", default=""),
            }
            for p in pages
        ]
        return to_json({"count": len(output), "pages": output})

    async def do_get(self, params: ManageDocumentPagesInput) -> str:
        query = {"page_ids": params.page_ids, "content_format": params.content_format}
        result = await self.client.get_doc_pages(self.workspace(params), params.document_id, query)

        pages = pluck_list(result, "pages")
        if not pages:
            return "No page content found."

        output = [
            {
                "id": pluck(p, "id", default=""),
                "name": pluck(p, "name", default=""),
                "sub_title": pluck(p, "sub_title", default=""),
                "content": pluck(p, "content", default=""),
            }
            for p in pages
        ]
        return to_json({"pages": output})

    async def do_create(self, params: ManageDocumentPagesInput) -> str:
        data: Dict[str, Any] = {
            "name": params.name,
            "content": params.content or "",
            "content_format": params.content_format,
        }
        if params.sub_title is not None:
            data["sub_title"] = params.sub_title
        if params.parent_page_id:
            data["parent_page_id"] = params.parent_page_id

        result = await self.client.create_doc_page(self.workspace(params), params.document_id, data)
        return render(f"Page '{params.name}' created successfully.", {"id": pluck(result, "id", default="")})

    async def do_update(self, params: ManageDocumentPagesInput) -> str:
        data: Dict[str, Any] = {}
        if params.name is not None:
            data["name"] = params.name
        if params.sub_title is not None:
            data["sub_title"] = params.sub_title
        if params.content is not None:
            # O merge de conteúdo é feito pela API, não aqui
            data["content"] = params.content
            data["content_format"] = params.content_format
            data["content_edit_mode"] = params.edit_mode.value

        if not data:
            return "Error: At least one field to update (name, subTitle, content) is required."

        await self.client.update_doc_page(self.workspace(params), params.document_id, params.page_id, data)
        return f"Page '{params.page_id}' updated successfully."
