"""
Navegação: árvore workspace → spaces → folders → lists, e busca de tasks.
"""

from typing import Any, Dict, List, Optional

from pydantic import Field

from ..formatting import format_task, pluck, pluck_list, to_json
from .base import CsvList, ToolHandler, ToolInput


class GetHierarchyInput(ToolInput):
    """Input para montar a hierarquia do workspace."""
    workspace_id: Optional[str] = Field(default=None, description="Workspace/team ID. Uses configured default if omitted.")
    space_ids: CsvList = Field(default=None, description="Comma-separated space IDs to filter. Omit to get all spaces.")


class GetHierarchy(ToolHandler):
    description = (
        "Get the ClickUp workspace hierarchy: spaces, folders and lists with their IDs. "
        "Use this first to discover list IDs for creating or listing tasks."
    )
    input_model = GetHierarchyInput
    error_context = "getting hierarchy"

    async def run(self, params: GetHierarchyInput) -> str:
        workspace_id = params.workspace_id or self.client.workspace_id
        if not workspace_id:
            # Sem workspace configurado: usa o primeiro team do token
            teams = pluck_list(await self.client.get_teams(), "teams")
            if not teams:
                return "Error: No workspaces found. Check your API token."
            workspace_id = str(pluck(teams, 0, "id", default=""))

        spaces = pluck_list(await self.client.get_spaces(workspace_id), "spaces")
        wanted = set(params.space_ids) if params.space_ids else None

        tree: List[Dict[str, Any]] = []
        for space in spaces:
            space_id = str(pluck(space, "id", default=""))
            # Filtro aplicado antes de descer: spaces excluídos não geram chamadas
            if wanted is not None and space_id not in wanted:
                continue

            folders = pluck_list(await self.client.get_folders(space_id), "folders")
            lists = pluck_list(await self.client.get_folderless_lists(space_id), "lists")

            tree.append({
                "id": space_id,
                "name": pluck(space, "name", default=""),
                "folders": [
                    {
                        "id": pluck(folder, "id", default=""),
                        "name": pluck(folder, "name", default=""),
                        "lists": [_list_node(lst) for lst in pluck_list(folder, "lists")],
                    }
                    for folder in folders
                ],
                "lists": [_list_node(lst) for lst in lists],
            })

        return to_json({"workspace_id": workspace_id, "spaces": tree})


def _list_node(lst: Dict[str, Any]) -> Dict[str, Any]:
    return {"id": pluck(lst, "id", default=""), "name": pluck(lst, "name", default="")}


class SearchTasksInput(ToolInput):
    """Input para busca de tasks em todo o workspace."""
    workspace_id: Optional[str] = Field(default=None, description="Workspace/team ID. Uses configured default if omitted.")
    query: Optional[str] = Field(default=None, description="Text to match against task names")
    statuses: CsvList = Field(default=None, description="Comma-separated statuses to filter by")
    assignees: CsvList = Field(default=None, description="Comma-separated assignee user IDs")
    include_closed: bool = Field(default=False, description="Include closed tasks")
    include_subtasks: bool = Field(default=False, description="Include subtasks")
    page: Optional[int] = Field(default=None, ge=0, description="Page number (starts at 0)")


def task_filter_params(params: Any) -> Dict[str, Any]:
    """Filtros comuns de listagem de tasks como query params da API."""
    query: Dict[str, Any] = {}
    if params.statuses:
        query["statuses[]"] = params.statuses
    if params.assignees:
        query["assignees[]"] = params.assignees
    if params.include_closed:
        query["include_closed"] = "true"
    if params.page is not None:
        query["page"] = params.page
    return query


class SearchTasks(ToolHandler):
    description = (
        "Search tasks across the ClickUp workspace. "
        "Supports filtering by query, statuses, assignees, and more."
    )
    input_model = SearchTasksInput
    error_context = "searching tasks"

    async def run(self, params: SearchTasksInput) -> str:
        workspace_id = self.workspace(params, "search")

        query = task_filter_params(params)
        if params.query:
            query["name"] = params.query
        if params.include_subtasks:
            query["subtasks"] = "true"

        tasks = pluck_list(await self.client.search_tasks(workspace_id, query), "tasks")
        if not tasks:
            return "No tasks found matching the search criteria."

        output = [format_task(task) for task in tasks]
        return to_json({"count": len(output), "tasks": output})
