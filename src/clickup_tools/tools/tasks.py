"""
Tasks: listar, ler, criar, atualizar, deletar, anexos e tags.

Todo taskId aceita ID nativo ou custom (DEV-42); o cliente adiciona os
query params de custom ID quando necessário.
"""

from enum import Enum
from typing import Any, Dict, Optional

from pydantic import Field

from ..formatting import format_task, format_timestamp, pluck, pluck_list, render, require_key, to_json
from .base import (
    CLEAR_DATE,
    ActionToolHandler,
    ClearableEpochMillis,
    CsvList,
    EpochMillis,
    IntCsvList,
    ToolHandler,
    ToolInput,
)
from .hierarchy import task_filter_params

TASK_ID_DESCRIPTION = "Task ID (native ID or custom ID like DEV-42)"


def task_summary(task: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "id": pluck(task, "id", default=""),
        "name": pluck(task, "name", default=""),
        "status": pluck(task, "status", "status", default=""),
        "url": pluck(task, "url", default=""),
    }


# ============================================================================
# LEITURA
# ============================================================================

class GetTasksInput(ToolInput):
    """Input para listar tasks de uma list."""
    list_id: str = Field(..., min_length=1, description="List ID")
    statuses: CsvList = Field(default=None, description="Comma-separated statuses to filter by")
    assignees: CsvList = Field(default=None, description="Comma-separated assignee user IDs")
    due_date_gt: EpochMillis = Field(default=None, description="Only tasks due after this ISO 8601 date")
    due_date_lt: EpochMillis = Field(default=None, description="Only tasks due before this ISO 8601 date")
    include_closed: bool = Field(default=False, description="Include closed tasks")
    page: Optional[int] = Field(default=None, ge=0, description="Page number (starts at 0)")


class GetTasks(ToolHandler):
    description = "List tasks in a ClickUp list, with optional status, assignee and due date filters."
    input_model = GetTasksInput
    error_context = "getting tasks"

    async def run(self, params: GetTasksInput) -> str:
        query = task_filter_params(params)
        if params.due_date_gt is not None:
            query["due_date_gt"] = params.due_date_gt
        if params.due_date_lt is not None:
            query["due_date_lt"] = params.due_date_lt

        tasks = pluck_list(await self.client.get_tasks(params.list_id, query), "tasks")
        if not tasks:
            return "No tasks found in this list."

        output = [format_task(task) for task in tasks]
        return to_json({"count": len(output), "tasks": output})


class GetTaskInput(ToolInput):
    """Input para buscar uma task específica."""
    task_id: str = Field(..., min_length=1, description=TASK_ID_DESCRIPTION)
    include_subtasks: bool = Field(default=False, description="Include subtasks")


class GetTask(ToolHandler):
    description = "Get full details of a ClickUp task: description, assignees, tags, dates, location and subtasks."
    input_model = GetTaskInput
    error_context = "getting task"

    async def run(self, params: GetTaskInput) -> str:
        query = {"include_subtasks": "true"} if params.include_subtasks else None
        task = await self.client.get_task(params.task_id, query)

        output = {
            "id": pluck(task, "id", default=""),
            "custom_id": pluck(task, "custom_id"),
            "name": pluck(task, "name", default=""),
            "description": pluck(task, "description", default=""),
            "status": pluck(task, "status", "status", default=""),
            "priority": pluck(task, "priority", "priority"),
            "assignees": [
                {"id": pluck(a, "id", default=""), "username": pluck(a, "username", default="")}
                for a in pluck_list(task, "assignees")
            ],
            "tags": [pluck(t, "name", default="") for t in pluck_list(task, "tags")],
            "due_date": format_timestamp(pluck(task, "due_date")),
            "start_date": format_timestamp(pluck(task, "start_date")),
            "time_estimate": pluck(task, "time_estimate"),
            "url": pluck(task, "url", default=""),
            "list": {"id": pluck(task, "list", "id", default=""), "name": pluck(task, "list", "name", default="")},
            "folder": {"id": pluck(task, "folder", "id", default=""), "name": pluck(task, "folder", "name", default="")},
            "space": {"id": pluck(task, "space", "id", default="")},
        }

        subtasks = pluck_list(task, "subtasks")
        if subtasks:
            output["subtasks"] = [
                {
                    "id": pluck(st, "id", default=""),
                    "name": pluck(st, "name", default=""),
                    "status": pluck(st, "status", "status", default=""),
                }
                for st in subtasks
            ]

        return to_json(output)


# ============================================================================
# ESCRITA
# ============================================================================

class CreateTaskInput(ToolInput):
    """Input para criar uma nova task."""
    list_id: str = Field(..., min_length=1, description="List ID where the task will be created")
    name: str = Field(..., min_length=1, description="Task name")
    description: Optional[str] = Field(default=None, description="Task description (markdown)")
    status: Optional[str] = Field(default=None, description="Initial status")
    priority: Optional[int] = Field(default=None, ge=1, le=4, description="1=urgent, 2=high, 3=normal, 4=low")
    assignees: IntCsvList = Field(default=None, description="Comma-separated assignee user IDs")
    due_date: EpochMillis = Field(default=None, description="Due date (ISO 8601)")
    start_date: EpochMillis = Field(default=None, description="Start date (ISO 8601)")
    tags: CsvList = Field(default=None, description="Comma-separated tag names")
    parent_task_id: Optional[str] = Field(default=None, description="Parent task ID to create a subtask")


class CreateTask(ToolHandler):
    description = "Create a new task in a ClickUp list. Use clickup_members (resolve) to get assignee IDs."
    input_model = CreateTaskInput
    error_context = "creating task"

    async def run(self, params: CreateTaskInput) -> str:
        data: Dict[str, Any] = {"name": params.name}

        if params.description is not None:
            data["description"] = params.description
        if params.status:
            data["status"] = params.status
        if params.priority is not None:
            data["priority"] = params.priority
        if params.assignees:
            data["assignees"] = params.assignees
        if params.due_date is not None:
            data["due_date"] = params.due_date
            data["due_date_time"] = True
        if params.start_date is not None:
            data["start_date"] = params.start_date
            data["start_date_time"] = True
        if params.tags:
            data["tags"] = params.tags
        if params.parent_task_id:
            data["parent"] = params.parent_task_id

        result = await self.client.create_task(params.list_id, data)
        task_id = require_key(result, "id")
        return render(f"Task '{params.name}' created successfully (ID: {task_id}).", task_summary(result))


class UpdateTaskInput(ToolInput):
    """Input para atualizar uma task existente."""
    task_id: str = Field(..., min_length=1, description=TASK_ID_DESCRIPTION)
    name: Optional[str] = Field(default=None, description="New task name")
    description: Optional[str] = Field(default=None, description="New description")
    status: Optional[str] = Field(default=None, description="New status")
    priority: Optional[int] = Field(default=None, ge=1, le=4, description="1=urgent, 2=high, 3=normal, 4=low")
    assignees: IntCsvList = Field(default=None, description="Comma-separated user IDs to add as assignees")
    remove_assignees: IntCsvList = Field(default=None, description="Comma-separated user IDs to remove")
    due_date: ClearableEpochMillis = Field(default=None, description="New due date (ISO 8601). Empty string clears it.")
    start_date: ClearableEpochMillis = Field(default=None, description="New start date (ISO 8601). Empty string clears it.")
    time_estimate: Optional[int] = Field(default=None, ge=0, description="Time estimate in minutes")


class UpdateTask(ToolHandler):
    description = "Update fields of an existing ClickUp task. Only the provided fields are changed."
    input_model = UpdateTaskInput
    error_context = "updating task"

    async def run(self, params: UpdateTaskInput) -> str:
        data: Dict[str, Any] = {}

        if params.name:
            data["name"] = params.name
        if params.description is not None:
            data["description"] = params.description
        if params.status:
            data["status"] = params.status
        if params.priority is not None:
            data["priority"] = params.priority

        # Diff de assignees: add e rem independentes
        assignees: Dict[str, Any] = {}
        if params.assignees:
            assignees["add"] = params.assignees
        if params.remove_assignees:
            assignees["rem"] = params.remove_assignees
        if assignees:
            data["assignees"] = assignees

        for field in ("due_date", "start_date"):
            value = getattr(params, field)
            if value is None:
                continue
            if value == CLEAR_DATE:
                # null na API remove a data
                data[field] = None
            else:
                data[field] = value
                data[f"{field}_time"] = True

        if params.time_estimate is not None:
            data["time_estimate"] = params.time_estimate * 60000

        if not data:
            return "Error: At least one field to update is required."

        result = await self.client.update_task(params.task_id, data)
        return render("Task updated successfully.", task_summary(result))


class DeleteTaskInput(ToolInput):
    """Input para deletar uma task."""
    task_id: str = Field(..., min_length=1, description=TASK_ID_DESCRIPTION)


class DeleteTask(ToolHandler):
    description = "Delete a ClickUp task permanently. This cannot be undone."
    input_model = DeleteTaskInput
    error_context = "deleting task"

    async def run(self, params: DeleteTaskInput) -> str:
        await self.client.delete_task(params.task_id)
        return f"Task '{params.task_id}' deleted successfully."


class AttachFileInput(ToolInput):
    """Input para anexar arquivo por URL."""
    task_id: str = Field(..., min_length=1, description=TASK_ID_DESCRIPTION)
    file_url: str = Field(..., min_length=1, description="Public URL of the file to attach")


class AttachFile(ToolHandler):
    description = "Attach a file to a ClickUp task from a URL."
    input_model = AttachFileInput
    error_context = "attaching file"

    async def run(self, params: AttachFileInput) -> str:
        result = await self.client.attach_file(params.task_id, params.file_url)
        attachment = {
            "id": pluck(result, "id", default=""),
            "title": pluck(result, "title", default=""),
            "url": pluck(result, "url", default=params.file_url),
        }
        return render("File attached to task successfully.", attachment)


# ============================================================================
# TAGS
# ============================================================================

class TagAction(str, Enum):
    ADD = "add"
    REMOVE = "remove"


class ManageTagsInput(ToolInput):
    """Input para adicionar/remover tag de uma task."""
    action: Optional[str] = Field(default=None, description="add or remove")
    task_id: str = Field(..., min_length=1, description=TASK_ID_DESCRIPTION)
    tag_name: str = Field(..., min_length=1, description="Tag name (must exist in the space)")


class ManageTags(ActionToolHandler):
    description = "Add or remove a tag on a ClickUp task."
    input_model = ManageTagsInput
    error_context = "managing tags"
    actions = TagAction

    async def do_add(self, params: ManageTagsInput) -> str:
        await self.client.add_tag(params.task_id, params.tag_name)
        return f"Tag '{params.tag_name}' added to task successfully."

    async def do_remove(self, params: ManageTagsInput) -> str:
        await self.client.remove_tag(params.task_id, params.tag_name)
        return f"Tag '{params.tag_name}' removed from task successfully."
