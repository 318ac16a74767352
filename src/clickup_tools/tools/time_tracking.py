"""
Time tracking: iniciar/parar timer, registrar tempo, listar e timer atual.
"""

from enum import Enum
from typing import Any, Dict, Optional

from pydantic import Field

from ..formatting import format_minutes, format_timestamp, pluck, pluck_list, render, to_json
from .base import ActionToolHandler, CsvList, EpochMillis, ToolInput
from .tasks import TASK_ID_DESCRIPTION


class TimeTrackingAction(str, Enum):
    START = "start"
    STOP = "stop"
    LOG = "log"
    LIST = "list"
    CURRENT = "current"


class TimeTrackingInput(ToolInput):
    """Input da tool de time tracking."""
    action: Optional[str] = Field(default=None, description="start, stop, log, list, or current")
    workspace_id: Optional[str] = Field(default=None, description="Workspace/team ID. Uses configured default if omitted.")
    task_id: Optional[str] = Field(default=None, description=f"{TASK_ID_DESCRIPTION}. Required for start, log, list.")
    start: EpochMillis = Field(default=None, description="log: start time (ISO 8601)")
    duration: Optional[int] = Field(default=None, gt=0, description="log: duration in milliseconds")
    description: Optional[str] = Field(default=None, description="start/log: entry description")
    billable: Optional[bool] = Field(default=None, description="start/log: mark as billable")
    tags: CsvList = Field(default=None, description="start/log: comma-separated tag names")


def time_entry_summary(entry: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "id": pluck(entry, "id", default=""),
        "task": pluck(entry, "task", "name") or pluck(entry, "task", "id") or pluck(entry, "task_id", default=""),
        "description": pluck(entry, "description", default=""),
        "start": format_timestamp(pluck(entry, "start")) or "",
        "end": format_timestamp(pluck(entry, "end")) or "",
        "duration": format_minutes(pluck(entry, "duration")) if pluck(entry, "duration") is not None else "",
        "billable": bool(pluck(entry, "billable", default=False)),
    }


class TimeTracking(ActionToolHandler):
    description = (
        "Track time on ClickUp tasks. "
        "start/stop a timer, log a past time entry, list entries of a task, or show the running timer."
    )
    input_model = TimeTrackingInput
    error_context = "with time tracking"
    actions = TimeTrackingAction
    required_fields = {
        TimeTrackingAction.START: ("task_id",),
        TimeTrackingAction.LOG: ("task_id", "start", "duration"),
        TimeTrackingAction.LIST: ("task_id",),
    }

    async def before_dispatch(self, params: TimeTrackingInput, action: TimeTrackingAction) -> None:
        # list usa /task/{id}/time, que não depende do workspace
        if action is not TimeTrackingAction.LIST:
            self.workspace(params, "time tracking")

    def _entry_options(self, params: TimeTrackingInput) -> Dict[str, Any]:
        data: Dict[str, Any] = {}
        if params.description is not None:
            data["description"] = params.description
        if params.billable is not None:
            data["billable"] = params.billable
        if params.tags:
            data["tags"] = [{"name": tag} for tag in params.tags]
        return data

    async def do_start(self, params: TimeTrackingInput) -> str:
        workspace_id = self.workspace(params, "time tracking")
        result = await self.client.start_timer(workspace_id, params.task_id, self._entry_options(params))
        return render(f"Timer started on task '{params.task_id}'.", time_entry_summary(pluck(result, "data", default=result)))

    async def do_stop(self, params: TimeTrackingInput) -> str:
        workspace_id = self.workspace(params, "time tracking")
        result = await self.client.stop_timer(workspace_id)
        return render("Timer stopped.", time_entry_summary(pluck(result, "data", default=result)))

    async def do_log(self, params: TimeTrackingInput) -> str:
        workspace_id = self.workspace(params, "time tracking")
        data = {
            "start": params.start,
            "duration": params.duration,
            **self._entry_options(params),
        }
        result = await self.client.create_time_entry(workspace_id, params.task_id, data)
        return render("Time entry logged.", time_entry_summary(pluck(result, "data", default=result)))

    async def do_list(self, params: TimeTrackingInput) -> str:
        entries = pluck_list(await self.client.get_task_time_entries(params.task_id), "data")
        if not entries:
            return "No time entries found for this task."

        output = [
            {
                "id": pluck(e, "id", default=""),
                "user": pluck(e, "user", "username", default=""),
                "duration": format_minutes(pluck(e, "duration")) if pluck(e, "duration") is not None else "",
                "description": pluck(e, "description", default=""),
                "start": format_timestamp(pluck(e, "start")) or "",
                "end": format_timestamp(pluck(e, "end")) or "",
                "billable": bool(pluck(e, "billable", default=False)),
            }
            for e in entries
        ]
        return to_json({"task_id": params.task_id, "count": len(output), "entries": output})

    async def do_current(self, params: TimeTrackingInput) -> str:
        workspace_id = self.workspace(params, "time tracking")
        entry = pluck(await self.client.get_current_time_entry(workspace_id), "data")
        if not entry:
            return "No timer is currently running."
        return render("Currently running timer:", time_entry_summary(entry))
