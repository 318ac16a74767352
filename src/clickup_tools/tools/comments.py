"""
Comentários de tasks: ler (paginado) e adicionar.
"""

from enum import Enum
from typing import Any, Dict, Optional

from pydantic import Field

from ..formatting import format_timestamp, pluck, pluck_list, render, to_json
from .base import ActionToolHandler, ToolInput
from .tasks import TASK_ID_DESCRIPTION


class CommentAction(str, Enum):
    READ = "read"
    ADD = "add"


class ManageCommentsInput(ToolInput):
    """Input da tool de comentários."""
    action: Optional[str] = Field(default=None, description="read (default) or add")
    task_id: str = Field(..., min_length=1, description=TASK_ID_DESCRIPTION)
    comment_text: Optional[str] = Field(default=None, description="add: comment text")
    assignee: Optional[int] = Field(default=None, description="add: user ID to assign the comment to")
    notify_all: bool = Field(default=False, description="add: notify all task watchers")
    start: Optional[int] = Field(default=None, description="read: date (ms) of the oldest comment already seen, for pagination")
    start_id: Optional[str] = Field(default=None, description="read: ID of the oldest comment already seen, for pagination")


def comment_text(comment: Dict[str, Any]) -> str:
    """Junta os blocos comment[].text em um texto só."""
    return "".join(str(pluck(block, "text", default="")) for block in pluck_list(comment, "comment")).strip()


class ManageComments(ActionToolHandler):
    description = (
        "Read or add comments on a ClickUp task. "
        "read returns up to 25 comments; use start/startId from the last one to page."
    )
    input_model = ManageCommentsInput
    error_context = "with comments"
    actions = CommentAction
    default_action = CommentAction.READ
    required_fields = {
        CommentAction.ADD: ("comment_text",),
    }

    async def do_read(self, params: ManageCommentsInput) -> str:
        query: Dict[str, Any] = {}
        if params.start is not None:
            query["start"] = params.start
        if params.start_id:
            query["start_id"] = params.start_id

        comments = pluck_list(await self.client.get_comments(params.task_id, query), "comments")
        if not comments:
            return "No comments found on this task."

        output = [
            {
                "id": pluck(c, "id", default=""),
                "text": comment_text(c),
                "user": pluck(c, "user", "username") or pluck(c, "user", "email") or "Unknown",
                "date": format_timestamp(pluck(c, "date")) or "",
            }
            for c in comments
        ]
        return to_json({"count": len(output), "comments": output})

    async def do_add(self, params: ManageCommentsInput) -> str:
        data: Dict[str, Any] = {"comment_text": params.comment_text}
        if params.assignee is not None:
            data["assignee"] = params.assignee
        if params.notify_all:
            data["notify_all"] = True

        result = await self.client.create_comment(params.task_id, data)
        return render("Comment added successfully.", {"id": pluck(result, "id", default="")})
