"""
Chat do ClickUp (API v3): canais e envio de mensagens.
"""

from enum import Enum
from typing import Any, Dict, Optional

from pydantic import Field

from ..formatting import pluck, pluck_list, render, to_json
from .base import ActionToolHandler, ToolInput


class ChatAction(str, Enum):
    LIST_CHANNELS = "list_channels"
    SEND_MESSAGE = "send_message"


class MessageType(str, Enum):
    MESSAGE = "message"
    POST = "post"


class ChatInput(ToolInput):
    """Input da tool de chat."""
    action: Optional[str] = Field(default=None, description="list_channels or send_message")
    workspace_id: Optional[str] = Field(default=None, description="Workspace ID. Uses configured default if omitted.")
    cursor: Optional[str] = Field(default=None, description="list_channels: pagination cursor from a previous call")
    channel_id: Optional[str] = Field(default=None, description="send_message: channel ID")
    content: Optional[str] = Field(default=None, description="send_message: message content")
    content_format: str = Field(default="text/md", description="send_message: text/md or text/plain")
    type: MessageType = Field(default=MessageType.MESSAGE, description="send_message: message or post")
    post_title: Optional[str] = Field(default=None, description="send_message: title when type is post")


class Chat(ActionToolHandler):
    description = "List ClickUp chat channels or send a message (or post) to a channel."
    input_model = ChatInput
    error_context = "with chat"
    actions = ChatAction
    required_fields = {
        ChatAction.SEND_MESSAGE: ("channel_id", "content"),
    }

    async def before_dispatch(self, params: ChatInput, action: ChatAction) -> None:
        self.workspace(params, "chat")

    async def do_list_channels(self, params: ChatInput) -> str:
        query = {"cursor": params.cursor} if params.cursor else None
        result = await self.client.get_chat_channels(self.workspace(params, "chat"), query)

        channels = pluck_list(result, "channels")
        if not channels:
            return "No chat channels found."

        output: Dict[str, Any] = {
            "count": len(channels),
            "channels": [
                {
                    "id": pluck(ch, "id", default=""),
                    "name": pluck(ch, "name", default=""),
                    "type": pluck(ch, "type", default=""),
                    "member_count": pluck(ch, "member_count", default=0),
                }
                for ch in channels
            ],
        }
        next_cursor = pluck(result, "next_cursor")
        if next_cursor:
            output["next_cursor"] = next_cursor
        return to_json(output)

    async def do_send_message(self, params: ChatInput) -> str:
        data: Dict[str, Any] = {
            "content": params.content,
            "content_format": params.content_format,
        }
        if params.type is MessageType.POST:
            data["type"] = MessageType.POST.value
            if params.post_title:
                data["post_title"] = params.post_title

        result = await self.client.send_chat_message(self.workspace(params, "chat"), params.channel_id, data)
        return render(
            f"Message sent to channel '{params.channel_id}' successfully.",
            {"id": pluck(result, "id", default="")}
        )
