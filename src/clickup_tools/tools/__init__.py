from .base import ActionToolHandler, ToolHandler, ToolInput
from .chat import Chat
from .comments import ManageComments
from .documents import ManageDocument, ManageDocumentPages
from .hierarchy import GetHierarchy, SearchTasks
from .lists import ManageFolder, ManageList
from .members import Members
from .tasks import AttachFile, CreateTask, DeleteTask, GetTask, GetTasks, ManageTags, UpdateTask
from .time_tracking import TimeTracking

__all__ = [
    "ActionToolHandler",
    "AttachFile",
    "Chat",
    "CreateTask",
    "DeleteTask",
    "GetHierarchy",
    "GetTask",
    "GetTasks",
    "ManageComments",
    "ManageDocument",
    "ManageDocumentPages",
    "ManageFolder",
    "ManageList",
    "ManageTags",
    "Members",
    "SearchTasks",
    "TimeTracking",
    "ToolHandler",
    "ToolInput",
    "UpdateTask",
]
