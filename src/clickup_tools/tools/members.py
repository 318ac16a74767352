"""
Membros do workspace: listar, buscar e resolver nomes/emails em user IDs.
"""

from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import Field

from ..errors import ValidationError
from ..formatting import pluck, pluck_list, to_json
from .base import ActionToolHandler, ToolInput, split_csv


class MembersAction(str, Enum):
    LIST = "list"
    FIND = "find"
    RESOLVE = "resolve"


class MembersInput(ToolInput):
    """Input da tool de membros."""
    action: Optional[str] = Field(default=None, description="list (default), find, or resolve")
    query: Optional[Union[str, List[str]]] = Field(
        default=None,
        description="find: text to match in username, email or initials. "
                    "resolve: comma-separated usernames or emails."
    )


def flatten_members(response: Dict[str, Any]) -> List[Dict[str, Any]]:
    """Achata teams[].members[].user em uma lista simples de usuários."""
    members = []
    for team in pluck_list(response, "teams"):
        for member in pluck_list(team, "members"):
            user = pluck(member, "user")
            members.append(user if isinstance(user, dict) else member)
    return members


def find_members(members: List[Dict[str, Any]], query: str) -> List[Dict[str, Any]]:
    """Substring case-insensitive em username, email ou initials."""
    needle = query.lower()
    return [
        m for m in members
        if any(needle in str(pluck(m, key, default="")).lower() for key in ("username", "email", "initials"))
    ]


def resolve_members(members: List[Dict[str, Any]], names: List[str]) -> List[Dict[str, Any]]:
    """
    Match exato (case-insensitive) por username ou email.

    Um resultado por nome, na ordem de entrada, mesmo sem match.
    """
    results = []
    for name in names:
        lowered = name.lower()
        found = None
        for m in members:
            if lowered in (str(pluck(m, "username", default="")).lower(), str(pluck(m, "email", default="")).lower()):
                found = pluck(m, "id")
                break
        results.append({"query": name, "id": found, "resolved": found is not None})
    return results


class Members(ActionToolHandler):
    description = (
        "Look up ClickUp workspace members. "
        "list: all members. find: search by name, email or initials. "
        "resolve: convert comma-separated names/emails to user IDs for assigning tasks."
    )
    input_model = MembersInput
    error_context = "with members"
    actions = MembersAction
    default_action = MembersAction.LIST
    required_fields = {
        MembersAction.FIND: ("query",),
        MembersAction.RESOLVE: ("query",),
    }

    async def _members(self) -> List[Dict[str, Any]]:
        return flatten_members(await self.client.get_teams())

    async def do_list(self, params: MembersInput) -> str:
        members = await self._members()
        if not members:
            return "No members found."
        output = [
            {
                "id": pluck(m, "id", default=""),
                "username": pluck(m, "username", default=""),
                "email": pluck(m, "email", default=""),
                "role": pluck(m, "role", default=""),
            }
            for m in members
        ]
        return to_json({"count": len(output), "members": output})

    async def do_find(self, params: MembersInput) -> str:
        query = params.query if isinstance(params.query, str) else " ".join(params.query)
        matches = find_members(await self._members(), query)
        if not matches:
            return f"No member found matching '{query}'."
        output = [
            {
                "id": pluck(m, "id", default=""),
                "username": pluck(m, "username", default=""),
                "email": pluck(m, "email", default=""),
            }
            for m in matches
        ]
        return to_json({"matches": output})

    async def do_resolve(self, params: MembersInput) -> str:
        names = split_csv(params.query)
        if not names:
            raise ValidationError("query is required for resolve action.")
        results = resolve_members(await self._members(), names)
        return to_json({"results": results})
