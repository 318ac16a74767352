"""
Cliente HTTP para a API do ClickUp (v2 e v3).

Toda chamada passa por ClickUpClient.request: mesmos headers, mesmo timeout
e um único ponto de tradução de erros remotos.
"""

from enum import Enum
from typing import Any, Dict, Optional
from urllib.parse import quote

import httpx
from loguru import logger

from .config import API_BASE_URL, API_V3_BASE_URL, DEFAULT_TIMEOUT, Credentials
from .errors import ClickUpAPIError, ConfigurationError, TransportError, UnsupportedMethodError
from .identifiers import with_custom_id_params

SUPPORTED_METHODS = ("GET", "POST", "PUT", "DELETE")
QUERY_METHODS = ("GET", "DELETE")


class ApiVersion(str, Enum):
    V2 = "v2"
    V3 = "v3"


BASE_URLS = {
    ApiVersion.V2: API_BASE_URL,
    ApiVersion.V3: API_V3_BASE_URL,
}


def _error_details(response: httpx.Response) -> tuple:
    """Extrai (mensagem, ECODE) do corpo de uma resposta de erro."""
    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict):
        message = body.get("err") or body.get("error") or response.text
        return str(message), body.get("ECODE")
    return response.text, None


def _decode(response: httpx.Response) -> Dict[str, Any]:
    if not response.content:
        return {}
    try:
        data = response.json()
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {}


class ClickUpClient:
    """
    Cliente da API do ClickUp.

    Não guarda estado além das credenciais imutáveis; cada chamada abre seu
    próprio httpx.AsyncClient.
    """

    def __init__(self, credentials: Credentials, timeout: float = DEFAULT_TIMEOUT):
        self.credentials = credentials
        self.timeout = timeout

    def is_configured(self) -> bool:
        return bool(self.credentials.api_token)

    @property
    def workspace_id(self) -> str:
        return self.credentials.workspace_id

    def custom_id_params(self, task_id: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Query params para custom task IDs usando o workspace configurado."""
        return with_custom_id_params(task_id, self.workspace_id, params)

    def get_headers(self) -> Dict[str, str]:
        """
        Retorna headers para autenticação na API.

        Raises:
            ConfigurationError: Se o token não está configurado
        """
        if not self.credentials.api_token:
            raise ConfigurationError("ClickUp API token is not configured.")
        return {
            "Authorization": self.credentials.api_token,
            "Content-Type": "application/json"
        }

    async def request(
        self,
        method: str,
        path: str,
        data: Optional[Dict[str, Any]] = None,
        *,
        params: Optional[Dict[str, Any]] = None,
        version: ApiVersion = ApiVersion.V2
    ) -> Dict[str, Any]:
        """
        Executa uma chamada à API.

        Args:
            method: GET, POST, PUT ou DELETE
            path: Endpoint sem base URL (ex: "/list/123/task")
            data: Query params em GET/DELETE; corpo JSON em POST/PUT
            params: Query params adicionais (ex: custom task IDs)
            version: Versão da API (seleciona a base URL)

        Returns:
            Corpo JSON decodificado, ou {} se vazio/não-JSON

        Raises:
            ConfigurationError: Token ausente (nenhuma chamada de rede)
            UnsupportedMethodError: Método fora de GET/POST/PUT/DELETE
            TransportError: Falha de conexão ou timeout
            ClickUpAPIError: Resposta não-2xx
        """
        headers = self.get_headers()
        method = method.upper()
        if method not in SUPPORTED_METHODS:
            raise UnsupportedMethodError(method)

        url = f"{BASE_URLS[ApiVersion(version)]}{path}"
        query = dict(params or {})
        json_data = None
        if method in QUERY_METHODS:
            query = {**(data or {}), **query}
        else:
            json_data = data

        logger.debug(f"API {method} {path}")
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.request(
                    method=method,
                    url=url,
                    headers=headers,
                    params=query or None,
                    json=json_data
                )
        except httpx.RequestError as e:
            logger.error(f"Falha de conexão: {method} {url} | {type(e).__name__}: {e}")
            raise TransportError(f"Failed to connect to ClickUp API: {e}") from e

        if not response.is_success:
            message, err_code = _error_details(response)
            logger.error(
                f"ClickUp API error: {method} {url} | status={response.status_code} "
                f"err={message} ECODE={err_code}"
            )
            raise ClickUpAPIError(message, response.status_code, err_code, method=method, url=url)

        return _decode(response)

    # ------------------------------------------------------------------
    # Workspace e hierarquia
    # ------------------------------------------------------------------

    async def get_teams(self) -> Dict[str, Any]:
        return await self.request("GET", "/team")

    async def get_spaces(self, team_id: str) -> Dict[str, Any]:
        return await self.request("GET", f"/team/{team_id}/space")

    async def get_folders(self, space_id: str) -> Dict[str, Any]:
        return await self.request("GET", f"/space/{space_id}/folder")

    async def get_folderless_lists(self, space_id: str) -> Dict[str, Any]:
        return await self.request("GET", f"/space/{space_id}/list")

    async def get_lists_in_folder(self, folder_id: str) -> Dict[str, Any]:
        return await self.request("GET", f"/folder/{folder_id}/list")

    # ------------------------------------------------------------------
    # Tasks
    # ------------------------------------------------------------------

    async def search_tasks(self, team_id: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        return await self.request("GET", f"/team/{team_id}/task", params)

    async def get_tasks(self, list_id: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        return await self.request("GET", f"/list/{list_id}/task", params)

    async def get_task(self, task_id: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        return await self.request("GET", f"/task/{task_id}", params=self.custom_id_params(task_id, params))

    async def create_task(self, list_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        # parent pode ser um custom ID
        return await self.request(
            "POST", f"/list/{list_id}/task", data, params=self.custom_id_params(data.get("parent", ""))
        )

    async def update_task(self, task_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        return await self.request("PUT", f"/task/{task_id}", data, params=self.custom_id_params(task_id))

    async def delete_task(self, task_id: str) -> Dict[str, Any]:
        return await self.request("DELETE", f"/task/{task_id}", params=self.custom_id_params(task_id))

    # ------------------------------------------------------------------
    # Tags e anexos
    # ------------------------------------------------------------------

    async def add_tag(self, task_id: str, tag_name: str) -> Dict[str, Any]:
        return await self.request(
            "POST", f"/task/{task_id}/tag/{quote(tag_name, safe='')}",
            params=self.custom_id_params(task_id)
        )

    async def remove_tag(self, task_id: str, tag_name: str) -> Dict[str, Any]:
        return await self.request(
            "DELETE", f"/task/{task_id}/tag/{quote(tag_name, safe='')}",
            params=self.custom_id_params(task_id)
        )

    async def attach_file(self, task_id: str, file_url: str) -> Dict[str, Any]:
        return await self.request(
            "POST", f"/task/{task_id}/attachment", {"url": file_url},
            params=self.custom_id_params(task_id)
        )

    # ------------------------------------------------------------------
    # Comentários
    # ------------------------------------------------------------------

    async def get_comments(self, task_id: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        return await self.request("GET", f"/task/{task_id}/comment", params=self.custom_id_params(task_id, params))

    async def create_comment(self, task_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        return await self.request("POST", f"/task/{task_id}/comment", data, params=self.custom_id_params(task_id))

    # ------------------------------------------------------------------
    # Time tracking
    # ------------------------------------------------------------------

    async def get_task_time_entries(self, task_id: str) -> Dict[str, Any]:
        return await self.request("GET", f"/task/{task_id}/time", params=self.custom_id_params(task_id))

    async def start_timer(
        self,
        team_id: str,
        task_id: str,
        data: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        return await self.request(
            "POST", f"/team/{team_id}/time_entries/start", {"tid": task_id, **(data or {})},
            params=self.custom_id_params(task_id)
        )

    async def stop_timer(self, team_id: str) -> Dict[str, Any]:
        return await self.request("POST", f"/team/{team_id}/time_entries/stop")

    async def create_time_entry(
        self,
        team_id: str,
        task_id: str,
        data: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        return await self.request(
            "POST", f"/team/{team_id}/time_entries", {"tid": task_id, **(data or {})},
            params=self.custom_id_params(task_id)
        )

    async def get_current_time_entry(self, team_id: str) -> Dict[str, Any]:
        return await self.request("GET", f"/team/{team_id}/time_entries/current")

    # ------------------------------------------------------------------
    # Lists
    # ------------------------------------------------------------------

    async def get_list(self, list_id: str) -> Dict[str, Any]:
        return await self.request("GET", f"/list/{list_id}")

    async def create_list(self, space_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        return await self.request("POST", f"/space/{space_id}/list", data)

    async def create_list_in_folder(self, folder_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        return await self.request("POST", f"/folder/{folder_id}/list", data)

    async def update_list(self, list_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        return await self.request("PUT", f"/list/{list_id}", data)

    # ------------------------------------------------------------------
    # Folders
    # ------------------------------------------------------------------

    async def get_folder(self, folder_id: str) -> Dict[str, Any]:
        return await self.request("GET", f"/folder/{folder_id}")

    async def create_folder(self, space_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        return await self.request("POST", f"/space/{space_id}/folder", data)

    async def update_folder(self, folder_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        return await self.request("PUT", f"/folder/{folder_id}", data)

    # ------------------------------------------------------------------
    # Chat (v3)
    # ------------------------------------------------------------------

    async def get_chat_channels(self, workspace_id: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        return await self.request(
            "GET", f"/workspaces/{workspace_id}/chat/channels", params, version=ApiVersion.V3
        )

    async def send_chat_message(self, workspace_id: str, channel_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        return await self.request(
            "POST", f"/workspaces/{workspace_id}/chat/channels/{channel_id}/messages", data,
            version=ApiVersion.V3
        )

    # ------------------------------------------------------------------
    # Docs (v3)
    # ------------------------------------------------------------------

    async def create_doc(self, workspace_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        return await self.request("POST", f"/workspaces/{workspace_id}/docs", data, version=ApiVersion.V3)

    async def get_doc_pages(
        self,
        workspace_id: str,
        doc_id: str,
        params: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        return await self.request(
            "GET", f"/workspaces/{workspace_id}/docs/{doc_id}/pages", params, version=ApiVersion.V3
        )

    async def create_doc_page(self, workspace_id: str, doc_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        return await self.request(
            "POST", f"/workspaces/{workspace_id}/docs/{doc_id}/pages", data, version=ApiVersion.V3
        )

    async def update_doc_page(
        self,
        workspace_id: str,
        doc_id: str,
        page_id: str,
        data: Dict[str, Any]
    ) -> Dict[str, Any]:
        return await self.request(
            "PUT", f"/workspaces/{workspace_id}/docs/{doc_id}/pages/{page_id}", data, version=ApiVersion.V3
        )

