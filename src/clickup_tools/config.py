"""
Configuração via variáveis de ambiente.
"""

import os
from typing import Any, Mapping, Optional

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, field_validator

# ============================================================================
# CONFIGURAÇÃO
# ============================================================================

API_BASE_URL = "https://api.clickup.com/api/v2"
API_V3_BASE_URL = "https://api.clickup.com/api/v3"
DEFAULT_TIMEOUT = 30.0
CONNECTION_TEST_TIMEOUT = 10.0

KNOWN_ENV_VARS = (
    "CLICKUP_API_TOKEN",
    "CLICKUP_WORKSPACE_ID",
    "LOG_LEVEL",
    "LOG_FILE",
    "READ_ONLY_MODE",
)


class Credentials(BaseModel):
    """Token de API e workspace padrão. Imutável após a construção."""
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    api_token: str = Field(default="", description="Personal API token (pk_...)")
    workspace_id: str = Field(default="", description="Workspace (team) padrão")

    @field_validator("api_token", "workspace_id", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @classmethod
    def from_mapping(cls, config: Optional[Mapping[str, Any]]) -> "Credentials":
        """Constrói a partir do mapping entregue pelo host (api_token, workspace_id)."""
        config = config or {}
        return cls(api_token=config.get("api_token"), workspace_id=config.get("workspace_id"))


class Settings(BaseModel):
    """Configuração do processo."""
    model_config = ConfigDict(frozen=True)

    credentials: Credentials = Field(default_factory=Credentials)
    log_level: str = "INFO"
    log_file: str = ""
    read_only: bool = False

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ
        return cls(
            credentials=Credentials(
                api_token=env.get("CLICKUP_API_TOKEN", ""),
                workspace_id=env.get("CLICKUP_WORKSPACE_ID", ""),
            ),
            log_level=env.get("LOG_LEVEL", "INFO"),
            log_file=env.get("LOG_FILE", ""),
            read_only=env.get("READ_ONLY_MODE", "false").lower() == "true",
        )


def validate_settings(settings: Settings, environ: Optional[Mapping[str, str]] = None) -> None:
    """
    Valida configuração no startup.

    Ao contrário de um fail-fast, token ausente apenas gera warning: as tools
    respondem "not configured" em vez de derrubar o servidor.
    """
    env = os.environ if environ is None else environ

    if not settings.credentials.api_token:
        logger.warning("CLICKUP_API_TOKEN não configurado; todas as tools responderão 'not configured'")

    # Warning para desconhecidas (possível typo)
    unknown = {k for k in env.keys() if k.startswith("CLICKUP_")} - set(KNOWN_ENV_VARS)
    for var in sorted(unknown):
        logger.warning(f"Variável desconhecida ignorada (possível typo?): {var}")

    mode = "READ_ONLY" if settings.read_only else "READ_WRITE"
    logger.info(f"Configuração validada | Modo: {mode}")
