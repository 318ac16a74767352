"""
Exceções específicas do ClickUp Tools.

Todas as falhas internas derivam de ClickUpError e carregam um ErrorKind,
permitindo que a borda dos handlers decida como renderizar a mensagem.
"""

from enum import Enum
from typing import Iterable, Optional


class ErrorKind(str, Enum):
    """Categorias de erro."""
    CONFIGURATION = "configuration"
    VALIDATION = "validation"
    TRANSPORT = "transport"
    REMOTE_API = "remote_api"
    UNKNOWN_ACTION = "unknown_action"

    @property
    def is_local(self) -> bool:
        """Erros detectados localmente, antes de qualquer chamada de rede."""
        return self in (ErrorKind.CONFIGURATION, ErrorKind.VALIDATION, ErrorKind.UNKNOWN_ACTION)


class ClickUpError(Exception):
    """Exceção base para erros do ClickUp Tools."""
    kind: ErrorKind = ErrorKind.REMOTE_API

    @property
    def retryable(self) -> bool:
        return False


class ConfigurationError(ClickUpError):
    """Erro de configuração (token ausente, etc)."""
    kind = ErrorKind.CONFIGURATION


class ValidationError(ClickUpError):
    """Erro de validação de entrada."""
    kind = ErrorKind.VALIDATION


class InvalidDateError(ValidationError, ValueError):
    """Data/hora que não pôde ser interpretada."""

    def __init__(self, value: object):
        self.value = value
        super().__init__(f"invalid date/time value {value!r}")


class UnknownActionError(ClickUpError):
    """Ação desconhecida em um handler consolidado."""
    kind = ErrorKind.UNKNOWN_ACTION

    def __init__(self, action: str, valid_actions: Iterable[str]):
        self.action = action
        self.valid_actions = list(valid_actions)
        super().__init__(f"Unknown action '{action}'. Use: {', '.join(self.valid_actions)}.")


class UnsupportedMethodError(ClickUpError, ValueError):
    """Método HTTP não suportado pelo cliente (erro de programação)."""
    kind = ErrorKind.VALIDATION

    def __init__(self, method: str):
        self.method = method
        super().__init__(f"Unsupported HTTP method: {method}")


class TransportError(ClickUpError):
    """Falha de conexão, DNS ou timeout."""
    kind = ErrorKind.TRANSPORT

    @property
    def retryable(self) -> bool:
        return True


class ClickUpAPIError(ClickUpError):
    """Erro retornado pela API do ClickUp (resposta não-2xx)."""
    kind = ErrorKind.REMOTE_API

    def __init__(
        self,
        message: str,
        status_code: int,
        err_code: Optional[str] = None,
        method: Optional[str] = None,
        url: Optional[str] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.err_code = err_code
        self.method = method
        self.url = url
        text = f"ClickUp API error ({status_code}): {message}"
        if err_code:
            text += f" (code: {err_code})"
        super().__init__(text)

    @property
    def retryable(self) -> bool:
        # 429 e 5xx são transitórios; nada aqui faz retry, é apenas informativo
        return self.status_code == 429 or self.status_code >= 500


class MalformedResponseError(ClickUpError):
    """Resposta 2xx sem um campo indispensável para a operação."""
    kind = ErrorKind.REMOTE_API

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"ClickUp API response is missing '{key}'")
