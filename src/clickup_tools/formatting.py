"""
Funções auxiliares de formatação e extração de campos.
"""

import json
from typing import Any, Dict, Mapping, Optional

from .errors import MalformedResponseError
from .identifiers import from_epoch_millis

MAX_OUTPUT_LENGTH = 100000  # 100KB

_MISSING = object()


def sanitize_output(text: str) -> str:
    """
    Sanitiza texto de output para prevenir injection.

    Remove caracteres de controle (exceto newline e tab) e limita o tamanho.

    Args:
        text: Texto a sanitizar

    Returns:
        Texto sanitizado
    """
    if not isinstance(text, str):
        text = str(text)

    sanitized = ''.join(
        char for char in text
        if char in '\n\t' or (ord(char) >= 32 and ord(char) != 127)
    )

    if len(sanitized) > MAX_OUTPUT_LENGTH:
        sanitized = sanitized[:MAX_OUTPUT_LENGTH] + "\n\n[... output truncated ...]"

    return sanitized


def pluck(data: Any, *path: Any, default: Any = None) -> Any:
    """
    Lê um campo (possivelmente aninhado) tolerando ausência.

    Exemplo: pluck(task, "status", "status", default="") para task["status"]["status"].
    Retorna default se qualquer nível estiver ausente, for None ou não for
    um mapping/lista indexável.
    """
    current = data
    for key in path:
        if isinstance(current, Mapping):
            current = current.get(key, _MISSING)
        elif isinstance(current, list) and isinstance(key, int) and -len(current) <= key < len(current):
            current = current[key]
        else:
            return default
        if current is _MISSING or current is None:
            return default
    return current


def pluck_list(data: Any, *path: Any) -> list:
    """Como pluck, mas sempre retorna lista."""
    value = pluck(data, *path, default=[])
    return value if isinstance(value, list) else []


def require_key(data: Any, key: str) -> Any:
    """
    Lê um campo indispensável da resposta (ex: id de um create).

    Raises:
        MalformedResponseError: Se o campo estiver ausente
    """
    value = pluck(data, key)
    if value is None or value == "":
        raise MalformedResponseError(key)
    return value


def format_timestamp(ts: Any) -> Optional[str]:
    """
    Converte timestamp em milissegundos para string legível.

    Args:
        ts: Timestamp em milissegundos (int ou string numérica)

    Returns:
        String formatada YYYY-MM-DD HH:MM:SS, ou None se ausente
    """
    if ts is None or ts == "":
        return None
    try:
        return from_epoch_millis(int(ts))
    except (ValueError, TypeError, OverflowError, OSError):
        return str(ts)


def format_minutes(ms: Any) -> str:
    """Duração em ms para "N min" (uma casa decimal)."""
    try:
        minutes = round(int(ms) / 60000, 1)
    except (ValueError, TypeError):
        minutes = 0
    return f"{minutes} min"


def to_json(payload: Any) -> str:
    return json.dumps(payload, indent=2, ensure_ascii=False)


def render(message: str, payload: Optional[Any] = None) -> str:
    """Linha de status, opcionalmente seguida de JSON formatado."""
    if payload is None:
        return message
    return f"{message}\n{to_json(payload)}"


def format_task(task: Dict[str, Any]) -> Dict[str, Any]:
    """Projeção compacta de uma task para o agente."""
    return {
        "id": pluck(task, "id", default=""),
        "custom_id": pluck(task, "custom_id"),
        "name": pluck(task, "name", default=""),
        "status": pluck(task, "status", "status", default=""),
        "priority": pluck(task, "priority", "priority"),
        "assignees": [
            pluck(a, "username") or pluck(a, "id")
            for a in pluck_list(task, "assignees")
        ],
        "due_date": format_timestamp(pluck(task, "due_date")),
        "list": pluck(task, "list", "name"),
        "url": pluck(task, "url"),
    }
