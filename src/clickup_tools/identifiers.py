"""
Identificadores de task e conversão de datas.

Custom task IDs (ex: DEV-42) só são resolvidos pela API quando acompanhados
de custom_task_ids=true e do team_id do workspace.
"""

import re
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from .errors import InvalidDateError

CUSTOM_TASK_ID_PATTERN = re.compile(r"[A-Z]+-\d+")

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def is_custom_task_id(task_id: Optional[str]) -> bool:
    """
    Verifica se o ID é um custom task ID (LETRAS-NÚMERO).

    Args:
        task_id: ID da task

    Returns:
        True para "DEV-42"; False para IDs nativos ("868z8d9q1") ou minúsculas
    """
    if not isinstance(task_id, str):
        return False
    return CUSTOM_TASK_ID_PATTERN.fullmatch(task_id) is not None


def with_custom_id_params(
    task_id: str,
    workspace_id: Optional[str],
    params: Optional[Dict[str, Any]] = None
) -> Dict[str, Any]:
    """
    Adiciona os query params necessários para custom task IDs.

    Args:
        task_id: ID da task (nativo ou custom)
        workspace_id: Workspace configurado (pode ser vazio)
        params: Params existentes, não são modificados

    Returns:
        Novo dict com custom_task_ids/team_id quando aplicável
    """
    merged = dict(params or {})
    if workspace_id and is_custom_task_id(task_id):
        merged["custom_task_ids"] = "true"
        merged["team_id"] = workspace_id
    return merged


def to_epoch_millis(value: str) -> int:
    """
    Converte data ISO-8601 para timestamp em milissegundos.

    Aceita "2024-01-15", "2024-01-15T10:30:00", "2024-01-15 10:30:00.250",
    sufixo "Z" ou offset. Datas sem fuso são tratadas como UTC.

    Raises:
        InvalidDateError: Se o valor não puder ser interpretado
    """
    if not isinstance(value, str) or not value.strip():
        raise InvalidDateError(value)

    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"

    try:
        dt = datetime.fromisoformat(text)
    except ValueError:
        raise InvalidDateError(value) from None

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)

    # timedelta evita o arredondamento de float de dt.timestamp()
    delta = dt - datetime(1970, 1, 1, tzinfo=timezone.utc)
    return (delta.days * 86400 + delta.seconds) * 1000 + delta.microseconds // 1000


def from_epoch_millis(millis: int) -> str:
    """
    Converte timestamp em milissegundos para "YYYY-MM-DD HH:MM:SS" (UTC).

    A fração de segundo é descartada: to_epoch_millis(from_epoch_millis(m))
    devolve m arredondado para baixo ao segundo inteiro.
    """
    seconds = int(millis) // 1000
    return datetime.fromtimestamp(seconds, tz=timezone.utc).strftime(TIMESTAMP_FORMAT)
