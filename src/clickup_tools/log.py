"""
Logging (loguru) e correlation ID por invocação de tool.
"""

import contextvars
import sys
import uuid

from loguru import logger

# ============================================================================
# CORRELATION ID
# ============================================================================

# Variável de contexto para correlation ID
_correlation_id: contextvars.ContextVar[str] = contextvars.ContextVar(
    'correlation_id',
    default='no-cid'
)


def get_correlation_id() -> str:
    """Retorna o correlation ID atual."""
    return _correlation_id.get()


def set_new_correlation_id() -> str:
    """Gera e define um novo correlation ID."""
    new_id = str(uuid.uuid4())[:8]
    _correlation_id.set(new_id)
    return new_id


def _inject_correlation_id(record) -> None:
    record["extra"].setdefault("correlation_id", get_correlation_id())


# ============================================================================
# LOGGING CONFIGURATION
# ============================================================================

STDERR_FORMAT = (
    "<level>{level: <8}</level> | [{extra[correlation_id]}] "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - {message}"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | [{extra[correlation_id]}] {name}:{function}:{line} - {message}"


def setup_logging(level: str = "INFO", log_file: str = "") -> None:
    """
    Configura os sinks do loguru.

    Stderr sempre (stdout é do protocolo MCP); arquivo com rotação se log_file.
    """
    # Todo registro recebe o correlation_id do contexto atual
    logger.configure(patcher=_inject_correlation_id)
    logger.remove()
    logger.add(sys.stderr, level=level, format=STDERR_FORMAT, colorize=True)

    if log_file:
        logger.add(
            log_file,
            level=level,
            format=FILE_FORMAT,
            rotation="10 MB",
            retention="7 days",
            compression="gz",
            serialize=False,
            enqueue=True
        )
