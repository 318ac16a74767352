"""
Contrato comum das tools.

Todo handler segue o mesmo fluxo em handle():
    1. guarda de configuração (sem token → mensagem fixa, sem rede)
    2. validação dos argumentos via modelo pydantic
    3. execução (run), que pode despachar para uma ação
    4. borda de erro: qualquer exceção vira string, nunca propaga
"""

from enum import Enum
from typing import Annotated, Any, Callable, ClassVar, Dict, List, Literal, Mapping, Optional, Tuple, Type, Union

from loguru import logger
from pydantic import BaseModel, BeforeValidator, ConfigDict
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from ..client import ClickUpClient
from ..errors import ClickUpError, ConfigurationError, UnknownActionError, ValidationError
from ..formatting import sanitize_output
from ..identifiers import to_epoch_millis
from ..log import set_new_correlation_id

NOT_CONFIGURED = "ClickUp integration is not configured."


# ============================================================================
# TIPOS DE INPUT
# ============================================================================

def split_csv(value: Any) -> Any:
    """Aceita "a, b" ou ["a", "b"]; descarta itens vazios."""
    if value is None:
        return None
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        value = str(value)
    if isinstance(value, str):
        value = value.split(",")
    if isinstance(value, (list, tuple)):
        items = [str(v).strip() if isinstance(v, str) else v for v in value]
        return [v for v in items if v != "" and v is not None]
    return value


def parse_date(value: Any) -> Any:
    """
    Converte data ISO-8601 para epoch ms durante a validação.

    Vazio vira None; inteiros e strings só com dígitos passam direto como
    epoch ms.
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return to_epoch_millis(value)


# Marcador de "limpar a data" (entrada "")
CLEAR_DATE = ""


def parse_clearable_date(value: Any) -> Any:
    """Como parse_date, mas "" vira CLEAR_DATE em vez de None."""
    if isinstance(value, str) and not value.strip():
        return CLEAR_DATE
    return parse_date(value)


CsvList = Annotated[Optional[List[str]], BeforeValidator(split_csv)]
IntCsvList = Annotated[Optional[List[int]], BeforeValidator(split_csv)]
EpochMillis = Annotated[Optional[int], BeforeValidator(parse_date)]
ClearableEpochMillis = Annotated[Optional[Union[int, Literal[""]]], BeforeValidator(parse_clearable_date)]


class ToolInput(BaseModel):
    """Base dos modelos de input: camelCase no schema, snake_case no código."""
    model_config = ConfigDict(
        str_strip_whitespace=True,
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


def describe_validation_error(exc: PydanticValidationError) -> str:
    """Primeiro erro de validação como mensagem para o agente."""
    error = exc.errors()[0]
    field = ".".join(str(part) for part in error["loc"]) or "arguments"

    if error["type"] in ("missing", "string_too_short") or error.get("input", "") is None:
        return f"Error: {field} is required."

    reason = error["msg"]
    if error["type"] == "value_error":
        reason = str(error.get("ctx", {}).get("error", reason))
    return f"Error: {field} is invalid: {reason}."


# ============================================================================
# HANDLERS
# ============================================================================

class ToolHandler:
    """
    Handler de uma tool.

    Subclasses definem description, input_model, error_context e run().
    """

    description: ClassVar[str] = ""
    input_model: ClassVar[Type[ToolInput]] = ToolInput
    # Completa "Error <error_context>: ..." (ex: "creating task")
    error_context: ClassVar[str] = "running tool"

    def __init__(self, client: ClickUpClient):
        self.client = client

    @classmethod
    def parameters_schema(cls) -> Dict[str, Any]:
        """JSON schema dos argumentos (nomes em camelCase)."""
        return cls.input_model.model_json_schema(by_alias=True)

    async def handle(self, arguments: Optional[Mapping[str, Any]] = None) -> str:
        """
        Ponto de entrada único. Sempre retorna string, sucesso ou erro.
        """
        set_new_correlation_id()
        tool = type(self).__name__
        try:
            if not self.client.is_configured():
                raise ConfigurationError(NOT_CONFIGURED)
            try:
                params = self.input_model.model_validate(dict(arguments or {}))
            except PydanticValidationError as e:
                logger.debug(f"{tool}: argumentos inválidos ({e.error_count()} erro(s))")
                return describe_validation_error(e)
            result = await self.run(params)
        except ClickUpError as e:
            if e.kind.is_local:
                logger.debug(f"{tool}: {e.kind.value}: {e}")
                return sanitize_output(f"Error: {e}")
            logger.warning(f"{tool}: {e.kind.value} (retryable={e.retryable}): {e}")
            return sanitize_output(f"Error {self.error_context}: {e}")
        except Exception as e:
            logger.exception(f"{tool}: erro inesperado")
            return sanitize_output(f"Error {self.error_context}: {e}")

        return sanitize_output(result)

    async def run(self, params: Any) -> str:
        raise NotImplementedError

    def workspace(self, params: Any, purpose: str = "this action") -> str:
        """
        Workspace informado ou o configurado.

        Raises:
            ValidationError: Se nenhum dos dois estiver disponível
        """
        workspace_id = getattr(params, "workspace_id", None) or self.client.workspace_id
        if not workspace_id:
            raise ValidationError(
                f"Workspace ID is required for {purpose}. Configure it in settings or pass workspaceId."
            )
        return workspace_id


class ActionToolHandler(ToolHandler):
    """
    Handler consolidado: um campo action seleciona uma operação de um
    conjunto fechado (Enum). Cada membro do Enum exige um método do_<valor>.
    """

    actions: ClassVar[Type[Enum]]
    default_action: ClassVar[Optional[Enum]] = None
    # Campos obrigatórios por ação (nomes de campo do modelo, não aliases)
    required_fields: ClassVar[Dict[Enum, Tuple[str, ...]]] = {}

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        actions = cls.__dict__.get("actions")
        if actions is None:
            return
        missing = [a.value for a in actions if not callable(getattr(cls, f"do_{a.value}", None))]
        if missing:
            raise TypeError(f"{cls.__name__} não implementa as ações: {', '.join(missing)}")

    @classmethod
    def action_names(cls) -> List[str]:
        return [a.value for a in cls.actions]

    @classmethod
    def parameters_schema(cls) -> Dict[str, Any]:
        schema = super().parameters_schema()
        action = schema.get("properties", {}).get("action")
        if action is not None:
            action.pop("anyOf", None)
            action.update({"type": "string", "enum": cls.action_names()})
        return schema

    def parse_action(self, value: Optional[str]) -> Enum:
        if not value:
            if self.default_action is not None:
                return self.default_action
            raise ValidationError(f"action is required ({', '.join(self.action_names())}).")
        try:
            return self.actions(value)
        except ValueError:
            raise UnknownActionError(value, self.action_names()) from None

    def check_required(self, params: ToolInput, action: Enum) -> None:
        for name in self.required_fields.get(action, ()):
            value = getattr(params, name, None)
            if value is None or value == "" or value == []:
                alias = type(params).model_fields[name].alias or name
                raise ValidationError(f"{alias} is required for {action.value} action.")

    async def run(self, params: Any) -> str:
        action = self.parse_action(params.action)
        self.check_required(params, action)
        await self.before_dispatch(params, action)
        method: Callable = getattr(self, f"do_{action.value}")
        return await method(params)

    async def before_dispatch(self, params: Any, action: Enum) -> None:
        """Gancho para checagens comuns (ex: workspace obrigatório)."""
