"""
Base dos schemas de entrada (equivalentes aos formulários do painel).
"""
from decimal import Decimal, InvalidOperation
from typing import Annotated, Type, TypeVar

import pydantic
from pydantic import AfterValidator, BaseModel, ConfigDict

from services.errors import ValidationError
from utils.money import quantize

# Maior valor aceito nos formulários (12 dígitos, 2 casas)
VALOR_MAXIMO = Decimal("9999999999.99")


def _cents(value: Decimal) -> Decimal:
    try:
        value = quantize(value)
    except InvalidOperation:
        raise ValueError("Valor muito alto") from None
    if abs(value) > VALOR_MAXIMO:
        raise ValueError("Valor muito alto")
    return value


def _positive(value: Decimal) -> Decimal:
    if value <= 0:
        raise ValueError("Valor deve ser maior que zero")
    return value


def _non_negative(value: Decimal) -> Decimal:
    if value < 0:
        raise ValueError("Valor deve ser maior ou igual a zero")
    return value


# Valores monetários com duas casas decimais
NonNegativeMoney = Annotated[Decimal, AfterValidator(_cents), AfterValidator(_non_negative)]
PositiveMoney = Annotated[Decimal, AfterValidator(_cents), AfterValidator(_positive)]

HORA_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"

# Mensagens em português por tipo de erro do pydantic
MENSAGENS = {
    "missing": "campo obrigatório",
    "string_too_short": "campo obrigatório",
    "string_type": "deve ser um texto",
    "string_pattern_mismatch": "formato inválido",
    "literal_error": "opção inválida",
    "greater_than": "deve ser maior que {gt}",
    "greater_than_equal": "deve ser maior ou igual a {ge}",
    "decimal_parsing": "número inválido",
    "decimal_type": "número inválido",
    "float_parsing": "número inválido",
    "float_type": "número inválido",
    "int_parsing": "número inteiro inválido",
    "int_type": "número inteiro inválido",
    "finite_number": "número inválido",
    "date_parsing": "data inválida",
    "date_from_datetime_parsing": "data inválida",
    "date_type": "data inválida",
    "extra_forbidden": "campo não permitido",
}

SchemaT = TypeVar("SchemaT", bound=BaseModel)


class FormSchema(BaseModel):
    """Remove espaços das pontas dos textos e rejeita campos desconhecidos."""

    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")


def _message(error: dict) -> str:
    template = MENSAGENS.get(error["type"])
    if template:
        msg = template.format(**error.get("ctx", {}))
    else:
        msg = error["msg"]
        if msg.startswith("Value error, "):
            msg = msg[len("Value error, "):]
    campo = ".".join(str(p) for p in error["loc"])
    return f"{campo}: {msg}" if campo else msg


def parse_input(schema: Type[SchemaT], **data) -> SchemaT:
    """
    Valida os dados com o schema e converte erros do pydantic em ValidationError
    com mensagem legível.
    """
    try:
        return schema(**data)
    except pydantic.ValidationError as exc:
        errors = exc.errors(include_url=False)
        message = "; ".join(_message(e) for e in errors)
        raise ValidationError(message, errors=errors) from exc
