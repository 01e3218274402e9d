from datetime import date
from typing import Literal, Optional

from pydantic import Field

from schemas.base import FormSchema, PositiveMoney


class Lancamento(FormSchema):
    """Lançamento financeiro."""

    data: date
    tipo: Literal["entrada", "saida"]
    categoria: str = Field(min_length=1)
    descricao: str = Field(min_length=1)
    valor: PositiveMoney
    observacoes: Optional[str] = None
