from datetime import date
from typing import Literal, Optional

from pydantic import Field

from schemas.base import FormSchema, NonNegativeMoney


class Produto(FormSchema):
    """Cadastro de produto no estoque."""

    codigo: str = Field(min_length=1)
    nome: str = Field(min_length=1)
    descricao: Optional[str] = None
    quantidade: float = Field(ge=0)
    quantidade_minima: float = Field(ge=0)
    unidade: str = Field(min_length=1)
    valor_unitario: NonNegativeMoney
    fornecedor: Optional[str] = None
    localizacao: Optional[str] = None


class MovimentacaoEstoque(FormSchema):
    """Entrada ou saída de produto."""

    produto_id: int = Field(ge=1)
    tipo: Literal["entrada", "saida"]
    quantidade: float = Field(gt=0)
    data: date
    motivo: str = Field(min_length=1)
    observacoes: Optional[str] = None
