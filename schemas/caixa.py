"""
Schemas de abertura, movimentação e fechamento de caixa.
"""
from datetime import date
from typing import Literal, Optional

from pydantic import Field

from schemas.base import HORA_PATTERN, FormSchema, NonNegativeMoney, PositiveMoney

FORMAS_PAGAMENTO = {
    "dinheiro": "Dinheiro",
    "cartao_credito": "Cartão de Crédito",
    "cartao_debito": "Cartão de Débito",
    "pix": "PIX",
    "transferencia": "Transferência Bancária",
    "cheque": "Cheque",
    "outro": "Outro",
}

FormaPagamento = Literal[
    "dinheiro", "cartao_credito", "cartao_debito", "pix", "transferencia", "cheque", "outro"
]


class AberturaCaixa(FormSchema):
    data: date
    hora: str = Field(pattern=HORA_PATTERN)
    valor_inicial: NonNegativeMoney
    observacoes: Optional[str] = None


class MovimentacaoCaixa(FormSchema):
    tipo: Literal["entrada", "saida"]
    valor: PositiveMoney
    descricao: str = Field(min_length=1)
    forma_pagamento: FormaPagamento
    observacoes: Optional[str] = None


class FechamentoCaixa(FormSchema):
    valor_final: NonNegativeMoney
    observacoes: Optional[str] = None
