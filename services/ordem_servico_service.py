"""
Ordens de serviço (quadro de produção) e cálculo de orçamentos.
"""
from typing import Dict, List, Optional

from services.data_service import Filter, TableStore
from services.errors import InvalidStateError, ValidationError
from utils.money import quantize, sum_values, to_decimal, to_float

ORDENS = "ordens_servico"
ORCAMENTOS = "orcamentos"

# Colunas do quadro, na ordem do fluxo
FLUXO_STATUS = ["em_aberto", "em_producao", "pronto_entrega", "entregue"]

STATUS_ORDEM = {
    "em_aberto": "Em aberto",
    "em_producao": "Em produção",
    "pronto_entrega": "Pronto para entrega",
    "entregue": "Entregue",
    "cancelado": "Cancelado",
}

STATUS_ORCAMENTO = {
    "pendente": "Pendente",
    "aprovado": "Aprovado",
    "recusado": "Recusado",
    "em_producao": "Em produção",
    "concluido": "Concluído",
}


def next_status(status: str) -> Optional[str]:
    if status not in FLUXO_STATUS:
        return None
    i = FLUXO_STATUS.index(status)
    return FLUXO_STATUS[i + 1] if i + 1 < len(FLUXO_STATUS) else None


def previous_status(status: str) -> Optional[str]:
    if status not in FLUXO_STATUS:
        return None
    i = FLUXO_STATUS.index(status)
    return FLUXO_STATUS[i - 1] if i > 0 else None


def group_by_status(ordens: List[dict]) -> Dict[str, List[dict]]:
    """Ordens separadas pelas colunas do quadro (canceladas ficam de fora)."""
    grupos: Dict[str, List[dict]] = {status: [] for status in FLUXO_STATUS}
    for ordem in ordens:
        if ordem.get("status") in grupos:
            grupos[ordem["status"]].append(ordem)
    return grupos


def quote_item_total(quantidade, valor_unitario) -> float:
    return to_float(quantize(to_decimal(quantidade) * to_decimal(valor_unitario)))


def quote_total(itens: List[dict]) -> float:
    """Soma dos itens do orçamento (valor_total de cada item, recalculado)."""
    totais = [
        {"valor": quote_item_total(i.get("quantidade"), i.get("valor_unitario"))} for i in itens or []
    ]
    return to_float(sum_values(totais))


class WorkOrderService:
    def __init__(self, store: TableStore):
        self.store = store

    def list_orders(self) -> List[dict]:
        return self.store.fetch_all(ORDENS, order_by="data_entrega", order_direction="asc")

    def move(self, ordem_id: int, direction: str) -> dict:
        """Move a ordem uma coluna para a esquerda ('anterior') ou direita ('proximo')."""
        if direction not in ("anterior", "proximo"):
            raise ValidationError(f"Direção inválida: {direction}")
        ordem = self.store.fetch_by_id(ORDENS, ordem_id)
        status = ordem.get("status")
        novo = next_status(status) if direction == "proximo" else previous_status(status)
        if novo is None:
            raise InvalidStateError(
                f"A ordem {ordem_id} não pode ser movida a partir de '{STATUS_ORDEM.get(status, status)}'."
            )
        return self.store.update(ORDENS, ordem_id, {"status": novo})[0]


class QuoteService:
    def __init__(self, store: TableStore):
        self.store = store

    def list_quotes(self, status: Optional[str] = None) -> List[dict]:
        """
        Orçamentos do mais recente para o mais antigo, com o total recalculado
        a partir dos itens em `valor_calculado`.
        """
        if status and status not in STATUS_ORCAMENTO:
            raise ValidationError(f"Status de orçamento inválido: {status}")
        filters = [Filter("status", "eq", status)] if status else []
        orcamentos = self.store.fetch_all(ORCAMENTOS, filters=filters, order_by="data")
        for orcamento in orcamentos:
            orcamento["valor_calculado"] = quote_total(orcamento.get("itens"))
        return orcamentos
