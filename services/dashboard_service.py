"""
Resumo da página inicial.
"""
from datetime import date
from typing import Optional

from services.caixa_service import compute_totals as caixa_totals
from services.data_service import Filter, TableStore
from services.estoque_service import low_stock
from services.financas_service import compute_totals as financas_totals
from utils.money import to_float


def dashboard_summary(store: TableStore, today: Optional[date] = None) -> dict:
    """
    Contadores de orçamentos e ordens, receitas/despesas, alertas de estoque
    e saldo das movimentações de caixa do dia.
    """
    hoje = (today or date.today()).isoformat()

    orcamentos = store.fetch_all("orcamentos", limit=100)
    ordens = store.fetch_all("ordens_servico", limit=100)
    receitas, despesas, _ = financas_totals(store.fetch_all("financas", limit=100))
    estoque = store.fetch_all("estoque", limit=100)
    movimentacoes_hoje = store.fetch_all(
        "caixa_movimentacoes", filters=[Filter("data", "gte", hoje)]
    )
    entradas, saidas = caixa_totals(movimentacoes_hoje)

    return {
        "orcamentos": len(orcamentos),
        "ordens": len(ordens),
        "financas": {"receitas": receitas, "despesas": despesas},
        "estoque": {"total": len(estoque), "alertas": len(low_stock(estoque))},
        "caixa": to_float(entradas - saidas),
    }
