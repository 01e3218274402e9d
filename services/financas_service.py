"""
Regras de finanças: totais, série mensal para o gráfico de barras e totais por categoria.
"""
from datetime import date
from typing import Dict, List, Optional, Tuple

from dateutil.relativedelta import relativedelta

from schemas.base import parse_input
from schemas.financas import Lancamento
from services.data_service import TableStore
from utils.money import sum_values, to_decimal, to_float

FINANCAS = "financas"

MESES_ABREV = ["jan", "fev", "mar", "abr", "mai", "jun", "jul", "ago", "set", "out", "nov", "dez"]


def _iso(value) -> Optional[str]:
    if value is None or value == "":
        return None
    return value.isoformat() if isinstance(value, date) else str(value)


def filter_entries(
    lancamentos: List[dict],
    tipo: Optional[str] = None,
    categoria: Optional[str] = None,
    data_inicio=None,
    data_fim=None,
) -> List[dict]:
    inicio, fim = _iso(data_inicio), _iso(data_fim)
    filtrados = []
    for l in lancamentos:
        if tipo and l.get("tipo") != tipo:
            continue
        if categoria and l.get("categoria") != categoria:
            continue
        if inicio and (l.get("data") or "") < inicio:
            continue
        if fim and (l.get("data") or "") > fim:
            continue
        filtrados.append(l)
    return filtrados


def compute_totals(lancamentos: List[dict]) -> Tuple[float, float, float]:
    """(entradas, saídas, saldo)."""
    entradas = sum_values(l for l in lancamentos if l.get("tipo") == "entrada")
    saidas = sum_values(l for l in lancamentos if l.get("tipo") == "saida")
    return to_float(entradas), to_float(saidas), to_float(entradas - saidas)


def month_label(d: date) -> str:
    """Rótulo curto do mês, ex.: jun/25."""
    return f"{MESES_ABREV[d.month - 1]}/{d:%y}"


def monthly_series(lancamentos: List[dict], months: int = 6, today: Optional[date] = None) -> List[dict]:
    """
    Entradas, saídas e saldo dos últimos `months` meses (do mais antigo ao atual).
    """
    hoje = today or date.today()
    inicio_mes_atual = hoje.replace(day=1)
    dados = []
    for i in range(months - 1, -1, -1):
        inicio = inicio_mes_atual - relativedelta(months=i)
        fim = inicio + relativedelta(months=1, days=-1)
        do_mes = filter_entries(lancamentos, data_inicio=inicio, data_fim=fim)
        entradas, saidas, saldo = compute_totals(do_mes)
        dados.append(
            {"mes": month_label(inicio), "Entradas": entradas, "Saídas": saidas, "Saldo": saldo}
        )
    return dados


def category_breakdown(lancamentos: List[dict]) -> Dict[str, float]:
    """Total por categoria, do maior para o menor."""
    totais: Dict[str, object] = {}
    for l in lancamentos:
        categoria = l.get("categoria") or "Sem categoria"
        totais[categoria] = totais.get(categoria, to_decimal(0)) + to_decimal(l.get("valor"))
    ordenado = sorted(totais.items(), key=lambda item: item[1], reverse=True)
    return {categoria: to_float(total) for categoria, total in ordenado}


class FinanceService:
    def __init__(self, store: TableStore):
        self.store = store

    def list_entries(self) -> List[dict]:
        return self.store.fetch_all(FINANCAS, order_by="data", order_direction="desc")

    def create_entry(self, **dados) -> dict:
        lancamento = parse_input(Lancamento, **dados)
        record = lancamento.model_dump()
        record["data"] = lancamento.data.isoformat()
        record["valor"] = to_float(lancamento.valor)
        record["observacoes"] = lancamento.observacoes or None
        return self.store.insert(FINANCAS, record)[0]

    def remove_entry(self, lancamento_id: int) -> bool:
        return self.store.remove(FINANCAS, lancamento_id)
