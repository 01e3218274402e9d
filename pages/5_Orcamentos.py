import sys
from pathlib import Path

_ROOT = Path(__file__).resolve().parents[1]
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import streamlit as st

from services.auth_service import AuthService
from services.data_service import get_store
from services.errors import ServiceError
from services.ordem_servico_service import STATUS_ORCAMENTO, QuoteService, quote_item_total
from utils.formatters import format_currency, format_date, truncate_text
from utils.navigation import show_sidebar
from utils.ui_helpers import page_title, show_error, warning_box


st.set_page_config(page_title="Orçamentos", page_icon="📝", layout="wide")

AuthService.require_auth()
show_sidebar()

page_title("Orçamentos", "📝", "Orçamentos enviados aos clientes, com o total conferido pelos itens.")

service = QuoteService(get_store())

status = st.selectbox(
    "Status",
    options=[""] + list(STATUS_ORCAMENTO),
    format_func=lambda s: STATUS_ORCAMENTO.get(s, "Todos"),
)

try:
    orcamentos = service.list_quotes(status or None)
except ServiceError as exc:
    show_error(exc)
    st.stop()

busca = st.text_input("Filtrar por cliente").strip().lower()
if busca:
    orcamentos = [o for o in orcamentos if busca in (o.get("cliente") or "").lower()]

if not orcamentos:
    st.info("Nenhum orçamento encontrado.")
    st.stop()

divergentes = [
    o for o in orcamentos
    if abs((o.get("valor_total") or 0) - o["valor_calculado"]) >= 0.01
]
if divergentes:
    warning_box(
        f"{len(divergentes)} orçamento(s) com valor total diferente da soma dos itens: "
        + ", ".join(f"#{o['id']}" for o in divergentes)
    )

st.dataframe(
    [
        {
            "Nº": o["id"],
            "Data": format_date(o.get("data")),
            "Cliente": o["cliente"],
            "Telefone": o.get("telefone") or "",
            "Status": STATUS_ORCAMENTO.get(o.get("status"), o.get("status")),
            "Itens": len(o.get("itens") or []),
            "Total": format_currency(o["valor_calculado"]),
            "Obs.": truncate_text(o.get("observacoes")) or "",
        }
        for o in orcamentos
    ],
    use_container_width=True,
    hide_index=True,
)

for orcamento in orcamentos:
    with st.expander(f"#{orcamento['id']} {orcamento['cliente']} · {format_currency(orcamento['valor_calculado'])}"):
        st.dataframe(
            [
                {
                    "Descrição": item.get("descricao") or "",
                    "Quantidade": item.get("quantidade"),
                    "Valor unit.": format_currency(item.get("valor_unitario")),
                    "Total": format_currency(quote_item_total(item.get("quantidade"), item.get("valor_unitario"))),
                }
                for item in orcamento.get("itens") or []
            ],
            use_container_width=True,
            hide_index=True,
        )
