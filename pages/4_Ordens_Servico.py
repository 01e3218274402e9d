import sys
from pathlib import Path

_ROOT = Path(__file__).resolve().parents[1]
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import streamlit as st

from services.auth_service import AuthService
from services.data_service import get_store
from services.errors import ServiceError
from services.ordem_servico_service import (
    FLUXO_STATUS,
    STATUS_ORDEM,
    WorkOrderService,
    group_by_status,
    next_status,
    previous_status,
)
from utils.formatters import format_currency, format_date
from utils.navigation import show_sidebar
from utils.ui_helpers import page_title, show_error


st.set_page_config(page_title="Ordens de Serviço", page_icon="🛠️", layout="wide")

AuthService.require_auth()
show_sidebar()

page_title("Ordens de Serviço", "🛠️", "Acompanhe a produção: mova as ordens entre as etapas.")

service = WorkOrderService(get_store())

try:
    ordens = service.list_orders()
except ServiceError as exc:
    show_error(exc)
    st.stop()

busca = st.text_input("Filtrar por cliente ou produto").strip().lower()
if busca:
    ordens = [
        o for o in ordens
        if busca in (o.get("cliente") or "").lower() or busca in (o.get("produto") or "").lower()
    ]

grupos = group_by_status(ordens)
colunas = st.columns(len(FLUXO_STATUS))

for coluna, status in zip(colunas, FLUXO_STATUS):
    with coluna:
        st.markdown(f"**{STATUS_ORDEM[status]}** ({len(grupos[status])})")
        for ordem in grupos[status]:
            with st.container(border=True):
                st.markdown(f"**#{ordem['id']} {ordem['cliente']}**")
                st.caption(ordem["produto"])
                st.caption(f"Entrega: {format_date(ordem.get('data_entrega'))} · {format_currency(ordem.get('valor'))}")
                col_e, col_d = st.columns(2)
                with col_e:
                    if previous_status(status) and st.button("◀", key=f"ant_{ordem['id']}"):
                        try:
                            service.move(ordem["id"], "anterior")
                            st.rerun()
                        except ServiceError as exc:
                            show_error(exc)
                with col_d:
                    if next_status(status) and st.button("▶", key=f"prox_{ordem['id']}"):
                        try:
                            service.move(ordem["id"], "proximo")
                            st.rerun()
                        except ServiceError as exc:
                            show_error(exc)
