import sys
from pathlib import Path

_ROOT = Path(__file__).resolve().parents[1]
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import streamlit as st

from schemas.caixa import FORMAS_PAGAMENTO
from services.auth_service import AuthService
from services.caixa_service import CaixaState, CashRegisterService
from services.data_service import get_store
from services.errors import ServiceError
from utils.formatters import format_currency, format_date, format_payment_method, truncate_text
from utils.navigation import show_sidebar
from utils.ui_helpers import difference_box, page_title, show_error, success_box, warning_box


st.set_page_config(page_title="Caixa", page_icon="💰", layout="wide")

AuthService.require_auth()
show_sidebar()

page_title(
    "Caixa",
    "💰",
    "Abra o caixa no início do expediente, registre entradas e saídas e feche com a conferência.",
)

if "caixa_state" not in st.session_state:
    st.session_state.caixa_state = CaixaState()
service = CashRegisterService(get_store(), st.session_state.caixa_state)

try:
    service.load()
except ServiceError as exc:
    show_error(exc)
    st.stop()

ultimo = st.session_state.pop("ultimo_fechamento", None)
if ultimo:
    st.markdown(f"**Último fechamento:** sistema {format_currency(ultimo['valor_sistema'])}, "
                f"contado {format_currency(ultimo['valor_final'])}")
    difference_box(ultimo["diferenca"])

caixa = service.state.caixa
if caixa:
    entradas, saidas = service.totals()
    success_box(
        f"Caixa aberto em {format_date(caixa['data'])} às {caixa['hora_abertura']} · "
        f"Saldo atual: {format_currency(service.compute_current_balance())}"
    )
    col1, col2, col3, col4 = st.columns(4)
    with col1:
        st.metric("Valor inicial", format_currency(caixa["valor_inicial"]))
    with col2:
        st.metric("Entradas", format_currency(entradas))
    with col3:
        st.metric("Saídas", format_currency(saidas))
    with col4:
        st.metric("Saldo atual", format_currency(service.compute_current_balance()))
else:
    warning_box("Nenhum caixa aberto no momento. Abra o caixa para registrar movimentações.")

st.markdown("---")

if not caixa:
    st.subheader("Abrir caixa")
    data_padrao, hora_padrao = service.today_hora()
    with st.form("abrir_caixa"):
        col_d, col_h = st.columns(2)
        with col_d:
            data = st.date_input("Data", value=data_padrao)
        with col_h:
            hora = st.text_input("Hora (HH:MM)", value=hora_padrao)
        valor_inicial = st.number_input("Valor inicial (troco)", min_value=0.0, value=0.0, step=1.0, format="%.2f")
        observacoes = st.text_area("Observações (opcional)", placeholder="Ex: Início do expediente")
        abrir = st.form_submit_button("Abrir caixa", type="primary")
    if abrir:
        try:
            service.open_register(data, hora, valor_inicial, observacoes)
            st.success("Caixa aberto com sucesso.")
            st.rerun()
        except ServiceError as exc:
            show_error(exc)
else:
    tab_mov, tab_fechar = st.tabs(["Movimentações", "Fechar caixa"])

    with tab_mov:
        with st.form("nova_movimentacao", clear_on_submit=True):
            col_t, col_v, col_f = st.columns(3)
            with col_t:
                tipo = st.selectbox("Tipo", options=["entrada", "saida"],
                                    format_func=lambda t: "Entrada" if t == "entrada" else "Saída")
            with col_v:
                valor = st.number_input("Valor", min_value=0.0, value=0.0, step=1.0, format="%.2f")
            with col_f:
                forma = st.selectbox("Forma de pagamento", options=list(FORMAS_PAGAMENTO),
                                     format_func=format_payment_method)
            descricao = st.text_input("Descrição")
            obs_mov = st.text_input("Observações (opcional)")
            registrar = st.form_submit_button("Registrar movimentação", type="primary")
        if registrar:
            try:
                service.register_movement(tipo, valor, descricao, forma, obs_mov)
                st.success("Movimentação registrada.")
                st.rerun()
            except ServiceError as exc:
                show_error(exc)

        movimentacoes = service.sorted_movements()
        if not movimentacoes:
            st.info("Nenhuma movimentação neste caixa.")
        else:
            st.dataframe(
                [
                    {
                        "Hora": m["hora"],
                        "Tipo": "Entrada" if m["tipo"] == "entrada" else "Saída",
                        "Descrição": truncate_text(m["descricao"]),
                        "Forma": format_payment_method(m["forma_pagamento"]),
                        "Valor": format_currency(m["valor"]),
                        "Obs.": truncate_text(m.get("observacoes")) or "",
                    }
                    for m in movimentacoes
                ],
                use_container_width=True,
                hide_index=True,
            )

    with tab_fechar:
        saldo = float(service.compute_current_balance())
        st.markdown(f"**Valor no sistema:** {format_currency(saldo)} (valor inicial + entradas - saídas)")
        with st.form("fechar_caixa"):
            valor_final = st.number_input("Valor contado no caixa", min_value=0.0,
                                          value=max(saldo, 0.0), step=1.0, format="%.2f")
            obs_fech = st.text_area("Observações (opcional)")
            fechar = st.form_submit_button("Fechar caixa", type="primary")
        if fechar:
            try:
                st.session_state.ultimo_fechamento = service.close_register(valor_final, obs_fech)
                st.rerun()
            except ServiceError as exc:
                show_error(exc)

st.markdown("---")
with st.expander("📋 Histórico de fechamentos"):
    try:
        fechamentos = service.closing_history(limit=50)
    except ServiceError as exc:
        show_error(exc)
        fechamentos = []
    if not fechamentos:
        st.info("Nenhum fechamento registrado ainda.")
    else:
        st.dataframe(
            [
                {
                    "Data": format_date(f["data"]),
                    "Abertura": f["hora_abertura"],
                    "Fechamento": f["hora_fechamento"],
                    "Valor inicial": format_currency(f["valor_inicial"]),
                    "Entradas": format_currency(f["total_entradas"]),
                    "Saídas": format_currency(f["total_saidas"]),
                    "Sistema": format_currency(f["valor_sistema"]),
                    "Contado": format_currency(f["valor_final"]),
                    "Diferença": format_currency(f["diferenca"]),
                    "Obs.": truncate_text(f.get("observacoes")) or "",
                }
                for f in fechamentos
            ],
            use_container_width=True,
            hide_index=True,
        )
