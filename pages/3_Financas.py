import sys
from datetime import date
from pathlib import Path

_ROOT = Path(__file__).resolve().parents[1]
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import pandas as pd
import streamlit as st

from services.auth_service import AuthService
from services.data_service import get_store
from services.errors import ServiceError
from services.financas_service import (
    FinanceService,
    category_breakdown,
    compute_totals,
    filter_entries,
    monthly_series,
)
from utils.formatters import format_currency, format_date
from utils.navigation import show_sidebar
from utils.ui_helpers import page_title, show_error


st.set_page_config(page_title="Finanças", page_icon="📈", layout="wide")

AuthService.require_roles(["admin", "gerente"])
show_sidebar()

page_title("Finanças", "📈", "Entradas e saídas por categoria e evolução mensal.")

service = FinanceService(get_store())

try:
    lancamentos = service.list_entries()
except ServiceError as exc:
    show_error(exc)
    st.stop()

st.subheader("Filtros")
categorias = sorted({l["categoria"] for l in lancamentos if l.get("categoria")})
col_t, col_c, col_i, col_f = st.columns(4)
with col_t:
    tipo = st.selectbox("Tipo", options=["", "entrada", "saida"],
                        format_func=lambda t: {"": "Todos", "entrada": "Entradas", "saida": "Saídas"}[t])
with col_c:
    categoria = st.selectbox("Categoria", options=[""] + categorias, format_func=lambda c: c or "Todas")
with col_i:
    data_inicio = st.date_input("Data inicial", value=None)
with col_f:
    data_fim = st.date_input("Data final", value=None)

filtrados = filter_entries(lancamentos, tipo or None, categoria or None, data_inicio, data_fim)
entradas, saidas, saldo = compute_totals(filtrados)

col1, col2, col3 = st.columns(3)
with col1:
    st.metric("Entradas", format_currency(entradas))
with col2:
    st.metric("Saídas", format_currency(saidas))
with col3:
    st.metric("Saldo", format_currency(saldo))

st.markdown("---")
col_g1, col_g2 = st.columns([2, 1])
with col_g1:
    periodo = st.radio("Gráfico", options=[6, 12], horizontal=True,
                       format_func=lambda n: f"Últimos {n} meses")
    serie = pd.DataFrame(monthly_series(lancamentos, months=periodo)).set_index("mes")
    st.bar_chart(serie[["Entradas", "Saídas"]])
with col_g2:
    st.markdown("**Por categoria**")
    por_categoria = category_breakdown(filtrados)
    if por_categoria:
        st.dataframe(
            pd.DataFrame(
                {"Categoria": list(por_categoria), "Total": [format_currency(v) for v in por_categoria.values()]}
            ),
            use_container_width=True,
            hide_index=True,
        )

st.markdown("---")
col_form, col_list = st.columns([1, 2])

with col_form:
    st.subheader("Novo lançamento")
    with st.form("novo_lancamento", clear_on_submit=True):
        data_l = st.date_input("Data", value=date.today())
        tipo_l = st.selectbox("Tipo do lançamento", options=["entrada", "saida"],
                              format_func=lambda t: "Entrada" if t == "entrada" else "Saída")
        categoria_l = st.text_input("Categoria", placeholder="Ex: Vendas, Fornecedores, Aluguel")
        descricao_l = st.text_input("Descrição")
        valor_l = st.number_input("Valor", min_value=0.0, value=0.0, step=1.0, format="%.2f")
        obs_l = st.text_input("Observações (opcional)")
        salvar = st.form_submit_button("Salvar lançamento", type="primary")
    if salvar:
        try:
            service.create_entry(
                data=data_l, tipo=tipo_l, categoria=categoria_l,
                descricao=descricao_l, valor=valor_l, observacoes=obs_l or None,
            )
            st.success("Lançamento registrado.")
            st.rerun()
        except ServiceError as exc:
            show_error(exc)

with col_list:
    st.subheader("Lançamentos")
    if not filtrados:
        st.info("Nenhum lançamento encontrado.")
    else:
        st.dataframe(
            [
                {
                    "Data": format_date(l["data"]),
                    "Tipo": "Entrada" if l["tipo"] == "entrada" else "Saída",
                    "Categoria": l["categoria"],
                    "Descrição": l["descricao"],
                    "Valor": format_currency(l["valor"]),
                }
                for l in filtrados
            ],
            use_container_width=True,
            hide_index=True,
        )
        remover_id = st.selectbox(
            "Excluir lançamento",
            options=[None] + [l["id"] for l in filtrados],
            format_func=lambda i: "Selecione..." if i is None else next(
                f"{format_date(l['data'])} - {l['descricao']} ({format_currency(l['valor'])})"
                for l in filtrados if l["id"] == i
            ),
        )
        if remover_id and st.button("Excluir selecionado"):
            try:
                service.remove_entry(remover_id)
                st.success("Lançamento excluído.")
                st.rerun()
            except ServiceError as exc:
                show_error(exc)
