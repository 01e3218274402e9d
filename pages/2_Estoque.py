import sys
from datetime import date
from pathlib import Path

_ROOT = Path(__file__).resolve().parents[1]
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import streamlit as st

from services.auth_service import AuthService
from services.data_service import get_store
from services.errors import ServiceError
from services.estoque_service import StockService, inventory_value, low_stock, search_products
from utils.formatters import format_currency, format_date
from utils.navigation import show_sidebar
from utils.ui_helpers import page_title, show_error


st.set_page_config(page_title="Estoque", page_icon="📦", layout="wide")

AuthService.require_auth()
show_sidebar()

page_title("Estoque", "📦", "Chapas, perfis e acessórios. Abaixo do mínimo em destaque.")

service = StockService(get_store())

try:
    produtos = service.list_products()
except ServiceError as exc:
    show_error(exc)
    st.stop()

alertas = low_stock(produtos)

col1, col2, col3 = st.columns(3)
with col1:
    st.metric("Total de produtos", len(produtos))
with col2:
    st.metric("Em alerta (estoque baixo)", len(alertas))
with col3:
    st.metric("Valor do estoque", format_currency(inventory_value(produtos)))

tab_lista, tab_mov, tab_novo = st.tabs(["Produtos", "Movimentar", "Novo produto"])

with tab_lista:
    busca = st.text_input("Buscar produto (nome ou código)", placeholder="Ex: temperado, V123...")
    filtrados = search_products(produtos, busca)
    if alertas:
        st.subheader("⚠️ Produtos com estoque baixo")
        st.caption("Quantidade igual ou abaixo do mínimo definido.")
        st.dataframe(
            [{"Código": p["codigo"], "Nome": p["nome"], "Quantidade": p["quantidade"],
              "Mínimo": p["quantidade_minima"], "Unidade": p["unidade"]} for p in alertas],
            use_container_width=True,
            hide_index=True,
        )
    if not filtrados:
        st.info("Nenhum produto encontrado.")
    else:
        st.dataframe(
            [
                {
                    "Código": p["codigo"],
                    "Nome": p["nome"],
                    "Quantidade": p["quantidade"],
                    "Mínimo": p["quantidade_minima"],
                    "Unidade": p["unidade"],
                    "Valor unit.": format_currency(p["valor_unitario"]),
                    "Fornecedor": p.get("fornecedor") or "",
                    "Localização": p.get("localizacao") or "",
                    "Última entrada": format_date(p.get("ultima_entrada")),
                }
                for p in filtrados
            ],
            use_container_width=True,
            hide_index=True,
        )

with tab_mov:
    if not produtos:
        st.info("Cadastre um produto antes de registrar movimentações.")
    else:
        with st.form("movimentacao_estoque", clear_on_submit=True):
            produto_id = st.selectbox(
                "Produto",
                options=[p["id"] for p in produtos],
                format_func=lambda pid: next(
                    f"{p['codigo']} - {p['nome']} ({p['quantidade']:g} {p['unidade']})"
                    for p in produtos if p["id"] == pid
                ),
            )
            col_t, col_q, col_d = st.columns(3)
            with col_t:
                tipo = st.selectbox("Tipo", options=["entrada", "saida"],
                                    format_func=lambda t: "Entrada" if t == "entrada" else "Saída")
            with col_q:
                quantidade = st.number_input("Quantidade", min_value=0.0, value=1.0, step=1.0)
            with col_d:
                data_mov = st.date_input("Data", value=date.today())
            motivo = st.selectbox("Motivo", options=["compra", "venda", "ajuste", "perda", "devolucao"])
            observacoes = st.text_input("Observações (opcional)")
            registrar = st.form_submit_button("Registrar", type="primary")
        if registrar:
            try:
                atualizado = service.register_movement(produto_id, tipo, quantidade, data_mov, motivo, observacoes)
                st.success(f"Estoque atualizado: {atualizado['nome']} agora com {atualizado['quantidade']:g}.")
                st.rerun()
            except ServiceError as exc:
                show_error(exc)

        st.markdown("**Últimas movimentações**")
        try:
            movimentacoes = service.list_movements(limit=50)
        except ServiceError as exc:
            show_error(exc)
            movimentacoes = []
        st.dataframe(
            [{"Data": format_date(m["data"]), "Produto": m.get("produto_nome") or "",
              "Tipo": m["tipo"], "Quantidade": m["quantidade"], "Motivo": m["motivo"],
              "Obs.": m.get("observacoes") or ""} for m in movimentacoes],
            use_container_width=True,
            hide_index=True,
        )

with tab_novo:
    with st.form("novo_produto", clear_on_submit=True):
        col_c, col_n = st.columns([1, 2])
        with col_c:
            codigo = st.text_input("Código")
        with col_n:
            nome = st.text_input("Nome")
        descricao = st.text_input("Descrição (opcional)")
        col_q, col_m, col_u, col_v = st.columns(4)
        with col_q:
            qtd = st.number_input("Quantidade", min_value=0.0, value=0.0, step=1.0)
        with col_m:
            qtd_min = st.number_input("Quantidade mínima", min_value=0.0, value=0.0, step=1.0)
        with col_u:
            unidade = st.selectbox("Unidade", options=["chapa", "barra", "unidade", "m²", "kit"])
        with col_v:
            valor_unitario = st.number_input("Valor unitário", min_value=0.0, value=0.0, step=1.0, format="%.2f")
        fornecedor = st.text_input("Fornecedor (opcional)")
        localizacao = st.text_input("Localização (opcional)")
        salvar = st.form_submit_button("Salvar produto", type="primary")
    if salvar:
        try:
            service.create_product(
                codigo=codigo,
                nome=nome,
                descricao=descricao or None,
                quantidade=qtd,
                quantidade_minima=qtd_min,
                unidade=unidade,
                valor_unitario=valor_unitario,
                fornecedor=fornecedor or None,
                localizacao=localizacao or None,
            )
            st.success("Produto cadastrado.")
            st.rerun()
        except ServiceError as exc:
            show_error(exc)
