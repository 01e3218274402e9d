import sys
from pathlib import Path

# Garante que o diretório raiz do projeto esteja no path (para rodar de qualquer cwd)
_ROOT = Path(__file__).resolve().parents[0]
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import streamlit as st

from config import settings
from services.auth_service import AuthService, ensure_default_admin
from services.dashboard_service import dashboard_summary
from services.data_service import get_store
from services.demo_data import DEMO_USER_EMAIL, DEMO_USER_PASSWORD
from services.errors import ServiceError
from utils.formatters import format_currency, format_date
from utils.navigation import show_sidebar
from utils.ui_helpers import show_error


st.set_page_config(
    page_title="Vidraçaria - Painel",
    page_icon="🪟",
    layout="wide",
    initial_sidebar_state="expanded",
    menu_items={
        "Get Help": None,
        "Report a bug": None,
        "About": None,
    },
)


@st.cache_resource
def initialize_app():
    """
    Configura o logging, prepara o banco (ou o modo de demonstração)
    e garante o usuário admin padrão.
    """
    settings.configure_logging()
    ensure_default_admin(get_store())


def login_page():
    st.markdown("# 🔐 Vidraçaria - Painel Administrativo")
    st.caption("Orçamentos, ordens de serviço, estoque, caixa e finanças")
    st.markdown("---")

    col1, col2, col3 = st.columns([1, 2, 1])
    with col2:
        st.subheader("Entrar no sistema")
        if settings.DEMO_MODE:
            st.info(f"Modo de demonstração: use {DEMO_USER_EMAIL} / {DEMO_USER_PASSWORD}")
        with st.form("login_form"):
            email = st.text_input("Email", placeholder="seu@email.com")
            password = st.text_input("Senha", type="password", placeholder="••••••••")
            submit = st.form_submit_button("Entrar", use_container_width=True, type="primary")

        if submit:
            if not email or not password:
                st.error("Por favor, preencha email e senha.")
            else:
                try:
                    user = AuthService.authenticate(get_store(), email, password)
                except ServiceError as exc:
                    show_error(exc)
                    return
                if user:
                    AuthService.login(user)
                    st.success(f"Bem-vindo, {user['nome']}!")
                    st.rerun()
                else:
                    st.error("Credenciais inválidas.")


def home_page():
    from datetime import datetime

    user = AuthService.get_current_user()

    st.markdown("# 🏠 Dashboard")
    if user:
        st.markdown(f"Olá, **{user['nome']}**! Hoje é {format_date(datetime.now().date())}.")
    st.markdown("---")

    try:
        resumo = dashboard_summary(get_store())
    except ServiceError as exc:
        show_error(exc)
        return

    col1, col2, col3, col4, col5 = st.columns(5)
    with col1:
        st.metric("Orçamentos", resumo["orcamentos"])
    with col2:
        st.metric("Ordens de serviço", resumo["ordens"])
    with col3:
        st.metric("Receitas", format_currency(resumo["financas"]["receitas"]))
    with col4:
        st.metric("Despesas", format_currency(resumo["financas"]["despesas"]))
    with col5:
        st.metric("Caixa (hoje)", format_currency(resumo["caixa"]))

    estoque = resumo["estoque"]
    st.markdown(f"**Estoque:** {estoque['total']} produtos cadastrados")
    if estoque["alertas"]:
        st.warning(f"{estoque['alertas']} produto(s) com estoque igual ou abaixo do mínimo.")

    st.markdown("### Atalhos")
    st.markdown(
        "1. Abra o **Caixa** no início do expediente e registre entradas e saídas.  \n"
        "2. Acompanhe a produção em **Ordens de Serviço**.  \n"
        "3. Registre entradas de chapas e perfis em **Estoque**.  \n"
        "4. Veja a evolução mensal em **Finanças** (admin/gerente)."
    )


def main():
    initialize_app()
    AuthService.init_session_state()

    if not AuthService.is_authenticated():
        login_page()
    else:
        show_sidebar()
        home_page()


if __name__ == "__main__":
    main()
