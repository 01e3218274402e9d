import streamlit as st

from config import settings
from services.auth_service import AuthService


def show_sidebar() -> None:
    """
    Sidebar com informações do usuário e links para as páginas do painel.
    """
    user = AuthService.get_current_user()
    role = user["role"] if user else None

    with st.sidebar:
        st.markdown("## 🪟 Vidraçaria")
        if settings.DEMO_MODE:
            st.caption("Modo de demonstração")
        if user:
            st.markdown(f"**{user['nome']}**")
            st.caption(f"Perfil: {role}")

        st.markdown("---")
        st.markdown("### Menu")
        st.page_link("app.py", label="Início", icon="🏠")
        st.page_link("pages/1_Caixa.py", label="Caixa", icon="💰")
        st.page_link("pages/2_Estoque.py", label="Estoque", icon="📦")
        st.page_link("pages/4_Ordens_Servico.py", label="Ordens de Serviço", icon="🛠️")
        st.page_link("pages/5_Orcamentos.py", label="Orçamentos", icon="📝")
        if role in ("admin", "gerente"):
            st.page_link("pages/3_Financas.py", label="Finanças", icon="📈")

        st.markdown("---")
        if st.button("Sair", use_container_width=True):
            AuthService.logout()
            if hasattr(st, "switch_page"):
                st.switch_page("app.py")
            else:
                st.rerun()
