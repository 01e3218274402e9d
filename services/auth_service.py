"""
Serviço de autenticação e controle de acesso do painel.
"""
import logging
from typing import Optional, Sequence

import bcrypt
import streamlit as st

from services.data_service import Filter, TableStore, get_store
from services.demo_data import DEMO_USER_EMAIL, DEMO_USER_PASSWORD
from services.errors import ValidationError

logger = logging.getLogger(__name__)

USUARIOS = "usuarios"
ROLES = ("admin", "gerente", "funcionario")


class AuthService:
    """
    Gerencia autenticação, sessão e permissões básicas (roles).
    """

    @staticmethod
    def hash_password(password: str) -> str:
        salt = bcrypt.gensalt()
        hashed = bcrypt.hashpw(password.encode("utf-8"), salt)
        return hashed.decode("utf-8")

    @staticmethod
    def verify_password(password: str, hashed: str) -> bool:
        return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))

    @staticmethod
    def authenticate(store: TableStore, email: str, password: str) -> Optional[dict]:
        email = (email or "").strip().lower()
        if not email or not password:
            return None
        usuarios = store.fetch_all(USUARIOS, filters=[Filter("email", "eq", email)], limit=1)
        user = usuarios[0] if usuarios else None
        if user and user.get("ativo") and AuthService.verify_password(password, user["password_hash"]):
            return user
        return None

    @staticmethod
    def create_user(
        store: TableStore,
        email: str,
        nome: str,
        password: str,
        role: str = "funcionario",
    ) -> dict:
        email = (email or "").strip().lower()
        if "@" not in email:
            raise ValidationError("Email inválido")
        if not nome or not nome.strip():
            raise ValidationError("Nome é obrigatório")
        if len(password or "") < 6:
            raise ValidationError("A senha deve ter pelo menos 6 caracteres")
        if role not in ROLES:
            raise ValidationError(f"Perfil inválido: {role}")
        if store.fetch_all(USUARIOS, filters=[Filter("email", "eq", email)], limit=1):
            raise ValidationError("Já existe um usuário com este email")
        return store.insert(
            USUARIOS,
            {
                "email": email,
                "nome": nome.strip(),
                "password_hash": AuthService.hash_password(password),
                "role": role,
                "ativo": True,
            },
        )[0]

    # ----- Session / estado -----

    @staticmethod
    def init_session_state() -> None:
        if "authenticated" not in st.session_state:
            st.session_state.authenticated = False
        if "user" not in st.session_state:
            st.session_state.user = None

    @staticmethod
    def login(user: dict) -> None:
        st.session_state.authenticated = True
        st.session_state.user = {
            "id": user["id"],
            "email": user["email"],
            "nome": user["nome"],
            "role": user["role"],
        }

    @staticmethod
    def logout() -> None:
        st.session_state.authenticated = False
        st.session_state.user = None
        st.session_state.pop("caixa_state", None)

    @staticmethod
    def is_authenticated() -> bool:
        return st.session_state.get("authenticated", False)

    @staticmethod
    def get_current_user() -> Optional[dict]:
        return st.session_state.get("user")

    # ----- Requisitos de acesso -----

    @staticmethod
    def require_auth() -> None:
        """
        Garante que o usuário esteja autenticado.
        Se não estiver, mostra mensagem e interrompe a execução da página.
        """
        AuthService.init_session_state()
        if not AuthService.is_authenticated():
            st.warning("Você precisa fazer login para acessar esta página.")
            st.stop()

    @staticmethod
    def require_roles(allowed_roles: Sequence[str]) -> None:
        """
        Garante que o usuário autenticado tenha um dos perfis permitidos.
        """
        AuthService.require_auth()
        user = AuthService.get_current_user()
        if not user or user.get("role") not in allowed_roles:
            st.error("Você não tem permissão para acessar esta funcionalidade.")
            st.stop()


def ensure_default_admin(store: Optional[TableStore] = None) -> None:
    """
    Garante a existência de um usuário admin padrão.
    Executado na inicialização da aplicação.
    """
    store = store or get_store()
    admins = store.fetch_all(USUARIOS, filters=[Filter("role", "eq", "admin")], limit=1)
    if not admins:
        AuthService.create_user(
            store,
            email=DEMO_USER_EMAIL,
            nome="Administrador",
            password=DEMO_USER_PASSWORD,
            role="admin",
        )
        logger.warning(
            "Usuário admin criado: email=%s, senha=%s (altere em produção).",
            DEMO_USER_EMAIL,
            DEMO_USER_PASSWORD,
        )
