"""
Configuração do banco de dados do painel
- PostgreSQL em produção via DATABASE_URL
- SQLite para desenvolvimento local e testes
"""
from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from config.settings import DATABASE_URL, PERSISTENCE_TIMEOUT

# Base para os modelos
Base = declarative_base()


def build_engine(url: str, timeout: float = PERSISTENCE_TIMEOUT) -> Engine:
    """
    Cria o engine conforme o tipo de banco, sempre com limite de tempo
    para conexão e execução das consultas.
    """
    if url.startswith("postgresql"):
        return create_engine(
            url,
            echo=False,
            pool_pre_ping=True,
            pool_size=10,
            max_overflow=20,
            pool_recycle=3600,
            pool_timeout=timeout,
            connect_args={
                "connect_timeout": max(1, int(timeout)),
                "options": f"-c statement_timeout={int(timeout * 1000)}",
            },
        )

    # SQLite (desenvolvimento local / testes)
    connect_args = {"check_same_thread": False, "timeout": timeout}
    if url in ("sqlite://", "sqlite:///:memory:"):
        # Banco em memória: uma única conexão compartilhada
        return create_engine(
            url, connect_args=connect_args, poolclass=StaticPool, echo=False
        )
    return create_engine(url, connect_args=connect_args, echo=False)


engine: Optional[Engine] = build_engine(DATABASE_URL) if DATABASE_URL else None

# Session factory (None no modo de demonstração sem banco)
SessionLocal = (
    sessionmaker(autocommit=False, autoflush=False, bind=engine) if engine else None
)


def init_db(bind: Optional[Engine] = None) -> None:
    """
    Cria todas as tabelas definidas nos modelos.
    Deve ser chamada uma vez na inicialização da aplicação.
    """
    # Importa modelos aqui para registrar no metadata
    from models import (  # noqa: F401
        caixa,
        estoque,
        financas,
        orcamento,
        ordem_servico,
        user,
    )

    target = bind or engine
    if target is None:
        raise RuntimeError("DATABASE_URL não configurada; nada a inicializar.")
    Base.metadata.create_all(bind=target)
