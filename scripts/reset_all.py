"""
Script para limpar todas as tabelas e testar do zero.
- Limpa todos os dados do banco (via SQL, sem apagar o arquivo)
- Remove o arquivo do modo de demonstração, se existir
- Recria o usuário admin padrão

Pode rodar mesmo com o Streamlit aberto.
"""
import sys
from pathlib import Path

_ROOT = Path(__file__).resolve().parents[1]
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from config import settings
from config.database import init_db
from services.auth_service import ensure_default_admin
from services.data_service import SqlTableStore

# Ordem: tabelas filhas primeiro (por causa das chaves estrangeiras)
TABLES_TO_TRUNCATE = [
    "caixa_movimentacoes",
    "caixa_fechamentos",
    "caixa",
    "estoque_movimentacoes",
    "estoque",
    "financas",
    "orcamentos",
    "ordens_servico",
    "usuarios",
]


def main() -> None:
    print("Limpando dados do painel...")

    if settings.DEMO_DATA_PATH:
        demo_path = Path(settings.DEMO_DATA_PATH)
        if demo_path.exists():
            demo_path.unlink()
            print("  Removido:", demo_path)

    if settings.DEMO_MODE:
        print("\nModo de demonstração: os dados de exemplo serão recriados na próxima execução.")
        return

    from config.database import engine

    init_db()
    sqlite = settings.DATABASE_URL.startswith("sqlite")
    with engine.connect() as conn:
        for table in TABLES_TO_TRUNCATE:
            try:
                if sqlite:
                    conn.execute(text(f"DELETE FROM {table}"))
                else:
                    conn.execute(text(f"TRUNCATE TABLE {table} RESTART IDENTITY CASCADE"))
                conn.commit()
                print("  Limpo:", table)
            except SQLAlchemyError as e:
                conn.rollback()
                print("  ", table, "-", e)
        if sqlite:
            try:
                conn.execute(text("DELETE FROM sqlite_sequence"))
                conn.commit()
            except SQLAlchemyError:
                # sqlite_sequence só existe com AUTOINCREMENT
                conn.rollback()

    print("\nCriando usuario admin...")
    ensure_default_admin(SqlTableStore(engine))

    print("\nPronto. Pode testar do zero. (Atualize a pagina no navegador se o Streamlit estiver aberto.)")


if __name__ == "__main__":
    main()
