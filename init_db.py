"""
Script para inicializar o banco de dados do painel.
- Cria todas as tabelas
- Garante a existência de um usuário admin padrão
"""
from config import settings
from config.database import init_db
from services.auth_service import ensure_default_admin
from services.data_service import SqlTableStore


def main() -> None:
    if settings.DEMO_MODE:
        print("ℹ️ DATABASE_URL não configurada: o painel roda em modo de demonstração, sem banco.")
        return

    from config.database import engine

    print("📦 Inicializando banco de dados da vidraçaria...")
    init_db()
    print("✅ Tabelas criadas (se não existiam).")

    ensure_default_admin(SqlTableStore(engine))
    print("✅ Usuário admin garantido.")


if __name__ == "__main__":
    main()
