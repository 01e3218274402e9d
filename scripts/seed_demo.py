"""
Copia os dados de demonstração para o banco configurado em DATABASE_URL.
Útil para apresentar o painel já com orçamentos, ordens, estoque e caixa.
Tabelas que já têm registros são mantidas como estão.
"""
import sys
from pathlib import Path

_ROOT = Path(__file__).resolve().parents[1]
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

from config import settings
from config.database import init_db
from services.data_service import SqlTableStore
from services.demo_data import build_demo_data

# Ordem: tabelas referenciadas primeiro (chaves estrangeiras).
# Os ids são gerados pelo banco, por isso cada tabela só é semeada se estiver vazia.
SEED_ORDER = [
    "usuarios",
    "estoque",
    "estoque_movimentacoes",
    "caixa",
    "caixa_movimentacoes",
    "caixa_fechamentos",
    "financas",
    "orcamentos",
    "ordens_servico",
]


def main() -> None:
    if settings.DEMO_MODE:
        print("Configure DATABASE_URL para copiar os dados de demonstração para o banco.")
        return

    from config.database import engine

    init_db()
    store = SqlTableStore(engine)
    dados = build_demo_data()

    for table in SEED_ORDER:
        if store.fetch_all(table, limit=1):
            print(f"  {table}: já tem dados (mantido)")
            continue
        for record in dados.get(table, []):
            store.insert(table, record)
        print(f"  {table}: {len(dados.get(table, []))} registros criados")


if __name__ == "__main__":
    main()
