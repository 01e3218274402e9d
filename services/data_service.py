"""
Acesso às tabelas do painel.

Interface única por nome de tabela (fetch_all / fetch_by_id / insert / update / remove),
com duas implementações:
- SqlTableStore: banco configurado em DATABASE_URL (PostgreSQL ou SQLite)
- DemoTableStore: tabelas em memória com dados de demonstração, opcionalmente
  salvas em um arquivo JSON entre execuções

Os registros são dicts simples: datas em ISO (YYYY-MM-DD), horas em HH:MM,
valores em float.
"""
import copy
import json
import logging
from datetime import date, datetime
from decimal import Decimal
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Iterable, List, NamedTuple, Optional

from sqlalchemy import Date, DateTime, delete, insert as sql_insert, select, update as sql_update
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from services.errors import PersistenceFailure, RecordNotFoundError, ValidationError

logger = logging.getLogger(__name__)

TABLES = (
    "usuarios",
    "orcamentos",
    "ordens_servico",
    "estoque",
    "estoque_movimentacoes",
    "caixa",
    "caixa_movimentacoes",
    "caixa_fechamentos",
    "financas",
)

OPERATORS = ("eq", "neq", "gt", "gte", "lt", "lte", "like")


class Filter(NamedTuple):
    """Filtro de consulta: coluna, operador e valor (aplicados com E lógico)."""

    column: str
    operator: str
    value: Any


def _check_table(table: str) -> None:
    if table not in TABLES:
        raise ValidationError(f"Tabela desconhecida: {table}")


def _normalize_filters(filters: Iterable) -> List[Filter]:
    normalized = []
    for f in filters or ():
        if isinstance(f, dict):
            f = Filter(f["column"], f["operator"], f["value"])
        elif not isinstance(f, Filter):
            f = Filter(*f)
        if f.operator not in OPERATORS:
            raise ValidationError(f"Operador de filtro inválido: {f.operator}")
        normalized.append(f)
    return normalized


def _json_default(value):
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    raise TypeError(f"Valor não serializável: {value!r}")


class TableStore:
    """Interface comum dos repositórios de tabelas."""

    demo = False

    def fetch_all(
        self,
        table: str,
        limit: Optional[int] = None,
        order_by: Optional[str] = None,
        order_direction: str = "desc",
        filters: Iterable = (),
    ) -> List[Dict[str, Any]]:
        raise NotImplementedError

    def fetch_by_id(self, table: str, record_id) -> Dict[str, Any]:
        raise NotImplementedError

    def insert(self, table: str, record: Dict[str, Any]) -> List[Dict[str, Any]]:
        raise NotImplementedError

    def update(self, table: str, record_id, patch: Dict[str, Any]) -> List[Dict[str, Any]]:
        raise NotImplementedError

    def remove(self, table: str, record_id) -> bool:
        raise NotImplementedError


class DemoTableStore(TableStore):
    """
    Tabelas em memória para o modo de demonstração.
    Se `path` for informado, os dados são carregados dele e salvos a cada alteração.
    """

    demo = True

    def __init__(self, data: Optional[Dict[str, list]] = None, path: Optional[str] = None, seed: bool = True):
        self.path = Path(path) if path else None
        if data is not None:
            tables = copy.deepcopy(data)
        elif self.path and self.path.exists():
            with open(self.path, "r", encoding="utf-8") as f:
                tables = json.load(f)
        elif seed:
            from services.demo_data import build_demo_data

            tables = build_demo_data()
        else:
            tables = {}
        self._tables: Dict[str, list] = {name: list(tables.get(name, [])) for name in TABLES}

    def _save(self) -> None:
        if not self.path:
            return
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(self._tables, f, ensure_ascii=False, indent=2, default=_json_default)
        except OSError as exc:
            logger.error("[DEMO MODE] Erro ao salvar %s: %s", self.path, exc)
            raise PersistenceFailure(
                "Não foi possível salvar os dados de demonstração.", cause=exc
            ) from exc

    @staticmethod
    def _matches(item: dict, f: Filter) -> bool:
        current = item.get(f.column)
        value = f.value.isoformat() if isinstance(f.value, (date, datetime)) else f.value
        if f.operator == "eq":
            return current == value
        if f.operator == "neq":
            return current != value
        if f.operator == "like":
            return current is not None and str(value) in str(current)
        if current is None:
            return False
        if f.operator == "gt":
            return current > value
        if f.operator == "gte":
            return current >= value
        if f.operator == "lt":
            return current < value
        return current <= value

    def fetch_all(self, table, limit=None, order_by=None, order_direction="desc", filters=()):
        _check_table(table)
        logger.debug("[DEMO MODE] Buscando dados da tabela %s", table)
        filters = _normalize_filters(filters)
        data = [item for item in self._tables[table] if all(self._matches(item, f) for f in filters)]
        if order_by:
            # None sempre no fim, nas duas direções
            present = [item for item in data if item.get(order_by) is not None]
            missing = [item for item in data if item.get(order_by) is None]
            present.sort(key=lambda item: item[order_by], reverse=order_direction != "asc")
            data = present + missing
        if limit and limit > 0:
            data = data[:limit]
        return copy.deepcopy(data)

    def fetch_by_id(self, table, record_id):
        _check_table(table)
        logger.debug("[DEMO MODE] Buscando registro %s da tabela %s", record_id, table)
        for item in self._tables[table]:
            if item.get("id") == record_id:
                return copy.deepcopy(item)
        raise RecordNotFoundError(table, record_id)

    def insert(self, table, record):
        _check_table(table)
        logger.debug("[DEMO MODE] Inserindo na tabela %s: %s", table, record)
        new_id = max([0] + [item["id"] for item in self._tables[table]]) + 1
        new_item = json.loads(json.dumps({**record, "id": new_id}, default=_json_default))
        self._tables[table].append(new_item)
        try:
            self._save()
        except PersistenceFailure:
            self._tables[table].pop()
            raise
        return [copy.deepcopy(new_item)]

    def update(self, table, record_id, patch):
        _check_table(table)
        logger.debug("[DEMO MODE] Atualizando registro %s da tabela %s: %s", record_id, table, patch)
        rows = self._tables[table]
        for index, item in enumerate(rows):
            if item.get("id") == record_id:
                previous = item
                changes = json.loads(json.dumps(patch, default=_json_default))
                changes.pop("id", None)
                rows[index] = {**item, **changes}
                try:
                    self._save()
                except PersistenceFailure:
                    rows[index] = previous
                    raise
                return [copy.deepcopy(rows[index])]
        raise RecordNotFoundError(table, record_id)

    def remove(self, table, record_id):
        _check_table(table)
        logger.debug("[DEMO MODE] Removendo registro %s da tabela %s", record_id, table)
        rows = self._tables[table]
        remaining = [item for item in rows if item.get("id") != record_id]
        if len(remaining) == len(rows):
            raise RecordNotFoundError(table, record_id)
        self._tables[table] = remaining
        try:
            self._save()
        except PersistenceFailure:
            self._tables[table] = rows
            raise
        return True


class SqlTableStore(TableStore):
    """
    Tabelas no banco relacional (SQLAlchemy).
    Qualquer erro do banco, inclusive tempo esgotado, vira PersistenceFailure.
    """

    def __init__(self, engine: Engine):
        # Importa modelos para registrar as tabelas no metadata
        from config.database import Base
        from models import caixa, estoque, financas, orcamento, ordem_servico, user  # noqa: F401

        self.engine = engine
        self.metadata = Base.metadata
        self.Session = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    def _table(self, name: str):
        _check_table(name)
        return self.metadata.tables[name]

    @staticmethod
    def _to_db(table, values: Dict[str, Any]) -> Dict[str, Any]:
        out = {}
        for key, value in values.items():
            if key not in table.c:
                raise ValidationError(f"Coluna desconhecida: {table.name}.{key}")
            out[key] = SqlTableStore._coerce(table.c[key], value)
        return out

    @staticmethod
    def _coerce(column, value):
        if isinstance(value, str) and value:
            if isinstance(column.type, DateTime):
                return datetime.fromisoformat(value)
            if isinstance(column.type, Date):
                return date.fromisoformat(value)
        if isinstance(value, str) and not value and isinstance(column.type, (Date, DateTime)):
            return None
        if isinstance(value, Decimal):
            return float(value)
        return value

    @staticmethod
    def _from_db(row) -> Dict[str, Any]:
        record = dict(row._mapping)
        for key, value in record.items():
            if isinstance(value, (date, datetime)):
                record[key] = value.isoformat()
        return record

    def _condition(self, table, f: Filter):
        if f.column not in table.c:
            raise ValidationError(f"Coluna desconhecida: {table.name}.{f.column}")
        column = table.c[f.column]
        value = self._coerce(column, f.value)
        if f.operator == "eq":
            return column == value
        if f.operator == "neq":
            return column != value
        if f.operator == "gt":
            return column > value
        if f.operator == "gte":
            return column >= value
        if f.operator == "lt":
            return column < value
        if f.operator == "lte":
            return column <= value
        return column.like(f"%{f.value}%")

    def _failure(self, action: str, table: str, exc: SQLAlchemyError) -> PersistenceFailure:
        logger.error("Erro ao %s na tabela %s: %s", action, table, exc, exc_info=True)
        return PersistenceFailure(
            f"Não foi possível {action} na tabela {table}. Tente novamente mais tarde.",
            cause=exc,
        )

    def fetch_all(self, table, limit=None, order_by=None, order_direction="desc", filters=()):
        t = self._table(table)
        query = select(t)
        for f in _normalize_filters(filters):
            query = query.where(self._condition(t, f))
        if order_by:
            if order_by not in t.c:
                raise ValidationError(f"Coluna desconhecida: {table}.{order_by}")
            column = t.c[order_by]
            query = query.order_by(column.asc() if order_direction == "asc" else column.desc())
        if limit:
            query = query.limit(limit)

        db = self.Session()
        try:
            return [self._from_db(row) for row in db.execute(query)]
        except SQLAlchemyError as exc:
            raise self._failure("buscar dados", table, exc) from exc
        finally:
            db.close()

    def fetch_by_id(self, table, record_id):
        t = self._table(table)
        db = self.Session()
        try:
            row = db.execute(select(t).where(t.c.id == record_id)).first()
        except SQLAlchemyError as exc:
            raise self._failure("buscar registro", table, exc) from exc
        finally:
            db.close()
        if row is None:
            raise RecordNotFoundError(table, record_id)
        return self._from_db(row)

    def insert(self, table, record):
        t = self._table(table)
        values = self._to_db(t, {k: v for k, v in record.items() if k != "id"})
        db = self.Session()
        try:
            result = db.execute(sql_insert(t).values(**values))
            new_id = result.inserted_primary_key[0]
            row = db.execute(select(t).where(t.c.id == new_id)).first()
            db.commit()
            return [self._from_db(row)]
        except SQLAlchemyError as exc:
            db.rollback()
            raise self._failure("inserir", table, exc) from exc
        finally:
            db.close()

    def update(self, table, record_id, patch):
        t = self._table(table)
        values = self._to_db(t, {k: v for k, v in patch.items() if k != "id"})
        db = self.Session()
        try:
            result = db.execute(sql_update(t).where(t.c.id == record_id).values(**values))
            if result.rowcount == 0:
                db.rollback()
                raise RecordNotFoundError(table, record_id)
            row = db.execute(select(t).where(t.c.id == record_id)).first()
            db.commit()
            return [self._from_db(row)]
        except SQLAlchemyError as exc:
            db.rollback()
            raise self._failure("atualizar", table, exc) from exc
        finally:
            db.close()

    def remove(self, table, record_id):
        t = self._table(table)
        db = self.Session()
        try:
            result = db.execute(delete(t).where(t.c.id == record_id))
            if result.rowcount == 0:
                db.rollback()
                raise RecordNotFoundError(table, record_id)
            db.commit()
            return True
        except SQLAlchemyError as exc:
            db.rollback()
            raise self._failure("remover", table, exc) from exc
        finally:
            db.close()


@lru_cache(maxsize=1)
def get_store() -> TableStore:
    """
    Repositório da aplicação: banco configurado ou modo de demonstração.
    """
    from config import settings

    if settings.DEMO_MODE:
        logger.info("[DEMO MODE] Sem DATABASE_URL; usando dados de demonstração.")
        return DemoTableStore(path=settings.DEMO_DATA_PATH or None)

    from config.database import engine, init_db

    init_db()
    return SqlTableStore(engine)
