"""
Regras do estoque: movimentações ajustam a quantidade do produto.
"""
import logging
from typing import List, Optional

from schemas.base import parse_input
from schemas.estoque import MovimentacaoEstoque, Produto
from services.data_service import Filter, TableStore
from services.errors import PersistenceFailure, ValidationError
from utils.money import to_decimal, to_float

logger = logging.getLogger(__name__)

PRODUTOS = "estoque"
MOVIMENTACOES = "estoque_movimentacoes"


def inventory_value(produtos: List[dict]) -> float:
    """Valor total do estoque (quantidade x valor unitário)."""
    total = sum(
        (to_decimal(p.get("quantidade")) * to_decimal(p.get("valor_unitario")) for p in produtos),
        to_decimal(0),
    )
    return to_float(total)


def low_stock(produtos: List[dict]) -> List[dict]:
    """Produtos com quantidade igual ou abaixo do mínimo."""
    return [
        p
        for p in produtos
        if float(p.get("quantidade") or 0) <= float(p.get("quantidade_minima") or 0)
    ]


def search_products(produtos: List[dict], termo: str) -> List[dict]:
    termo = (termo or "").strip().lower()
    if not termo:
        return produtos
    return [
        p
        for p in produtos
        if termo in (p.get("nome") or "").lower() or termo in (p.get("codigo") or "").lower()
    ]


class StockService:
    def __init__(self, store: TableStore):
        self.store = store

    def list_products(self) -> List[dict]:
        return self.store.fetch_all(PRODUTOS, order_by="nome", order_direction="asc")

    def list_movements(self, produto_id: Optional[int] = None, limit: Optional[int] = None) -> List[dict]:
        filters = [Filter("produto_id", "eq", produto_id)] if produto_id else []
        return self.store.fetch_all(MOVIMENTACOES, filters=filters, order_by="data", limit=limit)

    def create_product(self, **dados) -> dict:
        produto = parse_input(Produto, **dados)
        existentes = self.store.fetch_all(PRODUTOS, filters=[Filter("codigo", "eq", produto.codigo)], limit=1)
        if existentes:
            raise ValidationError(f"Já existe um produto com o código {produto.codigo}.")
        record = produto.model_dump()
        record["valor_unitario"] = to_float(produto.valor_unitario)
        return self.store.insert(PRODUTOS, record)[0]

    def register_movement(
        self,
        produto_id: int,
        tipo: str,
        quantidade: float,
        data,
        motivo: str,
        observacoes: Optional[str] = None,
    ) -> dict:
        """
        Registra entrada/saída e atualiza a quantidade do produto.
        Retorna o produto atualizado.
        """
        dados = parse_input(
            MovimentacaoEstoque,
            produto_id=produto_id,
            tipo=tipo,
            quantidade=quantidade,
            data=data,
            motivo=motivo,
            observacoes=observacoes,
        )
        produto = self.store.fetch_by_id(PRODUTOS, dados.produto_id)
        disponivel = float(produto.get("quantidade") or 0)

        if dados.tipo == "saida" and dados.quantidade > disponivel:
            raise ValidationError(
                f"Quantidade insuficiente em estoque. Disponível: {disponivel:g} {produto.get('unidade') or ''}".rstrip()
            )

        movimentacao = self.store.insert(
            MOVIMENTACOES,
            {
                "produto_id": produto["id"],
                "produto_nome": produto.get("nome"),
                "tipo": dados.tipo,
                "quantidade": dados.quantidade,
                "data": dados.data.isoformat(),
                "motivo": dados.motivo,
                "observacoes": dados.observacoes or None,
            },
        )[0]

        if dados.tipo == "entrada":
            patch = {"quantidade": disponivel + dados.quantidade, "ultima_entrada": dados.data.isoformat()}
        else:
            patch = {"quantidade": disponivel - dados.quantidade}

        try:
            atualizado = self.store.update(PRODUTOS, produto["id"], patch)[0]
        except PersistenceFailure:
            # Sem ajuste de quantidade a movimentação não pode ficar registrada
            try:
                self.store.remove(MOVIMENTACOES, movimentacao["id"])
            except PersistenceFailure:
                logger.error(
                    "Movimentação %s gravada sem ajuste do produto %s.", movimentacao["id"], produto["id"]
                )
            raise
        return atualizado
