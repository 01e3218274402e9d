from datetime import date

import pytest

from services.errors import PersistenceFailure, RecordNotFoundError, ValidationError
from services.estoque_service import StockService, inventory_value, low_stock, search_products


def _produto(**extra):
    dados = {
        "codigo": "V123",
        "nome": "Vidro temperado 8mm",
        "quantidade": 10,
        "quantidade_minima": 5,
        "unidade": "chapa",
        "valor_unitario": 250,
        "fornecedor": "Vidros Brasil",
    }
    dados.update(extra)
    return dados


@pytest.fixture
def service(store):
    return StockService(store)


def test_create_product(service):
    produto = service.create_product(**_produto())

    assert produto["id"]
    assert produto["codigo"] == "V123"
    assert produto["valor_unitario"] == 250.0
    assert service.list_products()[0]["nome"] == "Vidro temperado 8mm"


def test_create_product_codigo_duplicado(service):
    service.create_product(**_produto())

    with pytest.raises(ValidationError):
        service.create_product(**_produto(nome="Outro"))


def test_create_product_invalido(service):
    with pytest.raises(ValidationError):
        service.create_product(**_produto(quantidade=-1))
    with pytest.raises(ValidationError):
        service.create_product(**_produto(nome=""))


def test_entrada_soma_quantidade_e_atualiza_ultima_entrada(service):
    produto = service.create_product(**_produto())

    atualizado = service.register_movement(produto["id"], "entrada", 4, date(2025, 6, 7), "compra")

    assert atualizado["quantidade"] == 14
    assert atualizado["ultima_entrada"] == "2025-06-07"
    movs = service.list_movements(produto["id"])
    assert len(movs) == 1
    assert movs[0]["produto_nome"] == "Vidro temperado 8mm"


def test_saida_subtrai_quantidade(service):
    produto = service.create_product(**_produto())

    atualizado = service.register_movement(produto["id"], "saida", 10, date(2025, 6, 7), "venda")

    assert atualizado["quantidade"] == 0
    assert atualizado.get("ultima_entrada") is None


def test_saida_maior_que_o_disponivel(service):
    produto = service.create_product(**_produto(quantidade=3))

    with pytest.raises(ValidationError) as exc:
        service.register_movement(produto["id"], "saida", 5, date(2025, 6, 7), "venda")

    assert exc.value.message == "Quantidade insuficiente em estoque. Disponível: 3 chapa"
    assert service.list_movements() == []


def test_movimentacao_de_produto_inexistente(service):
    with pytest.raises(RecordNotFoundError):
        service.register_movement(99, "entrada", 1, date(2025, 6, 7), "compra")


def test_movimentacao_com_quantidade_zero(service):
    produto = service.create_product(**_produto())

    with pytest.raises(ValidationError):
        service.register_movement(produto["id"], "entrada", 0, date(2025, 6, 7), "compra")


def test_falha_ao_atualizar_produto_remove_movimentacao(flaky_store):
    service = StockService(flaky_store)
    produto = service.create_product(**_produto())
    flaky_store.fail_on.add(("update", "estoque"))

    with pytest.raises(PersistenceFailure):
        service.register_movement(produto["id"], "entrada", 2, date(2025, 6, 7), "compra")

    assert service.list_movements() == []
    assert flaky_store.fetch_by_id("estoque", produto["id"])["quantidade"] == 10


def test_funcoes_de_estoque():
    produtos = [
        {"codigo": "V123", "nome": "Vidro temperado 8mm", "quantidade": 10, "quantidade_minima": 5, "valor_unitario": 250},
        {"codigo": "V456", "nome": "Vidro comum 4mm", "quantidade": 5, "quantidade_minima": 5, "valor_unitario": 120},
        {"codigo": "P789", "nome": "Perfil de alumínio", "quantidade": 2, "quantidade_minima": 10, "valor_unitario": 80.1},
    ]

    assert inventory_value(produtos) == 3260.2
    assert [p["codigo"] for p in low_stock(produtos)] == ["V456", "P789"]
    assert [p["codigo"] for p in search_products(produtos, "vidro")] == ["V123", "V456"]
    assert [p["codigo"] for p in search_products(produtos, "p789")] == ["P789"]
    assert search_products(produtos, "  ") == produtos
