"""
Testes do ciclo de vida do caixa.
"""
from datetime import date, datetime
from decimal import Decimal

import pytest

from services.caixa_service import (
    CaixaState,
    CashRegisterService,
    compute_balance,
    compute_totals,
)
from services.errors import InvalidStateError, PersistenceFailure, ValidationError


def _abrir(service, valor_inicial=200, data=date(2025, 6, 5), hora="08:30"):
    return service.open_register(data, hora, valor_inicial, "Início do expediente")


def test_scenario_abertura_movimentos_fechamento_sem_diferenca(store, clock):
    service = CashRegisterService(store, clock=clock)

    _abrir(service, 200)
    assert service.compute_current_balance() == Decimal("200")

    service.register_movement("entrada", 150, "Recebimento à vista", "dinheiro")
    service.register_movement("entrada", 350, "Pagamento de orçamento", "cartao_credito")
    service.register_movement("saida", 50, "Material de escritório", "dinheiro")
    assert service.compute_current_balance() == Decimal("650")

    fechamento = service.close_register(650)

    assert fechamento["valor_sistema"] == 650
    assert fechamento["valor_final"] == 650
    assert fechamento["diferenca"] == 0
    assert fechamento["total_entradas"] == 500
    assert fechamento["total_saidas"] == 50
    assert fechamento["valor_inicial"] == 200
    assert fechamento["data"] == "2025-06-05"
    assert fechamento["hora_abertura"] == "08:30"
    assert not service.is_open
    assert service.compute_current_balance() == Decimal("0")

    caixa = store.fetch_all("caixa")[0]
    assert caixa["status"] == "fechado"
    assert caixa["valor_sistema"] == 650
    assert caixa["diferenca"] == 0
    assert caixa["hora_fechamento"] == fechamento["hora_fechamento"]


def test_fechamento_com_falta(store, clock):
    service = CashRegisterService(store, clock=clock)
    _abrir(service, 200)

    fechamento = service.close_register(150, "Contagem conferida duas vezes")

    assert fechamento["valor_sistema"] == 200
    assert fechamento["diferenca"] == -50
    assert fechamento["observacoes"] == "Contagem conferida duas vezes"


def test_fechamento_com_sobra(store, clock):
    service = CashRegisterService(store, clock=clock)
    _abrir(service, 100)
    service.register_movement("entrada", 40, "Venda", "pix")

    fechamento = service.close_register(145.5)

    assert fechamento["diferenca"] == pytest.approx(5.5)


def test_saldo_acompanha_cada_movimentacao(demo_store, clock):
    service = CashRegisterService(demo_store, clock=clock)
    _abrir(service, "75.25")
    esperado = Decimal("75.25")
    for tipo, valor in [("entrada", "10.10"), ("saida", "5.05"), ("entrada", "0.10"), ("saida", "0.20")]:
        service.register_movement(tipo, valor, "Movimento", "dinheiro")
        esperado += Decimal(valor) if tipo == "entrada" else -Decimal(valor)
        entradas, saidas = service.totals()
        assert service.compute_current_balance() == esperado
        assert Decimal("75.25") + entradas - saidas == esperado


def test_soma_decimal_sem_erro_de_ponto_flutuante(store, clock):
    service = CashRegisterService(store, clock=clock)
    _abrir(service, 0)
    service.register_movement("entrada", 0.1, "a", "dinheiro")
    service.register_movement("entrada", 0.2, "b", "dinheiro")

    assert service.compute_current_balance() == Decimal("0.3")
    assert service.close_register(0.3)["diferenca"] == 0


def test_abrir_com_caixa_aberto_no_estado(store, clock):
    service = CashRegisterService(store, clock=clock)
    _abrir(service)

    with pytest.raises(InvalidStateError):
        _abrir(service, 300)

    assert len(store.fetch_all("caixa")) == 1


def test_abrir_com_caixa_aberto_em_outra_sessao(store, clock):
    primeira = CashRegisterService(store, CaixaState(), clock=clock)
    segunda = CashRegisterService(store, CaixaState(), clock=clock)
    _abrir(primeira)

    with pytest.raises(InvalidStateError):
        _abrir(segunda)

    assert not segunda.is_open
    assert len(store.fetch_all("caixa", filters=[("status", "eq", "aberto")])) == 1


def test_movimentacao_sem_caixa_aberto(store, clock):
    service = CashRegisterService(store, clock=clock)

    with pytest.raises(InvalidStateError):
        service.register_movement("entrada", 10, "Venda", "dinheiro")

    assert store.fetch_all("caixa_movimentacoes") == []


def test_fechar_sem_caixa_aberto(store, clock):
    service = CashRegisterService(store, clock=clock)

    with pytest.raises(InvalidStateError):
        service.close_register(0)

    assert store.fetch_all("caixa_fechamentos") == []


def test_fechar_duas_vezes(store, clock):
    service = CashRegisterService(store, clock=clock)
    _abrir(service)
    service.close_register(200)

    with pytest.raises(InvalidStateError):
        service.close_register(200)

    assert len(store.fetch_all("caixa_fechamentos")) == 1


@pytest.mark.parametrize("valor", [0, -10, "0.004", "abc"])
def test_movimentacao_com_valor_invalido(store, clock, valor):
    service = CashRegisterService(store, clock=clock)
    _abrir(service)

    with pytest.raises(ValidationError):
        service.register_movement("entrada", valor, "Venda", "dinheiro")

    assert store.fetch_all("caixa_movimentacoes") == []
    assert service.state.movimentacoes == []


@pytest.mark.parametrize("valor", ["1e30", "10000000000", 1e40])
def test_valor_alto_demais_e_rejeitado(store, clock, valor):
    service = CashRegisterService(store, clock=clock)
    _abrir(service)

    with pytest.raises(ValidationError) as exc:
        service.register_movement("entrada", valor, "Venda", "dinheiro")
    assert exc.value.message == "valor: Valor muito alto"

    with pytest.raises(ValidationError):
        service.close_register(valor)

    assert store.fetch_all("caixa_movimentacoes") == []
    assert service.is_open


def test_maior_valor_aceito(demo_store, clock):
    service = CashRegisterService(demo_store, clock=clock)
    _abrir(service, 0)

    mov = service.register_movement("entrada", "9999999999.99", "Obra grande", "transferencia")

    assert mov["valor"] == 9999999999.99


def test_movimentacao_com_tipo_ou_forma_invalidos(demo_store, clock):
    service = CashRegisterService(demo_store, clock=clock)
    _abrir(service)

    with pytest.raises(ValidationError) as exc:
        service.register_movement("estorno", 10, "Venda", "dinheiro")
    assert exc.value.message.startswith("tipo:")

    with pytest.raises(ValidationError) as exc:
        service.register_movement("entrada", 10, "Venda", "boleto")
    assert exc.value.message.startswith("forma_pagamento:")

    with pytest.raises(ValidationError):
        service.register_movement("entrada", 10, "   ", "dinheiro")


def test_abertura_com_valor_negativo(store, clock):
    service = CashRegisterService(store, clock=clock)

    with pytest.raises(ValidationError) as exc:
        _abrir(service, -1)

    assert "valor_inicial" in exc.value.message
    assert not service.is_open
    assert store.fetch_all("caixa") == []


def test_abertura_com_valor_zero_e_permitida(demo_store, clock):
    service = CashRegisterService(demo_store, clock=clock)

    caixa = _abrir(service, 0)

    assert caixa["valor_inicial"] == 0
    assert service.is_open


def test_abertura_com_hora_invalida(demo_store, clock):
    service = CashRegisterService(demo_store, clock=clock)

    with pytest.raises(ValidationError):
        _abrir(service, hora="25:00")


def test_fechamento_com_valor_negativo(store, clock):
    service = CashRegisterService(store, clock=clock)
    _abrir(service)

    with pytest.raises(ValidationError):
        service.close_register(-5)

    assert service.is_open
    assert store.fetch_all("caixa")[0]["status"] == "aberto"


def test_validacao_antes_do_estado(demo_store, clock):
    service = CashRegisterService(demo_store, clock=clock)

    # Sem caixa aberto, o valor inválido é reportado primeiro
    with pytest.raises(ValidationError):
        service.close_register(-5)


def test_movimentacao_usa_data_e_hora_do_relogio(demo_store):
    service = CashRegisterService(demo_store, clock=lambda: datetime(2025, 6, 6, 14, 7))
    _abrir(service)

    mov = service.register_movement("saida", 12.5, "Café", "dinheiro", "copa")

    assert mov["data"] == "2025-06-06"
    assert mov["hora"] == "14:07"
    assert mov["caixa_id"] == service.state.caixa["id"]
    assert mov["observacoes"] == "copa"


def test_movimentacoes_ordenadas_por_hora(demo_store):
    horas = iter([datetime(2025, 6, 5, 15, 0), datetime(2025, 6, 5, 9, 30), datetime(2025, 6, 5, 11, 0)])
    service = CashRegisterService(demo_store, clock=lambda: next(horas))
    _abrir(service)
    for descricao in ("tarde", "manha", "almoco"):
        service.register_movement("entrada", 1, descricao, "dinheiro")

    assert [m["hora"] for m in service.sorted_movements()] == ["09:30", "11:00", "15:00"]


def test_load_recupera_caixa_aberto(store, clock):
    service = CashRegisterService(store, clock=clock)
    caixa = _abrir(service, 200)
    service.register_movement("entrada", 150, "Venda", "pix")

    outra = CashRegisterService(store, clock=clock)
    outra.load()

    assert outra.is_open
    assert outra.state.caixa["id"] == caixa["id"]
    assert len(outra.state.movimentacoes) == 1
    assert outra.compute_current_balance() == Decimal("350")


def test_load_sem_caixa_aberto(store, clock):
    service = CashRegisterService(store, clock=clock)
    _abrir(service)
    service.close_register(200)

    outra = CashRegisterService(store, clock=clock)
    outra.load()

    assert not outra.is_open
    assert outra.state.movimentacoes == []


def test_historico_de_fechamentos(store, clock):
    service = CashRegisterService(store, clock=clock)
    _abrir(service, 100, data=date(2025, 6, 3))
    service.close_register(100)
    _abrir(service, 100, data=date(2025, 6, 5))
    service.close_register(90)
    _abrir(service, 100, data=date(2025, 6, 4))
    service.close_register(110)

    historico = service.closing_history()
    assert [f["data"] for f in historico] == ["2025-06-05", "2025-06-04", "2025-06-03"]
    assert [f["diferenca"] for f in historico] == [-10, 10, 0]
    assert len(service.closing_history(limit=2)) == 2


def test_estados_independentes_por_sessao(demo_store, clock):
    estado_a, estado_b = CaixaState(), CaixaState()
    a = CashRegisterService(demo_store, estado_a, clock=clock)
    _abrir(a)

    b = CashRegisterService(demo_store, estado_b, clock=clock)

    assert estado_a.is_open
    assert not estado_b.is_open
    assert b.compute_current_balance() == Decimal("0")


def test_falha_ao_abrir_nao_altera_estado(flaky_store, clock):
    flaky_store.fail_on.add(("insert", "caixa"))
    service = CashRegisterService(flaky_store, clock=clock)

    with pytest.raises(PersistenceFailure):
        _abrir(service)

    assert not service.is_open


def test_falha_ao_movimentar_nao_altera_estado(flaky_store, clock):
    service = CashRegisterService(flaky_store, clock=clock)
    _abrir(service)
    service.register_movement("entrada", 100, "Venda", "dinheiro")
    flaky_store.fail_on.add(("insert", "caixa_movimentacoes"))

    with pytest.raises(PersistenceFailure):
        service.register_movement("entrada", 50, "Venda", "dinheiro")

    assert len(service.state.movimentacoes) == 1
    assert service.compute_current_balance() == Decimal("300")


def test_falha_ao_fechar_nao_altera_estado(flaky_store, clock):
    service = CashRegisterService(flaky_store, clock=clock)
    _abrir(service)
    flaky_store.fail_on.add(("update", "caixa"))

    with pytest.raises(PersistenceFailure):
        service.close_register(200)

    assert service.is_open
    assert flaky_store.fetch_all("caixa_fechamentos") == []


def test_falha_no_historico_reabre_caixa(flaky_store, clock):
    service = CashRegisterService(flaky_store, clock=clock)
    _abrir(service)
    service.register_movement("entrada", 30, "Venda", "dinheiro")
    flaky_store.fail_on.add(("insert", "caixa_fechamentos"))

    with pytest.raises(PersistenceFailure):
        service.close_register(230)

    assert service.is_open
    assert service.compute_current_balance() == Decimal("230")
    caixa = flaky_store.fetch_all("caixa")[0]
    assert caixa["status"] == "aberto"
    assert caixa["valor_final"] is None
    assert caixa["diferenca"] is None

    flaky_store.fail_on.clear()
    assert service.close_register(230)["diferenca"] == 0


def test_funcoes_de_totais():
    movs = [
        {"tipo": "entrada", "valor": 150.0},
        {"tipo": "entrada", "valor": 350.0},
        {"tipo": "saida", "valor": 50.0},
    ]

    assert compute_totals(movs) == (Decimal("500.0"), Decimal("50.0"))
    assert compute_balance({"valor_inicial": 200.0}, movs) == Decimal("650")
    assert compute_balance(None, movs) == Decimal("0")
    assert compute_totals([]) == (Decimal("0"), Decimal("0"))


def test_today_hora_usa_o_relogio_do_servico(demo_store):
    service = CashRegisterService(demo_store, clock=lambda: datetime(2025, 6, 5, 7, 5))

    data, hora = service.today_hora()

    assert data == date(2025, 6, 5)
    assert hora == "07:05"
