from datetime import date, datetime
from decimal import Decimal

from utils.formatters import format_currency, format_date, format_payment_method, truncate_text


def test_format_currency():
    assert format_currency(1234.56) == "R$ 1.234,56"
    assert format_currency(Decimal("650")) == "R$ 650,00"
    assert format_currency(-50) == "-R$ 50,00"
    assert format_currency(None) == "R$ 0,00"
    assert format_currency(1000000) == "R$ 1.000.000,00"


def test_format_date():
    assert format_date(date(2025, 6, 5)) == "05/06/2025"
    assert format_date("2025-06-05") == "05/06/2025"
    assert format_date(datetime(2025, 6, 5, 18, 30)) == "05/06/2025 18:30"
    assert format_date("2025-06-05T18:30:00") == "05/06/2025 18:30"
    assert format_date(None) == ""
    assert format_date("") == ""


def test_format_payment_method():
    assert format_payment_method("cartao_credito") == "Cartão de Crédito"
    assert format_payment_method("pix") == "PIX"
    assert format_payment_method("boleto") == "boleto"
    assert format_payment_method(None) == ""


def test_truncate_text():
    assert truncate_text("curto") == "curto"
    assert truncate_text("a" * 50) == "a" * 50
    assert truncate_text("a" * 51) == "a" * 50 + "..."
    assert truncate_text("a" * 60, 10) == "a" * 10 + "..."
    assert truncate_text(None) is None
