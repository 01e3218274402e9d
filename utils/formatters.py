from datetime import date, datetime
from decimal import Decimal
from typing import Optional, Union

from schemas.caixa import FORMAS_PAGAMENTO


def format_currency(value: Union[float, Decimal, None]) -> str:
    """
    Formata um número como moeda em reais (R$ 1.234,56).
    """
    value = float(value or 0)
    sinal = "-" if value < 0 else ""
    texto = f"{abs(value):,.2f}".replace(",", "X").replace(".", ",").replace("X", ".")
    return f"{sinal}R$ {texto}"


def format_date(d: Union[date, datetime, str, None]) -> str:
    """
    Formata datas no padrão brasileiro. Aceita também datas ISO (YYYY-MM-DD).
    """
    if not d:
        return ""
    if isinstance(d, str):
        d = datetime.fromisoformat(d) if "T" in d or " " in d else date.fromisoformat(d)
    if isinstance(d, datetime):
        return d.strftime("%d/%m/%Y %H:%M")
    return d.strftime("%d/%m/%Y")


def format_payment_method(forma: Optional[str]) -> str:
    """Nome da forma de pagamento para exibição."""
    if not forma:
        return ""
    return FORMAS_PAGAMENTO.get(forma, forma)


def truncate_text(text: Optional[str], max_length: int = 50) -> Optional[str]:
    if not text or len(text) <= max_length:
        return text
    return f"{text[:max_length]}..."
