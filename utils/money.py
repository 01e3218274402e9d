"""
Valores monetários: aritmética em Decimal, gravação em float (como nas colunas Float).
"""
from decimal import ROUND_HALF_UP, Decimal

CENTAVOS = Decimal("0.01")


def to_decimal(value) -> Decimal:
    """Converte um valor lido do banco (float, int, str, None) para Decimal."""
    if value is None or value == "":
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def quantize(value) -> Decimal:
    """Arredonda para centavos."""
    return to_decimal(value).quantize(CENTAVOS, rounding=ROUND_HALF_UP)


def to_float(value) -> float:
    return float(quantize(value))


def sum_values(records, field: str = "valor") -> Decimal:
    return sum((to_decimal(r.get(field)) for r in records), Decimal("0"))
