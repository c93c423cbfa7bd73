# arqueos/utils/money.py
"""
Conversión de montos y cantidades.

Todas las funciones son totales: nunca lanzan excepción. Cualquier entrada que
no se pueda interpretar como número (None, "", "abc", NaN) vale 0.
"""
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from arqueos.config import CURRENCY_PREFIX

TWO_PLACES = Decimal("0.01")
THREE_PLACES = Decimal("0.001")
ZERO = Decimal("0")


def to_decimal(value) -> Decimal:
    """
    Interpreta `value` como Decimal.
    Acepta coma como separador decimal ("12,5" -> 12.5). Todas las comas se
    reemplazan, así que "1,234.50" no es válido y vale 0.
    """
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        d = value
    elif isinstance(value, int):
        d = Decimal(value)
    elif isinstance(value, float):
        d = Decimal(str(value))
    else:
        text = str(value).strip().replace(",", ".")
        if not text:
            return ZERO
        try:
            d = Decimal(text)
        except InvalidOperation:
            return ZERO
    if not d.is_finite():
        return ZERO
    return d


def _quantize(value: Decimal, places: Decimal) -> Decimal:
    try:
        return value.quantize(places, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        # Fuera de la precisión del contexto decimal
        return ZERO.quantize(places)


def round2(value) -> Decimal:
    return _quantize(to_decimal(value), TWO_PLACES)


def round3(value) -> Decimal:
    return _quantize(to_decimal(value), THREE_PLACES)


def parse_money(value) -> Decimal:
    """Monto a 2 decimales. parse_money(parse_money(x)) == parse_money(x)."""
    return round2(value)


def parse_qty(value) -> Decimal:
    """Cantidad sin redondear (se redondea al totalizar)."""
    return to_decimal(value)


def format_money(value) -> str:
    return f"{CURRENCY_PREFIX} {round2(value):.2f}"
