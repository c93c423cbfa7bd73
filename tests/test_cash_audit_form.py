from datetime import date
from decimal import Decimal

import pytest

from arqueos.exceptions import AuditValidationError
from arqueos.schemas.cash_audits import CashAuditIn, validate_form


def _data(**overrides):
    data = {
        "contador_uid": "7",
        "contador_name": "Contador Uno",
        "recibido_por": "María",
        "entregado_por": "Juan",
        "range_from": "2026-03-01",
        "range_to": "2026-03-07",
        "ventas_cash": "1500,25",
        "abonos": 200,
        "ingresos_extra": "49.754",
        "debitos": "300",
        "comment": "  sin novedad  ",
    }
    data.update(overrides)
    return data


def test_totales_derivados():
    form = validate_form(_data())
    assert form.ventas_cash == Decimal("1500.25")
    assert form.ingresos_extra == Decimal("49.75")
    assert form.sub_total == Decimal("1750.00")
    assert form.total_entregado == Decimal("1450.00")


def test_totales_del_cliente_se_ignoran():
    form = validate_form(_data(sub_total="999", total_entregado="1"))
    assert form.sub_total == Decimal("1750.00")
    assert form.total_entregado == Decimal("1450.00")


def test_montos_invalidos_valen_cero():
    form = validate_form(_data(ventas_cash="abc", abonos=None, ingresos_extra="", debitos="10,5"))
    assert form.sub_total == Decimal("0.00")
    assert form.total_entregado == Decimal("-10.50")


def test_textos_recortados_y_fechas():
    form = validate_form(_data())
    assert form.comment == "sin novedad"
    assert form.range_from == date(2026, 3, 1)
    assert form.range_to == date(2026, 3, 7)


def test_entregado_por_es_opcional():
    form = validate_form(_data(entregado_por=""))
    assert form.entregado_por == ""


def test_acepta_un_cash_audit_in():
    form = validate_form(CashAuditIn(**_data()))
    assert form.total_entregado == Decimal("1450.00")


@pytest.mark.parametrize("overrides, message", [
    ({"contador_uid": ""}, "Seleccione Contador."),
    ({"recibido_por": "   "}, "Recibido por es obligatorio."),
    ({"recibido_por": None}, "Recibido por es obligatorio."),
    ({"range_from": ""}, "Seleccione el rango arqueado."),
    ({"range_to": "no-es-fecha"}, "Seleccione el rango arqueado."),
    ({"range_from": "2026-03-08"}, "Rango inválido: Desde no puede ser mayor que Hasta."),
])
def test_validaciones_bloquean_el_guardado(overrides, message):
    with pytest.raises(AuditValidationError) as exc:
        validate_form(_data(**overrides))
    assert str(exc.value) == message


def test_rango_de_un_solo_dia_es_valido():
    form = validate_form(_data(range_from="2026-03-07", range_to="2026-03-07"))
    assert form.range_from == form.range_to
