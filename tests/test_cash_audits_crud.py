import logging
from datetime import date, datetime
from decimal import Decimal

from arqueos.crud.cash_audits import (
    create_cash_audit,
    delete_cash_audit,
    get_cash_audit,
    list_cash_audits,
    update_cash_audit,
)
from arqueos.models import PolloCashAudit
from arqueos.schemas.cash_audits import validate_form
from arqueos.utils.dates import end_of_day, start_of_day


def _form(**overrides):
    data = {
        "contador_uid": "1",
        "contador_name": "Contador Uno",
        "recibido_por": "María",
        "range_from": "2026-03-01",
        "range_to": "2026-03-01",
        "ventas_cash": 100,
        "abonos": 20,
        "ingresos_extra": 5,
        "debitos": 25,
    }
    data.update(overrides)
    return validate_form(data)


def test_create_asigna_fecha_y_devuelve_id(db):
    before = datetime.now()
    audit_id = create_cash_audit(db, _form(), created_by_uid="1", created_by_name="Contador Uno")

    audit = get_cash_audit(db, audit_id)
    assert audit is not None
    assert audit.created_at >= before.replace(microsecond=0)
    assert audit.created_by_name == "Contador Uno"
    assert audit.range_from == "2026-03-01"
    assert audit.sub_total == Decimal("125.00")
    assert audit.total_entregado == Decimal("100.00")


def test_create_respeta_created_at_del_llamador(db):
    when = datetime(2026, 1, 15, 8, 30)
    audit_id = create_cash_audit(db, _form(), created_at=when)
    assert get_cash_audit(db, audit_id).created_at == when


def test_list_filtra_por_rango_inclusivo_mas_recientes_primero(db):
    stamps = [
        datetime(2026, 2, 28, 23, 59, 59),
        datetime(2026, 3, 1, 0, 0, 0),
        datetime(2026, 3, 15, 12, 0, 0),
        datetime(2026, 3, 31, 23, 59, 59),
        datetime(2026, 4, 1, 0, 0, 0),
    ]
    for i, when in enumerate(stamps):
        create_cash_audit(db, _form(comment=f"#{i}"), created_at=when)

    rows = list_cash_audits(
        db,
        start_of_day(date(2026, 3, 1)),
        end_of_day(date(2026, 3, 31)),
    )
    assert [r.comment for r in rows] == ["#3", "#2", "#1"]

    all_rows = list_cash_audits(db)
    assert [r.comment for r in all_rows] == ["#4", "#3", "#2", "#1", "#0"]


def test_list_con_un_solo_limite_no_filtra(db):
    create_cash_audit(db, _form(), created_at=datetime(2026, 1, 1))
    create_cash_audit(db, _form(), created_at=datetime(2026, 6, 1))
    assert len(list_cash_audits(db, created_from=datetime(2026, 5, 1))) == 2


def test_list_normaliza_registros_heredados(db):
    db.add(PolloCashAudit(created_at=datetime(2026, 3, 2), ventas_cash=None, recibido_por=None))
    db.commit()

    (row,) = list_cash_audits(db)
    assert row.ventas_cash == Decimal("0.00")
    assert row.total_entregado == Decimal("0.00")
    assert row.recibido_por == ""
    assert row.contador_name == ""
    assert row.range_from == ""
    assert row.comment == ""


def test_update_sobreescribe_todo_y_conserva_creacion(db):
    when = datetime(2026, 3, 5, 10, 0)
    audit_id = create_cash_audit(db, _form(comment="original"), created_by_uid="1", created_at=when)

    ok = update_cash_audit(db, audit_id, _form(ventas_cash="200", debitos=0, comment=""))
    assert ok is True

    audit = get_cash_audit(db, audit_id)
    assert audit.ventas_cash == Decimal("200.00")
    assert audit.sub_total == Decimal("225.00")
    assert audit.total_entregado == Decimal("225.00")
    assert audit.comment == ""
    assert audit.created_at == when
    assert audit.created_by_uid == "1"


def test_update_inexistente_devuelve_false(db):
    assert update_cash_audit(db, 999, _form()) is False


def test_delete(db):
    keep = create_cash_audit(db, _form(), created_at=datetime(2026, 3, 1))
    gone = create_cash_audit(db, _form(), created_at=datetime(2026, 3, 2))

    delete_cash_audit(db, gone)
    assert [r.id for r in list_cash_audits(db)] == [keep]

    # Borrar algo que no existe no falla
    delete_cash_audit(db, 12345)
    assert [r.id for r in list_cash_audits(db)] == [keep]


def test_create_registra_el_monto_entregado(db, caplog, monkeypatch):
    monkeypatch.setattr(logging.getLogger("arqueos"), "propagate", True)
    with caplog.at_level(logging.INFO, logger="arqueos"):
        audit_id = create_cash_audit(db, _form(), created_by_name="Jefa")

    assert f"Arqueo {audit_id} creado por Jefa (entregado C$ 100.00)" in caplog.text
