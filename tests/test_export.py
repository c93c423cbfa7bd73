from datetime import date, datetime
from io import BytesIO

import pandas as pd

from arqueos.schemas.cash_audits import CashAuditRead
from arqueos.services.export import EXPORT_COLUMNS, build_export_frame, export_excel, export_filename


def _row(**kw):
    data = dict(
        id=1,
        created_at=datetime(2026, 3, 4, 9, 5, 0),
        contador_name="Contador Uno",
        recibido_por="Ana",
        entregado_por="Luis",
        range_from="2026-03-01",
        range_to="2026-03-03",
        ventas_cash="100.50",
        abonos="20",
        ingresos_extra="0",
        debitos="10",
        sub_total="120.50",
        total_entregado="110.50",
    )
    data.update(kw)
    return CashAuditRead(**data)


def test_nombre_del_archivo():
    assert export_filename(date(2026, 3, 4)) == "arqueos_pollo_2026-03-04.xlsx"


def test_una_fila_por_registro_con_columnas_fijas():
    df = build_export_frame([_row(), _row(id=2, created_at=None, comment="ok")])
    assert list(df.columns) == EXPORT_COLUMNS
    assert len(df) == 2
    assert df.loc[0, "Fecha de creación"] == "04/03/2026 09:05:00"
    assert df.loc[0, "Arqueado por (Contador)"] == "Contador Uno"
    assert df.loc[0, "Monto entregado"] == 110.5
    assert df.loc[1, "Fecha de creación"] == ""
    assert df.loc[1, "Comentario"] == "ok"


def test_listado_vacio_conserva_encabezados():
    df = build_export_frame([])
    assert list(df.columns) == EXPORT_COLUMNS
    assert df.empty


def test_excel_generado():
    output = export_excel([_row()])
    df = pd.read_excel(BytesIO(output.getvalue()), sheet_name="Arqueos")
    assert list(df.columns) == EXPORT_COLUMNS
    assert df.loc[0, "Recibido por"] == "Ana"
    assert df.loc[0, "Débitos"] == 10
