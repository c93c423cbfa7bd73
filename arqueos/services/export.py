# arqueos/services/export.py
"""Exportación a Excel del listado de arqueos (lo que ya está cargado, sin consultar)."""
import io
from datetime import date
from typing import Iterable, List, Optional

import pandas as pd

from arqueos.schemas.cash_audits import CashAuditRead
from arqueos.utils.dates import to_ymd

SHEET_NAME = "Arqueos"
XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

EXPORT_COLUMNS = [
    "Fecha de creación",
    "Rango arqueado",
    "Arqueado por (Contador)",
    "Recibido por",
    "Entregado por",
    "Ventas cash",
    "Abonos",
    "Ingresos extra",
    "Sub total",
    "Débitos",
    "Monto entregado",
    "Comentario",
]


def export_filename(today: Optional[date] = None) -> str:
    return f"arqueos_pollo_{to_ymd(today or date.today())}.xlsx"


def export_records(rows: Iterable[CashAuditRead]) -> List[dict]:
    data = []
    for r in rows:
        data.append({
            "Fecha de creación": r.created_at.strftime("%d/%m/%Y %H:%M:%S") if r.created_at else "",
            "Rango arqueado": f"{r.range_from} a {r.range_to}",
            "Arqueado por (Contador)": r.contador_name,
            "Recibido por": r.recibido_por,
            "Entregado por": r.entregado_por,
            "Ventas cash": float(r.ventas_cash),
            "Abonos": float(r.abonos),
            "Ingresos extra": float(r.ingresos_extra),
            "Sub total": float(r.sub_total),
            "Débitos": float(r.debitos),
            "Monto entregado": float(r.total_entregado),
            "Comentario": r.comment or "",
        })
    return data


def build_export_frame(rows: Iterable[CashAuditRead]) -> pd.DataFrame:
    # columns fijas: el encabezado sale aunque el listado esté vacío
    return pd.DataFrame(export_records(rows), columns=EXPORT_COLUMNS)


def export_excel(rows: Iterable[CashAuditRead]) -> io.BytesIO:
    df = build_export_frame(rows)

    output = io.BytesIO()
    with pd.ExcelWriter(output, engine="openpyxl") as writer:
        df.to_excel(writer, index=False, sheet_name=SHEET_NAME)

    output.seek(0)
    return output
