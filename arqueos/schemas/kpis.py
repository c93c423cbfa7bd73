# schemas/kpis.py
from pydantic import BaseModel
from typing import Optional
from decimal import Decimal
from datetime import date


class SalesRow(BaseModel):
    """Una línea de venta ya expandida (no se persiste)."""
    id: str
    date: str = ""
    product_name: str = "(sin nombre)"
    quantity: Decimal = Decimal(0)
    amount: Decimal = Decimal(0)
    measurement: str = ""
    type: str = "CONTADO"


class PeriodKpis(BaseModel):
    date_from: Optional[date] = None
    date_to: Optional[date] = None

    ventas_cash: Decimal = Decimal("0.00")
    abonos: Decimal = Decimal("0.00")      # Abonos a crédito cobrados en el rango
    recaudado: Decimal = Decimal("0.00")   # Cash + abonos

    lbs_cash: Decimal = Decimal("0.000")
    units_cash: Decimal = Decimal("0.000")
    lbs_credit: Decimal = Decimal("0.000")
    units_credit: Decimal = Decimal("0.000")


class PeriodKpisResponse(PeriodKpis):
    # Número de secuencia enviado por el cliente, se devuelve tal cual
    seq: Optional[int] = None


class AuditListSummary(BaseModel):
    """Sumas del listado filtrado."""
    count: int = 0
    sum_total: Decimal = Decimal("0.00")      # Monto entregado
    sum_debitos: Decimal = Decimal("0.00")
    sum_sub_total: Decimal = Decimal("0.00")
