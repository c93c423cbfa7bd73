# arqueos/services/kpis.py
"""
KPIs informativos de un período (ventas cash, recaudado, libras y unidades).

La agregación es una función pura (`aggregate_period_kpis`) que recibe el rango
y las dos colecciones fuente; la pantalla la usa dos veces: para el rango del
filtro del listado y para el rango del formulario. Nada de esto escribe en la
base de datos.
"""
import logging
from datetime import date
from decimal import Decimal
from typing import Any, Iterable, List, Mapping, Optional

from sqlalchemy.orm import Session

from arqueos.models import ArMovement, SaleType, SaleV2
from arqueos.schemas.cash_audits import CashAuditRead
from arqueos.schemas.kpis import AuditListSummary, PeriodKpis, SalesRow
from arqueos.utils.dates import parse_ymd, to_ymd
from arqueos.utils.money import ZERO, parse_qty, round2, round3, to_decimal

logger = logging.getLogger(__name__)

LB_ALIASES = frozenset({"lb", "lbs", "libra", "libras"})
UNIT_ALIASES = frozenset({"unidad", "unidades", "ud", "uds", "pieza", "piezas"})

ABONO = "ABONO"
NO_NAME = "(sin nombre)"


def _get(doc: Any, key: str, default=None):
    """Lee un campo de un dict o de un objeto ORM."""
    if isinstance(doc, Mapping):
        value = doc.get(key, default)
    else:
        value = getattr(doc, key, default)
    return default if value is None else value


def _norm_unit(measurement) -> str:
    return str(measurement or "").strip().lower()


def is_lb(measurement) -> bool:
    return _norm_unit(measurement) in LB_ALIASES


def is_unit(measurement) -> bool:
    return _norm_unit(measurement) in UNIT_ALIASES


def _line_amount(item: Mapping) -> Decimal:
    # El monto final explícito gana si no es cero
    explicit = to_decimal(item.get("line_final"))
    if explicit:
        return explicit
    qty = parse_qty(item.get("qty"))
    gross = to_decimal(item.get("unit_price")) * qty - to_decimal(item.get("discount"))
    return max(ZERO, gross)


def expand_sales_rows(docs: Iterable[Any]) -> List[SalesRow]:
    """Aplana documentos de venta: uno por línea si traen items, si no uno por venta."""
    rows: List[SalesRow] = []
    for doc in docs:
        doc_id = str(_get(doc, "id", ""))
        base_date = str(_get(doc, "date", ""))
        sale_type = str(_get(doc, "type", SaleType.CONTADO))
        items = _get(doc, "items")

        if isinstance(items, list) and items:
            for idx, item in enumerate(items):
                # Líneas heredadas que no son dict cuentan como línea vacía
                if not isinstance(item, Mapping):
                    item = {}
                rows.append(SalesRow(
                    id=f"{doc_id}#{idx}",
                    date=base_date,
                    product_name=str(item.get("product_name") or NO_NAME),
                    quantity=parse_qty(item.get("qty")),
                    amount=_line_amount(item),
                    measurement=str(item.get("measurement") or _get(doc, "measurement", "")),
                    type=sale_type,
                ))
            continue

        amount = _get(doc, "amount")
        if amount is None:
            amount = _get(doc, "amount_charged", 0)
        rows.append(SalesRow(
            id=doc_id,
            date=base_date,
            product_name=str(_get(doc, "product_name", NO_NAME)),
            quantity=parse_qty(_get(doc, "quantity", 0)),
            amount=to_decimal(amount),
            measurement=str(_get(doc, "measurement", "")),
            type=sale_type,
        ))
    return rows


def resolve_movement_date(movement: Any) -> Optional[date]:
    """
    Fecha explícita del movimiento; si falta o no se puede leer, la fecha de
    created_at.
    """
    explicit = parse_ymd(_get(movement, "date"))
    if explicit is not None:
        return explicit
    return parse_ymd(_get(movement, "created_at"))


def _in_range(value, date_from: date, date_to: date) -> bool:
    d = parse_ymd(value)
    return d is not None and date_from <= d <= date_to


def sum_abonos(movements: Iterable[Any], date_from: date, date_to: date) -> Decimal:
    total = ZERO
    for m in movements:
        if str(_get(m, "type", "")).upper() != ABONO:
            continue
        if _in_range(resolve_movement_date(m), date_from, date_to):
            total += abs(to_decimal(_get(m, "amount", 0)))
    return total


def _sum_qty(rows: Iterable[SalesRow], matches) -> Decimal:
    return sum((r.quantity for r in rows if matches(r.measurement)), ZERO)


def aggregate_period_kpis(
    date_from: date,
    date_to: date,
    sales_docs: Iterable[Any],
    movements: Iterable[Any],
) -> PeriodKpis:
    """
    Calcula los KPIs del rango [date_from, date_to] (inclusivo).
    Las ventas fuera de rango se descartan aquí también, aunque la consulta
    ya venga filtrada.
    """
    rows = [r for r in expand_sales_rows(sales_docs) if _in_range(r.date, date_from, date_to)]
    cash = [r for r in rows if r.type == SaleType.CONTADO]
    credit = [r for r in rows if r.type == SaleType.CREDITO]

    ventas_cash = sum((r.amount for r in cash), ZERO)
    abonos = sum_abonos(movements, date_from, date_to)

    return PeriodKpis(
        date_from=date_from,
        date_to=date_to,
        ventas_cash=round2(ventas_cash),
        abonos=round2(abonos),
        recaudado=round2(ventas_cash + abonos),
        lbs_cash=round3(_sum_qty(cash, is_lb)),
        units_cash=round3(_sum_qty(cash, is_unit)),
        lbs_credit=round3(_sum_qty(credit, is_lb)),
        units_credit=round3(_sum_qty(credit, is_unit)),
    )


def fetch_sales(db: Session, date_from: date, date_to: date) -> List[SaleV2]:
    # Fechas yyyy-MM-dd: el orden de texto es el orden cronológico
    return db.query(SaleV2).filter(
        SaleV2.date >= to_ymd(date_from),
        SaleV2.date <= to_ymd(date_to),
    ).all()


def fetch_movements(db: Session) -> List[ArMovement]:
    # Sin filtro en la consulta: la fecha se resuelve en memoria
    return db.query(ArMovement).all()


def load_period_kpis(db: Session, date_from: date, date_to: date) -> PeriodKpis:
    """
    Consulta y agrega. Si algo falla se registra el error y los KPIs quedan
    en cero: no deben bloquear el resto de la pantalla.
    """
    try:
        sales = fetch_sales(db, date_from, date_to)
        movements = fetch_movements(db)
        return aggregate_period_kpis(date_from, date_to, sales, movements)
    except Exception:
        logger.exception("Error cargando KPIs del periodo %s a %s", date_from, date_to)
        return PeriodKpis(date_from=date_from, date_to=date_to)


def summarize_audits(rows: Iterable[CashAuditRead]) -> AuditListSummary:
    rows = list(rows)
    return AuditListSummary(
        count=len(rows),
        sum_total=round2(sum((r.total_entregado for r in rows), ZERO)),
        sum_debitos=round2(sum((r.debitos for r in rows), ZERO)),
        sum_sub_total=round2(sum((r.sub_total for r in rows), ZERO)),
    )
