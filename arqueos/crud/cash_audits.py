# arqueos/crud/cash_audits.py
"""
Acceso a datos de la colección pollo_cash_audits.
Sin lógica de negocio: validar es responsabilidad de quien llama.
Los errores de la base de datos se propagan sin reintentos.
"""
import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy import desc
from sqlalchemy.orm import Session

from arqueos.models import PolloCashAudit
from arqueos.schemas.cash_audits import CashAuditForm, CashAuditRead
from arqueos.utils.dates import to_ymd
from arqueos.utils.money import format_money, parse_money

logger = logging.getLogger(__name__)

# Campos que se sobreescriben al editar (todo excepto la marca de creación)
EDITABLE_FIELDS = (
    "contador_uid", "contador_name", "entregado_por", "recibido_por",
    "range_from", "range_to",
    "ventas_cash", "abonos", "ingresos_extra", "debitos",
    "sub_total", "total_entregado",
    "comment",
)


def _form_values(payload: CashAuditForm) -> dict:
    values = payload.model_dump()
    values["range_from"] = to_ymd(payload.range_from)
    values["range_to"] = to_ymd(payload.range_to)
    return {field: values[field] for field in EDITABLE_FIELDS}


def _text(value) -> str:
    return str(value) if value else ""


def _to_read(row: PolloCashAudit) -> CashAuditRead:
    """Normaliza registros parciales o heredados: números a 0, textos a ""."""
    return CashAuditRead(
        id=row.id,
        created_at=row.created_at,
        created_by_uid=_text(row.created_by_uid),
        created_by_name=_text(row.created_by_name),
        contador_uid=_text(row.contador_uid),
        contador_name=_text(row.contador_name),
        entregado_por=_text(row.entregado_por),
        recibido_por=_text(row.recibido_por),
        range_from=_text(row.range_from),
        range_to=_text(row.range_to),
        ventas_cash=parse_money(row.ventas_cash),
        abonos=parse_money(row.abonos),
        ingresos_extra=parse_money(row.ingresos_extra),
        debitos=parse_money(row.debitos),
        sub_total=parse_money(row.sub_total),
        total_entregado=parse_money(row.total_entregado),
        comment=_text(row.comment),
    )


def create_cash_audit(
    db: Session,
    payload: CashAuditForm,
    created_by_uid: str = "",
    created_by_name: str = "",
    created_at: Optional[datetime] = None,
) -> int:
    """Crea el arqueo y devuelve su id. created_at por defecto = ahora."""
    db_audit = PolloCashAudit(
        created_at=created_at or datetime.now(),
        created_by_uid=created_by_uid,
        created_by_name=created_by_name,
        **_form_values(payload),
    )
    db.add(db_audit)
    db.commit()
    db.refresh(db_audit)
    logger.info(
        "Arqueo %s creado por %s (entregado %s)",
        db_audit.id,
        created_by_name or created_by_uid,
        format_money(db_audit.total_entregado),
    )
    return db_audit.id


def list_cash_audits(
    db: Session,
    created_from: Optional[datetime] = None,
    created_to: Optional[datetime] = None,
) -> List[CashAuditRead]:
    """
    Lista arqueos, más recientes primero.
    Solo filtra por created_at cuando vienen ambos límites (inclusivos).
    """
    query = db.query(PolloCashAudit)
    if created_from is not None and created_to is not None:
        query = query.filter(
            PolloCashAudit.created_at >= created_from,
            PolloCashAudit.created_at <= created_to,
        )
    rows = query.order_by(desc(PolloCashAudit.created_at), desc(PolloCashAudit.id)).all()
    return [_to_read(r) for r in rows]


def get_cash_audit(db: Session, audit_id: int) -> Optional[CashAuditRead]:
    row = db.query(PolloCashAudit).filter(PolloCashAudit.id == audit_id).first()
    return _to_read(row) if row else None


def update_cash_audit(db: Session, audit_id: int, payload: CashAuditForm) -> bool:
    """Sobreescribe el registro completo. False si no existe."""
    db_audit = db.query(PolloCashAudit).filter(PolloCashAudit.id == audit_id).first()
    if not db_audit:
        return False

    for field, value in _form_values(payload).items():
        setattr(db_audit, field, value)

    db.commit()
    logger.info("Arqueo %s actualizado", audit_id)
    return True


def delete_cash_audit(db: Session, audit_id: int) -> None:
    """Borra por id. Si no existe no hace nada."""
    db.query(PolloCashAudit).filter(PolloCashAudit.id == audit_id).delete(synchronize_session=False)
    db.commit()
    logger.info("Arqueo %s eliminado", audit_id)
