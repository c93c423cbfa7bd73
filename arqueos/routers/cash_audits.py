# arqueos/routers/cash_audits.py
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Response, status
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session

from arqueos.crud.cash_audits import (
    create_cash_audit,
    delete_cash_audit,
    get_cash_audit,
    list_cash_audits,
    update_cash_audit,
)
from arqueos.database import get_db
from arqueos.models import User
from arqueos.schemas.cash_audits import CashAuditIn, CashAuditRead, validate_form
from arqueos.schemas.kpis import AuditListSummary, PeriodKpisResponse
from arqueos.security import get_current_user
from arqueos.services.export import XLSX_MEDIA_TYPE, export_excel, export_filename
from arqueos.services.kpis import load_period_kpis, summarize_audits
from arqueos.utils.dates import end_of_day, start_of_day

router = APIRouter()


def _list_filtered(db: Session, created_from: Optional[date], created_to: Optional[date]):
    # Solo se filtra con ambos límites; si falta uno, listado completo
    if created_from and created_to:
        return list_cash_audits(db, start_of_day(created_from), end_of_day(created_to))
    return list_cash_audits(db)


# --------------------------------------------------------------------------
# 1. LISTAR ARQUEOS (filtro por fecha de creación)
# --------------------------------------------------------------------------
@router.get("/", response_model=List[CashAuditRead])
def read_cash_audits(
    created_from: Optional[date] = None,
    created_to: Optional[date] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return _list_filtered(db, created_from, created_to)

# --------------------------------------------------------------------------
# 2. SUMAS DEL LISTADO (monto entregado, débitos, sub totales)
# --------------------------------------------------------------------------
@router.get("/summary", response_model=AuditListSummary)
def read_cash_audits_summary(
    created_from: Optional[date] = None,
    created_to: Optional[date] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return summarize_audits(_list_filtered(db, created_from, created_to))

# --------------------------------------------------------------------------
# 3. KPIs DEL PERÍODO (ventas cash, recaudado, libras, unidades)
# --------------------------------------------------------------------------
@router.get("/kpis", response_model=PeriodKpisResponse)
def read_period_kpis(
    date_from: date,
    date_to: date,
    seq: Optional[int] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Mismo cálculo para el rango del filtro y para el rango del formulario.
    `seq` se devuelve tal cual: el cliente descarta respuestas con un seq
    menor al último que pidió.
    """
    if date_from > date_to:
        raise HTTPException(status_code=400, detail="Rango inválido: Desde no puede ser mayor que Hasta.")
    kpis = load_period_kpis(db, date_from, date_to)
    return PeriodKpisResponse(**kpis.model_dump(), seq=seq)

# --------------------------------------------------------------------------
# 4. EXPORTAR A EXCEL
# --------------------------------------------------------------------------
@router.get("/export")
def export_cash_audits(
    created_from: Optional[date] = None,
    created_to: Optional[date] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    output = export_excel(_list_filtered(db, created_from, created_to))
    headers = {
        'Content-Disposition': f'attachment; filename="{export_filename()}"'
    }
    return StreamingResponse(output, media_type=XLSX_MEDIA_TYPE, headers=headers)

# --------------------------------------------------------------------------
# 5. DETALLE
# --------------------------------------------------------------------------
@router.get("/{audit_id}", response_model=CashAuditRead)
def read_cash_audit(
    audit_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    audit = get_cash_audit(db, audit_id)
    if not audit:
        raise HTTPException(status_code=404, detail="Arqueo no encontrado")
    return audit

# --------------------------------------------------------------------------
# 6. CREAR ARQUEO
# --------------------------------------------------------------------------
@router.post("/", response_model=CashAuditRead, status_code=status.HTTP_201_CREATED)
def create_audit(
    audit_in: CashAuditIn,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    # Totales calculados aquí; nunca se toman del cliente
    form = validate_form(audit_in)
    audit_id = create_cash_audit(
        db,
        form,
        created_by_uid=current_user.uid,
        created_by_name=current_user.display_name,
    )
    return get_cash_audit(db, audit_id)

# --------------------------------------------------------------------------
# 7. EDITAR ARQUEO (sobreescribe el registro completo)
# --------------------------------------------------------------------------
@router.put("/{audit_id}", response_model=CashAuditRead)
def update_audit(
    audit_id: int,
    audit_in: CashAuditIn,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    form = validate_form(audit_in)
    if not update_cash_audit(db, audit_id, form):
        raise HTTPException(status_code=404, detail="Arqueo no encontrado")
    return get_cash_audit(db, audit_id)

# --------------------------------------------------------------------------
# 8. ELIMINAR (requiere confirmación explícita)
# --------------------------------------------------------------------------
@router.delete("/{audit_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_audit(
    audit_id: int,
    confirm: bool = False,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    if not confirm:
        raise HTTPException(status_code=400, detail="Confirme la eliminación del arqueo.")
    delete_cash_audit(db, audit_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
