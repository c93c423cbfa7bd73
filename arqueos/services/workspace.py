# arqueos/services/workspace.py
"""
Estado de la pantalla de arqueos, independiente de la interfaz.

CashAuditWorkspace guarda el filtro del listado, el formulario, los dos paneles
de KPIs y la bandera `busy`. Cualquier front (plantillas, escritorio, scripts)
puede manejar la pantalla a través de esta clase.
"""
import logging
import threading
from contextlib import contextmanager
from datetime import date
from typing import Callable, List, Optional

from arqueos.crud.cash_audits import (
    create_cash_audit,
    delete_cash_audit,
    list_cash_audits,
    update_cash_audit,
)
from arqueos.crud.users import get_contadores, pick_default_contador
from arqueos.database import SessionLocal
from arqueos.exceptions import AuditNotFoundError, WorkspaceBusyError
from arqueos.schemas.cash_audits import CashAuditIn, CashAuditRead, validate_form
from arqueos.schemas.kpis import AuditListSummary, PeriodKpis
from arqueos.schemas.users import ContadorRead
from arqueos.services.export import export_excel
from arqueos.services.kpis import load_period_kpis, summarize_audits
from arqueos.utils.dates import end_of_day, month_end, month_start, parse_ymd, start_of_day
from arqueos.utils.money import round2

logger = logging.getLogger(__name__)


class KpiPanel:
    """
    Un panel de KPIs con su propio número de secuencia.
    Solo se aplica el resultado de la última consulta pedida: una respuesta
    vieja que llega tarde se descarta.
    """

    def __init__(self, name: str):
        self.name = name
        self.kpis = PeriodKpis()
        self.loading = False
        self._seq = 0
        self._lock = threading.Lock()

    def begin(self) -> int:
        with self._lock:
            self._seq += 1
            self.loading = True
            return self._seq

    def resolve(self, token: int, kpis: PeriodKpis) -> bool:
        with self._lock:
            if token != self._seq:
                logger.debug("KPIs %s: respuesta %s descartada (vigente %s)", self.name, token, self._seq)
                return False
            self.kpis = kpis
            self.loading = False
            return True


class CashAuditWorkspace:

    def __init__(self, session_factory=SessionLocal, today: Optional[date] = None):
        self._session_factory = session_factory
        self._today = today

        today = self.today()
        self.filter_from: Optional[date] = month_start(today)
        self.filter_to: Optional[date] = month_end(today)

        self.rows: List[CashAuditRead] = []
        self.contadores: List[ContadorRead] = []
        self.busy = False

        self.list_kpis = KpiPanel("listado")
        self.form_kpis = KpiPanel("formulario")

        self.edit_id: Optional[int] = None
        self.form: dict = {"contador_uid": "", "contador_name": ""}
        self.reset_form()

    def today(self) -> date:
        return self._today or date.today()

    @contextmanager
    def _session(self):
        db = self._session_factory()
        try:
            yield db
        finally:
            db.close()

    # --- Listado ---

    def load_rows(self) -> List[CashAuditRead]:
        created_from = created_to = None
        if self.filter_from and self.filter_to:
            created_from = start_of_day(self.filter_from)
            created_to = end_of_day(self.filter_to)
        with self._session() as db:
            self.rows = list_cash_audits(db, created_from, created_to)
        return self.rows

    def set_filter(self, date_from, date_to) -> None:
        self.filter_from = parse_ymd(date_from)
        self.filter_to = parse_ymd(date_to)
        self.load_rows()
        self.refresh_list_kpis()

    def clear_filter(self) -> None:
        self.filter_from = None
        self.filter_to = None
        self.load_rows()

    @property
    def summary(self) -> AuditListSummary:
        return summarize_audits(self.rows)

    def export_excel(self) -> bytes:
        return export_excel(self.rows).getvalue()

    # --- KPIs ---

    def _refresh(self, panel: KpiPanel, date_from: Optional[date], date_to: Optional[date]) -> bool:
        if not date_from or not date_to:
            return False
        token = panel.begin()
        with self._session() as db:
            kpis = load_period_kpis(db, date_from, date_to)
        return panel.resolve(token, kpis)

    def refresh_list_kpis(self) -> bool:
        return self._refresh(self.list_kpis, self.filter_from, self.filter_to)

    def refresh_form_kpis(self) -> bool:
        return self._refresh(
            self.form_kpis,
            parse_ymd(self.form.get("range_from")),
            parse_ymd(self.form.get("range_to")),
        )

    # --- Contadores ---

    def load_contadores(self, current_uid: Optional[str] = None) -> List[ContadorRead]:
        with self._session() as db:
            users = get_contadores(db)
            pick = pick_default_contador(users, current_uid)
            self.contadores = [ContadorRead(uid=u.uid, name=u.display_name) for u in users]
            if pick:
                self.select_contador(pick.uid)
        return self.contadores

    def select_contador(self, uid: str) -> None:
        match = next((c for c in self.contadores if c.uid == uid), None)
        self.form["contador_uid"] = uid
        self.form["contador_name"] = match.name if match else ""

    # --- Formulario ---

    def reset_form(self) -> None:
        # El contador seleccionado se conserva
        today = self.today()
        self.edit_id = None
        self.form = {
            "contador_uid": self.form.get("contador_uid", ""),
            "contador_name": self.form.get("contador_name", ""),
            "recibido_por": "",
            "entregado_por": "",
            "range_from": today,
            "range_to": today,
            "ventas_cash": 0,
            "abonos": 0,
            "ingresos_extra": 0,
            "debitos": 0,
            "comment": "",
        }

    def update_form(self, **fields) -> None:
        self.form.update(fields)
        if "range_from" in fields or "range_to" in fields:
            self.refresh_form_kpis()

    @property
    def totals(self):
        """(sub_total, total_entregado) con los valores actuales del formulario."""
        current = CashAuditIn.model_validate(self.form)
        sub_total = round2(current.ventas_cash + current.abonos + current.ingresos_extra)
        return sub_total, round2(sub_total - current.debitos)

    def start_edit(self, row: CashAuditRead) -> None:
        today = self.today()
        self.edit_id = row.id
        self.form = {
            "contador_uid": row.contador_uid,
            "contador_name": row.contador_name,
            "recibido_por": row.recibido_por,
            "entregado_por": row.entregado_por,
            "range_from": row.range_from or today,
            "range_to": row.range_to or today,
            "ventas_cash": row.ventas_cash,
            "abonos": row.abonos,
            "ingresos_extra": row.ingresos_extra,
            "debitos": row.debitos,
            "comment": row.comment,
        }
        self.refresh_form_kpis()

    def save(self, current_user=None) -> int:
        """
        Valida y guarda (crea o sobreescribe si se está editando).
        Lanza AuditValidationError sin escribir nada si el formulario es inválido.
        """
        if self.busy:
            raise WorkspaceBusyError("Hay una operación en curso.")
        form = validate_form(self.form)

        self.busy = True
        try:
            with self._session() as db:
                if self.edit_id is not None:
                    if not update_cash_audit(db, self.edit_id, form):
                        raise AuditNotFoundError(f"Arqueo {self.edit_id} no encontrado")
                    audit_id = self.edit_id
                else:
                    audit_id = create_cash_audit(
                        db,
                        form,
                        created_by_uid=current_user.uid if current_user else "",
                        created_by_name=current_user.display_name if current_user else "",
                    )
            self.reset_form()
            self.load_rows()
            return audit_id
        finally:
            self.busy = False

    def delete(self, row: CashAuditRead, confirm: Callable[[str], bool]) -> bool:
        """Borra solo si `confirm` devuelve True. Devuelve si se borró."""
        if self.busy:
            raise WorkspaceBusyError("Hay una operación en curso.")
        when = row.created_at.strftime("%d/%m/%Y %H:%M:%S") if row.created_at else ""
        if not confirm(f"¿Eliminar el arqueo creado el {when}?"):
            return False

        self.busy = True
        try:
            with self._session() as db:
                delete_cash_audit(db, row.id)
            self.load_rows()
            return True
        finally:
            self.busy = False
