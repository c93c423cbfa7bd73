# schemas/cash_audits.py
from pydantic import BaseModel, ValidationError, computed_field, field_validator, model_validator
from typing import Optional
from decimal import Decimal
from datetime import date, datetime

from arqueos.exceptions import AuditValidationError
from arqueos.utils.dates import parse_ymd
from arqueos.utils.money import parse_money, round2

TEXT_FIELDS = ("contador_uid", "contador_name", "entregado_por", "recibido_por", "comment")
MONEY_FIELDS = ("ventas_cash", "abonos", "ingresos_extra", "debitos")


class CashAuditIn(BaseModel):
    """
    Datos capturados en el formulario de arqueo.
    Los montos aceptan texto con coma decimal y nunca fallan (inválido = 0).
    sub_total / total_entregado no se aceptan del cliente: se ignoran.
    """
    contador_uid: str = ""
    contador_name: str = ""

    entregado_por: str = ""   # Quien entrega (opcional)
    recibido_por: str = ""    # Quien recibe (obligatorio)

    range_from: Optional[date] = None
    range_to: Optional[date] = None

    ventas_cash: Decimal = Decimal("0.00")
    abonos: Decimal = Decimal("0.00")
    ingresos_extra: Decimal = Decimal("0.00")
    debitos: Decimal = Decimal("0.00")

    comment: str = ""

    @field_validator(*TEXT_FIELDS, mode="before")
    @classmethod
    def _clean_text(cls, v):
        return "" if v is None else str(v).strip()

    @field_validator("range_from", "range_to", mode="before")
    @classmethod
    def _parse_range(cls, v):
        return parse_ymd(v)

    @field_validator(*MONEY_FIELDS, mode="before")
    @classmethod
    def _parse_money(cls, v):
        return parse_money(v)


class CashAuditForm(CashAuditIn):
    """Formulario listo para guardar: validado y con totales derivados."""

    @model_validator(mode="after")
    def _check_required(self):
        if not self.contador_uid:
            raise AuditValidationError("Seleccione Contador.")
        if not self.recibido_por:
            raise AuditValidationError("Recibido por es obligatorio.")
        if not self.range_from or not self.range_to:
            raise AuditValidationError("Seleccione el rango arqueado.")
        if self.range_from > self.range_to:
            raise AuditValidationError("Rango inválido: Desde no puede ser mayor que Hasta.")
        return self

    @computed_field
    @property
    def sub_total(self) -> Decimal:
        return round2(self.ventas_cash + self.abonos + self.ingresos_extra)

    @computed_field
    @property
    def total_entregado(self) -> Decimal:
        return round2(self.sub_total - self.debitos)


def validate_form(data) -> CashAuditForm:
    """
    Construye el formulario validado a partir de un dict o de un CashAuditIn.
    Lanza AuditValidationError con el primer mensaje para el usuario.
    """
    if isinstance(data, BaseModel):
        data = data.model_dump()
    try:
        return CashAuditForm.model_validate(data)
    except ValidationError as e:
        for err in e.errors():
            cause = (err.get("ctx") or {}).get("error")
            if isinstance(cause, AuditValidationError):
                raise cause from None
        raise AuditValidationError(e.errors()[0]["msg"]) from None


class CashAuditRead(BaseModel):
    id: int
    created_at: Optional[datetime] = None
    created_by_uid: str = ""
    created_by_name: str = ""

    contador_uid: str = ""
    contador_name: str = ""
    entregado_por: str = ""
    recibido_por: str = ""

    # Texto: registros heredados pueden traer el rango vacío
    range_from: str = ""
    range_to: str = ""

    ventas_cash: Decimal = Decimal("0.00")
    abonos: Decimal = Decimal("0.00")
    ingresos_extra: Decimal = Decimal("0.00")
    debitos: Decimal = Decimal("0.00")

    sub_total: Decimal = Decimal("0.00")
    total_entregado: Decimal = Decimal("0.00")

    comment: str = ""

    class Config:
        from_attributes = True
