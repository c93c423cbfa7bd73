# arqueos/models/cash_audits.py
from sqlalchemy import Column, Integer, String, DateTime, Numeric, Text
from arqueos.database import Base

class PolloCashAudit(Base):
    """
    Arqueo físico de caja: quién entrega, quién recibe y los montos del
    período de ventas arqueado.
    Todas las columnas son nullable: puede haber registros parciales o
    heredados, y se normalizan al leer (ver crud/cash_audits.py).
    """
    __tablename__ = "pollo_cash_audits"

    id = Column(Integer, primary_key=True, index=True)

    created_at = Column(DateTime(timezone=True), index=True)
    created_by_uid = Column(String, nullable=True)
    created_by_name = Column(String, nullable=True)

    # Contador que arquea
    contador_uid = Column(String, nullable=True)
    contador_name = Column(String, nullable=True)

    entregado_por = Column(String, nullable=True)  # Quien entrega
    recibido_por = Column(String, nullable=True)   # Quien recibe (obligatorio al guardar)

    # Período de ventas arqueado (yyyy-MM-dd)
    range_from = Column(String(10), nullable=True)
    range_to = Column(String(10), nullable=True)

    # Entradas del usuario
    ventas_cash = Column(Numeric(12, 2), nullable=True)
    abonos = Column(Numeric(12, 2), nullable=True)
    ingresos_extra = Column(Numeric(12, 2), nullable=True)
    debitos = Column(Numeric(12, 2), nullable=True)  # Gastos / reabastecimiento

    # Derivados (se recalculan siempre antes de guardar)
    sub_total = Column(Numeric(12, 2), nullable=True)
    total_entregado = Column(Numeric(12, 2), nullable=True)

    comment = Column(Text, nullable=True)
