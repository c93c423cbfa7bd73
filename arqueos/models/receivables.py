# arqueos/models/receivables.py
from sqlalchemy import Column, Integer, String, DateTime, Numeric
from arqueos.database import Base

class ArMovement(Base):
    """
    Movimiento de cuentas por cobrar (colección externa, solo lectura aquí).
    CARGO = venta a crédito, ABONO = pago del cliente.
    Los montos pueden venir con signo; al totalizar se usa el valor absoluto.
    """
    __tablename__ = "ar_movements_pollo"
    __table_args__ = {'extend_existing': True}

    id = Column(Integer, primary_key=True, index=True)
    customer_name = Column(String, nullable=True)

    type = Column(String, nullable=True)          # CARGO / ABONO
    amount = Column(Numeric(12, 2), nullable=True)
    date = Column(String(10), nullable=True)      # yyyy-MM-dd (si falta, se usa created_at)
    sale_id = Column(Integer, nullable=True)
    comment = Column(String, nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=True)
