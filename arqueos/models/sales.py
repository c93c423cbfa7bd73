# arqueos/models/sales.py
from sqlalchemy import Column, Integer, String, Float, DateTime, Numeric, JSON
from arqueos.database import Base

class SaleType:
    CONTADO = "CONTADO"   # Venta de contado (cash)
    CREDITO = "CREDITO"   # Venta a crédito

# --- Ventas (colección externa, solo lectura aquí) ---
class SaleV2(Base):
    """
    Un documento de venta. Puede ser una venta "plana" (un producto) o traer
    `items`, una lista de líneas:
        {"product_name", "qty", "unit_price", "discount", "line_final", "measurement"}
    """
    __tablename__ = "sales_v2"
    __table_args__ = {'extend_existing': True}

    id = Column(Integer, primary_key=True, index=True)

    date = Column(String(10), index=True)       # yyyy-MM-dd
    type = Column(String, nullable=True)        # CONTADO / CREDITO (default CONTADO)

    # Venta plana
    product_name = Column(String, nullable=True)
    quantity = Column(Float, nullable=True)
    measurement = Column(String, nullable=True)  # lb, unidad, ...
    amount = Column(Numeric(12, 2), nullable=True)
    amount_charged = Column(Numeric(12, 2), nullable=True)

    # Venta con líneas
    items = Column(JSON, nullable=True)

    customer_name = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=True)
