from datetime import date, datetime, timedelta

from arqueos.database import SessionLocal, engine
# Importamos TODO desde arqueos.models (usando el __init__.py)
from arqueos.models import Base, User, Role, SaleV2, SaleType, ArMovement
from arqueos.security import get_password_hash

def init_db():
    print("--- Creando Tablas ---")
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()

    print("--- Iniciando Poblado ---")

    # 1. USUARIOS (directorio)
    users_to_create = [
        ("admin", "admin123", Role.ADMIN.value, None, "Administrador"),
        ("contador1", "0000", Role.CONTADOR.value, None, "Contador Uno"),
        ("supervisor", "1111", Role.ADMIN.value, [Role.CONTADOR.value], "Supervisora"),
        ("vendedor1", "2222", Role.VENDEDOR.value, None, "Vendedor Uno"),
    ]

    for uname, pwd, role, roles, full_name in users_to_create:
        if not db.query(User).filter(User.username == uname).first():
            db.add(User(
                username=uname,
                password_hash=get_password_hash(pwd),
                role=role,
                roles=roles,
                full_name=full_name,
            ))
            print(f"✅ Usuario '{uname}' creado.")
    db.commit()

    # 2. VENTAS DE EJEMPLO (solo si la tabla está vacía)
    today = date.today().isoformat()
    if db.query(SaleV2).count() == 0:
        db.add_all([
            SaleV2(date=today, type=SaleType.CONTADO, product_name="Pollo entero",
                   quantity=10, measurement="lb", amount=50),
            SaleV2(date=today, type=SaleType.CREDITO, product_name="Pechuga",
                   quantity=5, measurement="lb", amount=25, customer_name="Comedor Luz"),
            SaleV2(date=today, type=SaleType.CONTADO, items=[
                {"product_name": "Alitas", "qty": 3, "unit_price": 10, "discount": 0, "measurement": "unidad"},
                {"product_name": "Menudo", "qty": 2, "unit_price": 8, "line_final": 15, "measurement": "lb"},
            ]),
        ])
        db.commit()
        print("✅ Ventas de ejemplo creadas.")

    # 3. MOVIMIENTOS DE CUENTAS POR COBRAR
    if db.query(ArMovement).count() == 0:
        db.add_all([
            ArMovement(customer_name="Comedor Luz", type="CARGO", amount=25, date=today),
            ArMovement(customer_name="Comedor Luz", type="ABONO", amount=-20, date=today),
            ArMovement(customer_name="Comedor Luz", type="ABONO", amount=10,
                       created_at=datetime.now() - timedelta(days=40)),
        ])
        db.commit()
        print("✅ Movimientos de cartera creados.")

    db.close()

if __name__ == "__main__":
    init_db()
