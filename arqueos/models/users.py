import enum
from sqlalchemy import Column, Integer, String, Boolean, DateTime, JSON
from sqlalchemy.sql import func
from arqueos.database import Base
from arqueos.config import CONTADOR_ROLE

class Role(str, enum.Enum):
    ADMIN = "admin"
    CONTADOR = CONTADOR_ROLE
    VENDEDOR = "vendedor"

# Directorio de usuarios. Este servicio solo lo lee (login y selector de contador).
class User(Base):
    __tablename__ = "users"
    __table_args__ = {'extend_existing': True}

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String, unique=True, index=True, nullable=False)
    full_name = Column(String, nullable=True)
    email = Column(String, nullable=True)

    password_hash = Column(String, nullable=False)

    # Rol principal (coincidencia exacta) y/o lista de roles
    role = Column(String, nullable=True)
    roles = Column(JSON, nullable=True)

    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    @property
    def uid(self) -> str:
        return str(self.id)

    @property
    def display_name(self) -> str:
        return self.full_name or self.email or self.username or self.uid

    def has_role(self, role: str) -> bool:
        return self.role == role or (isinstance(self.roles, list) and role in self.roles)
