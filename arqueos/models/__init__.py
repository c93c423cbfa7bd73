# arqueos/models/__init__.py

# 1. Base de datos (Origen de la clase declarativa)
from arqueos.database import Base

# 2. Usuarios y Roles
from .users import User, Role

# 3. Arqueos (colección propia)
from .cash_audits import PolloCashAudit

# 4. Colecciones externas de solo lectura (KPIs)
from .sales import SaleV2, SaleType
from .receivables import ArMovement
