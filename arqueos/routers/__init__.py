# arqueos/routers/__init__.py

# Esto expone los módulos para que "from arqueos.routers import cash_audits" funcione
from . import auth
from . import users
from . import cash_audits
