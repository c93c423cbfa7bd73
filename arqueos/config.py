# arqueos/config.py
"""
Configuración central leída de variables de entorno.
Nunca falla si falta una variable: usa valores por defecto seguros.
"""
import os


def _get_int(key: str, default: int) -> int:
    try:
        return int(os.environ.get(key, str(default)))
    except (ValueError, TypeError):
        return default


# Base de datos (SQLite por defecto; cambia la URL si usas PostgreSQL o MySQL)
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./sql_app.db")

# JWT
SECRET_KEY = os.getenv("SECRET_KEY", "arqueos_secret_key_change_me_in_prod")
ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = _get_int("ACCESS_TOKEN_EXPIRE_MINUTES", 60 * 12)  # 12 horas

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Negocio
CONTADOR_ROLE = os.getenv("CONTADOR_ROLE", "contador")
CURRENCY_PREFIX = os.getenv("CURRENCY_PREFIX", "C$")
