from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware

from arqueos.database import engine
from arqueos.exceptions import AuditValidationError
from arqueos.logging_config import setup_logging
from arqueos.models import Base
from arqueos.routers import auth, users, cash_audits

logger = setup_logging()

# 1. CREACIÓN AUTOMÁTICA DE TABLAS
Base.metadata.create_all(bind=engine)

app = FastAPI(
    title="Arqueos de caja (Pollo)",
    description="Registro de arqueos físicos, débitos y monto entregado",
    version="1.0.0"
)

# 2. CONFIGURACIÓN DE CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# 3. REGISTRO DE ROUTERS (BACKEND API)
app.include_router(auth.router, prefix="/api/auth", tags=["🔑 Autenticación"])
app.include_router(users.router, prefix="/api/users", tags=["👤 Usuarios"])
app.include_router(cash_audits.router, prefix="/api/cash-audits", tags=["💰 Arqueos de caja"])

# --- 4. MANEJO DE ERRORES ---
@app.exception_handler(AuditValidationError)
async def audit_validation_exception_handler(request: Request, exc: AuditValidationError):
    # Aviso bloqueante para el usuario: no se escribió nada
    return JSONResponse(status_code=422, content={"detail": str(exc)})

@app.exception_handler(404)
async def not_found_exception_handler(request: Request, exc):
    detail = getattr(exc, "detail", None)
    if detail and detail != "Not Found":
        return JSONResponse(status_code=404, content={"detail": detail})
    return JSONResponse(status_code=404, content={"detail": "Recurso no encontrado"})
