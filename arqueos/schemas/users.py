from pydantic import BaseModel
from typing import Optional, List

class UserRead(BaseModel):
    id: int
    username: str
    full_name: Optional[str] = None
    email: Optional[str] = None
    role: Optional[str] = None
    roles: Optional[List[str]] = None
    is_active: bool = True

    class Config:
        from_attributes = True

class ContadorRead(BaseModel):
    uid: str
    name: str

class ContadorList(BaseModel):
    contadores: List[ContadorRead]
    # Selección por defecto: el usuario actual si es contador; si no, el primero
    default_uid: Optional[str] = None
