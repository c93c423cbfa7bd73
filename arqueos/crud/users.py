from typing import List, Optional
from sqlalchemy.orm import Session
from arqueos.config import CONTADOR_ROLE
from arqueos.models import User

def get_user_by_username(db: Session, username: str):
    """Busca un usuario activo por su username."""
    return db.query(User).filter(User.username == username, User.is_active == True).first()

def get_contadores(db: Session) -> List[User]:
    """
    Usuarios con rol contador: role == "contador" o "contador" en roles[].
    Se filtra en memoria porque roles[] es JSON.
    """
    users = db.query(User).filter(User.is_active == True).order_by(User.id).all()
    return [u for u in users if u.has_role(CONTADOR_ROLE)]

def pick_default_contador(contadores: List[User], current_uid: Optional[str]) -> Optional[User]:
    """El usuario actual si es contador; si no, el primero de la lista."""
    me = next((c for c in contadores if c.uid == current_uid), None)
    return me or (contadores[0] if contadores else None)
