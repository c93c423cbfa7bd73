from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from arqueos.database import get_db
from arqueos.models import User
from arqueos.crud.users import get_contadores, pick_default_contador
from arqueos.schemas.users import UserRead, ContadorRead, ContadorList
from arqueos.security import get_current_user

router = APIRouter()

# --- 1. USUARIO ACTUAL (ME) ---
@router.get("/me", response_model=UserRead)
def read_user_me(current_user: User = Depends(get_current_user)):
    return current_user

# --- 2. CONTADORES (selector del formulario de arqueo) ---
@router.get("/contadores", response_model=ContadorList)
def read_contadores(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    contadores = get_contadores(db)
    pick = pick_default_contador(contadores, current_user.uid)
    return ContadorList(
        contadores=[ContadorRead(uid=u.uid, name=u.display_name) for u in contadores],
        default_uid=pick.uid if pick else None,
    )
