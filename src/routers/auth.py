"""
Router de Autenticación
Emite el token de sesión a partir de correo y contraseña
"""
import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..config import Settings, get_settings
from ..models import get_db, User
from ..schemas import LoginRequest, LoginResponse
from ..utils.auth import verify_password, create_access_token
from ..utils.errors import InvalidCredentials

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/usuarios/login", response_model=LoginResponse)
async def login(
    credentials: LoginRequest,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings)
):
    """
    Login con correo y contraseña

    Usuario inexistente y contraseña incorrecta responden el mismo error,
    así el endpoint no revela qué correos están registrados
    """
    user = db.query(User).filter(User.email == credentials.email).first()

    if not user or not verify_password(credentials.password, user.password_hash):
        logger.info(f"Login rechazado para {credentials.email}")
        raise InvalidCredentials()

    role = user.role.upper()
    token = create_access_token(
        {"user_id": user.id, "role": role, "name": user.name},
        settings
    )

    return LoginResponse(token=token, role=role, name=user.name)
