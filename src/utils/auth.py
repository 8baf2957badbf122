"""
Utilidades de autenticación JWT y política de roles
Emite y valida los tokens de sesión del servicio
"""
from datetime import datetime, timedelta, timezone
from typing import Iterable, Optional

from jose import JWTError, jwt
from passlib.context import CryptContext
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from ..config import Settings, get_settings
from ..models.user import ROLES
from .errors import Unauthenticated, Forbidden

# HTTP Bearer scheme para el header Authorization
http_bearer = HTTPBearer(auto_error=False)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# Política única de roles: nombre de política -> roles admitidos
# ADMIN entra en todas las políticas como superusuario
ROLE_POLICIES = {
    "admin": frozenset({"ADMIN"}),
    "supervisor": frozenset({"SUPERVISOR", "ADMIN"}),
    "authenticated": frozenset(ROLES),
}


def hash_password(password: str) -> str:
    """Generar hash bcrypt (bcrypt solo considera los primeros 72 bytes)"""
    return pwd_context.hash(password.encode("utf-8")[:72])


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Comparar contraseña contra su hash"""
    return pwd_context.verify(plain_password.encode("utf-8")[:72], hashed_password)


def create_access_token(
    data: dict,
    settings: Settings,
    expires_delta: Optional[timedelta] = None
) -> str:
    """
    Crea un token de sesión firmado

    Args:
        data: Identidad a embeber (user_id, role, name)
        settings: Configuración con la clave y el algoritmo de firma
        expires_delta: Vigencia, por defecto ACCESS_TOKEN_EXPIRE_HOURS

    Returns:
        str: Token JWT
    """
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(hours=settings.ACCESS_TOKEN_EXPIRE_HOURS)
    )
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_token(token: str, settings: Settings) -> dict:
    """
    Decodifica y valida un token JWT

    Args:
        token: Token JWT a decodificar
        settings: Configuración con la clave y el algoritmo de firma

    Returns:
        dict: Identidad extraída del token (user_id, role, name)

    Raises:
        Unauthenticated: Si el token es inválido o expiró
    """
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        raise Unauthenticated("Token inválido o expirado")

    user_id = payload.get("user_id")
    role = (payload.get("role") or "").upper()
    if user_id is None or role not in ROLES:
        raise Unauthenticated("Token inválido o expirado")

    return {
        "user_id": user_id,
        "role": role,
        "name": payload.get("name")
    }


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(http_bearer),
    settings: Settings = Depends(get_settings)
) -> dict:
    """
    Obtiene el usuario actual desde el token JWT

    Raises:
        Unauthenticated: Si el token no está presente o es inválido
    """
    if not credentials:
        raise Unauthenticated("Token de autenticación requerido")

    return decode_token(credentials.credentials, settings)


def check_role(identity: dict, allowed_roles: Iterable[str]) -> dict:
    """Verifica que el rol de la identidad esté entre los permitidos"""
    if identity.get("role") not in allowed_roles:
        raise Forbidden()
    return identity


def require_policy(policy: str):
    """Factory de dependencias que aplica una política de ROLE_POLICIES"""
    allowed_roles = ROLE_POLICIES[policy]

    async def policy_checker(current_user: dict = Depends(get_current_user)) -> dict:
        return check_role(current_user, allowed_roles)

    return policy_checker


require_admin = require_policy("admin")
require_supervisor = require_policy("supervisor")
