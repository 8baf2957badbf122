"""
Router de Usuarios (solo ADMIN)
"""
import logging
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..models import get_db, User
from ..schemas import UserCreate, UserUpdate, UserResponse, MessageResponse
from ..utils import require_admin
from ..utils.auth import hash_password
from ..utils.errors import ValidationError, DuplicateEmail, NotFound, Conflict

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/usuarios", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(
    user_data: UserCreate,
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_admin)
):
    """Crear usuario con contraseña hasheada"""
    if db.query(User).filter(User.email == user_data.email).first():
        raise DuplicateEmail()

    new_user = User(
        name=user_data.name,
        email=user_data.email,
        password_hash=hash_password(user_data.password),
        role=user_data.role
    )
    db.add(new_user)
    try:
        db.commit()
    except IntegrityError:
        # Otro request registró el mismo correo entre la verificación y el insert
        db.rollback()
        raise DuplicateEmail()
    db.refresh(new_user)

    logger.info(f"Usuario {new_user.id} ({new_user.role}) creado por {current_user['user_id']}")
    return new_user


@router.get("/usuarios", response_model=List[UserResponse])
async def list_users(
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_admin)
):
    """Listar usuarios"""
    return db.query(User).order_by(User.id.asc()).all()


@router.get("/usuarios/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_admin)
):
    """Obtener usuario por ID"""
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise NotFound("Usuario no encontrado")
    return user


@router.put("/usuarios/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: int,
    user_data: UserUpdate,
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_admin)
):
    """Actualizar cualquier subconjunto de campos del usuario"""
    changes = {
        field: value
        for field, value in user_data.model_dump(exclude_unset=True).items()
        if value is not None
    }
    if not changes:
        raise ValidationError("No hay datos para actualizar")

    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise NotFound("Usuario no encontrado")

    if "email" in changes:
        taken = db.query(User).filter(
            User.email == changes["email"],
            User.id != user_id
        ).first()
        if taken:
            raise DuplicateEmail("Correo ya registrado por otro usuario")

    if "password" in changes:
        user.password_hash = hash_password(changes.pop("password"))

    for field, value in changes.items():
        setattr(user, field, value)

    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise DuplicateEmail("Correo ya registrado por otro usuario")
    db.refresh(user)
    return user


@router.delete("/usuarios/{user_id}", response_model=MessageResponse)
async def delete_user(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_admin)
):
    """Eliminar usuario"""
    try:
        deleted = db.query(User).filter(User.id == user_id).delete(synchronize_session=False)
        db.commit()
    except IntegrityError:
        db.rollback()
        raise Conflict("El usuario tiene registros asociados")

    if not deleted:
        raise NotFound("Usuario no encontrado")

    logger.info(f"Usuario {user_id} eliminado por {current_user['user_id']}")
    return MessageResponse(message="Usuario eliminado correctamente")
