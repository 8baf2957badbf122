"""
Router de Locales (Locations)
Lectura para cualquier usuario autenticado, escritura para SUPERVISOR o ADMIN
"""
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..models import get_db, Location
from ..schemas import LocationCreate, LocationResponse, MessageResponse
from ..utils import get_current_user, require_supervisor
from ..utils.errors import NotFound, Conflict

router = APIRouter()


@router.get("/locales", response_model=List[LocationResponse])
async def list_locations(
    db: Session = Depends(get_db),
    current_user: dict = Depends(get_current_user)
):
    """Listar locales, los más recientes primero"""
    return db.query(Location).order_by(Location.created_at.desc(), Location.id.desc()).all()


@router.post("/locales", response_model=LocationResponse, status_code=status.HTTP_201_CREATED)
async def create_location(
    location_data: LocationCreate,
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_supervisor)
):
    """Crear local"""
    new_location = Location(**location_data.model_dump())
    db.add(new_location)
    db.commit()
    db.refresh(new_location)
    return new_location


@router.put("/locales/{location_id}", response_model=LocationResponse)
async def update_location(
    location_id: int,
    location_data: LocationCreate,
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_supervisor)
):
    """Reemplazar los datos de un local"""
    location = db.query(Location).filter(Location.id == location_id).first()
    if not location:
        raise NotFound("Local no encontrado")

    for field, value in location_data.model_dump().items():
        setattr(location, field, value)

    db.commit()
    db.refresh(location)
    return location


@router.delete("/locales/{location_id}", response_model=MessageResponse)
async def delete_location(
    location_id: int,
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_supervisor)
):
    """Eliminar local"""
    try:
        deleted = db.query(Location).filter(Location.id == location_id).delete(synchronize_session=False)
        db.commit()
    except IntegrityError:
        db.rollback()
        raise Conflict("El local tiene visitas asociadas")

    if not deleted:
        raise NotFound("Local no encontrado")
    return MessageResponse(message="Local eliminado correctamente")
