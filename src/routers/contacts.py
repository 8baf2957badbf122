"""
Router de Contactos (formulario público)
"""
import logging
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ..models import get_db, Contact
from ..schemas import ContactCreate, ContactResponse, MessageResponse
from ..utils import require_admin

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/contactos", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def submit_contact(
    contact_data: ContactCreate,
    db: Session = Depends(get_db)
):
    """Guardar mensaje del formulario de contacto, no requiere sesión"""
    contact = Contact(**contact_data.model_dump())
    db.add(contact)
    db.commit()

    logger.info(f"Contacto {contact.id} recibido de {contact.email}")
    return MessageResponse(message="Contacto guardado correctamente")


@router.get("/contactos", response_model=List[ContactResponse])
async def list_contacts(
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_admin)
):
    """Listar contactos, los más recientes primero"""
    return db.query(Contact).order_by(Contact.created_at.desc(), Contact.id.desc()).all()
