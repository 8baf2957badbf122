"""
Schemas de Contacto
"""
from pydantic import BaseModel, EmailStr, Field
from typing import Optional
from datetime import datetime


class ContactCreate(BaseModel):
    """Schema del formulario de contacto"""
    name: str = Field(..., min_length=2, max_length=120)
    paternal_surname: str = Field(..., min_length=2, max_length=120)
    maternal_surname: str = Field(..., min_length=2, max_length=120)
    email: EmailStr
    phone: Optional[str] = Field(None, max_length=30)
    message: str = Field(..., min_length=5)

    class Config:
        json_schema_extra = {
            "example": {
                "name": "Camila",
                "paternal_surname": "Rojas",
                "maternal_surname": "Muñoz",
                "email": "camila.rojas@correo.cl",
                "phone": "+56912345678",
                "message": "Quisiera cotizar el servicio de reposición"
            }
        }


class ContactResponse(ContactCreate):
    id: int
    email: str
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
