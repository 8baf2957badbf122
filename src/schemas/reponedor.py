"""
Schemas de Reponedor
"""
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class ReponedorCreatedResponse(BaseModel):
    message: str
    reponedor_id: int


class ReponedorListItem(BaseModel):
    """Reponedor para los selectores del supervisor"""
    id: int = Field(..., description="ID de la ficha de reponedor")
    name: str = Field(..., description="Nombre del usuario")
    company: str
    service_line: str


class ReponedorProfileResponse(BaseModel):
    """Perfil del reponedor con su credencial QR"""
    id: int = Field(..., description="ID de la ficha de reponedor")
    user_id: int
    name: str
    email: str
    role: str
    rut: str
    company: str
    service_line: str
    valid_until: Optional[str] = Field(None, description="Vigencia, ej: '08 enero 2024'")
    photo: Optional[str] = Field(None, description="URL pública de la foto")
    qr_data_url: str = Field(..., description="QR en formato data:image/png;base64")
    geolocation: Optional[str] = None
    observations: str = ""
    created_at: Optional[datetime] = None
