"""
Schemas de Local (Location)
"""
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class LocationBase(BaseModel):
    """Schema base de Local"""
    company_name: str = Field(..., min_length=1, max_length=255, description="Empresa o cadena del local")
    commune: str = Field(..., min_length=1, max_length=120, description="Comuna")
    address: str = Field(..., min_length=1, max_length=255, description="Dirección")
    hours: Optional[str] = Field(None, max_length=255, description="Horario de atención")


class LocationCreate(LocationBase):
    """Schema para crear o reemplazar un local"""

    class Config:
        json_schema_extra = {
            "example": {
                "company_name": "Supermercado Central",
                "commune": "Providencia",
                "address": "Av. Providencia 1234",
                "hours": "Lunes a sábado 09:00 - 21:00"
            }
        }


class LocationResponse(LocationBase):
    """Schema para respuesta de local"""
    id: int = Field(..., description="ID del local")
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
