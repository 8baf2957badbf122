"""
Schemas de Usuario (User)
"""
from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional, Literal
from datetime import datetime

RoleName = Literal["ADMIN", "SUPERVISOR", "REPONEDOR", "PROVEEDOR"]


class UserCreate(BaseModel):
    """Schema para crear usuario (solo ADMIN)"""
    name: str = Field(..., min_length=2, max_length=255, description="Nombre del usuario")
    email: EmailStr = Field(..., description="Correo, único en el sistema")
    password: str = Field(..., min_length=6, description="Contraseña en texto plano")
    role: RoleName = Field(..., description="Rol del usuario")

    @field_validator("role", mode="before")
    @classmethod
    def normalize_role(cls, v):
        """Acepta el rol en cualquier capitalización"""
        return v.upper() if isinstance(v, str) else v

    class Config:
        json_schema_extra = {
            "example": {
                "name": "Pedro Soto",
                "email": "pedro.soto@cultiva.cl",
                "password": "secreto123",
                "role": "REPONEDOR"
            }
        }


class UserUpdate(BaseModel):
    """Schema para actualizar usuario, todos los campos opcionales"""
    name: Optional[str] = Field(None, min_length=2, max_length=255)
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(None, min_length=6)
    role: Optional[RoleName] = None

    @field_validator("role", mode="before")
    @classmethod
    def normalize_role(cls, v):
        return v.upper() if isinstance(v, str) else v


class UserResponse(BaseModel):
    """Schema para respuesta de usuario, nunca incluye el hash"""
    id: int = Field(..., description="ID del usuario")
    name: str
    email: str
    role: str
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
