"""
Schemas de autenticación
"""
from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    """Schema para login de usuario"""
    email: str = Field(..., min_length=1, description="Correo del usuario")
    password: str = Field(..., min_length=1, description="Contraseña del usuario")

    class Config:
        json_schema_extra = {
            "example": {
                "email": "admin@cultiva.cl",
                "password": "Admin123!"
            }
        }


class LoginResponse(BaseModel):
    """Schema para respuesta de login"""
    token: str = Field(..., description="Token de sesión, válido por 8 horas")
    role: str = Field(..., description="Rol del usuario en mayúsculas")
    name: str = Field(..., description="Nombre del usuario")

    class Config:
        json_schema_extra = {
            "example": {
                "token": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
                "role": "SUPERVISOR",
                "name": "María González"
            }
        }
