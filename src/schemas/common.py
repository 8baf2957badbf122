"""
Schemas compartidos
"""
from pydantic import BaseModel, Field


class MessageResponse(BaseModel):
    """Respuesta simple de confirmación"""
    message: str = Field(..., description="Mensaje para el usuario")


class HealthResponse(BaseModel):
    """Schema para health check"""
    status: str
    service: str
    version: str
    database: str
