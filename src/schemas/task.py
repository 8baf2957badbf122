"""
Schemas de Tarea (Task)
"""
from pydantic import BaseModel, Field
from typing import Literal
from datetime import date


class TaskCreate(BaseModel):
    """Schema para crear tarea"""
    reponedor_id: int = Field(..., gt=0, description="ID de la ficha de reponedor")
    description: str = Field(..., min_length=1, description="Detalle de la tarea")
    visit_date: date = Field(..., description="Fecha de la visita asociada")
    state: Literal["PENDIENTE", "RESUELTA"] = Field("PENDIENTE", description="Estado inicial")

    class Config:
        json_schema_extra = {
            "example": {
                "reponedor_id": 3,
                "description": "Reponer góndola de lácteos",
                "visit_date": "2024-01-10"
            }
        }


class TaskCreatedResponse(BaseModel):
    message: str
    task_id: int


class TaskResponse(BaseModel):
    """Tarea con datos del reponedor"""
    id: int
    description: str
    visit_date: date
    state: str
    reponedor_id: int
    company: str
    reponedor_name: str
