"""
Schemas de Visitas agendadas y su semana
"""
import datetime as dt
import re
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

VisitState = Literal["NO_REALIZADA", "EN_PROGRESO", "FINALIZADA"]

DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
TIME_PATTERN = re.compile(r"^\d{2}:\d{2}$")


class VisitScheduleRequest(BaseModel):
    """Schema para agendar o reprogramar una visita"""
    location_id: int = Field(..., description="ID del local")
    reponedor_id: int = Field(..., description="ID de la ficha de reponedor")
    visit_date: dt.date = Field(..., description="Primer día de la semana de visita (YYYY-MM-DD)")
    visit_time: str = Field(..., description="Hora de la visita (HH:MM)")

    @field_validator("visit_date", mode="before")
    @classmethod
    def validate_date_format(cls, v):
        if isinstance(v, str) and DATE_PATTERN.match(v):
            return v
        raise ValueError("Fecha inválida, formato YYYY-MM-DD")

    @field_validator("visit_time")
    @classmethod
    def validate_time_format(cls, v):
        if not TIME_PATTERN.match(v):
            raise ValueError("Hora inválida, formato HH:MM")
        hours, minutes = int(v[:2]), int(v[3:])
        if hours > 23 or minutes > 59:
            raise ValueError("Hora inválida, formato HH:MM")
        return v

    class Config:
        json_schema_extra = {
            "example": {
                "location_id": 1,
                "reponedor_id": 3,
                "visit_date": "2024-01-08",
                "visit_time": "09:30"
            }
        }


class VisitScheduledResponse(BaseModel):
    message: str
    visit_id: int


class VisitDayStateUpdate(BaseModel):
    """Cambio manual de estado, de un día o de toda la semana"""
    state: VisitState = Field(..., description="Nuevo estado")
    day: Optional[dt.date] = Field(None, description="Día a modificar, si se omite se modifican los 7")

    class Config:
        json_schema_extra = {
            "example": {
                "state": "FINALIZADA",
                "day": "2024-01-09"
            }
        }


class VisitListItem(BaseModel):
    """Visita en el listado del supervisor"""
    id: int
    location_id: int
    company_name: str
    address: str
    reponedor_id: int
    reponedor_name: str
    visit_date: dt.date
    visit_time: str
    state: str


class ReponedorVisitItem(BaseModel):
    """Visita en el listado del propio reponedor"""
    id: int
    visit_date: dt.date
    visit_time: str
    state: str
    started_at: Optional[dt.datetime] = None
    finished_at: Optional[dt.datetime] = None
    start_photo: Optional[str] = None
    end_photo: Optional[str] = None
    product_photos: Optional[str] = None
    geolocation: Optional[str] = None
    location_name: str
    address: str
    commune: str


class WeekDayState(BaseModel):
    """Estado de un día en el resumen semanal"""
    day: Literal["L", "M", "X", "J", "V", "S", "D"]
    date: dt.date
    state: VisitState


class VisitStartResponse(BaseModel):
    message: str
    start_photo: str
