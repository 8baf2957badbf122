"""
Modelos de Visita agendada y de su semana de seguimiento
"""
from sqlalchemy import (
    Column, Integer, String, Date, DateTime, ForeignKey, Text,
    CheckConstraint, UniqueConstraint
)
from sqlalchemy.sql import func
from .database import Base

VISIT_STATES = ("NO_REALIZADA", "EN_PROGRESO", "FINALIZADA")


class ScheduledVisit(Base):
    """
    Modelo de Visita Agendada - Un reponedor asignado a un local desde una fecha y hora
    El reponedor_id apunta al usuario (users.id), no a la ficha de reponedor
    """

    __tablename__ = "scheduled_visits"

    id = Column(Integer, primary_key=True, index=True)
    location_id = Column(Integer, ForeignKey("locations.id", ondelete="CASCADE"), nullable=False, index=True)
    supervisor_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)
    reponedor_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    visit_date = Column(Date, nullable=False, index=True)
    visit_time = Column(String(5), nullable=False)

    state = Column(String(20), default="NO_REALIZADA", nullable=False, index=True)

    # Un reponedor no puede tener dos visitas en la misma fecha y hora
    __table_args__ = (
        CheckConstraint(
            "state IN ('NO_REALIZADA', 'EN_PROGRESO', 'FINALIZADA')",
            name="check_visit_state"
        ),
        UniqueConstraint("reponedor_id", "visit_date", "visit_time", name="uq_visit_reponedor_slot"),
    )

    # Evidencia de ejecución
    start_photo = Column(String(255), nullable=True)
    end_photo = Column(String(255), nullable=True)
    product_photos = Column(Text, nullable=True)
    observations = Column(Text, nullable=True)
    geolocation = Column(String(100), nullable=True)
    started_at = Column(DateTime(timezone=True), nullable=True)
    finished_at = Column(DateTime(timezone=True), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self):
        return (
            f"<ScheduledVisit(id={self.id}, location={self.location_id}, "
            f"reponedor={self.reponedor_id}, date={self.visit_date}, time={self.visit_time})>"
        )


class WeeklyVisitDay(Base):
    """Modelo de Día de Visita - Estado de una visita agendada en un día concreto"""

    __tablename__ = "weekly_visit_days"

    id = Column(Integer, primary_key=True, index=True)
    visit_id = Column(Integer, ForeignKey("scheduled_visits.id", ondelete="CASCADE"), nullable=False, index=True)
    day = Column(Date, nullable=False, index=True)
    state = Column(String(20), default="NO_REALIZADA", nullable=False)

    __table_args__ = (
        CheckConstraint(
            "state IN ('NO_REALIZADA', 'EN_PROGRESO', 'FINALIZADA')",
            name="check_visit_day_state"
        ),
        UniqueConstraint("visit_id", "day", name="uq_visit_day"),
    )

    def __repr__(self):
        return f"<WeeklyVisitDay(visit={self.visit_id}, day={self.day}, state={self.state})>"
