"""
Modelo de Tarea (Task)
"""
from sqlalchemy import Column, Integer, Date, DateTime, ForeignKey, Text, String, CheckConstraint
from sqlalchemy.sql import func
from .database import Base

TASK_STATES = ("PENDIENTE", "RESUELTA")


class Task(Base):
    """Modelo de Tarea - Encargo de un supervisor a un reponedor"""

    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True, index=True)
    reponedor_id = Column(Integer, ForeignKey("reponedores.id", ondelete="CASCADE"), nullable=False, index=True)
    description = Column(Text, nullable=False)
    visit_date = Column(Date, nullable=False, index=True)
    state = Column(String(20), default="PENDIENTE", nullable=False)
    created_by = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)

    __table_args__ = (
        CheckConstraint("state IN ('PENDIENTE', 'RESUELTA')", name="check_task_state"),
    )

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self):
        return f"<Task(id={self.id}, reponedor={self.reponedor_id}, state={self.state})>"
