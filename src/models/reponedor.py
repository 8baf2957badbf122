"""
Modelo de Reponedor (ficha del trabajador en terreno)
"""
from sqlalchemy import Column, Integer, String, Date, DateTime, ForeignKey, Text
from sqlalchemy.sql import func
from .database import Base


class Reponedor(Base):
    """
    Modelo de Reponedor - Ficha de un usuario que repone productos en locales
    NOTA: la identidad (nombre, correo, rol) vive en 'users'
    """

    __tablename__ = "reponedores"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    rut = Column(String(20), nullable=False)
    company = Column(String(255), nullable=False)
    service_line = Column(String(255), nullable=False)
    valid_until = Column(Date, nullable=False)

    photo = Column(String(255), nullable=True)
    geolocation = Column(String(100), nullable=True)
    observations = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self):
        return f"<Reponedor(id={self.id}, user={self.user_id}, rut={self.rut})>"
