"""
Modelo de Contacto (formulario público)
"""
from sqlalchemy import Column, Integer, String, DateTime, Text
from sqlalchemy.sql import func
from .database import Base


class Contact(Base):
    """Modelo de Contacto - Mensaje recibido desde el formulario web, inmutable"""

    __tablename__ = "contacts"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(120), nullable=False)
    paternal_surname = Column(String(120), nullable=False)
    maternal_surname = Column(String(120), nullable=False)
    email = Column(String(255), nullable=False)
    phone = Column(String(30), nullable=True)
    message = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)

    def __repr__(self):
        return f"<Contact(id={self.id}, email={self.email})>"
