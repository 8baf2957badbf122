"""
Modelo de Local (Location)
"""
from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.sql import func
from .database import Base


class Location(Base):
    """Modelo de Local - Sala de venta donde se realizan las reposiciones"""

    __tablename__ = "locations"

    id = Column(Integer, primary_key=True, index=True)
    company_name = Column(String(255), nullable=False, index=True)
    commune = Column(String(120), nullable=False)
    address = Column(String(255), nullable=False)
    hours = Column(String(255), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self):
        return f"<Location(id={self.id}, company={self.company_name}, commune={self.commune})>"
