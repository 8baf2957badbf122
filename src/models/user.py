"""
Modelo de Usuario (User)
"""
from sqlalchemy import Column, Integer, String, DateTime, CheckConstraint
from sqlalchemy.sql import func
from .database import Base

ROLES = ("ADMIN", "SUPERVISOR", "REPONEDOR", "PROVEEDOR")


class User(Base):
    """Modelo de Usuario - Cuentas con acceso al sistema"""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False, index=True)

    __table_args__ = (
        CheckConstraint(
            "role IN ('ADMIN', 'SUPERVISOR', 'REPONEDOR', 'PROVEEDOR')",
            name="check_user_role"
        ),
    )

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self):
        return f"<User(id={self.id}, email={self.email}, role={self.role})>"
