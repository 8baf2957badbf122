"""
Tests del script de creación del administrador inicial
"""
from src.config import settings
from src.create_admin import create_admin
from src.models import User
from src.utils.auth import verify_password


def test_create_admin_is_idempotent(db):
    first = create_admin(db)
    second = create_admin(db)

    assert first.id == second.id
    assert first.role == "ADMIN"
    assert db.query(User).filter(User.email == settings.ADMIN_EMAIL).count() == 1
    assert verify_password(settings.ADMIN_PASSWORD, first.password_hash)
