"""
Crea las tablas y el usuario administrador inicial

Uso:
    python -m src.create_admin
"""
import logging

from .config import settings
from .models import Base, SessionLocal, User, engine
from .utils.auth import hash_password

logger = logging.getLogger(__name__)


def create_admin(db) -> User:
    """Inserta el ADMIN configurado si su correo aún no existe"""
    existing = db.query(User).filter(User.email == settings.ADMIN_EMAIL).first()
    if existing:
        logger.info(f"[INFO] Administrador {settings.ADMIN_EMAIL} ya existe (id={existing.id})")
        return existing

    admin = User(
        name=settings.ADMIN_NAME,
        email=settings.ADMIN_EMAIL,
        password_hash=hash_password(settings.ADMIN_PASSWORD),
        role="ADMIN"
    )
    db.add(admin)
    db.commit()
    db.refresh(admin)
    logger.info(f"[OK] Administrador {admin.email} creado (id={admin.id})")
    return admin


def main():
    logging.basicConfig(level=settings.LOG_LEVEL, format="%(levelname)s %(message)s")
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        create_admin(db)
    finally:
        db.close()


if __name__ == "__main__":
    main()
