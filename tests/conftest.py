"""
Configuración compartida de las pruebas
Base SQLite local, subidas en un directorio temporal y tokens emitidos directamente
"""
from datetime import date

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from src.config import Settings, get_settings
from src.main import app
from src.models import Base, get_db, User, Location, Reponedor
from src.utils.auth import hash_password, create_access_token

# Base de datos de pruebas
SQLALCHEMY_TEST_URL = "sqlite:///./test.db"

engine = create_engine(SQLALCHEMY_TEST_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

DEFAULT_PASSWORD = "secreto123"


def override_get_db():
    """Override database dependency"""
    try:
        db = TestingSessionLocal()
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db


@pytest.fixture
def test_settings(tmp_path):
    """Configuración con subidas en un directorio temporal"""
    return Settings(
        DATABASE_URL=SQLALCHEMY_TEST_URL,
        SECRET_KEY="clave-de-pruebas",
        UPLOAD_DIR=str(tmp_path / "uploads")
    )


@pytest.fixture
def client(test_settings):
    app.dependency_overrides[get_settings] = lambda: test_settings
    yield TestClient(app)
    app.dependency_overrides.pop(get_settings, None)


@pytest.fixture(autouse=True)
def setup_database():
    """Crear y limpiar base de datos antes de cada test"""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


def make_user(db, name, email, role, password=DEFAULT_PASSWORD) -> User:
    user = User(name=name, email=email, password_hash=hash_password(password), role=role)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def make_location(db, company_name="Supermercado Central", commune="Providencia") -> Location:
    location = Location(company_name=company_name, commune=commune, address="Av. Providencia 1234")
    db.add(location)
    db.commit()
    db.refresh(location)
    return location


def make_reponedor(db, user, company="Cultiva", service_line="Lácteos") -> Reponedor:
    reponedor = Reponedor(
        user_id=user.id,
        rut="12.345.678-9",
        company=company,
        service_line=service_line,
        valid_until=date(2025, 1, 8)
    )
    db.add(reponedor)
    db.commit()
    db.refresh(reponedor)
    return reponedor


def bearer(user: User, settings: Settings) -> dict:
    """Header Authorization para el usuario"""
    token = create_access_token(
        {"user_id": user.id, "role": user.role, "name": user.name},
        settings
    )
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers(db, test_settings):
    admin = make_user(db, "Administrador", "admin@cultiva.cl", "ADMIN")
    return bearer(admin, test_settings)


@pytest.fixture
def supervisor_headers(db, test_settings):
    supervisor = make_user(db, "Sofía Supervisora", "sofia@cultiva.cl", "SUPERVISOR")
    return bearer(supervisor, test_settings)
