"""
Tests de administración de usuarios, health check y formato de errores
"""
from src.models import User
from tests.conftest import make_user, DEFAULT_PASSWORD


def test_health_check(client):
    """Test del health check"""
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] in ["healthy", "unhealthy"]
    assert data["service"] == "Reponedores API - Field Visit Service"


def test_unknown_route_returns_error_body(client):
    response = client.get("/api/no-existe")
    assert response.status_code == 404
    assert response.json() == {"error": "Ruta no encontrada"}


# ============================================================================
# CREACIÓN
# ============================================================================

def test_create_user(client, admin_headers, db):
    response = client.post("/api/usuarios", headers=admin_headers, json={
        "name": "Pedro Soto",
        "email": "pedro@cultiva.cl",
        "password": "secreto123",
        "role": "reponedor"
    })

    assert response.status_code == 201
    data = response.json()
    assert data["email"] == "pedro@cultiva.cl"
    assert data["role"] == "REPONEDOR"
    assert "password" not in data
    assert "password_hash" not in data

    stored = db.query(User).filter(User.email == "pedro@cultiva.cl").first()
    assert stored.password_hash != "secreto123"


def test_created_user_can_login(client, admin_headers):
    client.post("/api/usuarios", headers=admin_headers, json={
        "name": "Pedro Soto",
        "email": "pedro@cultiva.cl",
        "password": "secreto123",
        "role": "SUPERVISOR"
    })

    response = client.post("/api/usuarios/login", json={
        "email": "pedro@cultiva.cl",
        "password": "secreto123"
    })
    assert response.status_code == 200
    assert response.json()["role"] == "SUPERVISOR"


def test_create_user_duplicate_email(client, admin_headers, db):
    """Correo duplicado no crea una segunda fila"""
    make_user(db, "Pedro Soto", "pedro@cultiva.cl", "REPONEDOR")

    response = client.post("/api/usuarios", headers=admin_headers, json={
        "name": "Otro Pedro",
        "email": "pedro@cultiva.cl",
        "password": "secreto123",
        "role": "REPONEDOR"
    })

    assert response.status_code == 400
    assert response.json() == {"error": "Correo ya registrado"}
    assert db.query(User).filter(User.email == "pedro@cultiva.cl").count() == 1


def test_create_user_invalid_fields(client, admin_headers):
    response = client.post("/api/usuarios", headers=admin_headers, json={
        "name": "P",
        "email": "no-es-correo",
        "password": "123",
        "role": "GERENTE"
    })

    assert response.status_code == 400
    campos = {error["campo"] for error in response.json()["errores"]}
    assert {"name", "email", "password", "role"} <= campos


# ============================================================================
# CONSULTA, ACTUALIZACIÓN Y BORRADO
# ============================================================================

def test_get_user_not_found(client, admin_headers):
    response = client.get("/api/usuarios/9999", headers=admin_headers)
    assert response.status_code == 404
    assert response.json() == {"error": "Usuario no encontrado"}


def test_list_users(client, admin_headers, db):
    make_user(db, "Pedro Soto", "pedro@cultiva.cl", "REPONEDOR")

    response = client.get("/api/usuarios", headers=admin_headers)
    assert response.status_code == 200
    emails = [user["email"] for user in response.json()]
    assert emails == ["admin@cultiva.cl", "pedro@cultiva.cl"]


def test_update_user_partial(client, admin_headers, db):
    user = make_user(db, "Pedro Soto", "pedro@cultiva.cl", "REPONEDOR")

    response = client.put(f"/api/usuarios/{user.id}", headers=admin_headers, json={
        "name": "Pedro Soto Rojas"
    })

    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "Pedro Soto Rojas"
    assert data["email"] == "pedro@cultiva.cl"
    assert data["role"] == "REPONEDOR"


def test_update_user_password_is_rehashed(client, admin_headers, db):
    user = make_user(db, "Pedro Soto", "pedro@cultiva.cl", "REPONEDOR")

    client.put(f"/api/usuarios/{user.id}", headers=admin_headers, json={"password": "nueva-clave"})

    old_login = client.post("/api/usuarios/login", json={
        "email": "pedro@cultiva.cl",
        "password": DEFAULT_PASSWORD
    })
    new_login = client.post("/api/usuarios/login", json={
        "email": "pedro@cultiva.cl",
        "password": "nueva-clave"
    })
    assert old_login.status_code == 401
    assert new_login.status_code == 200


def test_update_user_without_data(client, admin_headers, db):
    user = make_user(db, "Pedro Soto", "pedro@cultiva.cl", "REPONEDOR")

    response = client.put(f"/api/usuarios/{user.id}", headers=admin_headers, json={})
    assert response.status_code == 400
    assert response.json() == {"error": "No hay datos para actualizar"}


def test_update_user_email_taken(client, admin_headers, db):
    user = make_user(db, "Pedro Soto", "pedro@cultiva.cl", "REPONEDOR")

    response = client.put(f"/api/usuarios/{user.id}", headers=admin_headers, json={
        "email": "admin@cultiva.cl"
    })
    assert response.status_code == 400


def test_update_user_not_found(client, admin_headers):
    response = client.put("/api/usuarios/9999", headers=admin_headers, json={"name": "Nadie Aquí"})
    assert response.status_code == 404


def test_delete_user(client, admin_headers, db):
    user = make_user(db, "Pedro Soto", "pedro@cultiva.cl", "REPONEDOR")

    response = client.delete(f"/api/usuarios/{user.id}", headers=admin_headers)
    assert response.status_code == 200
    assert response.json() == {"message": "Usuario eliminado correctamente"}
    assert db.query(User).filter(User.email == "pedro@cultiva.cl").count() == 0


def test_delete_user_not_found(client, admin_headers):
    response = client.delete("/api/usuarios/9999", headers=admin_headers)
    assert response.status_code == 404
    assert response.json() == {"error": "Usuario no encontrado"}
