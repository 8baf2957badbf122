"""
Tests de locales y del formulario de contacto
"""
from src.models import Contact
from tests.conftest import make_user, bearer

LOCATION = {
    "company_name": "Supermercado Central",
    "commune": "Providencia",
    "address": "Av. Providencia 1234",
    "hours": "Lunes a sábado 09:00 - 21:00"
}


def test_create_and_list_locations(client, supervisor_headers):
    created = client.post("/api/locales", headers=supervisor_headers, json=LOCATION)
    assert created.status_code == 201
    assert created.json()["company_name"] == "Supermercado Central"

    client.post("/api/locales", headers=supervisor_headers, json={
        **LOCATION, "company_name": "Minimarket Sur"
    })

    response = client.get("/api/locales", headers=supervisor_headers)
    assert response.status_code == 200
    names = [location["company_name"] for location in response.json()]
    assert names == ["Minimarket Sur", "Supermercado Central"]


def test_reponedor_can_read_but_not_write_locations(client, db, test_settings):
    user = make_user(db, "Pedro Soto", "pedro@cultiva.cl", "REPONEDOR")
    headers = bearer(user, test_settings)

    assert client.get("/api/locales", headers=headers).status_code == 200
    assert client.post("/api/locales", headers=headers, json=LOCATION).status_code == 403


def test_update_location(client, supervisor_headers):
    location_id = client.post("/api/locales", headers=supervisor_headers, json=LOCATION).json()["id"]

    response = client.put(f"/api/locales/{location_id}", headers=supervisor_headers, json={
        **LOCATION, "commune": "Ñuñoa"
    })
    assert response.status_code == 200
    assert response.json()["commune"] == "Ñuñoa"


def test_update_location_not_found(client, supervisor_headers):
    response = client.put("/api/locales/9999", headers=supervisor_headers, json=LOCATION)
    assert response.status_code == 404
    assert response.json() == {"error": "Local no encontrado"}


def test_delete_location(client, supervisor_headers):
    location_id = client.post("/api/locales", headers=supervisor_headers, json=LOCATION).json()["id"]

    response = client.delete(f"/api/locales/{location_id}", headers=supervisor_headers)
    assert response.status_code == 200
    assert client.delete(f"/api/locales/{location_id}", headers=supervisor_headers).status_code == 404


# ============================================================================
# CONTACTOS
# ============================================================================

CONTACT = {
    "name": "Camila",
    "paternal_surname": "Rojas",
    "maternal_surname": "Muñoz",
    "email": "camila.rojas@correo.cl",
    "phone": "+56912345678",
    "message": "Quisiera cotizar el servicio de reposición"
}


def test_submit_contact_without_session(client, db):
    response = client.post("/api/contactos", json=CONTACT)

    assert response.status_code == 201
    assert response.json() == {"message": "Contacto guardado correctamente"}
    assert db.query(Contact).count() == 1


def test_submit_contact_field_errors(client, db):
    response = client.post("/api/contactos", json={
        **CONTACT,
        "name": "C",
        "email": "sin-arroba"
    })

    assert response.status_code == 400
    errores = response.json()["errores"]
    assert {error["campo"] for error in errores} == {"name", "email"}
    assert all(error["mensaje"] for error in errores)
    assert db.query(Contact).count() == 0


def test_list_contacts_requires_admin(client, supervisor_headers, admin_headers):
    client.post("/api/contactos", json=CONTACT)

    assert client.get("/api/contactos", headers=supervisor_headers).status_code == 403

    response = client.get("/api/contactos", headers=admin_headers)
    assert response.status_code == 200
    assert response.json()[0]["email"] == "camila.rojas@correo.cl"
