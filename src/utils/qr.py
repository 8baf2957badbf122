"""
Generación del código QR de la credencial del reponedor
"""
import base64
from io import BytesIO

import qrcode


def build_credential_text(profile: dict) -> str:
    """Texto codificado en la credencial"""
    return (
        f"Nombre: {profile['name']}\n"
        f"Correo: {profile['email']}\n"
        f"Empresa: {profile['company']}\n"
        f"Servicio: {profile['service_line']}\n"
        f"RUT: {profile['rut']}"
    )


def make_qr_data_url(text: str) -> str:
    """Renderiza el texto como PNG y lo devuelve como data URL"""
    image = qrcode.make(text)
    buffer = BytesIO()
    image.save(buffer, format="PNG")
    encoded = base64.b64encode(buffer.getvalue()).decode("ascii")
    return f"data:image/png;base64,{encoded}"
