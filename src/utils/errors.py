"""
Errores de dominio
Cada error es un HTTPException con el status que le corresponde,
los handlers de main.py los renderizan como {"error": detail}
"""
from fastapi import HTTPException, status


class ValidationError(HTTPException):
    def __init__(self, detail: str = "Datos inválidos"):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class Conflict(HTTPException):
    """Doble agendamiento o registro duplicado, se responde con 400"""

    def __init__(self, detail: str = "El registro ya existe"):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class DuplicateEmail(Conflict):
    def __init__(self, detail: str = "Correo ya registrado"):
        super().__init__(detail=detail)


class Unauthenticated(HTTPException):
    def __init__(self, detail: str = "No se pudieron validar las credenciales"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


class InvalidCredentials(Unauthenticated):
    def __init__(self):
        super().__init__(detail="Correo o contraseña incorrectos")


class Forbidden(HTTPException):
    def __init__(self, detail: str = "No tienes permisos para esta acción"):
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


class NotFound(HTTPException):
    def __init__(self, detail: str = "Recurso no encontrado"):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)
