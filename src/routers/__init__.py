"""
Routers de la API
"""
from .auth import router as auth_router
from .users import router as users_router
from .locations import router as locations_router
from .contacts import router as contacts_router
from .reponedor import router as reponedor_router
from .supervisor import router as supervisor_router

__all__ = [
    "auth_router",
    "users_router",
    "locations_router",
    "contacts_router",
    "reponedor_router",
    "supervisor_router"
]
