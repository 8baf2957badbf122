"""
Utilidades del servicio
"""
from .auth import get_current_user, require_admin, require_supervisor, require_policy
from .uploads import get_upload_store

__all__ = [
    "get_current_user",
    "require_admin",
    "require_supervisor",
    "require_policy",
    "get_upload_store"
]
