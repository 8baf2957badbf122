"""
Schemas Pydantic para validación
"""
from .common import MessageResponse, HealthResponse
from .auth import LoginRequest, LoginResponse
from .user import UserCreate, UserUpdate, UserResponse
from .location import LocationCreate, LocationResponse
from .reponedor import (
    ReponedorCreatedResponse,
    ReponedorListItem,
    ReponedorProfileResponse
)
from .visit import (
    VisitScheduleRequest,
    VisitScheduledResponse,
    VisitDayStateUpdate,
    VisitListItem,
    ReponedorVisitItem,
    WeekDayState,
    VisitStartResponse
)
from .task import TaskCreate, TaskCreatedResponse, TaskResponse
from .contact import ContactCreate, ContactResponse

__all__ = [
    # Common
    "MessageResponse",
    "HealthResponse",
    # Auth
    "LoginRequest",
    "LoginResponse",
    # User
    "UserCreate",
    "UserUpdate",
    "UserResponse",
    # Location
    "LocationCreate",
    "LocationResponse",
    # Reponedor
    "ReponedorCreatedResponse",
    "ReponedorListItem",
    "ReponedorProfileResponse",
    # Visit
    "VisitScheduleRequest",
    "VisitScheduledResponse",
    "VisitDayStateUpdate",
    "VisitListItem",
    "ReponedorVisitItem",
    "WeekDayState",
    "VisitStartResponse",
    # Task
    "TaskCreate",
    "TaskCreatedResponse",
    "TaskResponse",
    # Contact
    "ContactCreate",
    "ContactResponse"
]
