"""
Modelos de la base de datos
"""
from .database import Base, get_db, engine, SessionLocal
from .user import User, ROLES
from .location import Location
from .reponedor import Reponedor
from .visit import ScheduledVisit, WeeklyVisitDay, VISIT_STATES
from .task import Task, TASK_STATES
from .contact import Contact

__all__ = [
    "Base",
    "get_db",
    "engine",
    "SessionLocal",
    "User",
    "ROLES",
    "Location",
    "Reponedor",
    "ScheduledVisit",
    "WeeklyVisitDay",
    "VISIT_STATES",
    "Task",
    "TASK_STATES",
    "Contact",
]
