"""
Router de Supervisor
Agenda semanal de visitas, tareas y listados de apoyo
Todas las rutas exigen rol SUPERVISOR o ADMIN
"""
import logging
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..models import (
    get_db, ScheduledVisit, WeeklyVisitDay, Location, Reponedor, User, Task
)
from ..schemas import (
    VisitScheduleRequest, VisitScheduledResponse, VisitDayStateUpdate,
    VisitListItem, WeekDayState, TaskCreate, TaskCreatedResponse, TaskResponse,
    ReponedorListItem, LocationResponse, MessageResponse
)
from ..utils import require_supervisor
from ..utils.errors import NotFound, Conflict
from ..utils.weeks import consecutive_days, monday_of, summarize_week

logger = logging.getLogger(__name__)
router = APIRouter()

SLOT_TAKEN = "El reponedor ya tiene una visita agendada a esa hora"


def ensure_location_exists(db: Session, location_id: int) -> None:
    if not db.query(Location.id).filter(Location.id == location_id).first():
        raise NotFound("Local no encontrado")


def resolve_reponedor_user(db: Session, reponedor_id: int) -> int:
    """
    Traduce el ID de la ficha de reponedor al ID de su usuario
    Las visitas se registran contra el usuario
    """
    row = db.query(Reponedor.user_id).filter(Reponedor.id == reponedor_id).first()
    if not row:
        raise NotFound("Reponedor no encontrado")
    return row.user_id


def ensure_slot_free(
    db: Session,
    user_id: int,
    visit_date: date,
    visit_time: str,
    exclude_visit_id: Optional[int] = None
) -> None:
    """Un reponedor no puede tener dos visitas en la misma fecha y hora"""
    query = db.query(ScheduledVisit.id).filter(
        ScheduledVisit.reponedor_id == user_id,
        ScheduledVisit.visit_date == visit_date,
        ScheduledVisit.visit_time == visit_time
    )
    if exclude_visit_id is not None:
        query = query.filter(ScheduledVisit.id != exclude_visit_id)
    if query.first():
        raise Conflict(SLOT_TAKEN)


def materialize_week(db: Session, visit_id: int, start: date) -> List[WeeklyVisitDay]:
    """Crea los 7 días de seguimiento de una visita, todos NO_REALIZADA"""
    days = [
        WeeklyVisitDay(visit_id=visit_id, day=day, state="NO_REALIZADA")
        for day in consecutive_days(start)
    ]
    db.add_all(days)
    return days


# ============================================================================
# VISITAS AGENDADAS
# ============================================================================

@router.post(
    "/supervisor/visitas",
    response_model=VisitScheduledResponse,
    status_code=status.HTTP_201_CREATED
)
async def schedule_visit(
    visit_data: VisitScheduleRequest,
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_supervisor)
):
    """Agendar visita y crear su semana de seguimiento"""
    ensure_location_exists(db, visit_data.location_id)
    user_id = resolve_reponedor_user(db, visit_data.reponedor_id)
    ensure_slot_free(db, user_id, visit_data.visit_date, visit_data.visit_time)

    visit = ScheduledVisit(
        location_id=visit_data.location_id,
        supervisor_id=current_user["user_id"],
        reponedor_id=user_id,
        visit_date=visit_data.visit_date,
        visit_time=visit_data.visit_time,
        state="NO_REALIZADA"
    )
    db.add(visit)
    try:
        db.flush()
        materialize_week(db, visit.id, visit.visit_date)
        db.commit()
    except IntegrityError:
        db.rollback()
        raise Conflict(SLOT_TAKEN)

    logger.info(
        f"Visita {visit.id} agendada: local={visit.location_id} reponedor={user_id} "
        f"desde {visit.visit_date} {visit.visit_time}"
    )
    return VisitScheduledResponse(message="Visita agendada correctamente", visit_id=visit.id)


@router.get("/supervisor/visitas", response_model=List[VisitListItem])
async def list_visits(
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_supervisor)
):
    """Listar todas las visitas, fecha descendente y hora ascendente"""
    results = db.query(ScheduledVisit, Location, User).join(
        Location, ScheduledVisit.location_id == Location.id
    ).join(
        User, ScheduledVisit.reponedor_id == User.id
    ).order_by(
        ScheduledVisit.visit_date.desc(),
        ScheduledVisit.visit_time.asc()
    ).all()

    return [
        VisitListItem(
            id=visit.id,
            location_id=visit.location_id,
            company_name=location.company_name,
            address=location.address,
            reponedor_id=visit.reponedor_id,
            reponedor_name=user.name,
            visit_date=visit.visit_date,
            visit_time=visit.visit_time,
            state=visit.state
        )
        for visit, location, user in results
    ]


@router.get("/supervisor/visitas/resumen", response_model=List[WeekDayState])
async def weekly_summary(
    location_id: int = Query(..., description="ID del local"),
    week: date = Query(..., description="Cualquier fecha de la semana (YYYY-MM-DD)"),
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_supervisor)
):
    """
    Resumen L..D de la semana que contiene 'week' para un local
    Cada día se resuelve por su fecha, sin depender del orden de las filas
    """
    week_days = consecutive_days(monday_of(week))
    rows = db.query(WeeklyVisitDay.day, WeeklyVisitDay.state).join(
        ScheduledVisit, ScheduledVisit.id == WeeklyVisitDay.visit_id
    ).filter(
        ScheduledVisit.location_id == location_id,
        WeeklyVisitDay.day.in_(week_days)
    ).all()

    return summarize_week(week, rows)


@router.put("/supervisor/visitas/{visit_id}", response_model=MessageResponse)
async def reschedule_visit(
    visit_id: int,
    visit_data: VisitScheduleRequest,
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_supervisor)
):
    """
    Reprogramar visita
    La semana anterior se descarta completa y se crean 7 días nuevos
    """
    visit = db.query(ScheduledVisit).filter(ScheduledVisit.id == visit_id).first()
    if not visit:
        raise NotFound("Visita no encontrada")

    ensure_location_exists(db, visit_data.location_id)
    user_id = resolve_reponedor_user(db, visit_data.reponedor_id)
    ensure_slot_free(db, user_id, visit_data.visit_date, visit_data.visit_time, exclude_visit_id=visit.id)

    visit.location_id = visit_data.location_id
    visit.reponedor_id = user_id
    visit.visit_date = visit_data.visit_date
    visit.visit_time = visit_data.visit_time

    try:
        db.query(WeeklyVisitDay).filter(
            WeeklyVisitDay.visit_id == visit.id
        ).delete(synchronize_session=False)
        materialize_week(db, visit.id, visit_data.visit_date)
        db.commit()
    except IntegrityError:
        db.rollback()
        raise Conflict(SLOT_TAKEN)

    logger.info(f"Visita {visit_id} reprogramada desde {visit_data.visit_date} {visit_data.visit_time}")
    return MessageResponse(message="Visita actualizada correctamente")


@router.delete("/supervisor/visitas/{visit_id}", response_model=MessageResponse)
async def cancel_visit(
    visit_id: int,
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_supervisor)
):
    """Eliminar visita junto con sus días, en una sola transacción"""
    visit = db.query(ScheduledVisit).filter(ScheduledVisit.id == visit_id).first()
    if not visit:
        raise NotFound("Visita no encontrada")

    db.query(WeeklyVisitDay).filter(
        WeeklyVisitDay.visit_id == visit_id
    ).delete(synchronize_session=False)
    db.delete(visit)
    db.commit()

    logger.info(f"Visita {visit_id} eliminada por {current_user['user_id']}")
    return MessageResponse(message="Visita eliminada correctamente")


@router.put("/supervisor/visitas/{visit_id}/estado", response_model=MessageResponse)
async def set_day_state(
    visit_id: int,
    state_data: VisitDayStateUpdate,
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_supervisor)
):
    """
    Cambio manual de estado
    Cualquier estado se puede asignar directamente, sin seguir el orden natural.
    Con 'day' cambia solo ese día, sin él cambia los 7 días y la visita.
    """
    visit = db.query(ScheduledVisit).filter(ScheduledVisit.id == visit_id).first()
    if not visit:
        raise NotFound("Visita no encontrada")

    days = db.query(WeeklyVisitDay).filter(WeeklyVisitDay.visit_id == visit_id)
    if state_data.day:
        updated = days.filter(WeeklyVisitDay.day == state_data.day).update(
            {WeeklyVisitDay.state: state_data.state}, synchronize_session=False
        )
        if not updated:
            db.rollback()
            raise NotFound("El día no pertenece a la semana de la visita")
    else:
        days.update({WeeklyVisitDay.state: state_data.state}, synchronize_session=False)
        visit.state = state_data.state

    db.commit()
    return MessageResponse(message="Estado actualizado correctamente")


# ============================================================================
# TAREAS
# ============================================================================

@router.post(
    "/supervisor/tasks",
    response_model=TaskCreatedResponse,
    status_code=status.HTTP_201_CREATED
)
async def create_task(
    task_data: TaskCreate,
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_supervisor)
):
    """Crear tarea para un reponedor"""
    if not db.query(Reponedor.id).filter(Reponedor.id == task_data.reponedor_id).first():
        raise NotFound("Reponedor no encontrado")

    task = Task(
        reponedor_id=task_data.reponedor_id,
        description=task_data.description,
        visit_date=task_data.visit_date,
        state=task_data.state,
        created_by=current_user["user_id"]
    )
    db.add(task)
    db.commit()
    db.refresh(task)
    return TaskCreatedResponse(message="Tarea creada correctamente", task_id=task.id)


@router.get("/supervisor/tasks", response_model=List[TaskResponse])
async def list_tasks(
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_supervisor)
):
    """Listar tareas con datos del reponedor"""
    results = db.query(Task, Reponedor, User).join(
        Reponedor, Task.reponedor_id == Reponedor.id
    ).join(
        User, Reponedor.user_id == User.id
    ).order_by(Task.visit_date.desc(), Task.id.desc()).all()

    return [
        TaskResponse(
            id=task.id,
            description=task.description,
            visit_date=task.visit_date,
            state=task.state,
            reponedor_id=reponedor.id,
            company=reponedor.company,
            reponedor_name=user.name
        )
        for task, reponedor, user in results
    ]


@router.put("/supervisor/tasks/{task_id}/resolver", response_model=MessageResponse)
async def resolve_task(
    task_id: int,
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_supervisor)
):
    """Marcar tarea como resuelta"""
    updated = db.query(Task).filter(Task.id == task_id).update(
        {Task.state: "RESUELTA"}, synchronize_session=False
    )
    if not updated:
        raise NotFound("Tarea no encontrada")
    db.commit()
    return MessageResponse(message="Tarea marcada como resuelta")


@router.delete("/supervisor/tasks/{task_id}", response_model=MessageResponse)
async def delete_task(
    task_id: int,
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_supervisor)
):
    """Eliminar tarea"""
    deleted = db.query(Task).filter(Task.id == task_id).delete(synchronize_session=False)
    if not deleted:
        raise NotFound("Tarea no encontrada")
    db.commit()
    return MessageResponse(message="Tarea eliminada correctamente")


# ============================================================================
# LISTADOS DE APOYO
# ============================================================================

@router.get("/supervisor/reponedores", response_model=List[ReponedorListItem])
async def list_reponedores(
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_supervisor)
):
    """Listar reponedores ordenados por nombre"""
    results = db.query(Reponedor, User).join(
        User, Reponedor.user_id == User.id
    ).order_by(User.name.asc()).all()

    return [
        ReponedorListItem(
            id=reponedor.id,
            name=user.name,
            company=reponedor.company,
            service_line=reponedor.service_line
        )
        for reponedor, user in results
    ]


@router.get("/supervisor/locales", response_model=List[LocationResponse])
async def list_locations_for_scheduling(
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_supervisor)
):
    """Listar locales ordenados por empresa"""
    return db.query(Location).order_by(Location.company_name.asc()).all()
