"""
Router del Reponedor
Perfil con credencial QR y ejecución de visitas en terreno
(foto de inicio, geolocalización, fotos de productos)
"""
import logging
from datetime import date, datetime, timezone
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile, status
from sqlalchemy.orm import Session

from ..models import get_db, Reponedor, User, ScheduledVisit, WeeklyVisitDay, Location
from ..schemas import (
    ReponedorProfileResponse, ReponedorCreatedResponse,
    ReponedorVisitItem, VisitStartResponse, MessageResponse
)
from ..utils import get_current_user, require_admin, get_upload_store
from ..utils.errors import ValidationError, NotFound
from ..utils.qr import build_credential_text, make_qr_data_url
from ..utils.uploads import UploadStore, public_url
from ..utils.weeks import format_long_date_es

logger = logging.getLogger(__name__)
router = APIRouter()

UPLOAD_FOLDER = "reponedor"


def get_own_visit(db: Session, visit_id: int, user_id: int) -> ScheduledVisit:
    """Visita del usuario actual, una visita ajena se reporta como inexistente"""
    visit = db.query(ScheduledVisit).filter(
        ScheduledVisit.id == visit_id,
        ScheduledVisit.reponedor_id == user_id
    ).first()
    if not visit:
        raise NotFound("Visita no encontrada o no autorizada")
    return visit


def mark_today(db: Session, visit_id: int, state: str) -> None:
    """Refleja la ejecución en el día de hoy de la semana de la visita, si existe"""
    db.query(WeeklyVisitDay).filter(
        WeeklyVisitDay.visit_id == visit_id,
        WeeklyVisitDay.day == date.today()
    ).update({WeeklyVisitDay.state: state}, synchronize_session=False)


def parse_coordinates(lat: Optional[str], lng: Optional[str]) -> str:
    """Valida latitud/longitud y las devuelve como 'lat,lng'"""
    if not lat or not lng:
        raise ValidationError("Se requiere geolocalización")
    try:
        latitude, longitude = float(lat), float(lng)
    except ValueError:
        raise ValidationError("Coordenadas inválidas")
    if not (-90 <= latitude <= 90) or not (-180 <= longitude <= 180):
        raise ValidationError("Coordenadas inválidas")
    return f"{lat},{lng}"


# ============================================================================
# PERFIL
# ============================================================================

@router.get("/reponedor/profile", response_model=ReponedorProfileResponse)
async def get_profile(
    request: Request,
    db: Session = Depends(get_db),
    current_user: dict = Depends(get_current_user)
):
    """Perfil del reponedor autenticado con su credencial QR"""
    result = db.query(Reponedor, User).join(
        User, Reponedor.user_id == User.id
    ).filter(
        User.id == current_user["user_id"]
    ).order_by(Reponedor.id.desc()).first()

    if not result:
        raise NotFound("Reponedor no encontrado")

    reponedor, user = result
    qr_text = build_credential_text({
        "name": user.name,
        "email": user.email,
        "company": reponedor.company,
        "service_line": reponedor.service_line,
        "rut": reponedor.rut
    })

    return ReponedorProfileResponse(
        id=reponedor.id,
        user_id=reponedor.user_id,
        name=user.name,
        email=user.email,
        role=user.role,
        rut=reponedor.rut,
        company=reponedor.company,
        service_line=reponedor.service_line,
        valid_until=format_long_date_es(reponedor.valid_until) if reponedor.valid_until else None,
        photo=public_url(request, UPLOAD_FOLDER, reponedor.photo) if reponedor.photo else None,
        qr_data_url=make_qr_data_url(qr_text),
        geolocation=reponedor.geolocation,
        observations=reponedor.observations or "",
        created_at=reponedor.created_at
    )


@router.post(
    "/reponedor",
    response_model=ReponedorCreatedResponse,
    status_code=status.HTTP_201_CREATED
)
async def create_reponedor(
    user_id: int = Form(..., description="Usuario dueño de la ficha"),
    rut: str = Form(..., min_length=1),
    company: str = Form(..., min_length=1),
    service_line: str = Form(..., min_length=1),
    valid_until: date = Form(..., description="Vigencia de la credencial"),
    photo: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    uploads: UploadStore = Depends(get_upload_store),
    current_user: dict = Depends(require_admin)
):
    """Crear ficha de reponedor para un usuario existente"""
    if not db.query(User.id).filter(User.id == user_id).first():
        raise NotFound("Usuario no encontrado")

    with uploads.batch(UPLOAD_FOLDER) as batch:
        filename = await batch.add(photo, user_id) if photo else None
        reponedor = Reponedor(
            user_id=user_id,
            rut=rut,
            company=company,
            service_line=service_line,
            valid_until=valid_until,
            photo=filename
        )
        db.add(reponedor)
        db.commit()
        db.refresh(reponedor)

    logger.info(f"Ficha de reponedor {reponedor.id} creada para usuario {user_id}")
    return ReponedorCreatedResponse(
        message="Reponedor creado correctamente",
        reponedor_id=reponedor.id
    )


# ============================================================================
# VISITAS DEL REPONEDOR
# ============================================================================

@router.get("/reponedor/visitas", response_model=List[ReponedorVisitItem])
async def list_my_visits(
    db: Session = Depends(get_db),
    current_user: dict = Depends(get_current_user)
):
    """Visitas del usuario autenticado, fecha y hora ascendentes"""
    results = db.query(ScheduledVisit, Location).join(
        Location, ScheduledVisit.location_id == Location.id
    ).filter(
        ScheduledVisit.reponedor_id == current_user["user_id"]
    ).order_by(
        ScheduledVisit.visit_date.asc(),
        ScheduledVisit.visit_time.asc()
    ).all()

    return [
        ReponedorVisitItem(
            id=visit.id,
            visit_date=visit.visit_date,
            visit_time=visit.visit_time,
            state=visit.state,
            started_at=visit.started_at,
            finished_at=visit.finished_at,
            start_photo=visit.start_photo,
            end_photo=visit.end_photo,
            product_photos=visit.product_photos,
            geolocation=visit.geolocation,
            location_name=location.company_name,
            address=location.address,
            commune=location.commune
        )
        for visit, location in results
    ]


@router.post("/reponedor/visitas/{visit_id}/start", response_model=VisitStartResponse)
async def start_visit(
    visit_id: int,
    request: Request,
    start_photo: Optional[UploadFile] = File(None),
    lat: Optional[str] = Form(None),
    lng: Optional[str] = Form(None),
    db: Session = Depends(get_db),
    uploads: UploadStore = Depends(get_upload_store),
    current_user: dict = Depends(get_current_user)
):
    """Iniciar visita con foto de llegada y geolocalización"""
    if not start_photo:
        raise ValidationError("Se requiere la foto de inicio")
    geolocation = parse_coordinates(lat, lng)

    user_id = current_user["user_id"]
    visit = get_own_visit(db, visit_id, user_id)

    with uploads.batch(UPLOAD_FOLDER) as batch:
        filename = await batch.add(start_photo, user_id)
        visit.state = "EN_PROGRESO"
        visit.start_photo = filename
        visit.started_at = datetime.now(timezone.utc)
        visit.geolocation = geolocation
        mark_today(db, visit.id, "EN_PROGRESO")
        db.commit()

    logger.info(f"Visita {visit_id} iniciada por {user_id} en {geolocation}")
    return VisitStartResponse(
        message="Visita iniciada correctamente",
        start_photo=public_url(request, UPLOAD_FOLDER, filename)
    )


@router.post("/reponedor/visitas/{visit_id}/end", response_model=MessageResponse)
async def finish_visit(
    visit_id: int,
    product_photos: Optional[List[UploadFile]] = File(None),
    end_photo: Optional[str] = Form(None),
    observations: Optional[str] = Form(None),
    db: Session = Depends(get_db),
    uploads: UploadStore = Depends(get_upload_store),
    current_user: dict = Depends(get_current_user)
):
    """Finalizar visita con fotos de productos y foto final"""
    if not product_photos:
        raise ValidationError("Debe subir fotos de productos")
    if not end_photo:
        raise ValidationError("Debe subir la foto final de la visita")

    user_id = current_user["user_id"]
    visit = get_own_visit(db, visit_id, user_id)

    with uploads.batch(UPLOAD_FOLDER) as batch:
        filenames = [await batch.add(photo, user_id) for photo in product_photos]
        visit.product_photos = ",".join(filenames)
        visit.end_photo = end_photo
        visit.observations = observations or None
        visit.state = "FINALIZADA"
        visit.finished_at = datetime.now(timezone.utc)
        mark_today(db, visit.id, "FINALIZADA")
        db.commit()

    logger.info(f"Visita {visit_id} finalizada por {user_id} con {len(filenames)} fotos")
    return MessageResponse(message="Visita finalizada correctamente")
