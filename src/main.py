"""
Reponedores API - Servicio de visitas de reposición
FastAPI Application
"""
import logging
import time
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Depends, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import settings
from .models import get_db
from .schemas import HealthResponse

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"[STARTUP] {settings.APP_NAME} v{settings.APP_VERSION} iniciado")
    logger.info(f"[INFO] Documentación disponible en: http://{settings.SERVICE_HOST}:{settings.SERVICE_PORT}/docs")
    logger.info(f"[INFO] Endpoints en: {settings.API_PREFIX}")
    logger.info(f"[INFO] Archivos subidos en: {Path(settings.UPLOAD_DIR).resolve()}")

    yield

    logger.info(f"[SHUTDOWN] {settings.APP_NAME} detenido")


# Crear aplicación FastAPI
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="""
    Servicio de gestión de visitas de reposición a locales.

    ## Funcionalidades

    * **Usuarios**: Login con token de 8 horas, administración de cuentas y roles
    * **Locales**: Registro de salas de venta
    * **Supervisor**: Agenda semanal de visitas, resumen L..D por local, tareas
    * **Reponedor**: Perfil con credencial QR, inicio y cierre de visitas con fotos y geolocalización
    * **Contactos**: Formulario público de contacto
    """,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan
)

# Configurar CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["Content-Type", "Authorization"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start_time = time.time()

    response = await call_next(request)

    process_time = time.time() - start_time
    logger.info(
        f"{request.method} {request.url.path} - "
        f"Status: {response.status_code} - "
        f"Time: {process_time:.4f}s"
    )
    return response


# ============================================================================
# MANEJO DE ERRORES
# ============================================================================

@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Errores HTTP como {"error": mensaje}"""
    detail = exc.detail
    if exc.status_code == status.HTTP_404_NOT_FOUND and detail == "Not Found":
        detail = "Ruta no encontrada"
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": detail},
        headers=getattr(exc, "headers", None)
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Errores de validación por campo como {"errores": [{campo, mensaje}]}"""
    errores = []
    for error in exc.errors():
        location = [str(part) for part in error.get("loc", ())]
        if location and location[0] in ("body", "query", "path", "header", "form"):
            location = location[1:]
        message = error.get("msg", "Dato inválido")
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        errores.append({"campo": ".".join(location), "mensaje": message})

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"errores": errores}
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Error no controlado en {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Error interno del servidor"}
    )


# Importar y configurar routers después de crear la app para evitar imports circulares
from .routers import (
    auth_router,
    users_router,
    locations_router,
    contacts_router,
    reponedor_router,
    supervisor_router
)

# Incluir routers
app.include_router(auth_router, prefix=settings.API_PREFIX, tags=["auth"])
app.include_router(users_router, prefix=settings.API_PREFIX, tags=["usuarios"])
app.include_router(locations_router, prefix=settings.API_PREFIX, tags=["locales"])
app.include_router(contacts_router, prefix=settings.API_PREFIX, tags=["contactos"])
app.include_router(reponedor_router, prefix=settings.API_PREFIX, tags=["reponedor"])
app.include_router(supervisor_router, prefix=settings.API_PREFIX, tags=["supervisor"])

# Archivos subidos
Path(settings.UPLOAD_DIR).mkdir(parents=True, exist_ok=True)
app.mount("/uploads", StaticFiles(directory=settings.UPLOAD_DIR), name="uploads")


@app.get("/", include_in_schema=False)
async def root():
    """Redireccionar a la documentación"""
    return RedirectResponse(url="/docs")


@app.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check(db: Session = Depends(get_db)):
    """Health check con verificación de base de datos"""
    try:
        db.execute(text("SELECT 1"))
        db_status = "connected"
    except SQLAlchemyError:
        logger.warning("Health check sin conexión a la base de datos")
        db_status = "disconnected"

    return HealthResponse(
        status="healthy" if db_status == "connected" else "unhealthy",
        service=settings.APP_NAME,
        version=settings.APP_VERSION,
        database=db_status
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "src.main:app",
        host=settings.SERVICE_HOST,
        port=settings.SERVICE_PORT,
        reload=settings.DEBUG
    )
