"""
Almacenamiento local de fotos subidas por los reponedores
Las fotos se escriben primero con nombre temporal y solo se publican
cuando la operación completa termina sin errores
"""
import logging
import os
import time
from contextlib import contextmanager
from pathlib import Path
from typing import List, Tuple

from fastapi import Depends, Request, UploadFile

from ..config import Settings, get_settings
from .errors import ValidationError

logger = logging.getLogger(__name__)

CONTENT_TYPE_EXTENSIONS = {
    "image/jpeg": ".jpg",
    "image/jpg": ".jpg",
    "image/png": ".png",
    "image/webp": ".webp",
}


class UploadBatch:
    """Conjunto de archivos subidos en una misma operación"""

    def __init__(self, directory: Path, max_size: int, allowed_types: List[str]):
        self.directory = directory
        self.max_size = max_size
        self.allowed_types = allowed_types
        self._staged: List[Tuple[Path, Path]] = []

    async def add(self, upload: UploadFile, user_id: int) -> str:
        """
        Valida y escribe una foto con nombre temporal

        Args:
            upload: Archivo recibido en el formulario multipart
            user_id: Usuario dueño de la foto, forma parte del nombre

        Returns:
            str: Nombre final del archivo (foto_<user_id>_<timestamp_ms><ext>)

        Raises:
            ValidationError: Si no es una imagen o supera el tamaño permitido
        """
        if upload.content_type not in self.allowed_types:
            raise ValidationError("El archivo debe ser una imagen válida")

        await upload.seek(0)
        content = await upload.read()
        if len(content) > self.max_size:
            raise ValidationError(
                f"La imagen no debe superar {self.max_size // (1024 * 1024)}MB"
            )

        extension = Path(upload.filename or "").suffix.lower() or \
            CONTENT_TYPE_EXTENSIONS.get(upload.content_type, "")
        stamp = int(time.time() * 1000)
        suffix = f"_{len(self._staged)}" if self._staged else ""
        filename = f"foto_{user_id}_{stamp}{suffix}{extension}"

        final_path = self.directory / filename
        temp_path = self.directory / f".{filename}.part"
        # Registrar antes de escribir para limpiar también escrituras parciales
        self._staged.append((temp_path, final_path))
        temp_path.write_bytes(content)
        return filename

    def commit(self) -> None:
        """Publica los archivos con su nombre final"""
        for temp_path, final_path in self._staged:
            os.replace(temp_path, final_path)
        self._staged = []

    def discard(self) -> None:
        """Elimina todo lo escrito por el lote"""
        for temp_path, final_path in self._staged:
            for path in (temp_path, final_path):
                try:
                    path.unlink()
                except FileNotFoundError:
                    pass
        if self._staged:
            logger.warning(f"Descartados {len(self._staged)} archivos subidos en {self.directory}")
        self._staged = []


class UploadStore:
    """Directorio raíz de subidas con una carpeta por rol"""

    def __init__(self, base_dir: str, max_size: int, allowed_types: List[str]):
        self.base_dir = Path(base_dir)
        self.max_size = max_size
        self.allowed_types = allowed_types

    def directory(self, folder: str) -> Path:
        path = self.base_dir / folder
        path.mkdir(parents=True, exist_ok=True)
        return path

    @contextmanager
    def batch(self, folder: str):
        """
        Abre un lote de subidas en la carpeta indicada

        Si el bloque termina con una excepción se borran todos los archivos
        del lote, si termina bien se publican con su nombre final
        """
        batch = UploadBatch(self.directory(folder), self.max_size, self.allowed_types)
        try:
            yield batch
        except BaseException:
            batch.discard()
            raise
        try:
            batch.commit()
        except OSError:
            batch.discard()
            raise


def public_url(request: Request, folder: str, filename: str) -> str:
    """URL absoluta con la que se sirve un archivo subido"""
    return f"{str(request.base_url).rstrip('/')}/uploads/{folder}/{filename}"


def get_upload_store(settings: Settings = Depends(get_settings)) -> UploadStore:
    """Dependency con el almacenamiento de subidas configurado"""
    return UploadStore(
        settings.UPLOAD_DIR,
        settings.MAX_IMAGE_SIZE,
        settings.ALLOWED_IMAGE_TYPES
    )
