# gastos/application/use_cases/upload_document.py
import logging
from datetime import datetime
from typing import Optional

from gastos.domain.errors import ValidationError
from gastos.domain.models.document import DocumentUploadResult, DownloadedDocument
from gastos.domain.ports.document_archive import DocumentArchive

logger = logging.getLogger(__name__)

VALID_IMAGE_MIME_TYPES = {"image/jpeg", "image/png", "image/gif", "image/bmp", "image/webp"}
MAX_FILE_SIZE = 50 * 1024 * 1024


def build_full_path(destination_path: str, file_name: str) -> str:
    """Ej: ("okm:root/facturas", "a.jpg") -> "/okm:root/facturas/a.jpg"."""
    path = destination_path if destination_path.startswith("/") else "/" + destination_path
    path = path if path.endswith("/") else path + "/"
    return path + file_name


class UploadDocumentUseCase:
    def __init__(self, archive: DocumentArchive):
        self.archive = archive

    def _validate(self, content: Optional[bytes], mime_type: Optional[str]) -> None:
        if not content:
            raise ValidationError("Los datos de la imagen están vacíos")
        if len(content) > MAX_FILE_SIZE:
            raise ValidationError(
                f"El tamaño de la imagen excede el límite permitido de {MAX_FILE_SIZE // (1024 * 1024)} MB"
            )
        if mime_type and mime_type.lower() not in VALID_IMAGE_MIME_TYPES:
            raise ValidationError("Tipo de imagen no válido. Formatos permitidos: JPEG, PNG, GIF, BMP, WEBP")

    def upload(
        self,
        content: Optional[bytes],
        file_name: str,
        destination_path: str,
        mime_type: Optional[str],
    ) -> DocumentUploadResult:
        self._validate(content, mime_type)
        if not file_name or not destination_path:
            raise ValidationError("fileName y destinationPath son obligatorios")

        full_path = build_full_path(destination_path, file_name)
        logger.info(f"Iniciando subida de imagen. Ruta: {full_path}, {len(content)} bytes, {mime_type}")
        document = self.archive.upload(full_path, content, mime_type or "application/octet-stream")

        return DocumentUploadResult(
            document_id=document.uuid,
            file_name=file_name,
            path=document.path,
            size=document.size if document.size is not None else len(content),
            mime_type=document.mime_type,
            upload_date=document.created or datetime.now(),
            message="Imagen subida exitosamente",
        )

    def download(self, doc_path: str) -> DownloadedDocument:
        if not doc_path or not doc_path.strip():
            raise ValidationError("El parámetro path es requerido")
        return self.archive.download(doc_path)
