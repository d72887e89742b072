# gastos/domain/errors.py
from typing import Any, Dict, Optional


class DomainError(Exception):
    """
    Error base del dominio. Cada subclase fija su código y status HTTP;
    la capa API los traduce al sobre JSON de error.
    """
    code = "DOMAIN_ERROR"
    title = "Error de dominio"
    status_code = 400

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.details = details or {}
        super().__init__(message)


class ValidationError(DomainError):
    code = "INVALID_ARGUMENT"
    title = "Argumento inválido"
    status_code = 400


class NotFoundError(DomainError):
    code = "NOT_FOUND"
    title = "Recurso no encontrado"
    status_code = 404


class OcrError(DomainError):
    code = "OCR_ERROR"
    title = "Error en el procesamiento OCR"
    status_code = 500


class ExtractionError(DomainError):
    code = "EXTRACTION_ERROR"
    title = "Error en la extracción de datos de factura"
    status_code = 500


class ArchiveError(DomainError):
    code = "ARCHIVE_ERROR"
    title = "Error en el archivo documental"
    status_code = 500
