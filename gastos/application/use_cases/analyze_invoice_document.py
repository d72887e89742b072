# gastos/application/use_cases/analyze_invoice_document.py
import logging
import time
from typing import Optional

from gastos.domain.errors import ValidationError
from gastos.domain.models.extraction import OcrAnalysis, ServiceStatus
from gastos.domain.ports.field_extractor import FieldExtractor
from gastos.domain.ports.text_extractor import TextExtractor

logger = logging.getLogger(__name__)

SUPPORTED_CONTENT_TYPES = (
    "image/jpeg",
    "image/png",
    "image/tiff",
    "image/bmp",
    "application/pdf",
)
DEFAULT_CONTENT_TYPE = "image/jpeg"

MAX_FILE_SIZE = 10 * 1024 * 1024
MIN_FILE_SIZE = 1024


class AnalyzeInvoiceDocumentUseCase:
    """
    Orquesta el flujo OCR -> extracción de campos para un documento subido.
    Toda validación ocurre antes de llamar a los proveedores externos.
    """

    def __init__(self, text_extractor: TextExtractor, field_extractor: FieldExtractor):
        self.text_extractor = text_extractor
        self.field_extractor = field_extractor

    def _validate(self, document: Optional[bytes], content_type: Optional[str]) -> None:
        if document is None:
            raise ValidationError("No se recibió archivo")

        if not content_type or not content_type.strip():
            logger.warning(f"Content-Type no especificado, se asume {DEFAULT_CONTENT_TYPE}")
            content_type = DEFAULT_CONTENT_TYPE

        lowered = content_type.lower()
        if not any(supported in lowered for supported in SUPPORTED_CONTENT_TYPES):
            raise ValidationError(
                f"Tipo de archivo no soportado: {content_type}",
                details={"supported": list(SUPPORTED_CONTENT_TYPES)},
            )

        size = len(document)
        if size == 0:
            raise ValidationError("El archivo está vacío")
        if size > MAX_FILE_SIZE:
            raise ValidationError(
                f"El archivo es demasiado grande. Máximo permitido: {MAX_FILE_SIZE // (1024 * 1024)}MB"
            )
        if size < MIN_FILE_SIZE:
            raise ValidationError("El archivo es demasiado pequeño para ser una imagen válida")

    def execute(self, document: Optional[bytes], content_type: Optional[str]) -> OcrAnalysis:
        self._validate(document, content_type)
        logger.info(f"Iniciando procesamiento OCR de archivo de {len(document)} bytes")

        start = time.perf_counter()
        ocr_text = self.text_extractor.extract_text(document)
        outcome = self.field_extractor.extract_fields(ocr_text)
        elapsed_ms = int((time.perf_counter() - start) * 1000)

        logger.info(f"Procesamiento completado en {elapsed_ms}ms")
        return OcrAnalysis.success(
            ocr_text=ocr_text,
            invoice_data=outcome.fields,
            processing_time_ms=elapsed_ms,
        )

    def status(self) -> ServiceStatus:
        ocr_available = self.text_extractor.is_available()
        extraction_available = self.field_extractor.is_available()
        return ServiceStatus(
            status="healthy" if ocr_available and extraction_available else "degraded",
            ocr_service_available=ocr_available,
            extraction_service_available=extraction_available,
            extraction_method=self.field_extractor.extraction_method,
        )
