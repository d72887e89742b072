# gastos/domain/models/extraction.py
import time
from dataclasses import dataclass
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

NOT_FOUND = "Not found"


class InvoiceData(BaseModel):
    """
    Los cuatro campos que el LLM extrae del texto OCR. Se mantienen como
    texto tal cual los devuelve el modelo; no se normalizan fechas ni montos.
    """
    vendor_name: str = NOT_FOUND
    invoice_date: str = NOT_FOUND
    total_amount: str = "0"
    currency: str = NOT_FOUND

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


FALLBACK_INVOICE_DATA = InvoiceData(
    vendor_name="Error al procesar",
    invoice_date=NOT_FOUND,
    total_amount="0",
    currency=NOT_FOUND,
)


@dataclass(frozen=True)
class Parsed:
    """El LLM devolvió un objeto JSON utilizable."""
    fields: InvoiceData
    is_fallback = False


@dataclass(frozen=True)
class Fallback:
    """No se pudo interpretar la respuesta; se usan los valores por defecto."""
    fields: InvoiceData
    reason: str
    is_fallback = True


ParseOutcome = Union[Parsed, Fallback]


class OcrAnalysis(BaseModel):
    status: str
    ocr_text: Optional[str] = None
    invoice_data: Optional[InvoiceData] = None
    processing_time_ms: Optional[int] = None
    error_message: Optional[str] = None

    @classmethod
    def success(cls, ocr_text: str, invoice_data: InvoiceData, processing_time_ms: int) -> "OcrAnalysis":
        return cls(
            status="success",
            ocr_text=ocr_text,
            invoice_data=invoice_data,
            processing_time_ms=processing_time_ms,
        )

    @classmethod
    def error(cls, message: str) -> "OcrAnalysis":
        return cls(status="error", error_message=message)


class ServiceStatus(BaseModel):
    status: str
    ocr_service_available: bool
    extraction_service_available: bool
    extraction_method: str
    timestamp: int = Field(default_factory=lambda: int(time.time() * 1000))
