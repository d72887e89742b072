# gastos/domain/ports/field_extractor.py
from abc import ABC, abstractmethod

from gastos.domain.models.extraction import ParseOutcome


class FieldExtractor(ABC):
    """Puerto para la extracción de campos estructurados a partir del texto OCR."""

    @abstractmethod
    def extract_fields(self, ocr_text: str) -> ParseOutcome:
        """
        Devuelve Parsed con los cuatro campos, o Fallback si la respuesta
        no pudo interpretarse. Lanza ExtractionError si el texto está vacío
        o si se agotan los reintentos.
        """
        pass

    @abstractmethod
    def is_available(self) -> bool:
        pass

    @property
    @abstractmethod
    def extraction_method(self) -> str:
        """Etiqueta del método de extracción, p. ej. "AI"."""
        pass
