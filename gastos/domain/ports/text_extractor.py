# gastos/domain/ports/text_extractor.py
from abc import ABC, abstractmethod


class TextExtractor(ABC):
    """Puerto para el motor OCR que convierte una imagen o PDF en texto plano."""

    @abstractmethod
    def extract_text(self, document: bytes) -> str:
        """
        Devuelve el texto reconocido, sin espacios al inicio ni al final.
        Lanza OcrError si el proveedor falla o no encuentra texto.
        """
        pass

    @abstractmethod
    def is_available(self) -> bool:
        """Indica si la configuración del proveedor está completa. No hace llamadas de red."""
        pass
