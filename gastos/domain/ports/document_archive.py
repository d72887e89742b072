# gastos/domain/ports/document_archive.py
from abc import ABC, abstractmethod

from gastos.domain.models.document import ArchivedDocument, DownloadedDocument


class DocumentArchive(ABC):
    """Puerto para el archivo documental donde se guardan los originales."""

    @abstractmethod
    def upload(self, doc_path: str, content: bytes, mime_type: str) -> ArchivedDocument:
        """Crea el documento en `doc_path` (ruta completa, con nombre de archivo)."""
        pass

    @abstractmethod
    def download(self, doc_path: str) -> DownloadedDocument:
        """Lanza NotFoundError si el documento no existe."""
        pass

    @abstractmethod
    def is_available(self) -> bool:
        pass
