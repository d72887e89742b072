# gastos/domain/models/document.py
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ArchivedDocument(BaseModel):
    """Metadatos que devuelve el archivo documental al crear un documento."""
    uuid: Optional[str] = None
    path: Optional[str] = None
    author: Optional[str] = None
    mime_type: Optional[str] = None
    size: Optional[int] = None
    created: Optional[datetime] = None
    checksum: Optional[str] = None
    locked: bool = False
    convertible_to_pdf: bool = False

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class DownloadedDocument(BaseModel):
    content: bytes
    content_type: str = "application/octet-stream"


class DocumentUploadResult(BaseModel):
    document_id: Optional[str] = None
    file_name: str
    path: Optional[str] = None
    size: int
    mime_type: Optional[str] = None
    upload_date: datetime
    message: str
    success: bool = True

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
