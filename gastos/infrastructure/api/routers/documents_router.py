# gastos/infrastructure/api/routers/documents_router.py
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile
from fastapi.responses import Response

from gastos.application.use_cases.upload_document import UploadDocumentUseCase
from gastos.domain.models.document import DocumentUploadResult
from gastos.infrastructure.api.dependencies import get_document_archive, get_upload_use_case

router = APIRouter(prefix="/api/documents", tags=["Documentos"])


@router.post("/upload", response_model=DocumentUploadResult, status_code=201)
def upload_document(
    file: UploadFile = File(..., description="Imagen a archivar"),
    destination_path: str = Form(..., alias="destinationPath", description="Carpeta destino, ej: /okm:root/facturas"),
    file_name: Optional[str] = Form(None, alias="fileName"),
    use_case: UploadDocumentUseCase = Depends(get_upload_use_case),
):
    content = file.file.read()
    return use_case.upload(
        content=content,
        file_name=file_name or file.filename,
        destination_path=destination_path,
        mime_type=file.content_type,
    )


@router.get("/download")
def download_document(
    path: str = Query(..., description="Ruta completa del documento"),
    use_case: UploadDocumentUseCase = Depends(get_upload_use_case),
):
    document = use_case.download(path)
    file_name = path.rsplit("/", 1)[-1]
    return Response(
        content=document.content,
        media_type=document.content_type,
        headers={"Content-Disposition": f'inline; filename="{file_name}"'},
    )


@router.get("/health")
def archive_health(archive=Depends(get_document_archive)):
    available = archive.is_available()
    return {"status": "UP" if available else "DOWN", "service": "OpenKM", "configured": available}
