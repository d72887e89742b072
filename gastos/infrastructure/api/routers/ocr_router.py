# gastos/infrastructure/api/routers/ocr_router.py
import logging

from fastapi import APIRouter, Depends, Request
from starlette.concurrency import run_in_threadpool

from gastos.application.use_cases.analyze_invoice_document import AnalyzeInvoiceDocumentUseCase
from gastos.domain.models.extraction import OcrAnalysis, ServiceStatus
from gastos.infrastructure.api.dependencies import get_analyze_use_case

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["OCR"])


@router.post("/ocr", response_model=OcrAnalysis, summary="Analizar una factura (imagen o PDF)")
async def analyze_invoice(
    request: Request,
    use_case: AnalyzeInvoiceDocumentUseCase = Depends(get_analyze_use_case),
):
    """
    Recibe el archivo como cuerpo binario; el Content-Type indica el formato.
    El OCR y la llamada al LLM son bloqueantes, por eso corren en el threadpool.
    """
    document = await request.body()
    content_type = request.headers.get("content-type")
    logger.info(f"Recibida petición OCR. Content-Type: {content_type}, tamaño: {len(document)} bytes")
    return await run_in_threadpool(use_case.execute, document, content_type)


@router.get("/status", response_model=ServiceStatus, summary="Estado de los servicios OCR y de IA")
def service_status(use_case: AnalyzeInvoiceDocumentUseCase = Depends(get_analyze_use_case)):
    return use_case.status()
