# gastos/infrastructure/api/dependencies.py
from functools import lru_cache

from fastapi import Depends
from sqlalchemy.orm import Session

from config import ArchiveSettings, LlmSettings, OcrSettings
from gastos.application.use_cases.analyze_invoice_document import AnalyzeInvoiceDocumentUseCase
from gastos.application.use_cases.card_expenses import CardExpensesUseCase
from gastos.application.use_cases.cards import CardUseCase
from gastos.application.use_cases.catalog import CatalogUseCase
from gastos.application.use_cases.complete_invoice import CompleteInvoiceUseCase
from gastos.application.use_cases.invoices import InvoiceFieldUseCase, InvoiceUseCase
from gastos.application.use_cases.upload_document import UploadDocumentUseCase
from gastos.domain.ports.document_archive import DocumentArchive
from gastos.domain.ports.field_extractor import FieldExtractor
from gastos.domain.ports.text_extractor import TextExtractor
from gastos.infrastructure.external.azure_ocr_adapter import AzureOcrAdapter
from gastos.infrastructure.external.llama_extraction_adapter import LlamaExtractionAdapter
from gastos.infrastructure.external.openkm_adapter import OpenKMAdapter
from gastos.infrastructure.persistence.database import get_db
from gastos.infrastructure.persistence.expense_repository_adapter import SqlAlchemyExpenseRepository
from gastos.infrastructure.persistence.invoice_repository_adapter import SqlAlchemyInvoiceRepository
from gastos.infrastructure.persistence.repository_adapter import SqlAlchemyRepository


# --- Adaptadores externos: una instancia por proceso ---
@lru_cache()
def get_text_extractor() -> TextExtractor:
    return AzureOcrAdapter(OcrSettings.from_env())


@lru_cache()
def get_field_extractor() -> FieldExtractor:
    return LlamaExtractionAdapter(LlmSettings.from_env())


@lru_cache()
def get_document_archive() -> DocumentArchive:
    return OpenKMAdapter(ArchiveSettings.from_env())


# --- Casos de uso: uno por request ---
def get_analyze_use_case(
    text_extractor: TextExtractor = Depends(get_text_extractor),
    field_extractor: FieldExtractor = Depends(get_field_extractor),
) -> AnalyzeInvoiceDocumentUseCase:
    return AnalyzeInvoiceDocumentUseCase(text_extractor, field_extractor)


def get_upload_use_case(archive: DocumentArchive = Depends(get_document_archive)) -> UploadDocumentUseCase:
    return UploadDocumentUseCase(archive)


def get_card_expenses_use_case(db: Session = Depends(get_db)) -> CardExpensesUseCase:
    return CardExpensesUseCase(SqlAlchemyExpenseRepository(db))


def get_card_use_case(db: Session = Depends(get_db)) -> CardUseCase:
    return CardUseCase(SqlAlchemyRepository(db))


def get_catalog_use_case(db: Session = Depends(get_db)) -> CatalogUseCase:
    return CatalogUseCase(SqlAlchemyRepository(db))


def get_invoice_use_case(db: Session = Depends(get_db)) -> InvoiceUseCase:
    return InvoiceUseCase(SqlAlchemyInvoiceRepository(db))


def get_invoice_field_use_case(db: Session = Depends(get_db)) -> InvoiceFieldUseCase:
    return InvoiceFieldUseCase(SqlAlchemyInvoiceRepository(db))


def get_complete_invoice_use_case(db: Session = Depends(get_db)) -> CompleteInvoiceUseCase:
    return CompleteInvoiceUseCase(SqlAlchemyInvoiceRepository(db))
