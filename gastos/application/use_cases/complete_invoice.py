# gastos/application/use_cases/complete_invoice.py
import logging
from typing import Optional

from gastos.domain.errors import NotFoundError
from gastos.domain.models.enums import InvoiceStatus
from gastos.domain.models.invoice import CompleteInvoice, CompleteInvoiceCreate, CompleteInvoiceUpdate
from gastos.domain.ports.invoice_repository import InvoiceRepository
from gastos.infrastructure.persistence.models import (
    Card,
    Category,
    Company,
    CostCenter,
    Country,
    Invoice,
    InvoiceField,
    User,
)

logger = logging.getLogger(__name__)

# Campos de InvoiceField que una actualización completa puede modificar
UPDATABLE_FIELD_ATTRS = (
    "vendor_name",
    "invoice_date",
    "total_amount",
    "currency",
    "concept",
    "category_id",
    "cost_center_id",
    "client_visited",
    "notes",
)


class CompleteInvoiceUseCase:
    """
    Crea y actualiza una factura junto con sus campos en una única transacción:
    o se guardan ambos registros o ninguno.
    """

    def __init__(self, invoice_repo: InvoiceRepository):
        self.invoice_repo = invoice_repo

    def _require(self, model, entity_id: int, label: str):
        entity = self.invoice_repo.find_by_id(model, entity_id)
        if entity is None:
            raise NotFoundError(f"{label} no encontrado con ID: {entity_id}")
        return entity

    def _check_optional(self, model, entity_id: Optional[int], label: str) -> None:
        if entity_id is not None:
            self._require(model, entity_id, label)

    def create_complete(self, request: CompleteInvoiceCreate) -> CompleteInvoice:
        self._require(User, request.user_id, "Usuario")
        self._require(Company, request.company_id, "Empresa")
        self._require(Country, request.country_id, "País")
        self._check_optional(Card, request.card_id, "Tarjeta")
        self._check_optional(Category, request.category_id, "Categoría")
        self._check_optional(CostCenter, request.cost_center_id, "Centro de costo")

        try:
            invoice = Invoice(
                user_id=request.user_id,
                card_id=request.card_id,
                company_id=request.company_id,
                country_id=request.country_id,
                path=request.path,
                file_name=request.file_name,
                status=InvoiceStatus.DRAFT,
            )
            self.invoice_repo.add(invoice)
            self.invoice_repo.flush()

            field = InvoiceField(
                invoice_id=invoice.id,
                vendor_name=request.vendor_name,
                invoice_date=request.invoice_date,
                total_amount=request.total_amount,
                currency=request.currency,
                concept=request.concept,
                category_id=request.category_id,
                cost_center_id=request.cost_center_id,
                client_visited=request.client_visited,
                notes=request.notes,
            )
            self.invoice_repo.add(field)
            self.invoice_repo.commit()
        except Exception:
            logger.error("Error al crear la factura completa. Iniciando rollback.", exc_info=True)
            self.invoice_repo.rollback()
            raise

        self.invoice_repo.refresh(invoice)
        self.invoice_repo.refresh(field)
        logger.info(f"Factura completa creada: invoice={invoice.id}, field={field.id}")
        return CompleteInvoice.from_entities(invoice, field)

    def update_complete(self, request: CompleteInvoiceUpdate) -> Optional[CompleteInvoice]:
        """Retorna None si la factura o sus campos no existen."""
        invoice = self.invoice_repo.find_by_id(Invoice, request.id_invoice)
        field = self.invoice_repo.find_by_id(InvoiceField, request.id)
        if invoice is None or field is None or field.invoice_id != invoice.id:
            logger.warning(f"Factura {request.id_invoice} o campos {request.id} no encontrados")
            return None

        self._check_optional(Country, request.country_id, "País")
        self._check_optional(Category, request.category_id, "Categoría")
        self._check_optional(CostCenter, request.cost_center_id, "Centro de costo")

        try:
            if request.country_id is not None:
                invoice.country_id = request.country_id

            for attr in UPDATABLE_FIELD_ATTRS:
                value = getattr(request, attr)
                if value is not None:
                    setattr(field, attr, value)

            self.invoice_repo.commit()
        except Exception:
            logger.error(f"Error al actualizar la factura completa {request.id_invoice}. Iniciando rollback.", exc_info=True)
            self.invoice_repo.rollback()
            raise

        self.invoice_repo.refresh(invoice)
        self.invoice_repo.refresh(field)
        return CompleteInvoice.from_entities(invoice, field)
