# gastos/application/use_cases/invoices.py
import logging
from typing import List, Optional

from gastos.domain.errors import NotFoundError, ValidationError
from gastos.domain.models.enums import InvoiceStatus
from gastos.domain.models.invoice import (
    InvoiceCreate,
    InvoiceFieldCreate,
    InvoiceFieldOut,
    InvoiceFieldUpdate,
    InvoiceOut,
    InvoiceUpdate,
)
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


class InvoiceUseCase:
    """Operaciones CRUD y cambios de estado de facturas."""

    def __init__(self, invoice_repo: InvoiceRepository):
        self.invoice_repo = invoice_repo

    def _require(self, model, entity_id: int, label: str):
        entity = self.invoice_repo.find_by_id(model, entity_id)
        if entity is None:
            raise NotFoundError(f"{label} no encontrado con ID: {entity_id}")
        return entity

    def _commit(self, action: str) -> None:
        try:
            self.invoice_repo.commit()
        except Exception:
            logger.error(f"Error al {action}. Iniciando rollback.", exc_info=True)
            self.invoice_repo.rollback()
            raise

    def create(self, request: InvoiceCreate) -> InvoiceOut:
        self._require(User, request.user_id, "Usuario")
        self._require(Company, request.company_id, "Empresa")
        self._require(Country, request.country_id, "País")
        if request.card_id is not None:
            self._require(Card, request.card_id, "Tarjeta")

        invoice = Invoice(**request.model_dump(), status=InvoiceStatus.DRAFT)
        self.invoice_repo.add(invoice)
        self._commit("crear la factura")
        self.invoice_repo.refresh(invoice)
        logger.info(f"Factura creada con ID: {invoice.id}")
        return InvoiceOut.from_entity(invoice)

    def get(self, invoice_id: int) -> InvoiceOut:
        return InvoiceOut.from_entity(self._require(Invoice, invoice_id, "Factura"))

    def list_invoices(
        self,
        card_id: Optional[int] = None,
        status: Optional[InvoiceStatus] = None,
        user_id: Optional[int] = None,
        company_id: Optional[int] = None,
        country_id: Optional[int] = None,
    ) -> List[InvoiceOut]:
        invoices = self.invoice_repo.list_invoices(
            card_id=card_id, status=status, user_id=user_id, company_id=company_id, country_id=country_id,
        )
        return [InvoiceOut.from_entity(invoice) for invoice in invoices]

    def update(self, invoice_id: int, request: InvoiceUpdate) -> InvoiceOut:
        invoice = self._require(Invoice, invoice_id, "Factura")
        changes = request.model_dump(exclude_none=True)
        if "card_id" in changes:
            self._require(Card, changes["card_id"], "Tarjeta")
        if "country_id" in changes:
            self._require(Country, changes["country_id"], "País")

        for attr, value in changes.items():
            setattr(invoice, attr, value)
        self._commit(f"actualizar la factura {invoice_id}")
        self.invoice_repo.refresh(invoice)
        return InvoiceOut.from_entity(invoice)

    def change_status(self, invoice_id: int, status: InvoiceStatus) -> InvoiceOut:
        invoice = self._require(Invoice, invoice_id, "Factura")
        invoice.status = status
        self._commit(f"cambiar el estado de la factura {invoice_id}")
        self.invoice_repo.refresh(invoice)
        logger.info(f"Factura {invoice_id} pasó a estado {status.value}")
        return InvoiceOut.from_entity(invoice)

    def delete(self, invoice_id: int) -> None:
        invoice = self._require(Invoice, invoice_id, "Factura")
        field = self.invoice_repo.find_field_by_invoice_id(invoice_id)
        if field is not None:
            self.invoice_repo.delete(field)
        self.invoice_repo.delete(invoice)
        self._commit(f"eliminar la factura {invoice_id}")


class InvoiceFieldUseCase:
    def __init__(self, invoice_repo: InvoiceRepository):
        self.invoice_repo = invoice_repo

    def _get_field(self, field_id: int) -> InvoiceField:
        field = self.invoice_repo.find_by_id(InvoiceField, field_id)
        if field is None:
            raise NotFoundError(f"Campos de factura no encontrados con ID: {field_id}")
        return field

    def _check_references(self, category_id: Optional[int], cost_center_id: Optional[int]) -> None:
        if category_id is not None and self.invoice_repo.find_by_id(Category, category_id) is None:
            raise NotFoundError(f"Categoría no encontrada con ID: {category_id}")
        if cost_center_id is not None and self.invoice_repo.find_by_id(CostCenter, cost_center_id) is None:
            raise NotFoundError(f"Centro de costo no encontrado con ID: {cost_center_id}")

    def _commit(self, action: str) -> None:
        try:
            self.invoice_repo.commit()
        except Exception:
            logger.error(f"Error al {action}. Iniciando rollback.", exc_info=True)
            self.invoice_repo.rollback()
            raise

    def create(self, request: InvoiceFieldCreate) -> InvoiceFieldOut:
        if self.invoice_repo.find_by_id(Invoice, request.invoice_id) is None:
            raise NotFoundError(f"Factura no encontrada con ID: {request.invoice_id}")
        if self.invoice_repo.find_field_by_invoice_id(request.invoice_id) is not None:
            raise ValidationError(f"La factura {request.invoice_id} ya tiene campos registrados")
        self._check_references(request.category_id, request.cost_center_id)

        field = InvoiceField(**request.model_dump())
        self.invoice_repo.add(field)
        self._commit("crear los campos de factura")
        self.invoice_repo.refresh(field)
        return InvoiceFieldOut.from_entity(field)

    def get(self, field_id: int) -> InvoiceFieldOut:
        return InvoiceFieldOut.from_entity(self._get_field(field_id))

    def get_by_invoice(self, invoice_id: int) -> InvoiceFieldOut:
        field = self.invoice_repo.find_field_by_invoice_id(invoice_id)
        if field is None:
            raise NotFoundError(f"La factura {invoice_id} no tiene campos registrados")
        return InvoiceFieldOut.from_entity(field)

    def list_all(self) -> List[InvoiceFieldOut]:
        return [InvoiceFieldOut.from_entity(field) for field in self.invoice_repo.list_by(InvoiceField)]

    def search_by_vendor(self, vendor_name: Optional[str]) -> List[InvoiceFieldOut]:
        if vendor_name is None or not vendor_name.strip():
            raise ValidationError("Nombre de proveedor es requerido")
        fields = self.invoice_repo.search(InvoiceField, "vendor_name", vendor_name.strip())
        return [InvoiceFieldOut.from_entity(field) for field in fields]

    def update(self, field_id: int, request: InvoiceFieldUpdate) -> InvoiceFieldOut:
        field = self._get_field(field_id)
        changes = request.model_dump(exclude_none=True)
        self._check_references(changes.get("category_id"), changes.get("cost_center_id"))

        for attr, value in changes.items():
            setattr(field, attr, value)
        self._commit(f"actualizar los campos de factura {field_id}")
        self.invoice_repo.refresh(field)
        logger.info(f"Campos de factura {field_id} actualizados: {sorted(changes)}")
        return InvoiceFieldOut.from_entity(field)

    def delete(self, field_id: int) -> None:
        field = self._get_field(field_id)
        self.invoice_repo.delete(field)
        self._commit(f"eliminar los campos de factura {field_id}")
