# gastos/infrastructure/persistence/invoice_repository_adapter.py
from typing import List, Optional

from gastos.domain.models.enums import InvoiceStatus
from gastos.domain.ports.invoice_repository import InvoiceRepository
from .models import Invoice, InvoiceField
from .repository_adapter import SqlAlchemyRepository


class SqlAlchemyInvoiceRepository(SqlAlchemyRepository, InvoiceRepository):

    def find_field_by_invoice_id(self, invoice_id: int) -> Optional[InvoiceField]:
        return self.db.query(InvoiceField).filter(InvoiceField.invoice_id == invoice_id).first()

    def list_invoices(
        self,
        card_id: Optional[int] = None,
        status: Optional[InvoiceStatus] = None,
        user_id: Optional[int] = None,
        company_id: Optional[int] = None,
        country_id: Optional[int] = None,
    ) -> List[Invoice]:
        query = self.db.query(Invoice)
        if card_id is not None:
            query = query.filter(Invoice.card_id == card_id)
        if status is not None:
            query = query.filter(Invoice.status == status)
        if user_id is not None:
            query = query.filter(Invoice.user_id == user_id)
        if company_id is not None:
            query = query.filter(Invoice.company_id == company_id)
        if country_id is not None:
            query = query.filter(Invoice.country_id == country_id)
        return query.order_by(Invoice.created_at.desc(), Invoice.id.desc()).all()
