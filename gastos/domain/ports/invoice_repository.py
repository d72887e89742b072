# gastos/domain/ports/invoice_repository.py
from abc import abstractmethod
from typing import List, Optional

from gastos.domain.models.enums import InvoiceStatus
from gastos.domain.ports.repository import Repository
from gastos.infrastructure.persistence.models import Invoice, InvoiceField


class InvoiceRepository(Repository):
    """Repositorio de facturas y de sus campos (relación 1:1)."""

    @abstractmethod
    def find_field_by_invoice_id(self, invoice_id: int) -> Optional[InvoiceField]:
        pass

    @abstractmethod
    def list_invoices(
        self,
        card_id: Optional[int] = None,
        status: Optional[InvoiceStatus] = None,
        user_id: Optional[int] = None,
        company_id: Optional[int] = None,
        country_id: Optional[int] = None,
    ) -> List[Invoice]:
        """Facturas que cumplen todos los filtros dados, de la más reciente a la más antigua."""
        pass
