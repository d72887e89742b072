# gastos/infrastructure/persistence/expense_repository_adapter.py
from datetime import datetime
from typing import Any, Dict, List

from sqlalchemy import update
from sqlalchemy.orm import Session

from gastos.domain.models.enums import InvoiceStatus
from gastos.domain.ports.expense_repository import ExpenseRepository
from .models import Card, Category, CostCenter, Invoice, InvoiceField


class SqlAlchemyExpenseRepository(ExpenseRepository):
    def __init__(self, db: Session):
        self.db = db

    def card_exists(self, card_id: int) -> bool:
        return self.db.query(Card.id).filter(Card.id == card_id).first() is not None

    def find_expense_rows(self, card_id: int) -> List[Dict[str, Any]]:
        rows = (
            self.db.query(
                InvoiceField.id.label("id"),
                Invoice.id.label("id_invoice"),
                InvoiceField.vendor_name,
                InvoiceField.concept,
                Category.name.label("category"),
                InvoiceField.invoice_date,
                InvoiceField.total_amount,
                InvoiceField.currency,
                InvoiceField.category_id,
                InvoiceField.cost_center_id,
                CostCenter.name.label("cost_center_name"),
                InvoiceField.client_visited,
                InvoiceField.notes,
                Invoice.status,
                Invoice.country_id,
                Invoice.path,
                Invoice.file_name,
            )
            .join(InvoiceField, InvoiceField.invoice_id == Invoice.id)
            .outerjoin(Category, Category.id == InvoiceField.category_id)
            .outerjoin(CostCenter, CostCenter.id == InvoiceField.cost_center_id)
            .filter(Invoice.card_id == card_id)
            .order_by(InvoiceField.invoice_date.desc(), Invoice.id.desc())
            .all()
        )
        return [dict(row._mapping) for row in rows]

    def mark_processed_if_draft(self, invoice_ids: List[int], now: datetime) -> int:
        if not invoice_ids:
            return 0
        # La condición sobre status hace que dos aprobaciones simultáneas
        # no puedan contar la misma factura.
        result = self.db.execute(
            update(Invoice)
            .where(Invoice.id.in_(invoice_ids), Invoice.status == InvoiceStatus.DRAFT)
            .values(status=InvoiceStatus.PROCESSED, updated_at=now)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount or 0

    def commit(self) -> None:
        self.db.commit()

    def rollback(self) -> None:
        self.db.rollback()
