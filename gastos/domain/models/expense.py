# gastos/domain/models/expense.py
from datetime import date
from typing import List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from gastos.domain.models.enums import InvoiceStatus
from gastos.domain.models.money import Money

EXPENSE_ICON = "cash"

GROUP_PENDING = "PENDIENTE"
GROUP_APPROVED = "APROBADO"

_CAMEL = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class Expense(BaseModel):
    """Una fila de gasto: factura + sus campos, tal como se lista en la vista de tarjeta."""
    id: int
    id_invoice: int
    vendor_name: Optional[str] = None
    concept: Optional[str] = None
    category: Optional[str] = None
    invoice_date: date
    total_amount: Money
    currency: Optional[str] = None
    category_id: Optional[int] = None
    cost_center_id: Optional[int] = None
    cost_center_name: Optional[str] = None
    client_visited: Optional[str] = None
    notes: Optional[str] = None
    status: InvoiceStatus
    country_id: Optional[int] = None
    path: Optional[str] = None
    file_name: Optional[str] = None
    icon: str = EXPENSE_ICON

    model_config = _CAMEL


class ExpenseGroup(BaseModel):
    month: str
    total: Money
    count: int
    status: str
    expenses: List[Expense]

    model_config = _CAMEL
