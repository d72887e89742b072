# gastos/application/use_cases/card_expenses.py
import logging
from collections import OrderedDict
from datetime import datetime
from decimal import Decimal
from functools import cmp_to_key
from typing import List, Optional, Tuple

from gastos.domain.errors import NotFoundError, ValidationError
from gastos.domain.models.enums import InvoiceStatus
from gastos.domain.models.expense import GROUP_APPROVED, GROUP_PENDING, Expense, ExpenseGroup
from gastos.domain.ports.expense_repository import ExpenseRepository

logger = logging.getLogger(__name__)

SPANISH_MONTHS = (
    "Enero", "Febrero", "Marzo", "Abril", "Mayo", "Junio",
    "Julio", "Agosto", "Septiembre", "Octubre", "Noviembre", "Diciembre",
)
MONTH_NUMBERS = {name: number for number, name in enumerate(SPANISH_MONTHS, start=1)}


def month_label(value) -> str:
    return f"{SPANISH_MONTHS[value.month - 1]} {value.year}"


def _parse_key(label: str) -> Optional[Tuple[int, int]]:
    parts = label.split(" ")
    if len(parts) != 2 or parts[0] not in MONTH_NUMBERS:
        return None
    try:
        return int(parts[1]), MONTH_NUMBERS[parts[0]]
    except ValueError:
        return None


def _compare_groups(a: ExpenseGroup, b: ExpenseGroup) -> int:
    key_a, key_b = _parse_key(a.month), _parse_key(b.month)
    if key_a is None or key_b is None:
        return 0
    # Descendente: primero año, luego mes
    if key_a == key_b:
        return 0
    return -1 if key_a > key_b else 1


def group_status(expenses: List[Expense]) -> str:
    """El grupo queda APROBADO sólo si todas sus facturas están PROCESSED."""
    if expenses and all(expense.status == InvoiceStatus.PROCESSED for expense in expenses):
        return GROUP_APPROVED
    return GROUP_PENDING


def parse_month_year(label: Optional[str]) -> Tuple[int, int]:
    """Convierte "Diciembre 2024" en (12, 2024). Lanza ValidationError si no es válido."""
    if label is None or not label.strip():
        raise ValidationError("El parámetro monthYear es requerido")

    parts = label.strip().split(" ")
    if len(parts) != 2:
        raise ValidationError(f"Formato de mes inválido: '{label}'. Use el formato 'Mes Año', p. ej. 'Diciembre 2024'")

    month_name, year_text = parts
    try:
        year = int(year_text)
    except ValueError:
        raise ValidationError(f"Año inválido: '{year_text}'") from None

    if month_name not in MONTH_NUMBERS:
        raise ValidationError(f"Mes inválido: '{month_name}'")
    return MONTH_NUMBERS[month_name], year


class CardExpensesUseCase:
    """Agrupa los gastos de una tarjeta por mes y aprueba grupos completos."""

    def __init__(self, expense_repo: ExpenseRepository):
        self.expense_repo = expense_repo

    def _ensure_card(self, card_id: int) -> None:
        if not self.expense_repo.card_exists(card_id):
            raise NotFoundError(f"Tarjeta no encontrada con ID: {card_id}")

    def get_card_expenses(self, card_id: int) -> List[ExpenseGroup]:
        self._ensure_card(card_id)
        expenses = [Expense(**row) for row in self.expense_repo.find_expense_rows(card_id)]

        grouped: "OrderedDict[str, List[Expense]]" = OrderedDict()
        for expense in expenses:
            grouped.setdefault(month_label(expense.invoice_date), []).append(expense)

        groups = [
            ExpenseGroup(
                month=label,
                total=sum((expense.total_amount for expense in items), Decimal("0")),
                count=len(items),
                status=group_status(items),
                expenses=items,
            )
            for label, items in grouped.items()
        ]
        groups.sort(key=cmp_to_key(_compare_groups))

        logger.info(f"Tarjeta {card_id}: {len(expenses)} gastos en {len(groups)} grupos")
        return groups

    def approve_expense_group(self, card_id: int, month_year: Optional[str]) -> int:
        self._ensure_card(card_id)
        month, year = parse_month_year(month_year)

        try:
            invoice_ids = [
                row["id_invoice"]
                for row in self.expense_repo.find_expense_rows(card_id)
                if row["invoice_date"].month == month
                and row["invoice_date"].year == year
                and row["status"] == InvoiceStatus.DRAFT
            ]
            updated = self.expense_repo.mark_processed_if_draft(invoice_ids, datetime.now())
            self.expense_repo.commit()
        except Exception:
            logger.error(f"Error al aprobar gastos de la tarjeta {card_id} para {month_year}. Iniciando rollback.", exc_info=True)
            self.expense_repo.rollback()
            raise

        logger.info(f"Tarjeta {card_id}: {updated} facturas aprobadas para {month_year}")
        return updated
