# gastos/domain/ports/expense_repository.py
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Dict, List


class ExpenseRepository(ABC):
    """Consultas y actualizaciones que necesita la vista de gastos por tarjeta."""

    @abstractmethod
    def card_exists(self, card_id: int) -> bool:
        pass

    @abstractmethod
    def find_expense_rows(self, card_id: int) -> List[Dict[str, Any]]:
        """
        Facturas de la tarjeta unidas con sus campos (y nombres de categoría y
        centro de costo si existen), ordenadas por fecha de factura descendente.
        Cada fila es un dict con las claves del modelo Expense (sin `icon`).
        """
        pass

    @abstractmethod
    def mark_processed_if_draft(self, invoice_ids: List[int], now: datetime) -> int:
        """
        Pasa a PROCESSED sólo las facturas de la lista que siguen en DRAFT.
        Retorna cuántas filas cambiaron realmente.
        """
        pass

    @abstractmethod
    def commit(self) -> None:
        pass

    @abstractmethod
    def rollback(self) -> None:
        pass
