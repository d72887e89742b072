# gastos/infrastructure/api/routers/cards_router.py
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from gastos.application.use_cases.card_expenses import CardExpensesUseCase
from gastos.application.use_cases.cards import CardUseCase
from gastos.domain.models.card import CardCreate, CardOut, CardUpdate
from gastos.domain.models.enums import CardStatus, CardType
from gastos.domain.models.expense import ExpenseGroup
from gastos.infrastructure.api.dependencies import get_card_expenses_use_case, get_card_use_case

router = APIRouter(prefix="/api/cards", tags=["Tarjetas"])


@router.get("", response_model=List[CardOut])
def list_cards(use_case: CardUseCase = Depends(get_card_use_case)):
    return use_case.list_cards()


@router.get("/active", response_model=List[CardOut])
def list_active_cards(use_case: CardUseCase = Depends(get_card_use_case)):
    return use_case.list_cards(active_only=True)


@router.get("/user/{user_id}", response_model=List[CardOut])
def list_cards_by_user(user_id: int, use_case: CardUseCase = Depends(get_card_use_case)):
    return use_case.list_cards(user_id=user_id)


@router.get("/company/{company_id}", response_model=List[CardOut])
def list_cards_by_company(company_id: int, use_case: CardUseCase = Depends(get_card_use_case)):
    return use_case.list_cards(company_id=company_id)


@router.get("/type/{card_type}", response_model=List[CardOut])
def list_cards_by_type(card_type: CardType, use_case: CardUseCase = Depends(get_card_use_case)):
    return use_case.list_cards(card_type=card_type)


@router.get("/expiring-before/{limit}", response_model=List[CardOut])
def list_cards_expiring_before(limit: date, use_case: CardUseCase = Depends(get_card_use_case)):
    return use_case.expiring_before(limit)


@router.get("/search/holder", response_model=List[CardOut])
def search_cards_by_holder(
    name: Optional[str] = Query(None, description="Texto a buscar en el titular"),
    use_case: CardUseCase = Depends(get_card_use_case),
):
    return use_case.search("holder_name", name)


@router.get("/search/bank", response_model=List[CardOut])
def search_cards_by_bank(
    name: Optional[str] = Query(None, description="Texto a buscar en el banco emisor"),
    use_case: CardUseCase = Depends(get_card_use_case),
):
    return use_case.search("issuer_bank", name)


@router.get("/masked/{masked_number}", response_model=CardOut)
def get_card_by_masked_number(masked_number: str, use_case: CardUseCase = Depends(get_card_use_case)):
    return use_case.get_by_masked_number(masked_number)


@router.get("/{card_id}", response_model=CardOut)
def get_card(card_id: int, use_case: CardUseCase = Depends(get_card_use_case)):
    return use_case.get(card_id)


@router.post("", response_model=CardOut, status_code=201)
def create_card(request: CardCreate, use_case: CardUseCase = Depends(get_card_use_case)):
    return use_case.create(request)


@router.put("/{card_id}", response_model=CardOut)
def update_card(card_id: int, request: CardUpdate, use_case: CardUseCase = Depends(get_card_use_case)):
    return use_case.update(card_id, request)


@router.patch("/{card_id}/status/{status}", response_model=CardOut)
def change_card_status(card_id: int, status: CardStatus, use_case: CardUseCase = Depends(get_card_use_case)):
    return use_case.change_status(card_id, status)


STATUS_SHORTCUTS = {
    "block": CardStatus.BLOCKED,
    "unblock": CardStatus.ACTIVE,
    "suspend": CardStatus.SUSPENDED,
    "cancel": CardStatus.CANCELLED,
    "expire": CardStatus.EXPIRED,
}


def _register_shortcut(action: str, status: CardStatus) -> None:
    def shortcut(card_id: int, use_case: CardUseCase = Depends(get_card_use_case)):
        return use_case.change_status(card_id, status)

    router.add_api_route(
        f"/{{card_id}}/{action}",
        shortcut,
        methods=["PATCH"],
        response_model=CardOut,
        name=f"{action}_card",
    )


for _action, _status in STATUS_SHORTCUTS.items():
    _register_shortcut(_action, _status)


# --- Gastos agrupados por mes ---
@router.get("/{card_id}/expenses", response_model=List[ExpenseGroup])
def get_card_expenses(card_id: int, use_case: CardExpensesUseCase = Depends(get_card_expenses_use_case)):
    return use_case.get_card_expenses(card_id)


@router.patch("/{card_id}/expenses/approve")
def approve_expense_group(
    card_id: int,
    month_year: Optional[str] = Query(None, alias="monthYear", description="Ej: 'Diciembre 2024'"),
    use_case: CardExpensesUseCase = Depends(get_card_expenses_use_case),
):
    updated = use_case.approve_expense_group(card_id, month_year)
    return {
        "message": f"Grupo de gastos aprobado correctamente. {updated} factura(s) actualizada(s) de DRAFT a PROCESSED",
        "updatedCount": updated,
    }
