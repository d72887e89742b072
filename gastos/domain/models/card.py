# gastos/domain/models/card.py
import re
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from gastos.domain.models.enums import CardStatus, CardType
from gastos.domain.models.money import Money

CARD_NUMBER_RE = re.compile(r"^[0-9]{13,19}$")

_CAMEL = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


def mask_card_number(card_number: Optional[str]) -> str:
    """
    Oculta todos los dígitos excepto los últimos 4 y agrupa de a 4.
    Ej: "4111111111111111" -> "**** **** **** 1111"
    """
    if card_number is None or len(card_number) < 4:
        return "****"

    masked = "*" * (len(card_number) - 4) + card_number[-4:]
    return " ".join(masked[i:i + 4] for i in range(0, len(masked), 4))


def is_valid_card_number(card_number: Optional[str]) -> bool:
    return bool(card_number) and CARD_NUMBER_RE.match(card_number) is not None


class CardCreate(BaseModel):
    card_number: str
    holder_name: str = Field(..., min_length=1)
    card_type: CardType
    expiration_date: date
    issuer_bank: str = Field(..., min_length=1)
    credit_limit: Optional[Decimal] = Field(None, gt=0)
    description: Optional[str] = Field(None, max_length=255)
    user_id: int = Field(..., gt=0)
    company_id: int = Field(..., gt=0)

    model_config = _CAMEL


class CardUpdate(BaseModel):
    holder_name: Optional[str] = None
    card_type: Optional[CardType] = None
    expiration_date: Optional[date] = None
    issuer_bank: Optional[str] = None
    credit_limit: Optional[Decimal] = Field(None, gt=0)
    status: Optional[CardStatus] = None
    description: Optional[str] = Field(None, max_length=255)

    model_config = _CAMEL


class CardOut(BaseModel):
    """Vista pública de la tarjeta: nunca expone el número completo."""
    id: int
    masked_card_number: str
    holder_name: str
    card_type: CardType
    expiration_date: date
    issuer_bank: str
    credit_limit: Optional[Money] = None
    status: CardStatus
    description: Optional[str] = None
    user_id: int
    user_name: Optional[str] = None
    company_id: int
    company_name: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = _CAMEL

    @classmethod
    def from_entity(cls, card) -> "CardOut":
        return cls(
            id=card.id,
            masked_card_number=card.masked_card_number,
            holder_name=card.holder_name,
            card_type=card.card_type,
            expiration_date=card.expiration_date,
            issuer_bank=card.issuer_bank,
            credit_limit=card.credit_limit,
            status=card.status,
            description=card.description,
            user_id=card.user_id,
            user_name=card.user.name if card.user else None,
            company_id=card.company_id,
            company_name=card.company.name if card.company else None,
            created_at=card.created_at,
            updated_at=card.updated_at,
        )
