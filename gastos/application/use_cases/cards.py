# gastos/application/use_cases/cards.py
import logging
from datetime import date
from typing import List, Optional

from gastos.domain.errors import NotFoundError, ValidationError
from gastos.domain.models.card import CardCreate, CardOut, CardUpdate, is_valid_card_number, mask_card_number
from gastos.domain.models.enums import CardStatus, CardType
from gastos.domain.ports.repository import Repository
from gastos.infrastructure.persistence.models import Card, Company, User

logger = logging.getLogger(__name__)


class CardUseCase:
    """Alta, consulta y cambios de estado de tarjetas corporativas."""

    def __init__(self, repo: Repository, today=date.today):
        self.repo = repo
        self._today = today

    def _get_card(self, card_id: int) -> Card:
        card = self.repo.find_by_id(Card, card_id)
        if card is None:
            raise NotFoundError(f"Tarjeta no encontrada con ID: {card_id}")
        return card

    def _save(self, card: Card, action: str) -> CardOut:
        try:
            self.repo.commit()
        except Exception:
            logger.error(f"Error al {action}. Iniciando rollback.", exc_info=True)
            self.repo.rollback()
            raise
        self.repo.refresh(card)
        return CardOut.from_entity(card)

    def _check_expiration(self, expiration_date: date) -> None:
        if expiration_date <= self._today():
            raise ValidationError("Fecha de expiración debe ser futura")

    def create(self, request: CardCreate) -> CardOut:
        if not is_valid_card_number(request.card_number):
            raise ValidationError("Número de tarjeta debe tener entre 13-19 dígitos")
        if self.repo.find_one_by(Card, card_number=request.card_number) is not None:
            raise ValidationError("Ya existe una tarjeta con ese número")
        self._check_expiration(request.expiration_date)
        if self.repo.find_by_id(User, request.user_id) is None:
            raise NotFoundError(f"Usuario no encontrado con ID: {request.user_id}")
        if self.repo.find_by_id(Company, request.company_id) is None:
            raise NotFoundError(f"Empresa no encontrada con ID: {request.company_id}")

        card = Card(
            **request.model_dump(),
            masked_card_number=mask_card_number(request.card_number),
            status=CardStatus.ACTIVE,
        )
        self.repo.add(card)
        out = self._save(card, "crear la tarjeta")
        logger.info(f"Tarjeta creada con ID: {card.id} ({card.masked_card_number})")
        return out

    def get(self, card_id: int) -> CardOut:
        return CardOut.from_entity(self._get_card(card_id))

    def get_by_masked_number(self, masked_number: str) -> CardOut:
        card = self.repo.find_one_by(Card, masked_card_number=masked_number)
        if card is None:
            raise NotFoundError(f"Tarjeta no encontrada: {masked_number}")
        return CardOut.from_entity(card)

    def list_cards(
        self,
        user_id: Optional[int] = None,
        company_id: Optional[int] = None,
        card_type: Optional[CardType] = None,
        active_only: bool = False,
    ) -> List[CardOut]:
        filters = {}
        if card_type is not None:
            filters["card_type"] = card_type
        if user_id is not None:
            filters["user_id"] = user_id
        if company_id is not None:
            filters["company_id"] = company_id
        if active_only:
            filters["status"] = CardStatus.ACTIVE
        return [CardOut.from_entity(card) for card in self.repo.list_by(Card, **filters)]

    def expiring_before(self, limit: date) -> List[CardOut]:
        cards = self.repo.list_by(Card)
        return [CardOut.from_entity(card) for card in cards if card.expiration_date < limit]

    def search(self, attr: str, text: Optional[str]) -> List[CardOut]:
        """Búsqueda sin distinguir mayúsculas por titular (holder_name) o banco (issuer_bank)."""
        if text is None or not text.strip():
            raise ValidationError("El parámetro 'name' es obligatorio")
        return [CardOut.from_entity(card) for card in self.repo.search(Card, attr, text.strip())]

    def update(self, card_id: int, request: CardUpdate) -> CardOut:
        card = self._get_card(card_id)
        changes = request.model_dump(exclude_none=True)
        if "expiration_date" in changes:
            self._check_expiration(changes["expiration_date"])

        for attr, value in changes.items():
            setattr(card, attr, value)
        return self._save(card, f"actualizar la tarjeta {card_id}")

    def change_status(self, card_id: int, status: CardStatus) -> CardOut:
        card = self._get_card(card_id)
        card.status = status
        logger.info(f"Tarjeta {card_id} pasó a estado {status.value}")
        return self._save(card, f"cambiar el estado de la tarjeta {card_id}")
