# gastos/domain/models/invoice.py
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from gastos.domain.models.enums import InvoiceStatus
from gastos.domain.models.money import Money

_CAMEL = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


def _name(entity) -> Optional[str]:
    return entity.name if entity is not None else None


# --- Factura ---
class InvoiceCreate(BaseModel):
    user_id: int
    card_id: Optional[int] = None
    company_id: int
    country_id: int
    path: str = Field(..., min_length=1)
    file_name: Optional[str] = None

    model_config = _CAMEL


class InvoiceUpdate(BaseModel):
    card_id: Optional[int] = None
    country_id: Optional[int] = None
    path: Optional[str] = None
    file_name: Optional[str] = None
    status: Optional[InvoiceStatus] = None

    model_config = _CAMEL


class InvoiceOut(BaseModel):
    id: int
    user_id: int
    user_name: Optional[str] = None
    card_id: Optional[int] = None
    card_masked_number: Optional[str] = None
    company_id: int
    company_name: Optional[str] = None
    country_id: int
    country_name: Optional[str] = None
    path: str
    file_name: Optional[str] = None
    status: InvoiceStatus
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = _CAMEL

    @classmethod
    def from_entity(cls, invoice) -> "InvoiceOut":
        return cls(
            id=invoice.id,
            user_id=invoice.user_id,
            user_name=_name(invoice.user),
            card_id=invoice.card_id,
            card_masked_number=invoice.card.masked_card_number if invoice.card else None,
            company_id=invoice.company_id,
            company_name=_name(invoice.company),
            country_id=invoice.country_id,
            country_name=_name(invoice.country),
            path=invoice.path,
            file_name=invoice.file_name,
            status=invoice.status,
            created_at=invoice.created_at,
            updated_at=invoice.updated_at,
        )


# --- Campos de factura ---
class InvoiceFieldCreate(BaseModel):
    invoice_id: int
    vendor_name: str = Field(..., min_length=1)
    invoice_date: date
    total_amount: Decimal = Field(..., ge=0)
    currency: str = Field(..., min_length=3, max_length=3)
    concept: Optional[str] = None
    category_id: Optional[int] = None
    cost_center_id: Optional[int] = None
    client_visited: Optional[str] = None
    notes: Optional[str] = None

    model_config = _CAMEL


class InvoiceFieldUpdate(BaseModel):
    vendor_name: Optional[str] = Field(None, min_length=1)
    invoice_date: Optional[date] = None
    total_amount: Optional[Decimal] = Field(None, ge=0)
    currency: Optional[str] = Field(None, min_length=3, max_length=3)
    concept: Optional[str] = None
    category_id: Optional[int] = None
    cost_center_id: Optional[int] = None
    client_visited: Optional[str] = None
    notes: Optional[str] = None

    model_config = _CAMEL


class InvoiceFieldOut(BaseModel):
    id: int
    invoice_id: int
    vendor_name: str
    invoice_date: date
    total_amount: Money
    currency: str
    concept: Optional[str] = None
    category_id: Optional[int] = None
    category_name: Optional[str] = None
    cost_center_id: Optional[int] = None
    cost_center_name: Optional[str] = None
    client_visited: Optional[str] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = _CAMEL

    @classmethod
    def from_entity(cls, field) -> "InvoiceFieldOut":
        return cls(
            id=field.id,
            invoice_id=field.invoice_id,
            vendor_name=field.vendor_name,
            invoice_date=field.invoice_date,
            total_amount=field.total_amount,
            currency=field.currency,
            concept=field.concept,
            category_id=field.category_id,
            category_name=_name(field.category),
            cost_center_id=field.cost_center_id,
            cost_center_name=_name(field.cost_center),
            client_visited=field.client_visited,
            notes=field.notes,
            created_at=field.created_at,
            updated_at=field.updated_at,
        )


# --- Factura completa (Invoice + InvoiceField en una sola operación) ---
class CompleteInvoiceCreate(BaseModel):
    user_id: int
    company_id: int
    country_id: int
    card_id: Optional[int] = None
    path: str = Field(..., min_length=1)
    file_name: Optional[str] = None

    vendor_name: str = Field(..., min_length=1)
    invoice_date: date
    total_amount: Decimal = Field(..., ge=0)
    currency: str = Field(..., min_length=3, max_length=3)
    concept: Optional[str] = None
    category_id: Optional[int] = None
    cost_center_id: Optional[int] = None
    client_visited: Optional[str] = None
    notes: Optional[str] = None

    model_config = _CAMEL


class CompleteInvoiceUpdate(BaseModel):
    """
    Sólo se actualizan los campos de negocio. Path, nombre de archivo,
    tarjeta y estado de la factura no se tocan desde aquí.
    """
    id_invoice: int
    id: int
    country_id: Optional[int] = None

    vendor_name: Optional[str] = None
    invoice_date: Optional[date] = None
    total_amount: Optional[Decimal] = Field(None, ge=0)
    currency: Optional[str] = Field(None, min_length=3, max_length=3)
    concept: Optional[str] = None
    category_id: Optional[int] = None
    cost_center_id: Optional[int] = None
    client_visited: Optional[str] = None
    notes: Optional[str] = None

    model_config = _CAMEL


class CompleteInvoice(BaseModel):
    invoice_id: int
    user_name: Optional[str] = None
    card_masked_number: Optional[str] = None
    company_name: Optional[str] = None
    country_id: int
    country_name: Optional[str] = None
    path: str
    file_name: Optional[str] = None
    status: InvoiceStatus
    invoice_created_at: Optional[datetime] = None
    invoice_updated_at: Optional[datetime] = None

    invoice_field_id: int
    vendor_name: str
    invoice_date: date
    total_amount: Money
    currency: str
    concept: Optional[str] = None
    category_id: Optional[int] = None
    category_name: Optional[str] = None
    cost_center_id: Optional[int] = None
    cost_center_name: Optional[str] = None
    client_visited: Optional[str] = None
    notes: Optional[str] = None
    field_created_at: Optional[datetime] = None
    field_updated_at: Optional[datetime] = None

    model_config = _CAMEL

    @classmethod
    def from_entities(cls, invoice, field) -> "CompleteInvoice":
        return cls(
            invoice_id=invoice.id,
            user_name=_name(invoice.user),
            card_masked_number=invoice.card.masked_card_number if invoice.card else None,
            company_name=_name(invoice.company),
            country_id=invoice.country_id,
            country_name=_name(invoice.country),
            path=invoice.path,
            file_name=invoice.file_name,
            status=invoice.status,
            invoice_created_at=invoice.created_at,
            invoice_updated_at=invoice.updated_at,
            invoice_field_id=field.id,
            vendor_name=field.vendor_name,
            invoice_date=field.invoice_date,
            total_amount=field.total_amount,
            currency=field.currency,
            concept=field.concept,
            category_id=field.category_id,
            category_name=_name(field.category),
            cost_center_id=field.cost_center_id,
            cost_center_name=_name(field.cost_center),
            client_visited=field.client_visited,
            notes=field.notes,
            field_created_at=field.created_at,
            field_updated_at=field.updated_at,
        )
