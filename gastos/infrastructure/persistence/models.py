# gastos/infrastructure/persistence/models.py
from datetime import datetime

from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    Enum,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
)
from sqlalchemy.orm import relationship

from gastos.domain.models.enums import CardStatus, CardType, InvoiceStatus, UserRole, UserStatus
from .database import Base


class TimestampMixin:
    created_at = Column(DateTime, nullable=False, default=datetime.now)
    updated_at = Column(DateTime, default=datetime.now, onupdate=datetime.now)


class Country(Base):
    __tablename__ = "countries"

    id = Column(Integer, primary_key=True)
    iso_code = Column(String(10), unique=True, nullable=False)
    name = Column(String(100), nullable=False)

    companies = relationship("Company", back_populates="country")


class Company(Base):
    __tablename__ = "companies"

    id = Column(Integer, primary_key=True)
    name = Column(String(200), nullable=False)
    address = Column(String(500))
    country_id = Column(Integer, ForeignKey("countries.id"))

    country = relationship("Country", back_populates="companies")


class User(TimestampMixin, Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    email = Column(String(254), unique=True, nullable=False)
    name = Column(String(200), nullable=False)
    keycloak_id = Column(String(100), unique=True)
    role = Column(Enum(UserRole), nullable=False, default=UserRole.COLLABORATOR)
    status = Column(Enum(UserStatus), nullable=False, default=UserStatus.ACTIVE)
    company_id = Column(Integer, ForeignKey("companies.id"))
    country_id = Column(Integer, ForeignKey("countries.id"))

    company = relationship("Company")
    country = relationship("Country")


class Category(TimestampMixin, Base):
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True)
    name = Column(String(100), unique=True, nullable=False)
    description = Column(String(255))
    is_active = Column(Boolean, nullable=False, default=True)


class CostCenter(TimestampMixin, Base):
    __tablename__ = "cost_centers"

    id = Column(Integer, primary_key=True)
    code = Column(String(50), unique=True, nullable=False)
    name = Column(String(200), nullable=False)
    description = Column(String(255))
    is_active = Column(Boolean, nullable=False, default=True)


class Card(TimestampMixin, Base):
    __tablename__ = "cards"

    id = Column(Integer, primary_key=True)
    card_number = Column(String(19), unique=True, nullable=False)
    masked_card_number = Column(String(32), nullable=False)
    holder_name = Column(String(200), nullable=False)
    card_type = Column(Enum(CardType), nullable=False)
    expiration_date = Column(Date, nullable=False)
    issuer_bank = Column(String(200), nullable=False)
    credit_limit = Column(Numeric(15, 2))
    status = Column(Enum(CardStatus), nullable=False, default=CardStatus.ACTIVE)
    description = Column(String(255))
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    company_id = Column(Integer, ForeignKey("companies.id"), nullable=False)

    user = relationship("User")
    company = relationship("Company")
    invoices = relationship("Invoice", back_populates="card")


class Invoice(TimestampMixin, Base):
    __tablename__ = "invoices"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    card_id = Column(Integer, ForeignKey("cards.id"))
    company_id = Column(Integer, ForeignKey("companies.id"), nullable=False)
    country_id = Column(Integer, ForeignKey("countries.id"), nullable=False)
    path = Column(String(500), nullable=False)
    file_name = Column(String(255))
    status = Column(Enum(InvoiceStatus), nullable=False, default=InvoiceStatus.DRAFT)

    user = relationship("User")
    card = relationship("Card", back_populates="invoices")
    company = relationship("Company")
    country = relationship("Country")
    invoice_field = relationship("InvoiceField", back_populates="invoice", uselist=False)


class InvoiceField(TimestampMixin, Base):
    __tablename__ = "invoice_fields"

    id = Column(Integer, primary_key=True)
    # unique=True garantiza la relación 1:1 con la factura
    invoice_id = Column(Integer, ForeignKey("invoices.id"), unique=True, nullable=False)
    vendor_name = Column(String(255), nullable=False)
    invoice_date = Column(Date, nullable=False)
    total_amount = Column(Numeric(15, 2), nullable=False)
    currency = Column(String(3), nullable=False)
    concept = Column(Text)
    category_id = Column(Integer, ForeignKey("categories.id"))
    cost_center_id = Column(Integer, ForeignKey("cost_centers.id"))
    client_visited = Column(String(255))
    notes = Column(Text)

    invoice = relationship("Invoice", back_populates="invoice_field")
    category = relationship("Category")
    cost_center = relationship("CostCenter")
