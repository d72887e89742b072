# tests/conftest.py
import os

os.environ["DATABASE_URL"] = "sqlite://"

from datetime import date
from decimal import Decimal
from types import SimpleNamespace
from unittest.mock import Mock

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from gastos.domain.models.enums import CardStatus, CardType, InvoiceStatus, UserRole
from gastos.domain.ports.document_archive import DocumentArchive
from gastos.domain.ports.field_extractor import FieldExtractor
from gastos.domain.ports.text_extractor import TextExtractor
from gastos.infrastructure.api.dependencies import (
    get_document_archive,
    get_field_extractor,
    get_text_extractor,
)
from gastos.infrastructure.persistence import models
from gastos.infrastructure.persistence.database import Base, get_db
from main import app


@pytest.fixture
def db_session():
    """Base SQLite en memoria, nueva para cada test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    yield session
    session.close()
    engine.dispose()


@pytest.fixture
def seed(db_session):
    """País, empresa, usuario, tarjeta, categoría y centro de costo listos para usar."""
    country = models.Country(iso_code="PE", name="Perú")
    db_session.add(country)
    db_session.flush()

    company = models.Company(name="Datum SAC", address="Av. Principal 123", country_id=country.id)
    db_session.add(company)
    db_session.flush()

    user = models.User(
        email="ana.torres@datum.pe",
        name="Ana Torres",
        role=UserRole.COLLABORATOR,
        company_id=company.id,
        country_id=country.id,
    )
    category = models.Category(name="Alimentación", description="Comidas con clientes")
    cost_center = models.CostCenter(code="CC-001", name="Ventas")
    db_session.add_all([user, category, cost_center])
    db_session.flush()

    card = models.Card(
        card_number="4111111111111111",
        masked_card_number="**** **** **** 1111",
        holder_name="Ana Torres",
        card_type=CardType.CORPORATE,
        expiration_date=date(2030, 12, 31),
        issuer_bank="BCP",
        status=CardStatus.ACTIVE,
        user_id=user.id,
        company_id=company.id,
    )
    db_session.add(card)
    db_session.commit()

    return SimpleNamespace(
        country=country,
        company=company,
        user=user,
        card=card,
        category=category,
        cost_center=cost_center,
    )


@pytest.fixture
def add_expense(db_session, seed):
    """Crea una factura con sus campos para la tarjeta sembrada y retorna la factura."""

    def _add(invoice_date: date, amount: str, status: InvoiceStatus = InvoiceStatus.DRAFT, card_id=None):
        invoice = models.Invoice(
            user_id=seed.user.id,
            card_id=card_id or seed.card.id,
            company_id=seed.company.id,
            country_id=seed.country.id,
            path=f"/okm:root/facturas/{invoice_date.isoformat()}.jpg",
            file_name=f"{invoice_date.isoformat()}.jpg",
            status=status,
        )
        db_session.add(invoice)
        db_session.flush()
        db_session.add(models.InvoiceField(
            invoice_id=invoice.id,
            vendor_name="Restaurante El Sol",
            invoice_date=invoice_date,
            total_amount=Decimal(amount),
            currency="PEN",
            category_id=seed.category.id,
            cost_center_id=seed.cost_center.id,
        ))
        db_session.commit()
        return invoice

    return _add


@pytest.fixture
def text_extractor():
    extractor = Mock(spec=TextExtractor)
    extractor.is_available.return_value = True
    return extractor


@pytest.fixture
def field_extractor():
    extractor = Mock(spec=FieldExtractor)
    extractor.is_available.return_value = True
    extractor.extraction_method = "AI"
    return extractor


@pytest.fixture
def document_archive():
    archive = Mock(spec=DocumentArchive)
    archive.is_available.return_value = True
    return archive


@pytest.fixture
def client(db_session, text_extractor, field_extractor, document_archive):
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_text_extractor] = lambda: text_extractor
    app.dependency_overrides[get_field_extractor] = lambda: field_extractor
    app.dependency_overrides[get_document_archive] = lambda: document_archive
    yield TestClient(app)
    app.dependency_overrides.clear()
