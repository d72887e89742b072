# gastos/domain/models/catalog.py
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from gastos.domain.models.enums import UserRole, UserStatus

_CAMEL = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)
EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class CountryCreate(BaseModel):
    iso_code: str = Field(..., min_length=1, max_length=10)
    name: str = Field(..., min_length=1, max_length=100)

    model_config = _CAMEL


class CountryUpdate(BaseModel):
    iso_code: Optional[str] = Field(None, min_length=1, max_length=10)
    name: Optional[str] = Field(None, min_length=1, max_length=100)

    model_config = _CAMEL


class CountryOut(BaseModel):
    id: int
    iso_code: str
    name: str

    model_config = _CAMEL


class CompanyCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    address: Optional[str] = Field(None, max_length=500)
    country_id: Optional[int] = None

    model_config = _CAMEL


class CompanyUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    address: Optional[str] = Field(None, max_length=500)
    country_id: Optional[int] = None

    model_config = _CAMEL


class CompanyOut(BaseModel):
    id: int
    name: str
    address: Optional[str] = None
    country: Optional[CountryOut] = None

    model_config = _CAMEL


class UserCreate(BaseModel):
    email: str = Field(..., pattern=EMAIL_PATTERN)
    name: str = Field(..., min_length=1)
    keycloak_id: Optional[str] = None
    role: UserRole
    company_id: int
    country_id: int

    model_config = _CAMEL


class UserUpdate(BaseModel):
    email: Optional[str] = Field(None, pattern=EMAIL_PATTERN)
    name: Optional[str] = Field(None, min_length=1)
    role: Optional[UserRole] = None
    status: Optional[UserStatus] = None
    company_id: Optional[int] = None
    country_id: Optional[int] = None

    model_config = _CAMEL


class UserOut(BaseModel):
    id: int
    email: str
    name: str
    keycloak_id: Optional[str] = None
    role: UserRole
    status: UserStatus
    company: Optional[CompanyOut] = None
    country: Optional[CountryOut] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = _CAMEL


class CategoryCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=255)
    is_active: bool = True

    model_config = _CAMEL


class CategoryUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=255)
    is_active: Optional[bool] = None

    model_config = _CAMEL


class CategoryOut(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = _CAMEL


class CostCenterCreate(BaseModel):
    code: str = Field(..., min_length=1, max_length=50)
    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=255)
    is_active: bool = True

    model_config = _CAMEL


class CostCenterUpdate(BaseModel):
    code: Optional[str] = Field(None, min_length=1, max_length=50)
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=255)
    is_active: Optional[bool] = None

    model_config = _CAMEL


class CostCenterOut(BaseModel):
    id: int
    code: str
    name: str
    description: Optional[str] = None
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = _CAMEL
