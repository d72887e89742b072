# gastos/infrastructure/api/routers/catalog_router.py
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response

from gastos.application.use_cases.catalog import CatalogUseCase
from gastos.domain.models.catalog import (
    CategoryCreate,
    CategoryOut,
    CategoryUpdate,
    CompanyCreate,
    CompanyOut,
    CompanyUpdate,
    CostCenterCreate,
    CostCenterOut,
    CostCenterUpdate,
    CountryCreate,
    CountryOut,
    CountryUpdate,
    UserCreate,
    UserOut,
    UserUpdate,
)
from gastos.domain.models.enums import UserStatus
from gastos.infrastructure.api.dependencies import get_catalog_use_case
from gastos.infrastructure.persistence.models import Category, Company, CostCenter, Country, User

countries_router = APIRouter(prefix="/api/countries", tags=["Países"])
companies_router = APIRouter(prefix="/api/companies", tags=["Empresas"])
users_router = APIRouter(prefix="/api/users", tags=["Usuarios"])
categories_router = APIRouter(prefix="/api/categories", tags=["Categorías"])
cost_centers_router = APIRouter(prefix="/api/cost-centers", tags=["Centros de costo"])

NAME_QUERY = Query(None, description="Texto a buscar en el nombre")


# --- Países ---
@countries_router.get("", response_model=List[CountryOut])
def list_countries(use_case: CatalogUseCase = Depends(get_catalog_use_case)):
    return use_case.list_all(Country)


@countries_router.get("/search", response_model=List[CountryOut])
def search_countries(name: Optional[str] = NAME_QUERY, use_case: CatalogUseCase = Depends(get_catalog_use_case)):
    return use_case.search(Country, name)


@countries_router.get("/iso/{iso_code}", response_model=CountryOut)
def get_country_by_iso(iso_code: str, use_case: CatalogUseCase = Depends(get_catalog_use_case)):
    return use_case.find_by(Country, iso_code=iso_code)


@countries_router.get("/{country_id}", response_model=CountryOut)
def get_country(country_id: int, use_case: CatalogUseCase = Depends(get_catalog_use_case)):
    return use_case.get(Country, country_id)


@countries_router.post("", response_model=CountryOut, status_code=201)
def create_country(request: CountryCreate, use_case: CatalogUseCase = Depends(get_catalog_use_case)):
    return use_case.create_country(request)


@countries_router.put("/{country_id}", response_model=CountryOut)
def update_country(country_id: int, request: CountryUpdate, use_case: CatalogUseCase = Depends(get_catalog_use_case)):
    return use_case.update_country(country_id, request)


@countries_router.delete("/{country_id}", status_code=204)
def delete_country(country_id: int, use_case: CatalogUseCase = Depends(get_catalog_use_case)):
    use_case.delete(Country, country_id)
    return Response(status_code=204)


# --- Empresas ---
@companies_router.get("", response_model=List[CompanyOut])
def list_companies(use_case: CatalogUseCase = Depends(get_catalog_use_case)):
    return use_case.list_all(Company)


@companies_router.get("/search", response_model=List[CompanyOut])
def search_companies(name: Optional[str] = NAME_QUERY, use_case: CatalogUseCase = Depends(get_catalog_use_case)):
    return use_case.search(Company, name)


@companies_router.get("/by-country/{country_id}", response_model=List[CompanyOut])
def list_companies_by_country(country_id: int, use_case: CatalogUseCase = Depends(get_catalog_use_case)):
    return use_case.list_all(Company, country_id=country_id)


@companies_router.get("/{company_id}", response_model=CompanyOut)
def get_company(company_id: int, use_case: CatalogUseCase = Depends(get_catalog_use_case)):
    return use_case.get(Company, company_id)


@companies_router.post("", response_model=CompanyOut, status_code=201)
def create_company(request: CompanyCreate, use_case: CatalogUseCase = Depends(get_catalog_use_case)):
    return use_case.create_company(request)


@companies_router.put("/{company_id}", response_model=CompanyOut)
def update_company(company_id: int, request: CompanyUpdate, use_case: CatalogUseCase = Depends(get_catalog_use_case)):
    return use_case.update_company(company_id, request)


@companies_router.delete("/{company_id}", status_code=204)
def delete_company(company_id: int, use_case: CatalogUseCase = Depends(get_catalog_use_case)):
    use_case.delete(Company, company_id)
    return Response(status_code=204)


# --- Usuarios ---
@users_router.get("", response_model=List[UserOut])
def list_users(use_case: CatalogUseCase = Depends(get_catalog_use_case)):
    return use_case.list_all(User)


@users_router.get("/active", response_model=List[UserOut])
def list_active_users(use_case: CatalogUseCase = Depends(get_catalog_use_case)):
    return use_case.list_all(User, status=UserStatus.ACTIVE)


@users_router.get("/search", response_model=List[UserOut])
def search_users(name: Optional[str] = NAME_QUERY, use_case: CatalogUseCase = Depends(get_catalog_use_case)):
    return use_case.search(User, name)


@users_router.get("/email/{email}", response_model=UserOut)
def get_user_by_email(email: str, use_case: CatalogUseCase = Depends(get_catalog_use_case)):
    return use_case.find_by(User, email=email)


@users_router.get("/keycloak/{keycloak_id}", response_model=UserOut)
def get_user_by_keycloak_id(keycloak_id: str, use_case: CatalogUseCase = Depends(get_catalog_use_case)):
    return use_case.find_by(User, keycloak_id=keycloak_id)


@users_router.get("/company/{company_id}", response_model=List[UserOut])
def list_users_by_company(company_id: int, use_case: CatalogUseCase = Depends(get_catalog_use_case)):
    return use_case.list_all(User, company_id=company_id)


@users_router.get("/{user_id}", response_model=UserOut)
def get_user(user_id: int, use_case: CatalogUseCase = Depends(get_catalog_use_case)):
    return use_case.get(User, user_id)


@users_router.post("", response_model=UserOut, status_code=201)
def create_user(request: UserCreate, use_case: CatalogUseCase = Depends(get_catalog_use_case)):
    return use_case.create_user(request)


@users_router.put("/{user_id}", response_model=UserOut)
def update_user(user_id: int, request: UserUpdate, use_case: CatalogUseCase = Depends(get_catalog_use_case)):
    return use_case.update_user(user_id, request)


@users_router.patch("/{user_id}/status/{status}", response_model=UserOut)
def change_user_status(user_id: int, status: UserStatus, use_case: CatalogUseCase = Depends(get_catalog_use_case)):
    return use_case.change_user_status(user_id, status)


@users_router.patch("/{user_id}/activate", response_model=UserOut)
def activate_user(user_id: int, use_case: CatalogUseCase = Depends(get_catalog_use_case)):
    return use_case.change_user_status(user_id, UserStatus.ACTIVE)


@users_router.patch("/{user_id}/suspend", response_model=UserOut)
def suspend_user(user_id: int, use_case: CatalogUseCase = Depends(get_catalog_use_case)):
    return use_case.change_user_status(user_id, UserStatus.SUSPENDED)


@users_router.delete("/{user_id}", response_model=UserOut)
def deactivate_user(user_id: int, use_case: CatalogUseCase = Depends(get_catalog_use_case)):
    """Baja lógica: el usuario pasa a INACTIVE y conserva sus tarjetas y facturas."""
    return use_case.change_user_status(user_id, UserStatus.INACTIVE)


# --- Categorías ---
@categories_router.get("", response_model=List[CategoryOut])
def list_categories(use_case: CatalogUseCase = Depends(get_catalog_use_case)):
    return use_case.list_all(Category)


@categories_router.get("/active", response_model=List[CategoryOut])
def list_active_categories(use_case: CatalogUseCase = Depends(get_catalog_use_case)):
    return use_case.list_all(Category, is_active=True)


@categories_router.get("/search", response_model=List[CategoryOut])
def search_categories(name: Optional[str] = NAME_QUERY, use_case: CatalogUseCase = Depends(get_catalog_use_case)):
    return use_case.search(Category, name)


@categories_router.get("/{category_id}", response_model=CategoryOut)
def get_category(category_id: int, use_case: CatalogUseCase = Depends(get_catalog_use_case)):
    return use_case.get(Category, category_id)


@categories_router.post("", response_model=CategoryOut, status_code=201)
def create_category(request: CategoryCreate, use_case: CatalogUseCase = Depends(get_catalog_use_case)):
    return use_case.create_category(request)


@categories_router.put("/{category_id}", response_model=CategoryOut)
def update_category(category_id: int, request: CategoryUpdate, use_case: CatalogUseCase = Depends(get_catalog_use_case)):
    return use_case.update_category(category_id, request)


@categories_router.patch("/{category_id}/activate", response_model=CategoryOut)
def activate_category(category_id: int, use_case: CatalogUseCase = Depends(get_catalog_use_case)):
    return use_case.set_active(Category, category_id, True)


@categories_router.patch("/{category_id}/deactivate", response_model=CategoryOut)
def deactivate_category(category_id: int, use_case: CatalogUseCase = Depends(get_catalog_use_case)):
    return use_case.set_active(Category, category_id, False)


@categories_router.delete("/{category_id}", status_code=204)
def delete_category(category_id: int, use_case: CatalogUseCase = Depends(get_catalog_use_case)):
    use_case.delete(Category, category_id)
    return Response(status_code=204)


# --- Centros de costo ---
@cost_centers_router.get("", response_model=List[CostCenterOut])
def list_cost_centers(use_case: CatalogUseCase = Depends(get_catalog_use_case)):
    return use_case.list_all(CostCenter)


@cost_centers_router.get("/active", response_model=List[CostCenterOut])
def list_active_cost_centers(use_case: CatalogUseCase = Depends(get_catalog_use_case)):
    return use_case.list_all(CostCenter, is_active=True)


@cost_centers_router.get("/search", response_model=List[CostCenterOut])
def search_cost_centers(name: Optional[str] = NAME_QUERY, use_case: CatalogUseCase = Depends(get_catalog_use_case)):
    return use_case.search(CostCenter, name)


@cost_centers_router.get("/code/{code}", response_model=CostCenterOut)
def get_cost_center_by_code(code: str, use_case: CatalogUseCase = Depends(get_catalog_use_case)):
    return use_case.find_by(CostCenter, code=code)


@cost_centers_router.get("/{cost_center_id}", response_model=CostCenterOut)
def get_cost_center(cost_center_id: int, use_case: CatalogUseCase = Depends(get_catalog_use_case)):
    return use_case.get(CostCenter, cost_center_id)


@cost_centers_router.post("", response_model=CostCenterOut, status_code=201)
def create_cost_center(request: CostCenterCreate, use_case: CatalogUseCase = Depends(get_catalog_use_case)):
    return use_case.create_cost_center(request)


@cost_centers_router.put("/{cost_center_id}", response_model=CostCenterOut)
def update_cost_center(
    cost_center_id: int,
    request: CostCenterUpdate,
    use_case: CatalogUseCase = Depends(get_catalog_use_case),
):
    return use_case.update_cost_center(cost_center_id, request)


@cost_centers_router.patch("/{cost_center_id}/activate", response_model=CostCenterOut)
def activate_cost_center(cost_center_id: int, use_case: CatalogUseCase = Depends(get_catalog_use_case)):
    return use_case.set_active(CostCenter, cost_center_id, True)


@cost_centers_router.patch("/{cost_center_id}/deactivate", response_model=CostCenterOut)
def deactivate_cost_center(cost_center_id: int, use_case: CatalogUseCase = Depends(get_catalog_use_case)):
    return use_case.set_active(CostCenter, cost_center_id, False)


@cost_centers_router.delete("/{cost_center_id}", status_code=204)
def delete_cost_center(cost_center_id: int, use_case: CatalogUseCase = Depends(get_catalog_use_case)):
    use_case.delete(CostCenter, cost_center_id)
    return Response(status_code=204)


routers = [countries_router, companies_router, users_router, categories_router, cost_centers_router]
