# gastos/application/use_cases/catalog.py
import logging
from typing import Any, Dict, List, Tuple, Type

from pydantic import BaseModel

from gastos.domain.errors import NotFoundError, ValidationError
from gastos.domain.models.catalog import (
    CategoryCreate,
    CategoryUpdate,
    CompanyCreate,
    CompanyUpdate,
    CostCenterCreate,
    CostCenterUpdate,
    CountryCreate,
    CountryUpdate,
    UserCreate,
    UserUpdate,
)
from gastos.domain.models.enums import UserStatus
from gastos.domain.ports.repository import Repository
from gastos.infrastructure.persistence.models import (
    Card,
    Category,
    Company,
    CostCenter,
    Country,
    Invoice,
    InvoiceField,
    User,
)

logger = logging.getLogger(__name__)

ENTITY_LABELS: Dict[Any, str] = {
    Country: "País",
    Company: "Empresa",
    User: "Usuario",
    Category: "Categoría",
    CostCenter: "Centro de costo",
}

# Registros que impiden borrar una entidad de referencia: (modelo, columna, descripción)
DEPENDENTS: Dict[Any, Tuple[Tuple[Any, str, str], ...]] = {
    Country: ((Company, "country_id", "empresas"), (User, "country_id", "usuarios"), (Invoice, "country_id", "facturas")),
    Company: ((User, "company_id", "usuarios"), (Card, "company_id", "tarjetas"), (Invoice, "company_id", "facturas")),
    Category: ((InvoiceField, "category_id", "facturas"),),
    CostCenter: ((InvoiceField, "cost_center_id", "facturas"),),
}


class CatalogUseCase:
    """
    Datos de referencia: países, empresas, usuarios, categorías y centros de costo.
    Devuelve entidades ORM; los routers las serializan con sus modelos *Out.
    """

    def __init__(self, repo: Repository):
        self.repo = repo

    # --- Consultas ---
    def get(self, model: Type[Any], entity_id: int):
        entity = self.repo.find_by_id(model, entity_id)
        if entity is None:
            raise NotFoundError(f"{ENTITY_LABELS[model]} no encontrado con ID: {entity_id}")
        return entity

    def find_by(self, model: Type[Any], **filters: Any):
        entity = self.repo.find_one_by(model, **filters)
        if entity is None:
            (attr, value), = filters.items()
            raise NotFoundError(f"{ENTITY_LABELS[model]} no encontrado con {attr} '{value}'")
        return entity

    def list_all(self, model: Type[Any], **filters: Any) -> List[Any]:
        return self.repo.list_by(model, **filters)

    def search(self, model: Type[Any], name: str) -> List[Any]:
        if name is None or not name.strip():
            raise ValidationError("El parámetro 'name' es obligatorio")
        return self.repo.search(model, "name", name.strip())

    # --- Escritura ---
    def _ensure_unique(self, model: Type[Any], **filters: Any) -> None:
        if self.repo.find_one_by(model, **filters) is not None:
            (attr, value), = filters.items()
            raise ValidationError(f"Ya existe {ENTITY_LABELS[model].lower()} con {attr} '{value}'")

    def _commit(self, action: str) -> None:
        try:
            self.repo.commit()
        except Exception:
            logger.error(f"Error al {action}. Iniciando rollback.", exc_info=True)
            self.repo.rollback()
            raise

    def _create(self, entity):
        self.repo.add(entity)
        self._commit(f"crear {type(entity).__name__}")
        self.repo.refresh(entity)
        logger.info(f"{type(entity).__name__} creado con ID: {entity.id}")
        return entity

    def _update(self, model: Type[Any], entity_id: int, request: BaseModel, unique: Tuple[str, ...] = ()):
        """Aplica sólo los campos enviados; valida unicidad y referencias de los que cambian."""
        entity = self.get(model, entity_id)
        changes = request.model_dump(exclude_none=True)

        for attr in unique:
            if attr in changes and changes[attr] != getattr(entity, attr):
                self._ensure_unique(model, **{attr: changes[attr]})
        if "company_id" in changes:
            self.get(Company, changes["company_id"])
        if "country_id" in changes:
            self.get(Country, changes["country_id"])

        for attr, value in changes.items():
            setattr(entity, attr, value)
        self._commit(f"actualizar {model.__name__} {entity_id}")
        self.repo.refresh(entity)
        logger.info(f"{model.__name__} {entity_id} actualizado: {sorted(changes)}")
        return entity

    def create_country(self, request: CountryCreate) -> Country:
        self._ensure_unique(Country, iso_code=request.iso_code)
        return self._create(Country(**request.model_dump()))

    def update_country(self, country_id: int, request: CountryUpdate) -> Country:
        return self._update(Country, country_id, request, unique=("iso_code",))

    def create_company(self, request: CompanyCreate) -> Company:
        if request.country_id is not None:
            self.get(Country, request.country_id)
        return self._create(Company(**request.model_dump()))

    def update_company(self, company_id: int, request: CompanyUpdate) -> Company:
        return self._update(Company, company_id, request)

    def create_user(self, request: UserCreate) -> User:
        self._ensure_unique(User, email=request.email)
        if request.keycloak_id:
            self._ensure_unique(User, keycloak_id=request.keycloak_id)
        self.get(Company, request.company_id)
        self.get(Country, request.country_id)
        return self._create(User(**request.model_dump(), status=UserStatus.ACTIVE))

    def update_user(self, user_id: int, request: UserUpdate) -> User:
        return self._update(User, user_id, request, unique=("email",))

    def change_user_status(self, user_id: int, status: UserStatus) -> User:
        user = self.get(User, user_id)
        user.status = status
        self._commit(f"cambiar el estado del usuario {user_id}")
        self.repo.refresh(user)
        logger.info(f"Usuario {user_id} pasó a estado {status.value}")
        return user

    def create_category(self, request: CategoryCreate) -> Category:
        self._ensure_unique(Category, name=request.name)
        return self._create(Category(**request.model_dump()))

    def update_category(self, category_id: int, request: CategoryUpdate) -> Category:
        return self._update(Category, category_id, request, unique=("name",))

    def create_cost_center(self, request: CostCenterCreate) -> CostCenter:
        self._ensure_unique(CostCenter, code=request.code)
        return self._create(CostCenter(**request.model_dump()))

    def update_cost_center(self, cost_center_id: int, request: CostCenterUpdate) -> CostCenter:
        return self._update(CostCenter, cost_center_id, request, unique=("code",))

    def set_active(self, model: Type[Any], entity_id: int, active: bool):
        """Activa o desactiva una categoría o centro de costo."""
        entity = self.get(model, entity_id)
        entity.is_active = active
        self._commit(f"{'activar' if active else 'desactivar'} {model.__name__} {entity_id}")
        self.repo.refresh(entity)
        return entity

    def delete(self, model: Type[Any], entity_id: int) -> None:
        entity = self.get(model, entity_id)
        for dependent, column, label in DEPENDENTS.get(model, ()):
            if self.repo.find_one_by(dependent, **{column: entity_id}) is not None:
                raise ValidationError(
                    f"No se puede eliminar {ENTITY_LABELS[model].lower()} {entity_id}: existen {label} que dependen de este registro"
                )
        self.repo.delete(entity)
        self._commit(f"eliminar {model.__name__} {entity_id}")
        logger.info(f"{model.__name__} {entity_id} eliminado")
