# gastos/domain/ports/repository.py
from abc import ABC, abstractmethod
from typing import Any, List, Optional, Type


class Repository(ABC):
    """
    Contrato genérico de acceso a datos sobre los modelos ORM.
    La unidad de trabajo (commit/rollback) la controla el caso de uso.
    """

    @abstractmethod
    def find_by_id(self, model: Type[Any], entity_id: int) -> Optional[Any]:
        pass

    @abstractmethod
    def find_one_by(self, model: Type[Any], **filters: Any) -> Optional[Any]:
        """Primera entidad cuyos atributos coinciden con todos los filtros."""
        pass

    @abstractmethod
    def list_by(self, model: Type[Any], **filters: Any) -> List[Any]:
        """Todas las entidades que coinciden, ordenadas por id. Sin filtros devuelve todo."""
        pass

    @abstractmethod
    def search(self, model: Type[Any], attr: str, text: str) -> List[Any]:
        """Entidades cuyo atributo contiene el texto, sin distinguir mayúsculas."""
        pass

    @abstractmethod
    def add(self, entity: Any) -> Any:
        pass

    @abstractmethod
    def delete(self, entity: Any) -> None:
        pass

    @abstractmethod
    def flush(self) -> None:
        pass

    @abstractmethod
    def commit(self) -> None:
        pass

    @abstractmethod
    def rollback(self) -> None:
        pass

    @abstractmethod
    def refresh(self, entity: Any) -> None:
        pass
