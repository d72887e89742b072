# gastos/infrastructure/persistence/repository_adapter.py
from typing import Any, List, Optional, Type

from sqlalchemy.orm import Session

from gastos.domain.ports.repository import Repository


class SqlAlchemyRepository(Repository):
    def __init__(self, db: Session):
        self.db = db

    def find_by_id(self, model: Type[Any], entity_id: int) -> Optional[Any]:
        if entity_id is None:
            return None
        return self.db.query(model).filter(model.id == entity_id).first()

    def find_one_by(self, model: Type[Any], **filters: Any) -> Optional[Any]:
        return self.db.query(model).filter_by(**filters).first()

    def list_by(self, model: Type[Any], **filters: Any) -> List[Any]:
        return self.db.query(model).filter_by(**filters).order_by(model.id).all()

    def search(self, model: Type[Any], attr: str, text: str) -> List[Any]:
        column = getattr(model, attr)
        return self.db.query(model).filter(column.ilike(f"%{text}%")).order_by(model.id).all()

    def add(self, entity: Any) -> Any:
        self.db.add(entity)
        return entity

    def delete(self, entity: Any) -> None:
        self.db.delete(entity)

    def flush(self) -> None:
        self.db.flush()

    def commit(self) -> None:
        self.db.commit()

    def rollback(self) -> None:
        self.db.rollback()

    def refresh(self, entity: Any) -> None:
        self.db.refresh(entity)
