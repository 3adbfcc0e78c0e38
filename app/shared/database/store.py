# app/shared/database/store.py
import logging
from typing import Any, Dict, Iterable, List, Optional, Type

from sqlalchemy import and_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import InvalidArgument, NotFound, StoreError

logger = logging.getLogger(__name__)


def parse_object_id(raw: Any, field: str = "id") -> int:
    """Convertir un id recibido en la frontera; ids mal formados -> InvalidArgument"""
    if isinstance(raw, bool):
        raise InvalidArgument(f"Malformed {field}: {raw!r}")
    if isinstance(raw, int):
        value = raw
    else:
        text = str(raw).strip() if raw is not None else ""
        if not (text.isascii() and text.isdigit()):
            raise InvalidArgument(f"Malformed {field}: {raw!r}")
        value = int(text)
    if value <= 0:
        raise InvalidArgument(f"Malformed {field}: {raw!r}")
    return value


def commit(db: Session):
    """Confirmar la transacción de la operación; rollback y StoreError si falla"""
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Commit failed: {e}")
        raise StoreError("Could not persist changes") from e


class Collection:
    """Fachada CRUD sobre un modelo, con filtros de igualdad y orden por timestamp.

    Las escrituras no confirman: el servicio dueño de la operación llama a
    ``commit`` una sola vez, de modo que las operaciones de varios pasos
    comparten la misma transacción.
    """

    def __init__(
        self,
        db: Session,
        model: Type,
        filter_fields: Iterable[str] = (),
        sort_field: str = "created_at",
    ):
        self.db = db
        self.model = model
        self.filter_fields = frozenset(filter_fields) | {"id"}
        self.sort_field = sort_field

    @property
    def name(self) -> str:
        return self.model.__tablename__

    def _criteria(self, filters: Optional[Dict[str, Any]]):
        criteria = []
        for field, value in (filters or {}).items():
            if field not in self.filter_fields:
                raise InvalidArgument(f"Cannot filter {self.name} by '{field}'")
            if value is None:
                continue
            criteria.append(getattr(self.model, field) == value)
        return and_(*criteria) if criteria else None

    def _query(self, filters: Optional[Dict[str, Any]]):
        query = self.db.query(self.model)
        criteria = self._criteria(filters)
        if criteria is not None:
            query = query.filter(criteria)
        return query

    def _failed(self, action: str, e: SQLAlchemyError):
        self.db.rollback()
        logger.error(f"Error on {action} in '{self.name}': {e}")
        return StoreError(f"Could not {action} {self.name}")

    def insert(self, doc: Dict[str, Any]) -> int:
        try:
            instance = self.model(**doc)
            self.db.add(instance)
            self.db.flush()
            return instance.id
        except SQLAlchemyError as e:
            raise self._failed("insert into", e) from e

    def find(self, filters: Optional[Dict[str, Any]] = None, descending: bool = True) -> List[Any]:
        sort_column = getattr(self.model, self.sort_field)
        order = (sort_column.desc(), self.model.id.desc()) if descending else (sort_column.asc(), self.model.id.asc())
        try:
            return self._query(filters).order_by(*order).all()
        except SQLAlchemyError as e:
            raise self._failed("query", e) from e

    def find_one(self, filters: Dict[str, Any]) -> Optional[Any]:
        try:
            return self._query(filters).first()
        except SQLAlchemyError as e:
            raise self._failed("query", e) from e

    def find_by_id(self, raw_id: Any) -> Any:
        object_id = parse_object_id(raw_id)
        doc = self.find_one({"id": object_id})
        if doc is None:
            raise NotFound(f"{self.model.__name__} {object_id} not found")
        return doc

    def update(self, filters: Dict[str, Any], patch: Dict[str, Any]) -> int:
        try:
            return self._query(filters).update(patch, synchronize_session="fetch")
        except SQLAlchemyError as e:
            raise self._failed("update", e) from e

    def delete(self, filters: Dict[str, Any]) -> int:
        try:
            return self._query(filters).delete(synchronize_session="fetch")
        except SQLAlchemyError as e:
            raise self._failed("delete from", e) from e
