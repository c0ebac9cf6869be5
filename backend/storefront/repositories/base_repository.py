"""Shared SQLAlchemy plumbing for the entity repositories.

Known store failures (missing row, foreign key violation on delete,
unsortable field) come back as StoreResult values. Every other
exception raised by the driver propagates unchanged.
"""

import logging
from typing import Callable, Dict, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Query

from storefront.domain.entities import Page, PageRequest
from storefront.domain.results import StoreResult

logger = logging.getLogger(__name__)


class SqlAlchemyRepository:
    """Base class: subclasses set `model`, `entity_kind` and `sortable_fields`."""

    model = None
    entity_kind = ""
    # External sort key -> model attribute name
    sortable_fields: Dict[str, str] = {}

    def __init__(self, db_session) -> None:
        self.db = db_session

    def _sort_column(self, order_by: str):
        attribute = self.sortable_fields.get(order_by)
        if attribute is None:
            return None
        return getattr(self.model, attribute)

    def _page(self, query: Query, request: PageRequest, mapper: Callable) -> StoreResult:
        """Run `query` as one sorted page. The primary key breaks ties so
        identical requests against unchanged data return identical pages."""
        column = self._sort_column(request.order_by)
        if column is None:
            return StoreResult.invalid_sort(
                f"Cannot sort {self.entity_kind} by '{request.order_by}'"
            )

        total = query.order_by(None).count()
        ordering = column.asc() if request.direction == "ASC" else column.desc()
        rows = (
            query.order_by(ordering, self.model.id.asc())
            .offset(request.offset)
            .limit(request.size)
            .all()
        )
        return StoreResult.ok(
            Page(
                content=[mapper(row) for row in rows],
                total_elements=total,
                number=request.page,
                size=request.size,
                order_by=request.order_by,
                direction=request.direction,
            )
        )

    def _get_row(self, row_id: int, for_update: bool = False) -> Optional[object]:
        query = self.db.query(self.model).filter_by(id=row_id)
        if for_update:
            query = query.with_for_update()
        return query.first()

    def _delete(self, row_id: int) -> StoreResult[None]:
        """Delete by id. The row is re-read under a row lock (where the
        dialect has one) in the same transaction as the delete."""
        db_row = self._get_row(row_id, for_update=True)
        if db_row is None:
            self.db.rollback()
            return StoreResult.not_found(f"{self.entity_kind} {row_id}")

        try:
            self.db.delete(db_row)
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.info(
                "Delete blocked by foreign key",
                extra={
                    "context": {
                        "entity": self.entity_kind,
                        "id": row_id,
                        "error": str(e.orig),
                    }
                },
            )
            return StoreResult.integrity_violation(str(e.orig))

        return StoreResult.ok()
