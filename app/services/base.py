# app/services/base.py
from sqlalchemy.orm import Session

from app.utils.errors import NotFound
from app.utils.policy import Action, ResourceKind, ensure_authorized


class BaseService:
    """Shared lookup-then-authorize steps for the resource services"""

    def __init__(self, db: Session):
        self.db = db

    def get_or_404(self, model, entity_id: int, kind: ResourceKind, query=None):
        query = query if query is not None else self.db.query(model)
        entity = query.filter(model.id == entity_id).first()
        if entity is None:
            raise NotFound.for_kind(kind.value)
        return entity

    def get_authorized(self, principal, model, entity_id: int, kind: ResourceKind, action: Action, query=None):
        """Load an entity and check the principal may act on it.

        A missing id is reported as NotFound before ownership is considered.
        """
        entity = self.get_or_404(model, entity_id, kind, query=query)
        ensure_authorized(principal, action, kind, entity)
        return entity
