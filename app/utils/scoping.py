# app/utils/scoping.py
from sqlalchemy.orm import Query

from app.config.settings import Settings
from app.utils.policy import Action, ResourceKind, authorize


def scope_to_owner(query: Query, model, principal, kind: ResourceKind) -> Query:
    """Narrow a query to the rows the principal may see.

    Callers allowed to viewAny (admins) get the collection unfiltered,
    everyone else only the rows they own.
    """
    if authorize(principal, Action.VIEW_ANY, kind):
        return query
    return query.filter(model.owner_id == principal.id)


def paginate(query: Query, skip: int = 0, limit: int = None) -> list:
    if limit is None:
        limit = Settings.PAGINATION["page_size"]
    return query.offset(max(skip, 0)).limit(Settings.page_limit(limit)).all()
