"""Error kinds raised by the CRUD engine.

Callers decide the user-visible representation:
- `NotFound` -> 404 (unknown entity, or no row for an id)
- `PermissionDenied` -> 403
- `ConnectionFailure` / `QueryFailure` -> 500 with the driver message
"""

from __future__ import annotations


class CrudError(Exception):
    """Base class for all CRUD engine errors."""


class NotFound(CrudError):
    """Entity name not registered, or zero rows matched a lookup by id."""


class ConnectionFailure(CrudError):
    """The database could not be opened or pinged."""


class QueryFailure(CrudError):
    """A statement failed (malformed SQL, constraint violation, type mismatch)."""


class DeadlineExceeded(QueryFailure):
    """The in-flight statement was cancelled because its deadline expired."""


class PermissionDenied(CrudError):
    """The authorization predicate rejected the request."""

    def __init__(self, entity_name: str = "", action: str = "") -> None:
        self.entity_name = entity_name
        self.action = action
        super().__init__(f"not allowed to {action or 'access'} {entity_name or 'this page'}")
