"""Schema-driven CRUD over arbitrary relational tables.

Given a table name, a primary-key column and optional column subsets, the
executor lists, fetches, creates, updates and deletes rows without knowing the
table's shape ahead of time. Column names and types are discovered on every
call.
"""

from crud.admin import Admin
from crud.entities import Entity, EntityRegistry
from crud.errors import (
    ConnectionFailure,
    CrudError,
    DeadlineExceeded,
    NotFound,
    PermissionDenied,
    QueryFailure,
)
from crud.executor import CrudExecutor
from crud.menus import Menu, SearchResult
from crud.permissions import Action, PermissionGate, resolve_action
from crud.rows import Column, Row
from crud.schema import SchemaIntrospector, TableShape
from crud.types import GenericType, from_generic, to_generic

__all__ = [
    "Action",
    "Admin",
    "Column",
    "ConnectionFailure",
    "CrudError",
    "CrudExecutor",
    "DeadlineExceeded",
    "Entity",
    "EntityRegistry",
    "GenericType",
    "Menu",
    "NotFound",
    "PermissionDenied",
    "PermissionGate",
    "QueryFailure",
    "Row",
    "SchemaIntrospector",
    "SearchResult",
    "TableShape",
    "from_generic",
    "resolve_action",
    "to_generic",
]
