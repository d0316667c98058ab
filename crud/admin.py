"""The admin configuration object.

Constructed once at startup and passed by reference; the entity registry is
frozen at the end of construction.
"""

from __future__ import annotations

import posixpath
from typing import Any, Iterable, List, Mapping, Optional

from sqlalchemy.engine import Engine

from crud.entities import Entity, EntityRegistry, Formatter
from crud.executor import CrudExecutor
from crud.menus import Menu, SearchResult, build_menus, search_entities
from crud.permissions import AllowedFn, IdentityFn, PermissionGate
from logging_utils import get_logger

logger = get_logger(__name__)

DEFAULT_BASE_URL = "/admin"


def normalize_base_url(base_url: Optional[str]) -> str:
    """'/admin/' -> '/admin', '' -> '/admin', 'panel' -> '/panel'."""

    raw = (base_url or "").strip() or DEFAULT_BASE_URL
    raw = "/" + raw.strip("/")
    return raw if raw != "/" else ""


class Admin:
    def __init__(
        self,
        engine: Engine,
        *,
        base_url: str = DEFAULT_BASE_URL,
        entities: Iterable[Any] = (),
        default_formatters: Optional[Mapping[str, Formatter]] = None,
        user_identifier: Optional[IdentityFn] = None,
        permission_checker: Optional[AllowedFn] = None,
        templates: Optional[Mapping[str, str]] = None,
        statement_timeout: Optional[float] = None,
        ping: bool = True,
    ) -> None:
        self.base_url = normalize_base_url(base_url)
        self.registry = EntityRegistry(entities)
        self.default_formatters = dict(default_formatters or {})
        self.templates = dict(templates or {})
        self.executor = CrudExecutor(engine, timeout=statement_timeout)
        self.gate = PermissionGate(
            user_identifier,
            permission_checker,
            login_url=self.url("login"),
        )

        if ping:
            # Fatal at startup: ConnectionFailure propagates to the caller.
            self.executor.ping()

        self.registry.freeze()
        logger.info(
            "admin ready base_url=%s entities=%s",
            self.base_url or "/",
            ",".join(e.table_name for e in self.registry),
        )

    @property
    def engine(self) -> Engine:
        return self.executor.engine

    def url(self, *parts: str) -> str:
        return posixpath.join(self.base_url or "/", *parts)

    def lookup(self, table_name: str) -> Optional[Entity]:
        return self.registry.lookup(table_name)

    def menus(self) -> List[Menu]:
        return build_menus(self.registry, self.base_url)

    def search(self, query: str) -> List[SearchResult]:
        return search_entities(self.registry, query, self.base_url)
