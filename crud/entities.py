from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, Iterator, List, Mapping, Optional

from crud.errors import NotFound
from crud.schema import ALL_COLUMNS
from logging_utils import get_logger

logger = get_logger(__name__)

Formatter = Callable[[Any], str]


@dataclass
class Entity:
    """Declarative description of one admin-managed table."""

    # Table name; may be schema-qualified ("public.users"). The last "." always
    # separates schema and table, so a table whose own name contains a dot
    # ("my.table") cannot be addressed.
    table_name: str
    primary_key: str = "id"
    # Titles default to the table name.
    title_singular: str = ""
    title_plural: str = ""
    description: str = ""
    fav_icon: str = ""
    # Menu position, ascending.
    order: int = 0
    # Empty column lists mean "all columns".
    select_columns: List[str] = field(default_factory=list)
    edit_columns: List[str] = field(default_factory=list)
    new_columns: List[str] = field(default_factory=list)
    # Per-entity overrides of the process-wide default formatters.
    value_formatters: Dict[str, Formatter] = field(default_factory=dict)
    column_name_formatters: Dict[str, Formatter] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.table_name = (self.table_name or "").strip()
        if not self.table_name:
            raise ValueError("Entity.table_name is required")
        self.primary_key = (self.primary_key or "").strip() or "id"
        self.title_singular = self.title_singular or self.table_name
        self.title_plural = self.title_plural or self.table_name
        self.select_columns = list(self.select_columns or [])
        self.edit_columns = list(self.edit_columns or [])
        self.new_columns = list(self.new_columns or [])
        self.value_formatters = dict(self.value_formatters or {})
        self.column_name_formatters = dict(self.column_name_formatters or {})

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Entity":
        return cls(**dict(data))

    def get_select_columns(self) -> List[str]:
        return list(self.select_columns) or [ALL_COLUMNS]

    def get_edit_columns(self) -> List[str]:
        return list(self.edit_columns) or [ALL_COLUMNS]

    def get_new_columns(self) -> List[str]:
        if self.new_columns:
            return list(self.new_columns)
        return self.get_edit_columns()


class EntityRegistry:
    """Table name -> Entity, populated at startup then frozen.

    Re-registering a table name overwrites the previous definition
    (last write wins, no merge). There is no removal.
    """

    def __init__(self, entities: Iterable[Entity] = ()) -> None:
        self._entities: Dict[str, Entity] = {}
        self._frozen = False
        self.register_all(entities)

    def register(self, entity: Entity) -> None:
        if self._frozen:
            raise RuntimeError("entity registry is frozen")
        if isinstance(entity, Mapping):
            entity = Entity.from_dict(entity)
        if entity.table_name in self._entities:
            logger.info("entity %s re-registered; replacing previous definition", entity.table_name)
        self._entities[entity.table_name] = entity

    def register_all(self, entities: Iterable[Entity]) -> None:
        for entity in entities:
            self.register(entity)

    def lookup(self, table_name: str) -> Optional[Entity]:
        return self._entities.get(table_name)

    def require(self, table_name: str) -> Entity:
        entity = self.lookup(table_name)
        if entity is None:
            raise NotFound(f"unknown entity {table_name!r}")
        return entity

    def freeze(self) -> None:
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def __iter__(self) -> Iterator[Entity]:
        return iter(list(self._entities.values()))

    def __len__(self) -> int:
        return len(self._entities)

    def __contains__(self, table_name: object) -> bool:
        return table_name in self._entities
