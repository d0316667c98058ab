from __future__ import annotations

import posixpath
from dataclasses import dataclass
from typing import Iterable, List

from crud.entities import Entity


@dataclass(frozen=True)
class Menu:
    order: int
    identifier: str
    title: str
    url: str
    fav_icon: str


@dataclass(frozen=True)
class SearchResult:
    title: str
    description: str
    link: str


def entity_url(base_url: str, table_name: str) -> str:
    return posixpath.join(base_url or "/", "entity", table_name)


def build_menus(entities: Iterable[Entity], base_url: str) -> List[Menu]:
    """One menu per entity, ascending by order; ties broken by table name."""

    menus = [
        Menu(
            order=e.order,
            identifier=e.table_name,
            title=e.title_plural,
            url=entity_url(base_url, e.table_name),
            fav_icon=e.fav_icon,
        )
        for e in entities
    ]
    return sorted(menus, key=lambda m: (m.order, m.identifier))


def search_entities(entities: Iterable[Entity], query: str, base_url: str) -> List[SearchResult]:
    """Case-insensitive match over table name, titles and description."""

    needle = (query or "").strip().lower()
    if not needle:
        return []

    hits = []
    for e in sorted(entities, key=lambda e: (e.order, e.table_name)):
        haystack = " ".join([e.table_name, e.title_singular, e.title_plural, e.description])
        if needle in haystack.lower():
            hits.append(
                SearchResult(
                    title=e.title_plural,
                    description=e.description,
                    link=entity_url(base_url, e.table_name),
                )
            )
    return hits
