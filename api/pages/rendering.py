"""Shared helpers for the admin pages: the Admin handle, page rendering with
template overrides, and the template helpers every page gets."""

from __future__ import annotations

from typing import Any, Dict

from flask import current_app, render_template, render_template_string, request

from crud.admin import Admin
from crud.formatters import format_column_name, format_value, html_input_type, html_input_value
from crud.rows import Column

EXTENSION_KEY = "crud_admin"


def current_admin() -> Admin:
    return current_app.extensions[EXTENSION_KEY]


def wants_json() -> bool:
    return request.accept_mimetypes.best == "application/json"


def admin_context() -> Dict[str, Any]:
    """Context processor: base data plus formatting helpers."""

    admin = current_admin()

    def _format_value(entity, column: Column) -> str:
        return format_value(entity, column, admin.default_formatters)

    return {
        "base_url": admin.base_url,
        "menus": admin.menus(),
        "show_search_bar": True,
        "format_value": _format_value,
        "column_label": format_column_name,
        "input_type": lambda column: html_input_type(column.generic_type),
        "input_value": html_input_value,
    }


def render_page(name: str, status: int = 200, **context: Any):
    """Render `pages/<name>.html`, or the override registered for `name`."""

    override = current_admin().templates.get(name)
    if override is not None:
        return render_template_string(override, **context), status
    return render_template(f"pages/{name}.html", **context), status
