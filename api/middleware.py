from __future__ import annotations

from flask import g, jsonify, redirect, request

from api.pages.rendering import current_admin, render_page, wants_json
from api.schemas.api_responses import fail_from
from crud.errors import CrudError, PermissionDenied
from crud.permissions import Outcome
from logging_utils import get_logger

logger = get_logger(__name__)

# Blueprints reachable without an identity (otherwise login would redirect to itself).
GATE_EXEMPT_BLUEPRINTS = {"admin.auth"}


def enforce_permissions():
    """before_request hook: run the permission gate before any admin view.

    Runs before the entity is looked up, so a denied caller gets the same
    answer for registered and unknown entities.
    """

    if request.blueprint in GATE_EXEMPT_BLUEPRINTS:
        return None

    view_args = request.view_args or {}
    entity_name = view_args.get("entity")
    decision = current_admin().gate.decide(request, entity_name, view_args.get("entity_id"))

    if decision.outcome is Outcome.LOGIN:
        return redirect(decision.redirect_to)
    if decision.outcome is Outcome.DENY:
        raise PermissionDenied(entity_name or "", decision.action.value if decision.action else "")

    g.admin_identity = decision.identity
    return None


_ERROR_PAGES = {404: "not_found", 403: "not_authorised"}


def handle_crud_error(exc: CrudError):
    payload, status = fail_from(exc)
    if status >= 500:
        logger.error("admin request failed path=%s: %s", request.path, exc, exc_info=exc)

    if wants_json():
        return jsonify(payload), status
    return render_page(_ERROR_PAGES.get(status, "error"), status=status, message=str(exc))
