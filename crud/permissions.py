"""Per-request permission gate.

The action is inferred from the request shape:
- last path segment `delete` (or HTTP DELETE) -> delete
- a target id in the path -> update
- POST without a target id -> create
- anything else -> read
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional

from logging_utils import get_logger

logger = get_logger(__name__)

DELETE_SEGMENT = "delete"

IdentityFn = Callable[[Any], Optional[str]]
AllowedFn = Callable[[str, str, str], bool]


class Action(str, Enum):
    READ = "read"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


def _has_delete_indicator(path: str) -> bool:
    segments = [s for s in (path or "").split("/") if s]
    return bool(segments) and segments[-1] == DELETE_SEGMENT


def resolve_action(method: str, path: str, target_id: Optional[str] = None) -> Action:
    method = (method or "GET").upper()

    if method == "DELETE" or _has_delete_indicator(path):
        return Action.DELETE
    if target_id:
        return Action.UPDATE
    if method in ("POST", "PUT", "PATCH"):
        return Action.CREATE
    return Action.READ


class Outcome(str, Enum):
    ALLOW = "allow"
    DENY = "deny"
    LOGIN = "login"


@dataclass(frozen=True)
class Decision:
    outcome: Outcome
    identity: str = ""
    action: Optional[Action] = None
    redirect_to: str = ""

    @property
    def allowed(self) -> bool:
        return self.outcome is Outcome.ALLOW


class PermissionGate:
    """Decide whether a request may reach its handler.

    - no identity function configured: every request is allowed
    - identity function returns empty: redirect to `login_url`
    - no predicate, or no entity named by the request: allowed
    - predicate returns False: denied; the handler must not run
    """

    def __init__(
        self,
        identify: Optional[IdentityFn] = None,
        allowed: Optional[AllowedFn] = None,
        *,
        login_url: str = "/admin/login",
    ) -> None:
        self.identify = identify
        self.allowed = allowed
        self.login_url = login_url

    def decide(
        self,
        request: Any,
        entity_name: Optional[str] = None,
        target_id: Optional[str] = None,
    ) -> Decision:
        if self.identify is None:
            return Decision(Outcome.ALLOW)

        identity = self.identify(request)
        if not identity:
            return Decision(Outcome.LOGIN, redirect_to=self.login_url)

        if self.allowed is None or not entity_name:
            return Decision(Outcome.ALLOW, identity=identity)

        action = resolve_action(request.method, request.path, target_id)
        if not self.allowed(identity, entity_name, action.value):
            logger.info(
                "permission denied identity=%s entity=%s action=%s",
                identity,
                entity_name,
                action.value,
            )
            return Decision(Outcome.DENY, identity=identity, action=action)

        return Decision(Outcome.ALLOW, identity=identity, action=action)
