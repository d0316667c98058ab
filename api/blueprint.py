from flask import Blueprint

from api.middleware import enforce_permissions, handle_crud_error
from api.pages.auth import auth_bp
from api.pages.dashboard import dashboard_bp
from api.pages.entities import entities_bp
from api.pages.rendering import admin_context
from crud.errors import CrudError


def create_api_blueprint(*, enable_auth_pages: bool = True) -> Blueprint:
    """Create the admin blueprint and register page blueprints.

    Keep this as the single registration point to avoid double-registering routes.
    The URL prefix (the admin base URL) is given when the app registers it.
    """
    admin_bp = Blueprint("admin", __name__)

    # Applies to every nested blueprint.
    admin_bp.before_request(enforce_permissions)
    admin_bp.context_processor(admin_context)
    admin_bp.register_error_handler(CrudError, handle_crud_error)

    admin_bp.register_blueprint(dashboard_bp)
    admin_bp.register_blueprint(entities_bp)

    if enable_auth_pages:
        admin_bp.register_blueprint(auth_bp)

    return admin_bp
