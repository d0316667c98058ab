from flask import Blueprint, request

from api.pages.rendering import current_admin, render_page

dashboard_bp = Blueprint("dashboard", __name__)


@dashboard_bp.route("/", methods=["GET"])
def dashboard():
    """Dashboard: the entity menu."""
    return render_page("dashboard")


@dashboard_bp.route("/search/", methods=["GET"])
def search():
    """Search registered entities by name, title and description."""
    query = (request.args.get("q") or "").strip()
    results = current_admin().search(query)
    return render_page("search", query=query, results=results, result_count=len(results))
