from flask import Blueprint

from api.pages.rendering import render_page

# Authentication is supplied by the host application through the
# ADMIN_USER_IDENTIFIER hook; these pages are placeholders it can override
# with ADMIN_TEMPLATES.
auth_bp = Blueprint("auth", __name__)


@auth_bp.route("/login", methods=["GET"])
def login():
    return render_page("login")


@auth_bp.route("/register", methods=["GET"])
def register():
    return render_page("register")


@auth_bp.route("/forget-password", methods=["GET"])
def forget_password():
    return render_page("forget_password")
