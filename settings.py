"""App settings.

Flask loads this module on startup via ``app.config.from_pyfile(...)``.
Environment variables (see ``config.env_overrides``) and the mapping passed to
``create_app(...)`` take precedence.
"""

# Demo entities matching the tables declared in models/.
DEMO_ENTITIES: list[dict[str, object]] = [
    {
        "table_name": "users",
        "primary_key": "id",
        "title_plural": "Users",
        "title_singular": "User",
        "description": "Users of the system.",
        "select_columns": ["id", "name", "email", "is_active"],
        "edit_columns": ["name", "email", "is_active"],
        # The password is only set on creation; it is never shown back.
        "new_columns": ["name", "email", "password", "is_active"],
        "fav_icon": "fa-user",
        "order": 1,
    },
    {
        "table_name": "organizations",
        "primary_key": "id",
        "title_plural": "Organizations",
        "title_singular": "Organization",
        "description": "Organizations of the system.",
        "select_columns": ["id", "name"],
        "edit_columns": ["name"],
        "fav_icon": "fa-building",
        "order": 2,
    },
    {
        "table_name": "permissions",
        "primary_key": "id",
        "title_plural": "Permissions",
        "title_singular": "Permission",
        "description": "User permissions",
        "select_columns": ["id", "name"],
        "edit_columns": ["name"],
        "fav_icon": "fa-key",
        "order": 3,
    },
    {
        "table_name": "api_keys",
        "primary_key": "id",
        "title_plural": "Api Keys",
        "title_singular": "Api Key",
        "description": "User api keys",
        "select_columns": ["id", "name", "key"],
        "edit_columns": ["name", "key"],
        "fav_icon": "fa-key",
        "order": 4,
    },
    {
        "table_name": "settings",
        "primary_key": "id",
        "title_plural": "Settings",
        "title_singular": "Setting",
        "description": "User settings",
        "select_columns": ["id", "name", "value"],
        "edit_columns": ["name", "value"],
        "fav_icon": "fa-cog",
        "order": 5,
    },
    {
        "table_name": "tasks",
        "primary_key": "id",
        "title_plural": "Tasks",
        "title_singular": "Task",
        "description": "User tasks",
        "select_columns": ["id", "name", "status", "due_at"],
        "edit_columns": ["name", "description", "status", "priority", "due_at"],
        "fav_icon": "fa-tasks",
        "order": 6,
    },
]

# Single source of truth for app configuration.
SETTINGS: dict[str, object] = {
    # Flask
    "SECRET_KEY": "dev-not-secret",
    # Database (None -> data/crud_admin.db, see db.DEFAULT_DATABASE_URI)
    "DATABASE_URI": None,
    "DATABASE_ENGINE": None,
    # Per-statement deadline in seconds (None disables it).
    "STATEMENT_TIMEOUT_S": None,
    # Admin
    "ADMIN_BASE_URL": "/admin",
    "ADMIN_ENTITIES": DEMO_ENTITIES,
    "ADMIN_DEFAULT_FORMATTERS": {},
    "ADMIN_USER_IDENTIFIER": None,
    "ADMIN_PERMISSION_CHECKER": None,
    "ADMIN_TEMPLATES": {},
    # Startup
    "INIT_DB_ON_STARTUP": False,
    # Logging
    "LOG_LEVEL": "INFO",
    "SLOW_REQUEST_MS": 250,
}

# Flask only picks up upper-case module attributes.
globals().update(SETTINGS)
