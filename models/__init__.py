"""SQLAlchemy models for the demo tables.

Important: This project uses a single declarative Base defined in `db.py`.
Import `Base` from this package in all model modules.

The admin itself never imports these models: it discovers table shapes at
runtime. They exist so `db.init_db()` and the tests can create a fresh
database with the demo entity set from `settings.py`.
"""

from db import Base  # re-export a single shared Base

# Import models so they are registered with SQLAlchemy metadata.
from models.users import User  # noqa: F401
from models.organizations import Organization  # noqa: F401
from models.permissions import Permission  # noqa: F401
from models.api_keys import ApiKey  # noqa: F401
from models.app_settings import AppSetting  # noqa: F401
from models.tasks import Task  # noqa: F401
