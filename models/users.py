from models import Base
from sqlalchemy import Boolean, Column, DateTime, Integer, String, func, true

from utils.time_utils import utcnow_sa_default


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String, nullable=False)
    email = Column(String, nullable=True)
    password = Column(String, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True, server_default=true())

    update_at = Column(DateTime, nullable=True, onupdate=utcnow_sa_default)
    # The admin inserts through Core, so the database supplies the default.
    created_at = Column(
        DateTime,
        nullable=False,
        default=utcnow_sa_default,
        server_default=func.current_timestamp(),
    )
