from models import Base
from sqlalchemy import Column, DateTime, Integer, String, func

from utils.time_utils import utcnow_sa_default


class Permission(Base):
    __tablename__ = "permissions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String, unique=True, nullable=False)
    update_at = Column(DateTime, nullable=True)
    created_at = Column(
        DateTime,
        nullable=False,
        default=utcnow_sa_default,
        server_default=func.current_timestamp(),
    )
