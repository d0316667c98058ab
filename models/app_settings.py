from models import Base
from sqlalchemy import Column, Integer, String, Text


class AppSetting(Base):
    """Free-form name/value settings (table `settings`)."""

    __tablename__ = "settings"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String, unique=True, nullable=False)
    value = Column(Text, nullable=True)
