from models import Base
from sqlalchemy import Column, Integer, String


class ApiKey(Base):
    __tablename__ = "api_keys"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String, nullable=False)
    # Stored as entered; the admin does not hash or rotate keys.
    key = Column(String, nullable=False)
