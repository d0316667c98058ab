from models import Base
from sqlalchemy import Column, DateTime, Integer, String, Text


class Task(Base):
    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    status = Column(String, nullable=False, default="todo", server_default="todo")
    priority = Column(Integer, nullable=True)
    due_at = Column(DateTime, nullable=True)
