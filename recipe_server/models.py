from sqlalchemy import Column, String, Text

from .db import Base


class Recipe(Base):
    __tablename__ = "recipes"
    id = Column(String, primary_key=True, index=True)
    name = Column(Text, nullable=False)
    ingredients = Column(Text, nullable=False)  # JSON-encoded list
    instructions = Column(Text, nullable=False)
    tags = Column(Text, nullable=True)  # JSON-encoded list, NULL when absent
    source = Column(Text, nullable=True)
