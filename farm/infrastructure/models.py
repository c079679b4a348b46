# farm/infrastructure/models.py
"""
SQLAlchemy ORM models for the farm.

A barn keeps no list of its animals: membership is the set of animals whose
barn_id points at it, resolved by query.
"""
from sqlalchemy import Column, Enum, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from farm.domain.models import Color
from farm.infrastructure.db.session import Base


class Barn(Base):
    __tablename__ = "barns"

    id = Column(Integer, primary_key=True)
    name = Column(String(255), nullable=False)
    color = Column(Enum(Color), nullable=False, index=True)

    def __repr__(self):
        return f"<Barn id={self.id} name={self.name!r} color={self.color.value}>"


class Animal(Base):
    __tablename__ = "animals"

    id = Column(Integer, primary_key=True)
    name = Column(String(255), nullable=False)
    favorite_color = Column(Enum(Color), nullable=False, index=True)
    barn_id = Column(Integer, ForeignKey("barns.id"), nullable=False, index=True)

    # many-to-one only, no backref
    barn = relationship("Barn")

    def __repr__(self):
        return f"<Animal id={self.id} name={self.name!r} color={self.favorite_color.value} barn={self.barn_id}>"
