from typing import List

from farm.domain.errors import NotFoundError
from farm.domain.models import Color
from farm.infrastructure.db.session import SessionLocal
from farm.infrastructure.models import Animal


class AnimalRepo:
    """Animal store. Writes are flushed, never committed: the caller owns the transaction."""

    def __init__(self, db=None):
        self.db = db or SessionLocal()

    def find_all(self) -> List[Animal]:
        return self.db.query(Animal).order_by(Animal.id).all()

    def find_all_by_color(self, color: Color) -> List[Animal]:
        return (
            self.db.query(Animal)
            .filter(Animal.favorite_color == color)
            .order_by(Animal.id)
            .all()
        )

    def find_all_by_barn(self, barn_id: int) -> List[Animal]:
        return self.db.query(Animal).filter(Animal.barn_id == barn_id).order_by(Animal.id).all()

    def color_of(self, animal_id: int) -> Color:
        """Favorite color read straight from the table, bypassing the identity map."""
        color = self.db.query(Animal.favorite_color).filter(Animal.id == animal_id).scalar()
        if color is None:
            raise NotFoundError("animal", animal_id)
        return color

    def get_by_id(self, animal_id: int) -> Animal:
        animal = self.db.get(Animal, animal_id)
        if animal is None:
            raise NotFoundError("animal", animal_id)
        return animal

    def save(self, animal: Animal) -> Animal:
        self.db.add(animal)
        self.db.flush()
        return animal

    def save_all(self, animals: List[Animal]) -> List[Animal]:
        self.db.add_all(animals)
        self.db.flush()
        return animals

    def delete(self, animal: Animal):
        self.db.delete(animal)
        self.db.flush()

    def delete_all(self):
        self.db.query(Animal).delete(synchronize_session="fetch")
        self.db.flush()
