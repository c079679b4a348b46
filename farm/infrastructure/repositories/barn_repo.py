from typing import List, Optional, Tuple

from sqlalchemy import func

from farm.domain.errors import NotFoundError
from farm.domain.models import Color
from farm.infrastructure.db.session import SessionLocal
from farm.infrastructure.models import Animal, Barn


class BarnRepo:
    """Barn store. Like AnimalRepo, flushes and leaves commit to the caller."""

    def __init__(self, db=None):
        self.db = db or SessionLocal()

    def find_all(self) -> List[Barn]:
        return self.db.query(Barn).order_by(Barn.id).all()

    def find_all_by_color(self, color: Color) -> List[Barn]:
        return self.db.query(Barn).filter(Barn.color == color).order_by(Barn.id).all()

    def get_by_id(self, barn_id: int) -> Barn:
        barn = self.db.get(Barn, barn_id)
        if barn is None:
            raise NotFoundError("barn", barn_id)
        return barn

    def save(self, barn: Barn) -> Barn:
        self.db.add(barn)
        self.db.flush()
        return barn

    def save_all(self, barns: List[Barn]) -> List[Barn]:
        self.db.add_all(barns)
        self.db.flush()
        return barns

    def delete(self, barn: Barn):
        self.db.delete(barn)
        self.db.flush()

    def delete_all(self):
        self.db.query(Barn).delete(synchronize_session="fetch")
        self.db.flush()

    def occupancy(self, color: Optional[Color] = None) -> List[Tuple[Barn, int]]:
        """Barns with the number of animals referencing each, ordered by id."""
        q = (
            self.db.query(Barn, func.count(Animal.id))
            .outerjoin(Animal, Animal.barn_id == Barn.id)
            .group_by(Barn.id)
            .order_by(Barn.id)
        )
        if color is not None:
            q = q.filter(Barn.color == color)
        return [(barn, count) for barn, count in q.all()]
