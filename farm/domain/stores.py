# farm/domain/stores.py
"""
Store contracts consumed by the allocation service. The SQLAlchemy
repositories in farm.infrastructure.repositories implement these.
"""
from typing import List, Optional, Protocol

from farm.domain.models import Color


class AnimalStore(Protocol):
    def find_all(self) -> List: ...
    def find_all_by_color(self, color: Color) -> List: ...
    def find_all_by_barn(self, barn_id: int) -> List: ...
    def color_of(self, animal_id: int) -> Color: ...
    def get_by_id(self, animal_id: int): ...
    def save(self, animal): ...
    def save_all(self, animals: List): ...
    def delete(self, animal) -> None: ...
    def delete_all(self) -> None: ...


class BarnStore(Protocol):
    def find_all(self) -> List: ...
    def find_all_by_color(self, color: Color) -> List: ...
    def get_by_id(self, barn_id: int): ...
    def save(self, barn): ...
    def save_all(self, barns: List): ...
    def delete(self, barn) -> None: ...
    def delete_all(self) -> None: ...
    def occupancy(self, color: Optional[Color] = None) -> List: ...
