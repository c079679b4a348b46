# farm/services/animal_service.py
"""
Allocation engine: places animals into barns of their favorite color.

Every public operation runs as one transaction while holding the lock of the
color it touches. Repositories only flush; commit and rollback happen here.
"""
import logging
from contextlib import contextmanager
from typing import Dict, List, Optional, Tuple

from sqlalchemy import inspect
from sqlalchemy.exc import SQLAlchemyError

from farm.domain.balancing import balance_chunks
from farm.domain.capacity import CapacityPolicy
from farm.domain.errors import CapacityInvariantViolation, NotFoundError, StoreFailure
from farm.domain.models import Color
from farm.domain.stores import AnimalStore, BarnStore
from farm.infrastructure.db.session import SessionLocal
from farm.infrastructure.models import Animal, Barn
from farm.infrastructure.repositories.animal_repo import AnimalRepo
from farm.infrastructure.repositories.barn_repo import BarnRepo
from farm.services.locks import ColorLockRegistry, color_locks

logger = logging.getLogger(__name__)


class AnimalService:
    def __init__(
        self,
        db=None,
        animal_repo: AnimalStore = None,
        barn_repo: BarnStore = None,
        policy: CapacityPolicy = None,
        locks: ColorLockRegistry = None,
    ):
        self.db = db or SessionLocal()
        self.animal_repo = animal_repo or AnimalRepo(self.db)
        self.barn_repo = barn_repo or BarnRepo(self.db)
        self.policy = policy or CapacityPolicy()
        self.locks = locks or color_locks

    # ----------------------------
    # Transactions
    # ----------------------------

    @contextmanager
    def _transaction(self, *colors: Color):
        with self.locks.hold(*colors):
            # objects loaded before the lock may have been moved by another session
            self.db.expire_all()
            try:
                yield
                self.db.commit()
            except SQLAlchemyError as exc:
                self.db.rollback()
                logger.warning("Store failure, rolled back: %s", exc)
                raise StoreFailure(str(exc)) from exc
            except Exception:
                self.db.rollback()
                logger.warning("Operation aborted, rolled back", exc_info=True)
                raise

    # ----------------------------
    # Queries
    # ----------------------------

    def find_all(self) -> List[Animal]:
        return self.animal_repo.find_all()

    def get_animal(self, animal_id: int) -> Animal:
        return self.animal_repo.get_by_id(animal_id)

    def barn_occupancy(self, color: Optional[Color] = None) -> List[Tuple[Barn, int]]:
        return self.barn_repo.occupancy(color)

    def barn_detail(self, barn_id: int) -> Tuple[Barn, List[Animal]]:
        barn = self.barn_repo.get_by_id(barn_id)
        return barn, self.animal_repo.find_all_by_barn(barn_id)

    # ----------------------------
    # Add
    # ----------------------------

    def add_to_farm(self, animal: Animal) -> Animal:
        with self._transaction(animal.favorite_color):
            self._add(animal)
        return animal

    def add_many(self, animals: List[Animal]) -> List[Animal]:
        return [self.add_to_farm(a) for a in animals]

    def _add(self, animal: Animal):
        color = animal.favorite_color
        capacity = self.policy.capacity()
        barns = self.barn_repo.find_all_by_color(color)

        if not barns:
            barn = self._create_barn(color)
            animal.barn = barn
            self.barn_repo.save(barn)
            self.animal_repo.save(animal)
            return

        # a re-added animal is not counted against its own barn
        population = [a for a in self.animal_repo.find_all_by_color(color) if a is not animal]
        members = self._members_by_barn(barns, population)

        # lowest occupancy, ties go to the lowest barn id
        target = min(barns, key=lambda b: (len(members[b.id]), b.id))
        if len(members[target.id]) < capacity:
            logger.debug("Placing %s in %s (%d/%d)", animal.name, target.name, len(members[target.id]), capacity)
            animal.barn = target
            self.animal_repo.save(animal)
            return

        barns = barns + [self._create_barn(color)]
        population = population + [animal]
        chunk_size = len(population) // len(barns)
        self._balance(barns, population, chunk_size)

    # ----------------------------
    # Remove
    # ----------------------------

    def remove_from_farm(self, animal: Animal):
        identity = inspect(animal).identity
        if identity is None:
            raise NotFoundError("animal", animal.id)
        self._remove_by_id(identity[0])

    def remove_many(self, animal_ids: List[int]):
        for animal_id in animal_ids:
            self._remove_by_id(animal_id)

    def _remove_by_id(self, animal_id: int):
        color = self.animal_repo.color_of(animal_id)
        with self._transaction(color):
            # reload under the lock, the caller's copy may be stale or gone
            self._remove(self.animal_repo.get_by_id(animal_id))

    def _remove(self, animal: Animal):
        color = animal.favorite_color
        capacity = self.policy.capacity()
        population = self.animal_repo.find_all_by_color(color)
        if all(a.id != animal.id for a in population):
            raise NotFoundError("animal", animal.id)

        barns = self._barns_of(population)
        members = self._members_by_barn(barns, population)
        own_barn = next(b for b in barns if b.id == animal.barn_id)

        if len(barns) == 1:
            self.animal_repo.delete(animal)
            if len(members[own_barn.id]) == 1:
                logger.info("Deleting %s, its last animal left", own_barn.name)
                self.barn_repo.delete(own_barn)
            return

        remaining = [a for a in population if a.id != animal.id]
        k = len(barns)
        n = len(remaining)
        min_cap, min_rem = divmod(n, k - 1)
        max_cap = n // k

        if min_cap <= capacity and min_rem == 0:
            dropped, kept = barns[0], barns[1:]
            logger.info("Collapsing %d %s barns into %d, dropping %s", k, color.value, k - 1, dropped.name)
            self._balance(kept, remaining, min_cap)
            self.animal_repo.delete(animal)
            self.barn_repo.delete(dropped)
        elif max_cap <= capacity and max_cap > 1:
            self._balance(barns, remaining, max_cap)
            self.animal_repo.delete(animal)
        else:
            logger.debug("No redistribution for %s (%d animals, %d barns)", color.value, n, k)
            self.animal_repo.delete(animal)
            if len(members[own_barn.id]) == 1:
                logger.info("Deleting %s, its last animal left", own_barn.name)
                self.barn_repo.delete(own_barn)

    # ----------------------------
    # Bulk
    # ----------------------------

    def delete_all(self):
        with self._transaction(*Color):
            self.animal_repo.delete_all()
            self.barn_repo.delete_all()
        logger.info("Deleted all animals and barns")

    # ----------------------------
    # Helpers
    # ----------------------------

    def _create_barn(self, color: Color) -> Barn:
        barn = Barn(name=self.policy.generate_name(self.policy.next_seed()), color=color)
        logger.info("Creating barn %s for %s", barn.name, color.value)
        return barn

    @staticmethod
    def _barns_of(population: List[Animal]) -> List[Barn]:
        barns = {a.barn_id: a.barn for a in population}
        return [barns[barn_id] for barn_id in sorted(barns)]

    @staticmethod
    def _members_by_barn(barns: List[Barn], population: List[Animal]) -> Dict[int, List[Animal]]:
        members = {b.id: [] for b in barns}
        for a in population:
            if a.barn_id not in members:
                raise CapacityInvariantViolation(
                    f"animal {a.id} ({a.favorite_color.value}) references barn {a.barn_id} of another color"
                )
            members[a.barn_id].append(a)
        return members

    def _balance(self, barns: List[Barn], population: List[Animal], chunk_size: int):
        chunks = balance_chunks(population, len(barns), chunk_size)

        capacity = self.policy.capacity()
        largest = max(len(chunk) for chunk in chunks)
        if largest > capacity:
            raise CapacityInvariantViolation(
                f"balancing {len(population)} animals into {len(barns)} barns "
                f"needs {largest} places, capacity is {capacity}"
            )

        for barn, chunk in zip(barns, chunks):
            for a in chunk:
                a.barn = barn

        self.barn_repo.save_all(barns)
        self.animal_repo.save_all(population)
        logger.info(
            "Rebalanced %d animals across %d barns: %s",
            len(population), len(barns), [len(chunk) for chunk in chunks],
        )
