# tests/conftest.py
import random

import pytest
from faker import Faker
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from farm.domain.capacity import CapacityPolicy
from farm.domain.models import Color
from farm.infrastructure.db.init_db import init_db
from farm.infrastructure.models import Animal, Barn
from farm.services.animal_service import AnimalService
from farm.services.locks import ColorLockRegistry

FAKE = Faker()
CAPACITY = 3


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine):
    Session = sessionmaker(bind=engine, expire_on_commit=False, autoflush=False)
    session = Session()
    yield session
    session.close()


@pytest.fixture
def policy():
    return CapacityPolicy(capacity=CAPACITY, rng=random.Random(7))


@pytest.fixture
def service(db, policy):
    return AnimalService(db=db, policy=policy, locks=ColorLockRegistry())


def make_animal(color: Color = Color.RED, name: str = None) -> Animal:
    return Animal(name=name or FAKE.first_name(), favorite_color=color)


def seed_barns(db, color: Color, occupancies):
    """Persist barns of one color holding the given number of animals each, bypassing the service."""
    barns = []
    for i, count in enumerate(occupancies):
        barn = Barn(name=f"Seed {i}", color=color)
        db.add(barn)
        db.flush()
        for _ in range(count):
            db.add(Animal(name=FAKE.first_name(), favorite_color=color, barn=barn))
        barns.append(barn)
    db.commit()
    return barns


def occupancies(db, color: Color = None):
    """Occupancy per barn of a color, ordered by barn id."""
    query = db.query(Barn).order_by(Barn.id)
    if color is not None:
        query = query.filter(Barn.color == color)
    return [db.query(Animal).filter(Animal.barn_id == b.id).count() for b in query.all()]


def assert_invariants(db, capacity: int = CAPACITY):
    for animal in db.query(Animal).all():
        assert animal.barn is not None
        assert animal.barn.color == animal.favorite_color
    for barn in db.query(Barn).all():
        count = db.query(Animal).filter(Animal.barn_id == barn.id).count()
        assert 1 <= count <= capacity, f"{barn} holds {count}"
