"""Dependency injection for the farm API."""

from fastapi import Depends
from sqlalchemy.orm import Session

from farm.infrastructure.db.session import get_session
from farm.services.animal_service import AnimalService


def get_animal_service(db: Session = Depends(get_session)) -> AnimalService:
    """AnimalService bound to the request's session."""
    return AnimalService(db=db)
