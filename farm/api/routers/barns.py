# farm/api/routers/barns.py
"""
Barn endpoints: occupancy listing and barn details. Read only.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends

from farm.api.dependencies import get_animal_service
from farm.domain.models import AnimalDTO, BarnDetailDTO, BarnDTO, Color
from farm.services.animal_service import AnimalService

router = APIRouter()


@router.get("", response_model=List[BarnDTO], summary="List barns with their occupancy")
def list_barns(color: Optional[Color] = None, service: AnimalService = Depends(get_animal_service)):
    return [
        BarnDTO(id=b.id, name=b.name, color=b.color, occupancy=count)
        for b, count in service.barn_occupancy(color)
    ]


@router.get("/{barn_id}", response_model=BarnDetailDTO, summary="Get barn details")
def get_barn(barn_id: int, service: AnimalService = Depends(get_animal_service)):
    barn, animals = service.barn_detail(barn_id)
    return BarnDetailDTO(
        id=barn.id,
        name=barn.name,
        color=barn.color,
        occupancy=len(animals),
        animals=[AnimalDTO.model_validate(a) for a in animals],
    )
