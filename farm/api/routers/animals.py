# farm/api/routers/animals.py
"""
Animal endpoints: list, add (single and batch), remove, clear the farm.
"""
from typing import List

from fastapi import APIRouter, Depends

from farm.api.dependencies import get_animal_service
from farm.domain.models import AnimalCreate, AnimalDTO, RemoveAnimalsReq
from farm.infrastructure.models import Animal
from farm.services.animal_service import AnimalService

router = APIRouter()


@router.get("", response_model=List[AnimalDTO], summary="List all animals")
def list_animals(service: AnimalService = Depends(get_animal_service)):
    return service.find_all()


@router.post("", response_model=AnimalDTO, summary="Add an animal to the farm")
def add_animal(req: AnimalCreate, service: AnimalService = Depends(get_animal_service)):
    return service.add_to_farm(Animal(name=req.name, favorite_color=req.favorite_color))


@router.post("/batch", response_model=List[AnimalDTO], summary="Add several animals, in order")
def add_animals(reqs: List[AnimalCreate], service: AnimalService = Depends(get_animal_service)):
    return service.add_many([Animal(name=r.name, favorite_color=r.favorite_color) for r in reqs])


@router.get("/{animal_id}", response_model=AnimalDTO, summary="Get an animal")
def get_animal(animal_id: int, service: AnimalService = Depends(get_animal_service)):
    return service.get_animal(animal_id)


@router.delete("/{animal_id}", summary="Remove an animal from the farm")
def remove_animal(animal_id: int, service: AnimalService = Depends(get_animal_service)):
    service.remove_many([animal_id])
    return {"removed": [animal_id]}


@router.post("/remove", summary="Remove several animals, in order")
def remove_animals(req: RemoveAnimalsReq, service: AnimalService = Depends(get_animal_service)):
    service.remove_many(req.ids)
    return {"removed": req.ids}


@router.delete("", summary="Remove every animal and barn")
def clear_farm(service: AnimalService = Depends(get_animal_service)):
    service.delete_all()
    return {"status": "ok"}
