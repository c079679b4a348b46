from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Color(str, Enum):
    RED = "RED"
    ORANGE = "ORANGE"
    YELLOW = "YELLOW"
    GREEN = "GREEN"
    BLUE = "BLUE"
    PURPLE = "PURPLE"
    PINK = "PINK"
    BLACK = "BLACK"
    WHITE = "WHITE"
    GRAY = "GRAY"


class AnimalCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    favorite_color: Color


class AnimalDTO(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    favorite_color: Color
    barn_id: Optional[int] = None


class BarnDTO(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    color: Color
    occupancy: int = 0


class BarnDetailDTO(BarnDTO):
    animals: List[AnimalDTO] = Field(default_factory=list)


class RemoveAnimalsReq(BaseModel):
    ids: List[int]
