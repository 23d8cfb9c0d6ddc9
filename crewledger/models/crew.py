from enum import Enum
from typing import List

from pydantic import EmailStr, Field

from crewledger.models.base import MongoModel


class UserRole(str, Enum):
    CAPTAIN = "captain"
    EDITOR = "editor"
    CREW = "crew"


class CrewMember(MongoModel):
    season_id: str
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    color: str = "#000000"
    roles: List[UserRole] = [UserRole.CREW]

    @property
    def is_captain(self) -> bool:
        return UserRole.CAPTAIN in self.roles
