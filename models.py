# models.py
from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


class User(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    age: int
    interests: List[str]
    created_at: datetime = Field(alias="createdAt")

    @field_validator("interests")
    @classmethod
    def _dedupe_interests(cls, v: List[str]) -> List[str]:
        # a set of tags; first occurrence keeps its position for display
        return list(dict.fromkeys(v))


class Match(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user: User
    common_interests: List[str] = Field(alias="commonInterests")
    match_score: int = Field(alias="matchScore")


class StorageResult(BaseModel):
    """Outcome of a single load or save against the key-value store."""
    ok: bool
    key: Optional[str] = None
    error: Optional[str] = None
