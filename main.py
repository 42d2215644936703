import logging
from typing import List, Optional

import uvicorn
from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field, field_validator

from config import (
    API_HOST, API_PORT, DATABASE_FILE, LOG_LEVEL, SEED_SAMPLE_DATA,
    MIN_AGE, MAX_AGE, MIN_PROFILE_INTERESTS,
)
from database import MemoryStorage, SqliteStorage
from matcher import find_matches
from models import Match, User
from profile_store import ProfileStore
from sample_data import AVAILABLE_INTERESTS
from session import ProfileCreated, Session, handle_profile_created

logger = logging.getLogger(__name__)


# ----------------------
# Pydantic models
# ----------------------
class ProfilePayload(BaseModel):
    name: str
    age: int = Field(ge=MIN_AGE, le=MAX_AGE)
    interests: List[str]

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name must not be empty")
        return v

    @field_validator("interests")
    @classmethod
    def _known_interests(cls, v: List[str]) -> List[str]:
        v = list(dict.fromkeys(v))
        unknown = [i for i in v if i not in AVAILABLE_INTERESTS]
        if unknown:
            raise ValueError(f"unknown interests: {', '.join(unknown)}")
        if len(v) < MIN_PROFILE_INTERESTS:
            raise ValueError(f"select at least {MIN_PROFILE_INTERESTS} interests")
        return v


# ----------------------
# Helpers
# ----------------------
def dump_user(user: User) -> dict:
    return user.model_dump(mode="json", by_alias=True)


def dump_match(store: ProfileStore, match: Match) -> dict:
    data = match.model_dump(mode="json", by_alias=True)
    data["shortlisted"] = store.is_user_shortlisted(match.user.id)
    return data


def default_storage():
    if DATABASE_FILE == ":memory:":
        return MemoryStorage()
    return SqliteStorage(DATABASE_FILE)


def create_app(storage=None) -> FastAPI:
    """Build the app around an explicitly loaded store and session."""
    storage = storage if storage is not None else default_storage()
    store = ProfileStore(storage)
    store.load()
    session = Session(storage)
    session.load()
    if SEED_SAMPLE_DATA:
        store.add_sample_data()

    app = FastAPI(title="Friend Finder")
    app.state.store = store
    app.state.session = session

    @app.get("/")
    def root():
        return {"status": "ok", "service": "Friend Finder", "users": len(store.get_all_users())}

    @app.get("/interests")
    def interests():
        return {"interests": AVAILABLE_INTERESTS}

    @app.post("/profiles", status_code=201)
    def create_profile(payload: ProfilePayload):
        user = store.create_user(payload.name, payload.age, payload.interests)
        session.set_current_user(user)
        matches = handle_profile_created(store, ProfileCreated(user))
        return {"user": dump_user(user), "matches": [dump_match(store, m) for m in matches]}

    @app.get("/profiles")
    def list_profiles():
        return {"users": [dump_user(u) for u in store.get_all_users()]}

    @app.get("/me")
    def me():
        if session.current_user is None:
            raise HTTPException(status_code=404, detail="No profile created in this session")
        return dump_user(session.current_user)

    @app.get("/matches")
    def matches(name: str):
        name = name.strip()
        if not name:
            raise HTTPException(status_code=400, detail="Empty name")
        user: Optional[User] = store.get_user_by_name(name)
        found = find_matches(store, name)
        return {
            "user": dump_user(user) if user else None,
            "matches": [dump_match(store, m) for m in found],
        }

    @app.get("/shortlist")
    def shortlist():
        return {"users": [dump_user(u) for u in store.get_shortlisted_users()]}

    @app.post("/shortlist/{user_id}")
    def add_to_shortlist(user_id: str):
        store.shortlist_user(user_id)
        return {"user_id": user_id, "shortlisted": True}

    @app.delete("/shortlist/{user_id}")
    def remove_from_shortlist(user_id: str):
        store.remove_from_shortlist(user_id)
        return {"user_id": user_id, "shortlisted": False}

    @app.post("/sample-data")
    def sample_data():
        created = store.add_sample_data()
        return {"created": len(created)}

    @app.delete("/data")
    def clear_data():
        store.clear_all_data()
        session.clear()
        return {"status": "cleared"}

    return app


if __name__ == "__main__":
    logging.basicConfig(level=LOG_LEVEL)
    uvicorn.run("main:create_app", factory=True, host=API_HOST, port=API_PORT)
