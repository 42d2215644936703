# session.py
import logging
from dataclasses import dataclass
from typing import List, Optional

from pydantic import ValidationError

from config import CURRENT_USER_STORAGE_KEY
from database import StorageError
from matcher import find_matches_for_user
from models import Match, StorageResult, User

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProfileCreated:
    """Emitted by the profile-creation flow; consumed once by the match flow."""
    user: User


def handle_profile_created(store, event: ProfileCreated) -> List[Match]:
    """Automatic match search right after a profile is created."""
    logger.info("Running matches for new profile %s", event.user.id)
    return find_matches_for_user(store, event.user)


class Session:
    """The active session's own profile, persisted under the current-user key."""

    def __init__(self, storage):
        self.storage = storage
        self.current_user: Optional[User] = None

    def load(self) -> StorageResult:
        key = CURRENT_USER_STORAGE_KEY
        try:
            raw = self.storage.get_item(key)
        except StorageError as e:
            logger.error("Error loading current user: %s", e)
            return StorageResult(ok=False, key=key, error=str(e))
        if raw is None:
            return StorageResult(ok=True, key=key)
        try:
            self.current_user = User.model_validate_json(raw)
        except ValidationError:
            logger.error("Discarding corrupt current user under %s", key)
            try:
                self.storage.remove_item(key)
            except StorageError as e:
                logger.error("Could not purge %s: %s", key, e)
            return StorageResult(ok=False, key=key, error="corrupt data")
        return StorageResult(ok=True, key=key)

    def set_current_user(self, user: User) -> StorageResult:
        self.current_user = user
        key = CURRENT_USER_STORAGE_KEY
        try:
            self.storage.set_item(key, user.model_dump_json(by_alias=True))
        except StorageError as e:
            logger.error("Error saving current user: %s", e)
            return StorageResult(ok=False, key=key, error=str(e))
        return StorageResult(ok=True, key=key)

    def clear(self) -> None:
        """Forget the in-memory user; the persisted key is removed by ProfileStore.clear_all_data()."""
        self.current_user = None
