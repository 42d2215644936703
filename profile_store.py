# profile_store.py
import json
import logging
import threading
import uuid
from datetime import datetime, timezone
from typing import Callable, List, Optional

from pydantic import TypeAdapter, ValidationError

from config import USERS_STORAGE_KEY, SHORTLIST_STORAGE_KEY, CURRENT_USER_STORAGE_KEY
from database import StorageError
from models import StorageResult, User
from sample_data import SAMPLE_USERS

logger = logging.getLogger(__name__)

_users_adapter = TypeAdapter(List[User])
_shortlist_adapter = TypeAdapter(List[str])


def log_storage_error(result: StorageResult) -> None:
    logger.error("Storage error on %s: %s", result.key, result.error)


class ProfileStore:
    """
    Owns the list of users and the shortlist of favorited user ids.
    Every mutation is written through to `storage` before returning.
    Call load() once after construction to pick up persisted state.
    Each mutation holds `_lock` from the change through its save; FastAPI
    calls sync routes from a threadpool.
    """

    def __init__(self, storage, on_storage_error: Optional[Callable[[StorageResult], None]] = None):
        self.storage = storage
        self.on_storage_error = on_storage_error or log_storage_error
        self._users: List[User] = []
        self._shortlist: List[str] = []
        self._lock = threading.RLock()

    # ----------------------
    # Persistence
    # ----------------------
    def _load_key(self, key: str, adapter: TypeAdapter):
        """Return (value or None, StorageResult). Corrupt values are purged."""
        try:
            raw = self.storage.get_item(key)
        except StorageError as e:
            return None, StorageResult(ok=False, key=key, error=str(e))
        if raw is None:
            return None, StorageResult(ok=True, key=key)
        try:
            return adapter.validate_json(raw), StorageResult(ok=True, key=key)
        except ValidationError as e:
            logger.warning("Discarding corrupt data under %s", key)
            try:
                self.storage.remove_item(key)
            except StorageError as remove_error:
                logger.error("Could not purge %s: %s", key, remove_error)
            return None, StorageResult(ok=False, key=key, error=f"corrupt data: {e.error_count()} errors")

    def load(self) -> List[StorageResult]:
        with self._lock:
            users, users_result = self._load_key(USERS_STORAGE_KEY, _users_adapter)
            shortlist, shortlist_result = self._load_key(SHORTLIST_STORAGE_KEY, _shortlist_adapter)
            self._users = users or []
            self._shortlist = list(dict.fromkeys(shortlist or []))
        results = [users_result, shortlist_result]
        for result in results:
            if not result.ok:
                self.on_storage_error(result)
        logger.info("Loaded %d users and %d shortlisted ids", len(self._users), len(self._shortlist))
        return results

    def save(self) -> List[StorageResult]:
        with self._lock:
            users_json = json.dumps([u.model_dump(mode="json", by_alias=True) for u in self._users])
            shortlist_json = json.dumps(self._shortlist)
            results = []
            for key, value in ((USERS_STORAGE_KEY, users_json), (SHORTLIST_STORAGE_KEY, shortlist_json)):
                try:
                    self.storage.set_item(key, value)
                    results.append(StorageResult(ok=True, key=key))
                except StorageError as e:
                    # in-memory state is kept even though it didn't reach storage
                    result = StorageResult(ok=False, key=key, error=str(e))
                    self.on_storage_error(result)
                    results.append(result)
        return results

    # ----------------------
    # Users
    # ----------------------
    def _generate_id(self) -> str:
        existing = {u.id for u in self._users}
        while True:
            user_id = uuid.uuid4().hex[:12]
            if user_id not in existing:
                return user_id

    def create_user(self, name: str, age: int, interests: List[str]) -> User:
        """No validation here; callers check name/age/interests."""
        with self._lock:
            user = User(
                id=self._generate_id(),
                name=name,
                age=age,
                interests=list(interests),
                created_at=datetime.now(timezone.utc),
            )
            self._users.append(user)
            self.save()
        logger.info("Created user %s (%s)", user.id, user.name)
        return user

    def get_user_by_name(self, name: str) -> Optional[User]:
        """First user in store order whose name matches case-insensitively."""
        wanted = name.lower()
        for user in self._users:
            if user.name.lower() == wanted:
                return user
        return None

    def get_all_users(self) -> List[User]:
        return list(self._users)

    def add_sample_data(self) -> List[User]:
        """Seed the demo pool, only when no users exist yet."""
        with self._lock:
            if self._users:
                return []
            now = datetime.now(timezone.utc)
            created = []
            for sample in SAMPLE_USERS:
                user = User(id=self._generate_id(), created_at=now, **sample)
                self._users.append(user)
                created.append(user)
            self.save()
        logger.info("Seeded %d sample users", len(created))
        return created

    # ----------------------
    # Shortlist
    # ----------------------
    def shortlist_user(self, user_id: str) -> None:
        with self._lock:
            if user_id not in self._shortlist:
                self._shortlist.append(user_id)
                self.save()

    def remove_from_shortlist(self, user_id: str) -> None:
        with self._lock:
            if user_id in self._shortlist:
                self._shortlist.remove(user_id)
                self.save()

    def is_user_shortlisted(self, user_id: str) -> bool:
        return user_id in self._shortlist

    def get_shortlisted_users(self) -> List[User]:
        # user-store order, not the order ids were shortlisted
        return [u for u in self._users if u.id in self._shortlist]

    def clear_all_data(self) -> None:
        with self._lock:
            self._users = []
            self._shortlist = []
            for key in (USERS_STORAGE_KEY, SHORTLIST_STORAGE_KEY, CURRENT_USER_STORAGE_KEY):
                try:
                    self.storage.remove_item(key)
                except StorageError as e:
                    self.on_storage_error(StorageResult(ok=False, key=key, error=str(e)))
        logger.info("Cleared all stored data")
