"""Gym storage backed by a JSON file."""
import json
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, AsyncIterator, Dict, List, Optional

from pydantic import ValidationError

from ..config import settings
from ..exceptions import GymNotFoundError, GymStoreError
from ..models import GymRecord
from ..utils.logger import logger


class GymRepository:
    """Gym access for the duration of one store session."""

    async def find_all(self) -> List[GymRecord]:
        raise NotImplementedError

    async def save(self, gym: GymRecord) -> GymRecord:
        raise NotImplementedError

    async def update(self, gym_id: int, fields: Dict[str, Any]) -> GymRecord:
        raise NotImplementedError


class GymStore:
    """Hands out repository sessions; each session is released exactly once."""

    def session(self):
        """Return an async context manager yielding a ``GymRepository``."""
        raise NotImplementedError


class JsonGymRepository(GymRepository):
    """Repository over an in-memory copy of the gym file."""

    def __init__(self, path: Path, gyms: List[GymRecord]):
        self.path = path
        self._gyms: Dict[int, GymRecord] = {gym.id: gym for gym in gyms}

    async def find_all(self) -> List[GymRecord]:
        """Get copies of every gym, ordered by id."""
        return [gym.model_copy() for _, gym in sorted(self._gyms.items())]

    async def save(self, gym: GymRecord) -> GymRecord:
        """Insert or replace a gym and write the file.

        Args:
            gym: Gym to persist

        Returns:
            The stored gym
        """
        self._gyms[gym.id] = gym.model_copy()
        self._flush()
        return gym

    async def update(self, gym_id: int, fields: Dict[str, Any]) -> GymRecord:
        """Update selected fields of a gym and write the file.

        Args:
            gym_id: Gym identifier
            fields: Field values to overwrite

        Returns:
            The updated gym

        Raises:
            GymNotFoundError: If no gym has this id
        """
        if gym_id not in self._gyms:
            raise GymNotFoundError(gym_id)
        updated = self._gyms[gym_id].model_copy(update=fields)
        self._gyms[gym_id] = updated
        self._flush()
        return updated

    def _flush(self) -> None:
        data = [gym.model_dump(mode="json") for _, gym in sorted(self._gyms.items())]
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
        tmp_path.replace(self.path)


class JsonGymStore(GymStore):
    """Gym store reading and writing a single JSON array file."""

    def __init__(self, path: Optional[Path] = None):
        """Initialize the gym store.

        Args:
            path: JSON file path. Defaults to settings.store_path
        """
        self.path = path or settings.store_path
        self._ensure_file()

    def _ensure_file(self) -> None:
        """Ensure the store file and its directory exist."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        if not self.path.exists():
            self.path.write_text("[]", encoding="utf-8")

    def _load(self) -> List[GymRecord]:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                raw = json.load(f)
            return [GymRecord(**item) for item in raw]
        except (OSError, json.JSONDecodeError, ValidationError, TypeError) as e:
            raise GymStoreError(f"Failed to load gyms from {self.path}: {e}") from e

    @asynccontextmanager
    async def session(self) -> AsyncIterator[JsonGymRepository]:
        """Open a repository session over the current file contents."""
        repository = JsonGymRepository(self.path, self._load())
        logger.debug(f"Opened gym store session on {self.path}")
        try:
            yield repository
        finally:
            logger.debug(f"Closed gym store session on {self.path}")
