# Saved idea list
# Keeps the user's saved ideas in a small file-backed key/value store,
# one JSON value per key, mirroring browser local storage semantics.

import json
import logging
from pathlib import Path
from typing import List, Optional, Union

from hustle.config import LOCAL_STORAGE_DIR, SAVED_IDEAS_KEY
from hustle.models import Idea

logger = logging.getLogger(__name__)


class LocalStorage:
    """String values keyed by name, stored as files under a directory."""

    def __init__(self, directory: Union[str, Path] = LOCAL_STORAGE_DIR):
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def get_item(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set_item(self, key: str, value: str) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self._path(key)
        tmp_path = path.with_suffix(".tmp")
        tmp_path.write_text(value, encoding="utf-8")
        tmp_path.replace(path)

    def remove_item(self, key: str) -> None:
        self._path(key).unlink(missing_ok=True)


def _is_idea_record(item) -> bool:
    return (isinstance(item, dict)
            and isinstance(item.get("id"), str)
            and isinstance(item.get("text"), str)
            and isinstance(item.get("websites"), list))


class SavedIdeaStore:
    """
    Ordered list of saved ideas, unique by id.

    The persisted value is read once, when the store is created. Anything
    that is not a JSON array of idea records is discarded and the key
    cleared; after that the in-memory list is authoritative and every
    change is written back.
    """

    def __init__(self, storage: Optional[LocalStorage] = None, key: str = SAVED_IDEAS_KEY):
        self.storage = storage or LocalStorage()
        self.key = key
        self._ideas: List[Idea] = self._load()

    def _load(self) -> List[Idea]:
        try:
            raw = self.storage.get_item(self.key)
            if raw is None:
                return []
            parsed = json.loads(raw)
        except (ValueError, RecursionError, OSError) as e:
            logger.error(f"Failed to parse saved ideas from local storage: {e}")
            self._clear()
            return []

        if not isinstance(parsed, list) or not all(_is_idea_record(item) for item in parsed):
            logger.error(f"Loaded data from local storage has invalid format: {parsed!r}")
            self._clear()
            return []

        ideas: List[Idea] = []
        seen = set()
        for item in parsed:
            if item["id"] in seen:
                continue
            seen.add(item["id"])
            ideas.append(Idea(id=item["id"], text=item["text"],
                              websites=[w for w in item["websites"] if isinstance(w, str)]))
        return ideas

    def _clear(self) -> None:
        try:
            self.storage.remove_item(self.key)
        except OSError as e:
            logger.error(f"Failed to clear saved ideas from local storage: {e}")

    def _persist(self) -> None:
        try:
            if self._ideas:
                payload = json.dumps([idea.model_dump() for idea in self._ideas])
                self.storage.set_item(self.key, payload)
            else:
                self.storage.remove_item(self.key)
        except OSError as e:
            logger.error(f"Failed to save ideas to local storage: {e}")

    @property
    def ideas(self) -> List[Idea]:
        return list(self._ideas)

    def __len__(self) -> int:
        return len(self._ideas)

    def __contains__(self, idea_id: str) -> bool:
        return any(idea.id == idea_id for idea in self._ideas)

    def save(self, idea: Idea) -> bool:
        """Append an idea. Returns False, changing nothing, if its id is already saved."""
        if idea.id in self:
            return False
        self._ideas.append(idea)
        self._persist()
        return True

    def remove(self, idea_id: str) -> bool:
        """Remove the idea with this id. Returns False if there was none."""
        remaining = [idea for idea in self._ideas if idea.id != idea_id]
        if len(remaining) == len(self._ideas):
            return False
        self._ideas = remaining
        self._persist()
        return True
