"""Key-value blob stores holding serialized history.

Both stores keep whole text values under a single key and have the same
``get``/``set`` surface; the history layer doesn't care which it gets.
"""

import logging
import os
from pathlib import Path
from typing import Dict, Optional

logger = logging.getLogger(__name__)


class MemoryStore:
    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._values: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value


class JsonFileStore:
    """One ``<key>.json`` file per key under ``directory``."""

    def __init__(self, directory: Path):
        self.directory = Path(directory)

    def path_for(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def get(self, key: str) -> Optional[str]:
        target = self.path_for(key)
        if not target.exists():
            return None
        with target.open('r', encoding='utf-8') as handle:
            return handle.read()

    def set(self, key: str, value: str) -> None:
        target = self.path_for(key)
        target.parent.mkdir(parents=True, exist_ok=True)
        tmp = target.with_suffix('.json.tmp')
        with tmp.open('w', encoding='utf-8') as handle:
            handle.write(value)
        # readers see the old blob or the new one, never a partial write
        os.replace(tmp, target)
        logger.debug(f"Wrote {len(value)} bytes to {target}")
