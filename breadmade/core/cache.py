"""Local durable cache backed by a JSON file"""
import json
from pathlib import Path
from typing import Any, Dict, Optional

from breadmade.utils.logger import logger


def load_json_self_heal(file_path: Path, default: Any) -> Any:
    """Load JSON file, moving a corrupted file aside and returning the default."""
    try:
        if not file_path.exists():
            return default
        with open(file_path, encoding="utf-8") as f:
            return json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.warning(f"Failed to load {file_path}, using default: {e}")
        if file_path.exists():
            backup_path = file_path.with_suffix(".bak")
            file_path.replace(backup_path)
            logger.warning(f"Backed up corrupted cache file to {backup_path}")
        return default


def save_json_atomic(file_path: Path, data: Any) -> None:
    """Save JSON file atomically to prevent corruption."""
    file_path.parent.mkdir(parents=True, exist_ok=True)
    temp_path = file_path.with_suffix(".tmp")

    try:
        with open(temp_path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False, default=str)
        temp_path.replace(file_path)
    except Exception:
        if temp_path.exists():
            temp_path.unlink()
        raise


class LocalCache:
    """Key/value store persisted to a single JSON file.

    Every write rewrites the whole file, so the latest value for a key always
    overwrites the previous one.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def _load(self) -> Dict[str, Any]:
        data = load_json_self_heal(self.path, {})
        if not isinstance(data, dict):
            return {}
        return data

    def get(self, key: str) -> Optional[Any]:
        return self._load().get(key)

    def set(self, key: str, value: Any) -> None:
        data = self._load()
        data[key] = value
        save_json_atomic(self.path, data)

    def remove(self, key: str) -> None:
        data = self._load()
        if key in data:
            del data[key]
            save_json_atomic(self.path, data)
