"""
Resumability storage for in-progress assessments.

A checkpoint is a JSON document (see ``SessionCheckpoint``) stored under a
client-scoped key. Stores only move text around; encoding and decoding is
the caller's concern.
"""

from __future__ import annotations

import os
import re
import tempfile
from pathlib import Path
from typing import Protocol

from .config import AssessmentConfig, get_settings
from .exceptions import ConfigurationError
from .logging import get_logger

logger = get_logger(__name__)

_SAFE_KEY = re.compile(r"[^A-Za-z0-9_.-]+")


class CheckpointStore(Protocol):
    def get(self, key: str) -> str | None: ...

    def put(self, key: str, payload: str) -> None: ...

    def delete(self, key: str) -> None: ...


class InMemoryCheckpointStore:
    """Process-local store, used by default and in tests."""

    def __init__(self):
        self._data: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def put(self, key: str, payload: str) -> None:
        self._data[key] = payload

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def __contains__(self, key: object) -> bool:
        return key in self._data


class FileCheckpointStore:
    """One JSON file per key inside ``directory``; writes are atomic renames."""

    def __init__(self, directory: str | Path):
        self.directory = Path(directory)
        self.directory.mkdir(parents=True, exist_ok=True)

    def _path(self, key: str) -> Path:
        safe = _SAFE_KEY.sub("_", key).strip("._")
        if not safe:
            raise ValueError(f"Invalid checkpoint key: {key!r}")
        return self.directory / f"{safe}.json"

    def get(self, key: str) -> str | None:
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def put(self, key: str, payload: str) -> None:
        path = self._path(key)
        fd, tmp = tempfile.mkstemp(dir=self.directory, prefix=".ckpt-", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(payload)
            os.replace(tmp, path)
        except OSError:
            Path(tmp).unlink(missing_ok=True)
            raise

    def delete(self, key: str) -> None:
        self._path(key).unlink(missing_ok=True)


def create_checkpoint_store(config: AssessmentConfig | None = None) -> CheckpointStore:
    """Build the store selected by ``ASSESSMENT_CHECKPOINT_BACKEND``."""
    if config is None:
        config = get_settings().assessment

    if config.checkpoint_backend == "memory":
        logger.debug("Using in-memory checkpoint store")
        return InMemoryCheckpointStore()
    if config.checkpoint_backend == "file":
        logger.info("Using file checkpoint store at %s", config.checkpoint_dir)
        return FileCheckpointStore(config.checkpoint_dir)
    raise ConfigurationError(
        f"Unknown checkpoint backend: {config.checkpoint_backend}",
        config_key="checkpoint_backend",
    )
