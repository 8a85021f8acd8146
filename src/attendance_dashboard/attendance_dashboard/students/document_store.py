from __future__ import annotations

import hashlib
import json
import logging
import os
import tempfile
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from ..core.exceptions import StorageError, VersionConflictError
from .repository import MISSING_VERSION

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class JsonDocument:
    payload: Any
    version: str


def _version_of(raw: bytes) -> str:
    return hashlib.sha256(raw).hexdigest()[:16]


class JsonFileDocumentStore:
    """One pretty-printed JSON file per document name under ``root``.

    Writes go through a temp file and ``os.replace`` so readers never see a
    half-written document. The version token is a hash of the file bytes.
    """

    def __init__(self, root: str | Path):
        self._root = Path(root)
        self._lock = threading.Lock()

    @property
    def root(self) -> Path:
        return self._root

    def _path(self, name: str) -> Path:
        return self._root / name

    def get(self, name: str) -> Optional[JsonDocument]:
        path = self._path(name)
        if not path.exists():
            return None
        raw = path.read_bytes()
        return JsonDocument(payload=json.loads(raw.decode("utf-8")), version=_version_of(raw))

    def put(self, name: str, payload: Any, *, if_version: Optional[str] = None) -> str:
        raw = json.dumps(payload, ensure_ascii=False, indent=2).encode("utf-8")
        path = self._path(name)

        with self._lock:
            if if_version is not None:
                current = _version_of(path.read_bytes()) if path.exists() else MISSING_VERSION
                if current != if_version:
                    raise VersionConflictError("Roster was modified by another request, reload and try again")

            try:
                self._root.mkdir(parents=True, exist_ok=True)
                fd, tmp_name = tempfile.mkstemp(dir=self._root, prefix=f".{name}.", suffix=".tmp")
                with os.fdopen(fd, "wb") as f:
                    f.write(raw)
                os.replace(tmp_name, path)
            except OSError as e:
                logger.error("Failed to write document %s: %s", path, e)
                raise StorageError(f"Failed to save {name}: {e}") from e

        logger.debug("Saved document %s (%d bytes)", path, len(raw))
        return _version_of(raw)
