from __future__ import annotations

import json
import os
import shutil
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional
from uuid import uuid4


@dataclass
class JsonStoreError(Exception):
    path: Path
    message: str
    cause: Optional[BaseException] = None

    def __str__(self) -> str:
        base = f"{self.message} (path={self.path})"
        if self.cause is not None:
            return f"{base}; cause={type(self.cause).__name__}: {self.cause}"
        return base


class JsonReadError(JsonStoreError):
    pass


class JsonWriteError(JsonStoreError):
    pass


def ensure_dir(dir_path: Path) -> None:
    try:
        dir_path.mkdir(parents=True, exist_ok=True)
    except Exception as e:
        raise JsonWriteError(path=dir_path, message="Failed to create directory", cause=e) from e


def read_json(path: Path, *, default: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """
    Read a JSON object.

    Missing or blank file -> copy of `default` (or {}).
    Invalid JSON or a non-object root -> JsonReadError.
    """
    fallback = dict(default or {})
    try:
        if not path.exists():
            return fallback
        raw = path.read_text(encoding="utf-8").strip()
        if raw == "":
            return fallback
        data = json.loads(raw)
    except Exception as e:
        raise JsonReadError(path=path, message="Failed to read/parse JSON", cause=e) from e

    if not isinstance(data, dict):
        raise JsonReadError(path=path, message="JSON root must be an object")
    return data


def atomic_write_json(path: Path, data: Dict[str, Any], *, backup: bool = False, indent: int = 2) -> None:
    """
    Write to a temp file in the same directory, fsync, then os.replace().
    The previous file survives any failure; with backup=True it is also copied to <name>.bak.
    """
    if not isinstance(data, dict):
        raise JsonWriteError(path=path, message="atomic_write_json expects a dict")

    ensure_dir(path.parent)
    tmp_path = path.parent / f".{path.name}.{uuid4().hex}.tmp"

    try:
        payload = json.dumps(data, ensure_ascii=False, indent=indent)
        with open(tmp_path, "wb") as f:
            f.write(payload.encode("utf-8"))
            f.flush()
            os.fsync(f.fileno())

        if backup and path.exists():
            shutil.copy2(path, path.with_suffix(path.suffix + ".bak"))

        os.replace(tmp_path, path)
    except Exception as e:
        raise JsonWriteError(path=path, message="Failed to write JSON atomically", cause=e) from e
    finally:
        if tmp_path.exists():
            try:
                tmp_path.unlink()
            except OSError:
                pass


def now_iso_utc() -> str:
    """e.g. 2025-12-24T10:05:00Z"""
    return time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime())
