"""Snapshot persistence for the reference index."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

from pydantic import ValidationError

from edgedoc.core.errors import IndexStoreError
from edgedoc.core.logging import get_logger
from edgedoc.index.models import ReferenceIndex

log = get_logger(__name__)


def save_index(index: ReferenceIndex, path: Path) -> Path:
    """Write the snapshot atomically.

    The JSON is written to a temporary file in the target directory and
    renamed over ``path``, so readers see either the old or the new
    snapshot, never a partial one. The temporary file is removed on any
    failure.

    Raises:
        IndexStoreError: If the directory or file can't be written.
    """
    payload = index.to_json()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    except OSError as e:
        raise IndexStoreError.write_failed(str(path), str(e)) from e

    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as tmp:
            tmp.write(payload)
            tmp.flush()
            os.fsync(tmp.fileno())
        os.replace(tmp_path, path)
    except OSError as e:
        tmp_path.unlink(missing_ok=True)
        raise IndexStoreError.write_failed(str(path), str(e)) from e
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise

    log.info("reference_index_saved", path=str(path), **index.counts())
    return path


def load_index(path: Path) -> ReferenceIndex:
    """Read a snapshot written by ``save_index``.

    Raises:
        IndexStoreError: If the file is missing or doesn't parse.
    """
    if not path.is_file():
        raise IndexStoreError.not_found(str(path))
    try:
        data = path.read_bytes()
    except OSError as e:
        raise IndexStoreError.corrupt(str(path), str(e)) from e
    try:
        return ReferenceIndex.from_json(data)
    except ValidationError as e:
        raise IndexStoreError.corrupt(str(path), f"{e.error_count()} validation errors") from e
