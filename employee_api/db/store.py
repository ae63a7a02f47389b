"""
Record stores: whole-collection load/save over a persisted document.

A store knows nothing about the entities it holds. Every call to `load`
returns the full collection and every call to `save` replaces it wholesale;
there is no indexing, partial write or locking. Callers that may have more
than one writer must serialize access themselves.
"""

from __future__ import annotations

import copy
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Protocol, Sequence

from employee_api.core.exceptions import StoreError

logger = logging.getLogger(__name__)

Document = Dict[str, Any]
SeedFactory = Callable[[], List[Document]]


class RecordStore(Protocol):
    """Storage-medium-agnostic collection of JSON-compatible documents."""

    def load(self) -> List[Document]:
        ...

    def save(self, records: Sequence[Document]) -> None:
        ...


class JsonFileStore:
    """
    Record store persisted as a single pretty-printed JSON array on disk.

    On construction the parent directory is created and, if the document does
    not exist yet, it is initialized with `seed()` (or an empty array).

    By default a missing or corrupt document loads as an empty collection and
    the problem is logged. With `strict=True` a StoreError is raised instead.
    """

    def __init__(
        self,
        path: Path | str,
        *,
        seed: Optional[SeedFactory] = None,
        strict: bool = False,
    ) -> None:
        self.path = Path(path)
        self.strict = strict
        self._ensure_document(seed)

    def _ensure_document(self, seed: Optional[SeedFactory]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StoreError(f"Cannot create data directory {self.path.parent}: {exc}") from exc

        if self.path.exists():
            return
        records = seed() if seed is not None else []
        self.save(records)
        if records:
            logger.info("Initialized %s with %d seed record(s)", self.path.name, len(records))
        else:
            logger.info("Initialized empty document %s", self.path.name)

    def load(self) -> List[Document]:
        try:
            raw = self.path.read_text(encoding="utf-8")
            data = json.loads(raw)
        except (OSError, ValueError) as exc:
            return self._load_failed(f"cannot read {self.path}: {exc}")

        if not isinstance(data, list):
            return self._load_failed(f"{self.path} does not contain a JSON array")
        return data

    def _load_failed(self, reason: str) -> List[Document]:
        if self.strict:
            raise StoreError(f"Failed to load document: {reason}")
        logger.error("Failed to load document, using empty collection: %s", reason)
        return []

    def save(self, records: Sequence[Document]) -> None:
        payload = json.dumps(list(records), indent=2, ensure_ascii=False)
        # Write a sibling temp file and rename it over the target so readers
        # never observe a partially written document.
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self.path.name}.", suffix=".tmp", dir=str(self.path.parent)
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(payload)
                fh.write("\n")
            os.replace(tmp_name, self.path)
        except OSError as exc:
            try:
                os.unlink(tmp_name)
            except OSError as cleanup_exc:
                logger.warning("Could not remove temp file %s: %s", tmp_name, cleanup_exc)
            raise StoreError(f"Failed to write {self.path}: {exc}") from exc

    def __repr__(self) -> str:
        return f"JsonFileStore(path={str(self.path)!r}, strict={self.strict})"


class InMemoryStore:
    """Record store held in process memory; copies on every load and save."""

    def __init__(
        self,
        records: Optional[Sequence[Document]] = None,
        *,
        seed: Optional[SeedFactory] = None,
    ) -> None:
        if records is None:
            records = seed() if seed is not None else []
        self._records: List[Document] = copy.deepcopy(list(records))

    def load(self) -> List[Document]:
        return copy.deepcopy(self._records)

    def save(self, records: Sequence[Document]) -> None:
        self._records = copy.deepcopy(list(records))

    def __len__(self) -> int:
        return len(self._records)
