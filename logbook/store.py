"""
Record stores the engine reads from and writes to.

Both stores expose the same interface: get/list/put/delete of plain dict
records keyed by (kind, id). Kinds used by the engine: vehicles, trips,
periods, sessions, context.
"""

import copy
import uuid
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

KINDS = ("vehicles", "trips", "periods", "sessions", "context")

Record = Dict[str, Any]


class MemoryStore:
    """In-process store; records are copied in and out."""

    def __init__(self, data: Optional[Dict[str, Dict[str, Record]]] = None):
        self._data: Dict[str, Dict[str, Record]] = {kind: {} for kind in KINDS}
        for kind, records in (data or {}).items():
            self._data.setdefault(kind, {}).update(copy.deepcopy(records or {}))

    def get(self, kind: str, record_id: str) -> Optional[Record]:
        record = self._data.get(kind, {}).get(record_id)
        return copy.deepcopy(record) if record is not None else None

    def list(self, kind: str) -> List[Record]:
        return [copy.deepcopy(r) for r in self._data.get(kind, {}).values()]

    def put(self, kind: str, record_id: str, record: Record) -> None:
        self._data.setdefault(kind, {})[record_id] = copy.deepcopy(record)
        self._saved()

    def delete(self, kind: str, record_id: str) -> bool:
        removed = self._data.get(kind, {}).pop(record_id, None) is not None
        if removed:
            self._saved()
        return removed

    def to_dict(self) -> Dict[str, Dict[str, Record]]:
        return copy.deepcopy(self._data)

    def _saved(self) -> None:
        """Hook called after every change."""


class YamlStore(MemoryStore):
    """
    Store backed by a single YAML file.

    The whole file is loaded on open and rewritten after every put/delete,
    so separate processes (CLI invocations) see each other's changes.
    """

    def __init__(self, filename: Union[str, Path]):
        self.filename = Path(filename)
        data = None
        if self.filename.exists():
            with open(self.filename, "r") as fp:
                data = yaml.load(fp, Loader=yaml.SafeLoader)
        super().__init__(data)

    def _saved(self) -> None:
        # Empty kinds are omitted from the file
        data = {kind: records for kind, records in self._data.items() if records}
        with open(self.filename, "w") as fp:
            yaml.dump(
                data,
                fp,
                default_flow_style=False,
                allow_unicode=True,
                sort_keys=False,
                width=120,
            )

    def save(self) -> None:
        """Write the current contents, creating the file if needed."""
        self._saved()


def new_id() -> str:
    """Fresh opaque record identifier."""
    return uuid.uuid4().hex
