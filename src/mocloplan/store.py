"""Part/folder record store backed by an optional YAML document."""

from __future__ import annotations

import logging
import os
import threading
from contextlib import contextmanager
from dataclasses import dataclass, replace
from typing import Dict, Iterable, Iterator, List, Optional

import yaml

from .records import Folder, PartRecord

logger = logging.getLogger(__name__)

DEFAULT_FOLDER_ID = "default"

DEFAULT_FOLDERS = (
    Folder(id="default", name="Unsorted", description="Plasmids not yet filed", color="#6b7280"),
    Folder(id="vectors", name="Vectors", description="Vector plasmids", color="#3b82f6"),
    Folder(id="parts", name="Parts", description="Biological parts", color="#10b981"),
    Folder(id="assemblies", name="Assemblies", description="Finished constructs", color="#8b5cf6"),
)


class StorageError(RuntimeError):
    """Raised when the backing document cannot be read or written."""


@dataclass(frozen=True)
class DeleteSummary:
    success: int
    failed: int


class RecordStore:
    def __init__(self, path: Optional[str] = None):
        self.path = path
        self._lock = threading.RLock()
        self._records: Dict[str, PartRecord] = {}
        self._folders: Dict[str, Folder] = {}
        if path and os.path.exists(path):
            self._load()
        for f in DEFAULT_FOLDERS:
            self._folders.setdefault(f.id, replace(f))

    # -- persistence ---------------------------------------------------------

    def _load(self) -> None:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                doc = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as exc:
            raise StorageError(f"Cannot read record store {self.path}: {exc}") from exc
        if not isinstance(doc, dict):
            raise StorageError(f"Record store {self.path} must be a YAML mapping.")
        for d in doc.get("folders", []) or []:
            folder = Folder.from_dict(d)
            self._folders[folder.id] = folder
        for d in doc.get("records", []) or []:
            rec = PartRecord.from_dict(d)
            self._records[rec.id] = rec

    def _save(self) -> None:
        if not self.path:
            return
        doc = {
            "folders": [f.to_dict() for f in self._folders.values()],
            "records": [r.to_dict() for r in self._records.values()],
        }
        tmp = f"{self.path}.tmp"
        try:
            with open(tmp, "w", encoding="utf-8") as f:
                yaml.safe_dump(doc, f, sort_keys=False)
            os.replace(tmp, self.path)
        except (OSError, yaml.YAMLError) as exc:
            raise StorageError(f"Cannot write record store {self.path}: {exc}") from exc

    # -- records -------------------------------------------------------------

    def get_all(self) -> List[PartRecord]:
        with self._lock:
            return sorted(self._records.values(), key=lambda r: r.added_at, reverse=True)

    def get_by_id(self, record_id: str) -> Optional[PartRecord]:
        with self._lock:
            return self._records.get(record_id)

    def get_by_name(self, name: str) -> Optional[PartRecord]:
        with self._lock:
            for r in self._records.values():
                if r.name == name:
                    return r
            return None

    def exists(self, name: str) -> bool:
        return self.get_by_name(name) is not None

    def search(self, query: str) -> List[PartRecord]:
        q = query.lower()
        return [
            r
            for r in self.get_all()
            if q in r.name.lower()
            or q in (r.description or "").lower()
            or q in (r.part_type or "").lower()
        ]

    @contextmanager
    def _transaction(self) -> Iterator[None]:
        # on a failed save the in-memory state is restored before re-raising
        with self._lock:
            records, folders = dict(self._records), dict(self._folders)
            try:
                yield
                self._save()
            except StorageError:
                self._records, self._folders = records, folders
                raise

    def upsert(self, record: PartRecord) -> bool:
        if not record.folder_id:
            record = replace(record, folder_id=DEFAULT_FOLDER_ID)
        with self._transaction():
            self._records[record.id] = record
        return True

    def delete(self, record_id: str) -> bool:
        with self._lock:
            if record_id not in self._records:
                return False
            with self._transaction():
                del self._records[record_id]
        logger.info("Deleted record %s", record_id)
        return True

    def delete_many(self, record_ids: Iterable[str]) -> DeleteSummary:
        success = failed = 0
        for record_id in record_ids:
            if self.delete(record_id):
                success += 1
            else:
                failed += 1
        return DeleteSummary(success=success, failed=failed)

    # -- folders -------------------------------------------------------------

    def list_folders(self) -> List[Folder]:
        with self._lock:
            return sorted(self._folders.values(), key=lambda f: f.name)

    def create_folder(self, folder: Folder) -> bool:
        with self._lock:
            if folder.id in self._folders or any(f.name == folder.name for f in self._folders.values()):
                logger.warning("Folder %s (%s) already exists", folder.id, folder.name)
                return False
            with self._transaction():
                self._folders[folder.id] = folder
            return True

    def update_folder(
        self,
        folder_id: str,
        name: Optional[str] = None,
        description: Optional[str] = None,
        color: Optional[str] = None,
    ) -> bool:
        with self._lock:
            folder = self._folders.get(folder_id)
            if folder is None:
                return False
            if name is not None and any(f.name == name and f.id != folder_id for f in self._folders.values()):
                return False
            changes = {"name": name, "description": description, "color": color}
            with self._transaction():
                self._folders[folder_id] = replace(folder, **{k: v for k, v in changes.items() if v is not None})
            return True

    def delete_folder(self, folder_id: str, move_to: str = DEFAULT_FOLDER_ID) -> bool:
        with self._lock:
            if folder_id not in self._folders or folder_id == move_to:
                return False
            with self._transaction():
                for rid, r in list(self._records.items()):
                    if r.folder_id == folder_id:
                        self._records[rid] = replace(r, folder_id=move_to)
                del self._folders[folder_id]
            return True

    def move_records(self, record_ids: Iterable[str], folder_id: str) -> bool:
        ok = True
        with self._transaction():
            for rid in record_ids:
                r = self._records.get(rid)
                if r is None:
                    ok = False
                    continue
                self._records[rid] = replace(r, folder_id=folder_id)
        return ok

    def list_by_folder(self, folder_id: Optional[str] = None) -> List[PartRecord]:
        records = self.get_all()
        if folder_id is None:
            return records
        return [r for r in records if (r.folder_id or DEFAULT_FOLDER_ID) == folder_id]
