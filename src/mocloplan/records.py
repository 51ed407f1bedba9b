from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from .type_iis.inserts import Insert
from .type_iis.sites import T2SSite


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _parse_time(value: Any) -> datetime:
    if not value:
        return _now()
    t = value if isinstance(value, datetime) else datetime.fromisoformat(str(value))
    # stored times without an offset are taken as UTC
    return t if t.tzinfo is not None else t.replace(tzinfo=timezone.utc)


@dataclass(frozen=True)
class PartFeature:
    name: str
    type: str
    start: int
    end: int
    strand: str = "+"
    color: Optional[str] = None


@dataclass
class PartRecord:
    """A stored plasmid/part. The design engine only reads it."""

    id: str
    name: str
    sequence: str = ""
    description: Optional[str] = None
    t2s_sites: List[T2SSite] = field(default_factory=list)
    inserts: List[Insert] = field(default_factory=list)
    moclo_compatible: bool = False
    level: int = 0
    part_type: str = "unknown"
    resistance: Optional[str] = None
    origin: Optional[str] = None
    features: List[PartFeature] = field(default_factory=list)
    folder_id: Optional[str] = None
    added_at: datetime = field(default_factory=_now)

    @property
    def size(self) -> int:
        return len(self.sequence)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "sequence": self.sequence,
            "description": self.description,
            "size": self.size,
            "t2s_sites": [s.to_dict() for s in self.t2s_sites],
            "inserts": [i.to_dict() for i in self.inserts],
            "moclo_compatible": self.moclo_compatible,
            "level": self.level,
            "part_type": self.part_type,
            "resistance": self.resistance,
            "origin": self.origin,
            "features": [
                {
                    "name": f.name,
                    "type": f.type,
                    "start": f.start,
                    "end": f.end,
                    "strand": f.strand,
                    "color": f.color,
                }
                for f in self.features
            ],
            "folder_id": self.folder_id,
            "added_at": self.added_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "PartRecord":
        return cls(
            id=str(d["id"]),
            name=str(d.get("name") or d["id"]),
            sequence=str(d.get("sequence") or ""),
            description=d.get("description"),
            t2s_sites=[T2SSite.from_dict(s) for s in (d.get("t2s_sites") or [])],
            inserts=[Insert.from_dict(i) for i in (d.get("inserts") or [])],
            moclo_compatible=bool(d.get("moclo_compatible", False)),
            level=int(d.get("level") or 0),
            part_type=str(d.get("part_type") or "unknown"),
            resistance=d.get("resistance") or None,
            origin=d.get("origin") or None,
            features=[
                PartFeature(
                    name=str(f.get("name", "")),
                    type=str(f.get("type", "")),
                    start=int(f.get("start", 0)),
                    end=int(f.get("end", 0)),
                    strand=str(f.get("strand", "+")),
                    color=f.get("color"),
                )
                for f in (d.get("features") or [])
            ],
            folder_id=d.get("folder_id"),
            added_at=_parse_time(d.get("added_at")),
        )


@dataclass
class Folder:
    id: str
    name: str
    description: Optional[str] = None
    color: str = "#6b7280"
    created_at: datetime = field(default_factory=_now)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "color": self.color,
            "created_at": self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Folder":
        return cls(
            id=str(d["id"]),
            name=str(d.get("name") or d["id"]),
            description=d.get("description"),
            color=str(d.get("color") or "#6b7280"),
            created_at=_parse_time(d.get("created_at")),
        )
