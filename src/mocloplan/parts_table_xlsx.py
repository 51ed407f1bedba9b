from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional
import openpyxl

@dataclass(frozen=True)
class PartRow:
    name: str
    id: Optional[str] = None
    part_type: str = "unknown"
    level: int = 0
    sequence: Optional[str] = None
    file: Optional[str] = None
    resistance: Optional[str] = None
    origin: Optional[str] = None
    description: Optional[str] = None

def _cell(r, i: int) -> Optional[str]:
    if i < 0 or i >= len(r) or r[i] is None:
        return None
    v = str(r[i]).strip()
    return v or None

def load_parts_table_xlsx(path: str, sheet: Optional[str] = None) -> List[PartRow]:
    wb = openpyxl.load_workbook(path, data_only=True, read_only=True)
    if sheet:
        if sheet not in wb.sheetnames:
            raise ValueError(f"Sheet '{sheet}' not found in {path}. Available: {wb.sheetnames}")
        ws = wb[sheet]
    else:
        ws = wb[wb.sheetnames[0]]

    rows = ws.iter_rows(values_only=True)
    try:
        header = [str(x).strip().lower() if x is not None else "" for x in next(rows)]
    except StopIteration:
        raise ValueError("Empty parts table sheet.")

    def idx_of(*names: str) -> int:
        for n in names:
            if n in header:
                return header.index(n)
        return -1

    i_id = idx_of("id", "part_id")
    i_name = idx_of("name", "part", "part_name")
    i_type = idx_of("type", "part_type", "parttype")
    i_level = idx_of("level", "moclo_level")
    i_seq = idx_of("sequence", "seq")
    i_file = idx_of("file", "path", "filename")
    i_res = idx_of("resistance", "marker")
    i_ori = idx_of("origin", "ori")
    i_desc = idx_of("description", "notes")

    if i_name < 0:
        raise ValueError(f"Parts table must have a Name column; header={header}")

    out: List[PartRow] = []
    for r in rows:
        name = _cell(r, i_name)
        if not name:
            continue
        level = 0
        raw_level = _cell(r, i_level)
        if raw_level is not None:
            try:
                level = int(float(raw_level))
            except ValueError:
                level = 0
        out.append(
            PartRow(
                name=name,
                id=_cell(r, i_id),
                part_type=(_cell(r, i_type) or "unknown").lower(),
                level=level,
                sequence=_cell(r, i_seq),
                file=_cell(r, i_file),
                resistance=_cell(r, i_res),
                origin=_cell(r, i_ori),
                description=_cell(r, i_desc),
            )
        )
    wb.close()
    return out
