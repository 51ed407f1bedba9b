from __future__ import annotations

import io
import logging
import os
import re
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple

from Bio import SeqIO

from .type_iis.dna import clean_iupac

logger = logging.getLogger(__name__)

FASTA_EXT_RE = re.compile(r"\.(fasta|fa|fas)$", re.IGNORECASE)
GENBANK_EXT_RE = re.compile(r"\.(gb|gbk|genbank|ape|dna)$", re.IGNORECASE)
GENBANK_MARKERS = ("LOCUS", "ORIGIN", "FEATURES")

MIN_PLAIN_TEXT_BASES = 10
MIN_LINE_BASES = 20
FASTA_LINE_WIDTH = 80


@dataclass(frozen=True)
class ImportedFile:
    filename: str
    content: str
    path: str


@dataclass
class FolderImport:
    folder_path: str
    files: List[ImportedFile] = field(default_factory=list)
    total_files: int = 0
    successful_files: int = 0


@dataclass(frozen=True)
class ExtractedSequence:
    sequence: str
    description: str


def write_fasta(path: str, entries: Iterable[Tuple[str, str]]) -> int:
    """Write (header, sequence) pairs as wrapped FASTA; returns the number of records written."""
    n = 0
    with open(path, "w", encoding="utf-8") as f:
        for header, seq in entries:
            f.write(f">{header}\n")
            for i in range(0, len(seq), FASTA_LINE_WIDTH):
                f.write(seq[i:i + FASTA_LINE_WIDTH] + "\n")
            n += 1
    logger.debug("Wrote %d FASTA record(s) to %s", n, path)
    return n


def import_file(path: str) -> ImportedFile:
    with open(path, "r", encoding="utf-8") as f:
        content = f.read()
    return ImportedFile(filename=os.path.basename(path), content=content, path=path)


def import_folder(folder_path: str) -> FolderImport:
    """Read every visible regular file in a folder; unreadable files are logged and skipped."""
    result = FolderImport(folder_path=folder_path)
    for name in sorted(os.listdir(folder_path)):
        if name.startswith(".") or name.startswith("~"):
            continue
        path = os.path.join(folder_path, name)
        if not os.path.isfile(path):
            continue
        result.total_files += 1
        try:
            result.files.append(import_file(path))
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Unable to read %s: %s", name, exc)
    result.successful_files = len(result.files)
    return result


def _from_fasta(content: str, filename: str) -> Optional[ExtractedSequence]:
    if content.startswith(">"):
        rec = next(SeqIO.parse(io.StringIO(content), "fasta"), None)
        if rec is None:
            return None
        seq = clean_iupac(str(rec.seq))
        description = rec.description.strip()
    else:
        # extension says FASTA but there is no header: take everything as sequence
        seq = clean_iupac(content)
        description = f"Sequence from {filename}"
    if not seq:
        return None
    return ExtractedSequence(seq, description or f"FASTA sequence from {filename}")


def _scrape_origin(content: str) -> str:
    idx = content.find("ORIGIN")
    if idx == -1:
        return ""
    block = content[idx + len("ORIGIN"):]
    end = block.find("//")
    if end != -1:
        block = block[:end]
    return clean_iupac(re.sub(r"[\d\s]+", "", block))


def _from_genbank(content: str, filename: str) -> Optional[ExtractedSequence]:
    description = ""
    seq = ""
    try:
        rec = SeqIO.read(io.StringIO(content), "genbank")
        seq = clean_iupac(str(rec.seq))
        if rec.description and rec.description != ".":
            description = rec.description
        elif rec.name:
            description = f"GenBank: {rec.name}"
    except ValueError as exc:
        logger.debug("Biopython rejected %s as GenBank (%s); scraping ORIGIN", filename, exc)

    if not seq:
        seq = _scrape_origin(content)
    if not description:
        m = re.search(r"DEFINITION\s+([^\n]+(?:\n\s+[^\n]+)*)", content)
        if m:
            description = re.sub(r"\n\s+", " ", m.group(1)).strip()
        else:
            m = re.search(r"LOCUS\s+([^\n]+)", content)
            if m:
                description = f"GenBank: {m.group(1).strip()}"
    if not seq:
        return None
    return ExtractedSequence(seq, description or f"GenBank sequence from {filename}")


def extract_sequence(content: str, filename: str) -> ExtractedSequence:
    """
    Sniff FASTA, then GenBank, then plain text, then the longest DNA-looking
    line. Returns an empty sequence when nothing usable is found.
    """
    text = content.strip()
    if not text:
        logger.warning("File %s is empty", filename)
        return ExtractedSequence("", f"Empty file: {filename}")

    if text.startswith(">") or FASTA_EXT_RE.search(filename):
        found = _from_fasta(text, filename)
        if found is not None:
            return found

    if any(marker in text for marker in GENBANK_MARKERS) or GENBANK_EXT_RE.search(filename):
        found = _from_genbank(text, filename)
        if found is not None:
            return found

    plain = clean_iupac(text)
    if len(plain) > MIN_PLAIN_TEXT_BASES:
        return ExtractedSequence(plain, f"Plain-text sequence from {filename}")

    longest = ""
    for line in text.splitlines():
        cleaned = clean_iupac(line)
        if len(cleaned) > len(longest) and len(cleaned) > MIN_LINE_BASES:
            longest = cleaned
    if longest:
        return ExtractedSequence(longest, f"Sequence extracted from {filename}")

    logger.warning("No valid sequence found in %s", filename)
    return ExtractedSequence("", f"Unable to parse: {filename}")
