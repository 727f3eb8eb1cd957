"""Per-document phase detection from file names and front matter."""

from __future__ import annotations

import re
from enum import Enum
from pathlib import PurePosixPath


class Phase(str, Enum):
    STAKEHOLDERS = "stakeholders"
    PRINCIPLES = "principles"
    GOVERNANCE = "governance"
    BUSINESS = "business"
    APPLICATION = "application"
    TECHNOLOGY = "technology"
    SOLUTIONS = "solutions"
    REQUIREMENTS = "requirements"
    DECISIONS = "decisions"
    RISKS = "risks"
    ROADMAP = "roadmap"


# Checked against the file name first; the first match wins.
_FILENAME_PATTERNS: list[tuple[re.Pattern[str], Phase]] = [
    (re.compile(r"stakeholder"), Phase.STAKEHOLDERS),
    (re.compile(r"principle"), Phase.PRINCIPLES),
    (re.compile(r"governance|contract|compliance"), Phase.GOVERNANCE),
    (re.compile(r"decision|\badrs?\b"), Phase.DECISIONS),
    (re.compile(r"risk"), Phase.RISKS),
    (re.compile(r"roadmap|migration"), Phase.ROADMAP),
]

# Words in the front matter phase/category value.
_FRONT_MATTER_PATTERNS: list[tuple[re.Pattern[str], Phase]] = [
    (re.compile(r"business"), Phase.BUSINESS),
    (re.compile(r"application|information|\bdata\b"), Phase.APPLICATION),
    (re.compile(r"technology"), Phase.TECHNOLOGY),
    (re.compile(r"solution|opportunit"), Phase.SOLUTIONS),
    (re.compile(r"requirement"), Phase.REQUIREMENTS),
    (re.compile(r"migration|roadmap"), Phase.ROADMAP),
    (re.compile(r"governance"), Phase.GOVERNANCE),
]

# TOGAF ADM letters (front matter codes and file name prefixes).
_PHASE_LETTERS: dict[str, Phase] = {
    "B": Phase.BUSINESS,
    "C": Phase.APPLICATION,
    "D": Phase.TECHNOLOGY,
    "E": Phase.SOLUTIONS,
    "F": Phase.ROADMAP,
    "G": Phase.GOVERNANCE,
    "R": Phase.REQUIREMENTS,
}

_PREFIX_CODES: dict[str, Phase] = {
    "X1": Phase.DECISIONS,
    "X2": Phase.RISKS,
}

_FRONT_MATTER_KEYS = ("togaf_phase", "phase", "category")
_LETTER_RE = re.compile(r"^(?:phase\s+)?([a-z])$", re.IGNORECASE)
_PREFIX_RE = re.compile(r"^([A-Z])(\d*)$")


def _file_words(name: str) -> str:
    stem = PurePosixPath(name.replace("\\", "/")).name
    if stem.lower().endswith(".md"):
        stem = stem[:-3]
    return re.sub(r"[_\-.]+", " ", stem).lower()


def _from_front_matter(front_matter: dict[str, str]) -> Phase | None:
    for key in _FRONT_MATTER_KEYS:
        value = front_matter.get(key, "").strip()
        if not value:
            continue
        letter = _LETTER_RE.match(value)
        if letter:
            phase = _PHASE_LETTERS.get(letter.group(1).upper())
            if phase is not None:
                return phase
            continue
        lowered = value.lower()
        for pattern, phase in _FRONT_MATTER_PATTERNS:
            if pattern.search(lowered):
                return phase
    return None


def _from_prefix(name: str) -> Phase | None:
    stem = PurePosixPath(name.replace("\\", "/")).name
    prefix = stem.split("_")[0].upper()
    if prefix in _PREFIX_CODES:
        return _PREFIX_CODES[prefix]
    m = _PREFIX_RE.match(prefix)
    if not m:
        return None
    return _PHASE_LETTERS.get(m.group(1))


def detect_phase(name: str, front_matter: dict[str, str]) -> Phase | None:
    """Decide which rule set reads a document.

    Order: file name keywords, then the front matter phase, then the
    ``B1_``-style file name prefix. None means the document only
    contributes diagram edges.
    """
    words = _file_words(name)
    for pattern, phase in _FILENAME_PATTERNS:
        if pattern.search(words):
            return phase
    return _from_front_matter(front_matter) or _from_prefix(name)
