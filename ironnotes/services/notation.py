"""
Shorthand set notation.

Turns what a lifter types between sets into a ParsedSet. Accepted forms:

    100kg 10r 3s      tokens in any order, suffixes optional ("100 10 3")
    100x10x3          weight x reps [x sets], also with "X" or "×"
    SA 50kg 8r        "SA" prefix marks a single-arm set

Units are recognised and recorded but never converted.
"""
from __future__ import annotations

import re
from typing import Optional

from ironnotes.exceptions import ParseFailure
from ironnotes.schemas.set_entry import ParsedSet

SINGLE_ARM_PREFIX = "SA"
MULTIPLIER_RE = re.compile(r"[X×]")

# longest suffix first so "KGS" is not read as "KG" + "S"
WEIGHT_RE = re.compile(r"^(?P<num>\d+(?:\.\d*)?|\.\d+)\s*(?P<unit>KGS|KG|LBS|LB)?$")
REPS_RE = re.compile(r"^(?P<num>\d+)\s*(?:REPS|REP|R)?$")
SETS_RE = re.compile(r"^(?P<num>\d+)\s*(?:SETS|SET|S)?$")

def parse(text: str) -> ParsedSet:
    """Parse one line of set shorthand. Raises ParseFailure on anything unusable."""
    cleaned = (text or "").strip().upper()
    if not cleaned:
        raise ParseFailure(text, "empty input")

    single_arm = False
    if cleaned.startswith(SINGLE_ARM_PREFIX):
        single_arm = True
        cleaned = cleaned[len(SINGLE_ARM_PREFIX):].strip()
        if not cleaned:
            raise ParseFailure(text, "nothing after single-arm prefix")

    if MULTIPLIER_RE.search(cleaned):
        fields = _parse_multiplier(text, cleaned)
    else:
        fields = _parse_tokens(text, cleaned)
    return ParsedSet(is_single_arm=single_arm, **fields)

def _parse_multiplier(text: str, cleaned: str) -> dict:
    parts = [p.strip() for p in MULTIPLIER_RE.split(cleaned)]
    if len(parts) not in (2, 3):
        raise ParseFailure(text, f"expected weight x reps [x sets], got {len(parts)} parts")

    weight = parse_weight(parts[0])
    if weight is None:
        raise ParseFailure(text, f"bad weight {parts[0]!r}")
    reps = parse_count(parts[1], REPS_RE)
    if reps is None:
        raise ParseFailure(text, f"bad reps {parts[1]!r}")
    set_count = parse_count(parts[2], SETS_RE) if len(parts) == 3 else None

    return {"weight": weight[0], "unit": weight[1], "reps": reps, "set_count": set_count or 1}

def _parse_tokens(text: str, cleaned: str) -> dict:
    weight = None
    reps = None
    set_count = 1

    for token in cleaned.split():
        if weight is None and (w := parse_weight(token)) is not None:
            weight = w
        elif reps is None and (r := parse_count(token, REPS_RE)) is not None:
            reps = r
        elif (s := parse_count(token, SETS_RE)) is not None:
            set_count = s

    if weight is None:
        raise ParseFailure(text, "no weight found")
    if reps is None:
        raise ParseFailure(text, "no reps found")
    return {"weight": weight[0], "unit": weight[1], "reps": reps, "set_count": set_count}

def parse_weight(token: str) -> Optional[tuple[float, Optional[str]]]:
    """Return (weight, unit) for tokens like "100", "62.5KG", "135lbs"; None otherwise."""
    m = WEIGHT_RE.match(token.strip().upper())
    if not m:
        return None
    unit = m.group("unit")
    if unit:
        unit = "kg" if unit.startswith("KG") else "lb"
    return float(m.group("num")), unit

def parse_count(token: str, pattern: re.Pattern) -> Optional[int]:
    """Positive integer with an optional suffix from ``pattern``; None otherwise."""
    m = pattern.match(token.strip().upper())
    if not m:
        return None
    value = int(m.group("num"))
    return value if value > 0 else None
