"""Tolerant parsers for the clinical fields of a patient record.

Every parser returns ``None`` when the raw value cannot be read as clinical
data. ``None`` is never a stand-in for a low or zero measurement.
"""

from __future__ import annotations

import math
import re
from typing import Optional, Tuple

_NUMERIC_PREFIX = re.compile(r"\s*([+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?))")

BP_SENTINELS = frozenset({"N/A", "INVALID"})
# "invalid" is lowercase only here; BP and age do not check it
TEMP_SENTINELS = frozenset({"N/A", "INVALID", "TEMP_ERROR", "invalid"})
AGE_SENTINELS = frozenset({"N/A", "unknown"})
AGE_REJECT_SUBSTRINGS = ("fifty", "unknown")


def lenient_float(text: str) -> Optional[float]:
    """Parse the longest leading numeric prefix of ``text``.

    ``"98.6F"`` gives 98.6, ``" 120 "`` gives 120.0, ``"abc"`` gives None.
    """
    m = _NUMERIC_PREFIX.match(text)
    if not m:
        return None
    return float(m.group(1).replace("Infinity", "inf"))


def _is_number(value):
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _number_or_none(value):
    return None if math.isnan(value) else value


def parse_blood_pressure(raw) -> Optional[Tuple[float, float]]:
    if not isinstance(raw, str):
        return None
    text = raw.strip()
    if not text or text in BP_SENTINELS:
        return None

    parts = text.split("/")
    if len(parts) != 2:
        return None

    systolic, diastolic = (p.strip() for p in parts)
    if not systolic or not diastolic:
        return None
    if systolic in BP_SENTINELS or diastolic in BP_SENTINELS:
        return None

    s = lenient_float(systolic)
    d = lenient_float(diastolic)
    if s is None or d is None:
        return None
    return s, d


def parse_temperature(raw) -> Optional[float]:
    if _is_number(raw):
        return _number_or_none(raw)
    if not isinstance(raw, str):
        return None
    text = raw.strip()
    if not text or text in TEMP_SENTINELS:
        return None
    return lenient_float(text)


def parse_age(raw) -> Optional[float]:
    if _is_number(raw):
        return _number_or_none(raw)
    if not isinstance(raw, str):
        return None
    text = raw.strip()
    if not text or text in AGE_SENTINELS:
        return None
    lowered = text.lower()
    if any(word in lowered for word in AGE_REJECT_SUBSTRINGS):
        return None
    return lenient_float(text)
