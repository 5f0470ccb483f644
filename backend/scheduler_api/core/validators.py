"""Field format checks used by the resource routes."""

from __future__ import annotations

import re

EMAIL_RE = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
HEX_COLOR_RE = re.compile(r"#(?:[0-9A-Fa-f]{3}){1,2}")
TIME_OF_DAY_RE = re.compile(r"(?:[01]\d|2[0-3]):[0-5]\d")


def is_valid_email(value: str) -> bool:
    return EMAIL_RE.fullmatch(value) is not None


def is_valid_hex_color(value: str) -> bool:
    return HEX_COLOR_RE.fullmatch(value) is not None


def is_valid_time_of_day(value: str) -> bool:
    """``HH:MM`` on a 24 hour clock."""
    return TIME_OF_DAY_RE.fullmatch(value) is not None
