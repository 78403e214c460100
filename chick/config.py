"""
Run configuration and command-line value types
"""

import math
import re
from dataclasses import dataclass
from enum import Enum

import click

from .models import AddressFamily


DEFAULT_TIMEOUT = 5.0
DEFAULT_ILINE_TIMEOUT = 10.0

# Seconds per unit, Go duration syntax
DURATION_UNITS = {
    'ns': 1e-9,
    'us': 1e-6,
    'µs': 1e-6,
    'ms': 1e-3,
    's': 1.0,
    'm': 60.0,
    'h': 3600.0,
}

_DURATION_PART = re.compile(r'(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|ms|s|m|h)')


def parse_duration(value: str) -> float:
    """
    Parse a duration into seconds.

    Accepts Go-style durations ("500ms", "5s", "1m30s") or a bare
    number of seconds ("2.5").

    Raises:
        ValueError: malformed or non-positive duration
    """
    text = value.strip()
    if not text:
        raise ValueError("empty duration")

    try:
        seconds = float(text)
    except ValueError:
        seconds = 0.0
        pos = 0
        for match in _DURATION_PART.finditer(text):
            if match.start() != pos:
                break
            seconds += float(match.group(1)) * DURATION_UNITS[match.group(2)]
            pos = match.end()
        if pos != len(text) or pos == 0:
            raise ValueError(f"invalid duration '{value}'")

    if not math.isfinite(seconds):
        raise ValueError(f"invalid duration '{value}'")
    if seconds <= 0:
        raise ValueError(f"duration must be positive, got '{value}'")
    return seconds


class DurationType(click.ParamType):
    """click parameter type for durations, converted to seconds"""
    name = "duration"

    def convert(self, value, param, ctx):
        if isinstance(value, (int, float)):
            if value <= 0:
                self.fail(f"duration must be positive, got {value}", param, ctx)
            return float(value)
        try:
            return parse_duration(value)
        except ValueError as e:
            self.fail(str(e), param, ctx)


DURATION = DurationType()


class FamilyFilter(Enum):
    """Address families kept after resolution"""
    BOTH = "both"
    IPV4 = "ipv4"
    IPV6 = "ipv6"

    @classmethod
    def from_flags(cls, ipv4: bool, ipv6: bool) -> 'FamilyFilter':
        # Both flags together behave like no flag at all
        if ipv4 and not ipv6:
            return cls.IPV4
        if ipv6 and not ipv4:
            return cls.IPV6
        return cls.BOTH

    def accepts(self, family: AddressFamily) -> bool:
        if self is FamilyFilter.BOTH:
            return True
        if self is FamilyFilter.IPV4:
            return family is AddressFamily.IPV4
        return family is AddressFamily.IPV6


@dataclass(frozen=True)
class RunConfiguration:
    """Settings for one run, fixed once the command line is parsed"""
    target: str
    family_filter: FamilyFilter = FamilyFilter.BOTH
    timeout: float = DEFAULT_TIMEOUT
    iline_timeout: float = DEFAULT_ILINE_TIMEOUT
