"""
Exceptions raised by chick
"""

from enum import Enum


class ChickError(Exception):
    """Base class for chick errors"""


class InvalidTargetError(ChickError):
    """Target is neither an IP address nor a resolvable hostname"""


class ResolutionError(ChickError):
    """Forward lookup of a hostname produced no usable addresses"""


class LookupTimeoutError(ChickError):
    """A sub-lookup did not finish within its timeout"""


class ILineStatusError(ChickError):
    """I-line service answered with a non-success status"""

    def __init__(self, status=None):
        self.status = status
        super().__init__("failed to get network-info data")


class LookupKind(Enum):
    """The three per-address sub-lookups and their failure labels"""
    PTR = "PTR lookup failed"
    IPINFO = "IP info fetch failed"
    ILINE = "network-info fetch failed"


class SubLookupError(ChickError):
    """
    Failure of one sub-lookup for one address.

    Never fatal: it is stored on the address's record and printed
    next to whatever the other sub-lookups found.
    """

    def __init__(self, kind: LookupKind, cause: BaseException):
        self.kind = kind
        self.cause = cause
        super().__init__(f"{kind.value}: {describe(cause)}")


class InterruptCancellation(Exception):
    """The run was interrupted by the user before all addresses finished"""


def describe(exc: BaseException) -> str:
    """Short human-readable description of an exception"""
    message = str(exc).strip()
    return message or exc.__class__.__name__
