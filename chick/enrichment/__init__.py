"""
Enrichment modules for chick
"""

from .ptr_resolver import PTRResolver
from .ipinfo_lookup import IPInfoLookup
from .iline_lookup import ILineLookup
from .enricher import Enricher

__all__ = ['PTRResolver', 'IPInfoLookup', 'ILineLookup', 'Enricher']
