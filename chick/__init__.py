"""
chick - Extended DNS Check

Resolves a domain or IP address and enriches every resulting address
with PTR records, ipinfo.io organization data and IRCnet I-line servers.
"""

__version__ = "1.0.0"
__author__ = "chick"
