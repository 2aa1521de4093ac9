"""Hosting models of the cloud platform.

The hosting type decides how site ids are derived: generic cloud hosting
(`ace`, `acp`) serves one site per environment, while the site factory
(`acsf`) multiplexes many sites per environment by domain.
"""

from __future__ import annotations

from enum import Enum


class HostingType(str, Enum):
    """Hosting models understood by the alias deriver."""

    ACE = "ace"
    ACP = "acp"
    ACSF = "acsf"

    @classmethod
    def parse(cls, value: str | None) -> "HostingType | None":
        """Return the matching member, or None for unknown hosting models.

        Matching is exact: "ACE" or " acsf " are unknown hosting models.
        """

        if not value:
            return None
        try:
            return cls(value)
        except ValueError:
            return None
