"""
Postcode value object.
"""

import re
from dataclasses import dataclass

_WHITESPACE = re.compile(r"\s+")
_AREA = re.compile(r"^[A-Z]+")


def normalize_postcode(value: str) -> str:
    """Trim, uppercase and collapse inner whitespace of a postcode."""
    if value is None:
        return ""
    return _WHITESPACE.sub(" ", value.strip().upper())


@dataclass(frozen=True)
class Postcode:
    """UK style postcode, stored normalized."""

    value: str

    def __post_init__(self):
        """Normalize and validate postcode."""
        normalized = normalize_postcode(self.value)
        if not normalized:
            raise ValueError("Postcode is required")
        object.__setattr__(self, "value", normalized)

    @property
    def outward_code(self) -> str:
        """Part before the space, e.g. 'SW1A' for 'SW1A 1AA'."""
        return self.value.split(" ")[0]

    @property
    def area(self) -> str:
        """Leading letters of the postcode, e.g. 'SW' for 'SW1A 1AA'."""
        match = _AREA.match(self.value)
        return match.group(0) if match else self.outward_code

    def __str__(self) -> str:
        return self.value
