"""Closed classification of free-text product types.

Product types are typed in by hand ("Disk", "DISK FREN", "Kampana 410",
"Hub-B"). Reports only know three categories; everything else is OTHER.
A label belongs to a category when it contains one of its keywords,
ignoring case.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional


class ProductCategory(str, Enum):
    DISK = "disk"
    KAMPANA = "kampana"
    POYRA = "poyra"
    OTHER = "other"

    @classmethod
    def from_type_label(cls, label: Optional[str]) -> "ProductCategory":
        if not label:
            return cls.OTHER
        key = label.casefold()
        for category, keywords in _KEYWORDS:
            if any(keyword in key for keyword in keywords):
                return category
        return cls.OTHER


# Checked in order; a label mentioning two categories takes the first match.
_KEYWORDS: list[tuple[ProductCategory, tuple[str, ...]]] = [
    (ProductCategory.DISK, ("disk",)),
    (ProductCategory.KAMPANA, ("kampana", "drum")),
    (ProductCategory.POYRA, ("poyra", "hub")),
]
