"""
family.py - Family grouping read from a GEDCOM FAM record.

Module: geo_atlas.family
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple


@dataclass(frozen=True)
class Family:
    """
    A GEDCOM family.

    Husband, wife and child ids are weak references to individual xref ids;
    they are not checked against the individuals that were read.

    Attributes:
        xref_id (str): Family cross-reference id.
        husband (Optional[str]): Husband xref id.
        wife (Optional[str]): Wife xref id.
        children (Tuple[str, ...]): Child xref ids in file order.
        marriage_date (Optional[str]): Free-text marriage date.
        marriage_place (Optional[str]): Free-text marriage place.
    """
    xref_id: str
    husband: Optional[str] = None
    wife: Optional[str] = None
    children: Tuple[str, ...] = field(default_factory=tuple)
    marriage_date: Optional[str] = None
    marriage_place: Optional[str] = None

    def partners(self) -> List[str]:
        """Return the partner ids that are set, husband first."""
        return [p for p in (self.husband, self.wife) if p]

    def __str__(self) -> str:
        partners = ' & '.join(self.partners())
        return f"Family(id={self.xref_id}, partners=[{partners}], children={len(self.children)})"
