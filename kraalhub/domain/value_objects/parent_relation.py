from __future__ import annotations

from enum import Enum


class ParentRelation(str, Enum):
    DAM = "DAM"  # Mother
    SIRE = "SIRE"  # Father
