from __future__ import annotations

from enum import Enum


class Breed(str, Enum):
    ANGUS = "ANGUS"
    HEREFORD = "HEREFORD"
    HOLSTEIN = "HOLSTEIN"
    JERSEY = "JERSEY"
    CHAROLAIS = "CHAROLAIS"
    SIMMENTAL = "SIMMENTAL"
    BRAHMAN = "BRAHMAN"
    LIMOUSIN = "LIMOUSIN"
    GELBVIEH = "GELBVIEH"
    SHORTHORN = "SHORTHORN"
    BRANGUS = "BRANGUS"
    BELTED_GALLOWAY = "BELTED_GALLOWAY"
    LONGHORN = "LONGHORN"
    GUERNSEY = "GUERNSEY"
    AYRSHIRE = "AYRSHIRE"
