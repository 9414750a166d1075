# /// script
# requires-python = ">=3.12"
# dependencies = ["pydantic>=2.0"]
# ///
"""Plate-appearance result catalog.

Maps a result code (``"H1-L"``, ``"GO-6"``, ``"K"`` ...) to its category,
the number of bases a hit is worth, and whether it retires the batter or
counts as an at-bat. Scorekeeping code only ever reads the catalog through
:func:`lookup`, which returns ``None`` for codes it does not know.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from models import ResultCategory


@dataclass(frozen=True)
class ResultOption:
    code: str
    label: str
    category: ResultCategory
    hit_bases: int = 0  # 1=single .. 4=home run, 0 for non-hits
    is_out: bool = False
    is_at_bat: bool = False

    def to_dict(self) -> dict:
        return {
            "code": self.code,
            "label": self.label,
            "category": self.category.value,
            "hitBases": self.hit_bases,
            "isOut": self.is_out,
            "isAtBat": self.is_at_bat,
        }


@dataclass(frozen=True)
class ResultGroup:
    id: str
    label: str
    options: tuple[ResultOption, ...]


STRIKEOUT_CODES = frozenset({"K", "KK"})

FIELDER_NAMES = {
    1: "pitcher",
    2: "catcher",
    3: "first",
    4: "second",
    5: "third",
    6: "short",
    7: "left",
    8: "center",
    9: "right",
}

_DIRECTIONS = (("L", "left"), ("C", "center"), ("R", "right"))


# ---------------------------------------------------------------------------
# Option groups
# ---------------------------------------------------------------------------

def _hits() -> tuple[ResultOption, ...]:
    options = []
    kinds = ((1, "H1", "Single"), (2, "H2", "Double"), (3, "H3", "Triple"), (4, "HR", "Home run"))
    for bases, prefix, name in kinds:
        for code, direction in _DIRECTIONS:
            options.append(ResultOption(
                code=f"{prefix}-{code}", label=f"{name} to {direction}",
                category=ResultCategory.HIT, hit_bases=bases, is_at_bat=True,
            ))
        if bases == 1:
            options.append(ResultOption(
                code="H1-IN", label="Infield single",
                category=ResultCategory.HIT, hit_bases=1, is_at_bat=True,
            ))
    return tuple(options)


def _fielded_outs(prefix: str, verb: str, fielders: range) -> tuple[ResultOption, ...]:
    return tuple(
        ResultOption(
            code=f"{prefix}-{n}", label=f"{verb} to {FIELDER_NAMES[n]}",
            category=ResultCategory.OUT, is_out=True, is_at_bat=True,
        )
        for n in fielders
    )


HIT_OPTIONS = _hits()
GROUNDOUT_OPTIONS = _fielded_outs("GO", "Groundout", range(1, 7))
FLYOUT_OPTIONS = _fielded_outs("FO", "Flyout", range(1, 10))
LINEOUT_OPTIONS = _fielded_outs("LO", "Lineout", range(1, 10))

STRIKEOUT_OPTIONS = (
    ResultOption("K", "Strikeout swinging", ResultCategory.OUT, is_out=True, is_at_bat=True),
    ResultOption("KK", "Strikeout looking", ResultCategory.OUT, is_out=True, is_at_bat=True),
)

WALK_OPTIONS = (
    ResultOption("BB", "Walk", ResultCategory.WALK),
    ResultOption("HBP", "Hit by pitch", ResultCategory.HIT_BY_PITCH),
)

SACRIFICE_OPTIONS = (
    ResultOption("SAC", "Sacrifice bunt", ResultCategory.SACRIFICE_BUNT, is_out=True),
    ResultOption("SF", "Sacrifice fly", ResultCategory.SACRIFICE_FLY, is_out=True),
)

ERROR_OPTIONS = tuple(
    ResultOption(f"E-{n}", f"Error by {FIELDER_NAMES[n]}", ResultCategory.ERROR, is_at_bat=True)
    for n in range(1, 10)
)

FIELDERS_CHOICE_OPTIONS = (
    ResultOption("FC", "Fielder's choice", ResultCategory.FIELDERS_CHOICE, is_at_bat=True),
)

INTERFERENCE_OPTIONS = (
    ResultOption("INT", "Catcher's interference", ResultCategory.INTERFERENCE),
)

RESULT_GROUPS: tuple[ResultGroup, ...] = (
    ResultGroup("hit", "Hit", HIT_OPTIONS),
    ResultGroup("groundout", "Groundout", GROUNDOUT_OPTIONS),
    ResultGroup("flyout", "Flyout", FLYOUT_OPTIONS),
    ResultGroup("lineout", "Lineout", LINEOUT_OPTIONS),
    ResultGroup("strikeout", "Strikeout", STRIKEOUT_OPTIONS),
    ResultGroup("walk", "Walk / HBP", WALK_OPTIONS),
    ResultGroup("sacrifice", "Sacrifice", SACRIFICE_OPTIONS),
    ResultGroup("error", "Error", ERROR_OPTIONS),
    ResultGroup("fc", "Fielder's choice", FIELDERS_CHOICE_OPTIONS),
    ResultGroup("interference", "Interference", INTERFERENCE_OPTIONS),
)

_BY_CODE: dict[str, ResultOption] = {
    option.code: option for group in RESULT_GROUPS for option in group.options
}


# ---------------------------------------------------------------------------
# Lookup
# ---------------------------------------------------------------------------

def lookup(code: str) -> Optional[ResultOption]:
    """Return the catalog entry for *code*, or ``None`` if it is unknown."""
    return _BY_CODE.get(code)


def catalog_to_dict() -> list[dict]:
    """Grouped catalog in wire form, for pickers and the API."""
    return [
        {"id": g.id, "label": g.label, "options": [o.to_dict() for o in g.options]}
        for g in RESULT_GROUPS
    ]
