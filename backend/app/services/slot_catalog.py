from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Iterator, Mapping


class SlotType(str, Enum):
    theory = "Theory"
    lab = "Lab"


WEEK_DAYS: tuple[str, ...] = ("MON", "TUE", "WED", "THU", "FRI")
LUNCH_COLUMN = "Lunch"


@dataclass(frozen=True)
class TimetableColumn:
    key: str
    theory_window: tuple[str, str] | None
    lab_window: tuple[str, str] | None

    @property
    def is_lunch(self) -> bool:
        return self.key == LUNCH_COLUMN


TIMETABLE_COLUMNS: tuple[TimetableColumn, ...] = (
    TimetableColumn("08:00", ("08:00", "08:50"), ("08:00", "08:50")),
    TimetableColumn("08:51", ("09:00", "09:50"), ("08:51", "09:40")),
    TimetableColumn("09:51", ("10:00", "10:50"), ("09:51", "10:40")),
    TimetableColumn("10:41", ("11:00", "11:50"), ("10:41", "11:30")),
    TimetableColumn("11:40", ("12:00", "12:50"), ("11:40", "12:30")),
    TimetableColumn("12:31", None, ("12:31", "13:20")),
    TimetableColumn(LUNCH_COLUMN, None, None),
    TimetableColumn("14:00", ("14:00", "14:50"), ("14:00", "14:50")),
    TimetableColumn("14:51", ("15:00", "15:50"), ("14:51", "15:40")),
    TimetableColumn("15:51", ("16:00", "16:50"), ("15:51", "16:40")),
    TimetableColumn("16:41", ("17:00", "17:50"), ("16:41", "17:30")),
    TimetableColumn("17:40", ("18:00", "18:50"), ("17:40", "18:30")),
    TimetableColumn("18:31", ("19:01", "19:50"), ("18:31", "19:20")),
)

COLUMN_KEYS: tuple[str, ...] = tuple(column.key for column in TIMETABLE_COLUMNS)
_SCHEDULABLE_COLUMNS = frozenset(key for key in COLUMN_KEYS if key != LUNCH_COLUMN)

# Lecture-hour label -> grid column. Every theory occurrence goes through
# to_column_key(); do not copy this table anywhere else.
_LECTURE_HOUR_COLUMNS: Mapping[str, str] = MappingProxyType(
    {
        "08:00": "08:00",
        "09:00": "08:51",
        "10:00": "09:51",
        "11:00": "10:41",
        "12:00": "11:40",
        "14:00": "14:00",
        "15:00": "14:51",
        "16:00": "15:51",
        "17:00": "16:41",
        "18:00": "17:40",
        "19:01": "18:31",
    }
)


@dataclass(frozen=True)
class SlotOccurrence:
    day: str
    raw_time: str


@dataclass(frozen=True)
class SlotDefinition:
    code: str
    type: SlotType
    occurrences: tuple[SlotOccurrence, ...]


def to_column_key(slot_type: SlotType, day: str, raw_time: str) -> str | None:
    """Map one slot occurrence onto the grid column it occupies.

    Lab occurrences already carry a column key; theory occurrences carry the
    lecture-hour label printed on the slot chart and are translated. Returns
    ``None`` for days outside the week grid or times with no column.
    """
    if day not in WEEK_DAYS:
        return None
    if slot_type == SlotType.lab:
        return raw_time if raw_time in _SCHEDULABLE_COLUMNS else None
    return _LECTURE_HOUR_COLUMNS.get(raw_time)


_THEORY_SLOTS: dict[str, tuple[tuple[str, str], ...]] = {
    # Morning
    "A1": (("MON", "08:00"), ("WED", "09:00")),
    "F1": (("MON", "09:00"), ("WED", "10:00")),
    "D1": (("MON", "10:00"), ("THU", "08:00")),
    "TB1": (("MON", "11:00"),),
    "TG1": (("MON", "12:00"),),
    "V1": (("MON", "19:01"),),
    "B1": (("TUE", "08:00"), ("THU", "09:00")),
    "G1": (("TUE", "09:00"), ("THU", "10:00")),
    "E1": (("TUE", "10:00"), ("FRI", "08:00")),
    "TC1": (("TUE", "11:00"),),
    "TAA1": (("TUE", "12:00"),),
    "V2": (("TUE", "19:01"),),
    "C1": (("WED", "08:00"), ("FRI", "09:00")),
    "TD1": (("WED", "11:00"),),
    "TBB1": (("WED", "12:00"),),
    "TE1": (("THU", "11:00"),),
    "TCC1": (("THU", "12:00"),),
    "TA1": (("FRI", "10:00"),),
    "TF1": (("FRI", "11:00"),),
    "TDD1": (("FRI", "12:00"),),
    # Afternoon
    "A2": (("MON", "14:00"), ("WED", "15:00")),
    "F2": (("MON", "15:00"), ("WED", "16:00")),
    "D2": (("MON", "16:00"), ("THU", "14:00")),
    "TB2": (("MON", "17:00"),),
    "TG2": (("MON", "18:00"),),
    "V3": (("MON", "19:01"),),
    "B2": (("TUE", "14:00"), ("THU", "15:00")),
    "G2": (("TUE", "15:00"), ("THU", "16:00")),
    "E2": (("TUE", "16:00"), ("FRI", "14:00")),
    "TC2": (("TUE", "17:00"),),
    "TAA2": (("TUE", "18:00"),),
    "V4": (("TUE", "19:01"),),
    "C2": (("WED", "14:00"), ("FRI", "15:00")),
    "TD2": (("WED", "17:00"),),
    "TBB2": (("WED", "18:00"),),
    "V5": (("WED", "19:01"),),
    "TE2": (("THU", "17:00"),),
    "TCC2": (("THU", "18:00"),),
    "V6": (("THU", "19:01"),),
    "TA2": (("FRI", "16:00"),),
    "TF2": (("FRI", "17:00"),),
    "TDD2": (("FRI", "18:00"),),
    "V7": (("FRI", "19:01"),),
}

# Two-column lab blocks; three per half day, two slot codes per block.
_LAB_BLOCKS: tuple[tuple[str, str], ...] = (
    ("08:00", "08:51"),
    ("09:51", "10:41"),
    ("11:40", "12:31"),
    ("14:00", "14:51"),
    ("15:51", "16:41"),
    ("17:40", "18:31"),
)


def _lab_slots() -> Iterator[SlotDefinition]:
    number = 1
    for session_blocks in (_LAB_BLOCKS[:3], _LAB_BLOCKS[3:]):
        for day in WEEK_DAYS:
            for block in session_blocks:
                occurrences = tuple(SlotOccurrence(day, column) for column in block)
                for _ in range(2):
                    yield SlotDefinition(code=f"L{number}", type=SlotType.lab, occurrences=occurrences)
                    number += 1


def _build_catalog() -> Mapping[str, SlotDefinition]:
    catalog: dict[str, SlotDefinition] = {}
    for code, pairs in _THEORY_SLOTS.items():
        catalog[code] = SlotDefinition(
            code=code,
            type=SlotType.theory,
            occurrences=tuple(SlotOccurrence(day, raw_time) for day, raw_time in pairs),
        )
    for definition in _lab_slots():
        catalog[definition.code] = definition
    return MappingProxyType(catalog)


SLOT_CATALOG: Mapping[str, SlotDefinition] = _build_catalog()


def normalize_slot_code(code: str) -> str:
    return code.strip().upper()


def resolve_slot(code: str) -> SlotDefinition | None:
    return SLOT_CATALOG.get(normalize_slot_code(code))


def list_slots(slot_type: SlotType | None = None) -> list[SlotDefinition]:
    if slot_type is None:
        return list(SLOT_CATALOG.values())
    return [definition for definition in SLOT_CATALOG.values() if definition.type == slot_type]


def split_slot_combination(raw: str) -> list[str]:
    return [normalize_slot_code(part) for part in raw.split("+") if part.strip()]


def slot_codes_at(day: str, column: str, slot_type: SlotType | None = None) -> list[str]:
    """Slot codes whose occurrences land on ``(day, column)``, in catalog order."""
    codes: list[str] = []
    for definition in SLOT_CATALOG.values():
        if slot_type is not None and definition.type != slot_type:
            continue
        for occurrence in definition.occurrences:
            if occurrence.day != day:
                continue
            if to_column_key(definition.type, occurrence.day, occurrence.raw_time) == column:
                codes.append(definition.code)
                break
    return codes


# Picker suggestions: common registration bundles first, then single slots.
THEORY_COMBINATIONS: tuple[str, ...] = (
    "A1+TA1", "A1+TA1+TAA1", "B1+TB1", "B2+TB2", "B2+TB2+TBB2",
    "C1+TC1", "C1+TC1+TCC1", "C2+TC2", "C2+TC2+TCC2", "D1+TD1",
    "D2+TD2", "D2+TD2+TDD2", "E1+TE1", "E2+TE2", "F1+TF1",
    "F2+TF2", "A2+TA2", "G1+TG1", "G2+TG2", "A2+TA2+TAA2",
)
LAB_COMBINATIONS: tuple[str, ...] = tuple(f"L{number}+L{number + 1}" for number in range(1, 60, 2))
INDIVIDUAL_THEORY_SLOTS: tuple[str, ...] = (
    "A1", "A2", "B1", "B2", "C1", "C2", "D1", "D2", "E1", "E2",
    "F1", "F2", "G1", "G2", "TA1", "TA2", "TB1", "TB2", "TC1", "TC2",
    "TD1", "TD2", "TE1", "TE2", "TF1", "TF2", "TG1", "TG2",
    "TAA1", "TAA2", "TBB2", "TCC1", "TCC2", "TDD2",
    "V1", "V2", "V3", "V4", "V5", "V6", "V7",
)

DEFAULT_SUGGESTION_COUNT = 20
SEARCH_SUGGESTION_COUNT = 15


def suggest_slots(term: str | None = None, limit: int | None = None) -> list[str]:
    candidates = THEORY_COMBINATIONS + LAB_COMBINATIONS + INDIVIDUAL_THEORY_SLOTS
    needle = (term or "").strip().lower()
    if not needle:
        return list(candidates[: limit or DEFAULT_SUGGESTION_COUNT])
    matches = [candidate for candidate in candidates if needle in candidate.lower()]
    return matches[: limit or SEARCH_SUGGESTION_COUNT]
