from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field, replace
import logging
from typing import Iterable, List, Literal, Tuple

from app.services.registration_store import CourseRegistration
from app.services.slot_catalog import (
    COLUMN_KEYS,
    LAB_COMBINATIONS,
    THEORY_COMBINATIONS,
    WEEK_DAYS,
    SlotType,
    resolve_slot,
    split_slot_combination,
    to_column_key,
)

logger = logging.getLogger(__name__)

Cell = Tuple[str, str]


@dataclass(frozen=True)
class OccupancyRecord:
    registration_id: str
    course_number: int
    faculty_name: str
    slot_combination: str
    slot_code: str
    slot_type: SlotType
    day: str
    column: str

    @property
    def cell(self) -> Cell:
        return (self.day, self.column)


@dataclass(frozen=True)
class SlotWarning:
    registration_id: str
    course_number: int
    slot_code: str
    reason: Literal["unknown_slot_code", "unmapped_time"]

    @property
    def message(self) -> str:
        if self.reason == "unknown_slot_code":
            return f"Course {self.course_number}: slot {self.slot_code} is not in the slot catalog and was not scheduled"
        return f"Course {self.course_number}: slot {self.slot_code} has a time outside the timetable grid"


@dataclass(frozen=True)
class ConflictRecord:
    first: OccupancyRecord
    second: OccupancyRecord

    @property
    def day(self) -> str:
        return self.first.day

    @property
    def column(self) -> str:
        return self.first.column

    @property
    def cross_category(self) -> bool:
        return self.first.slot_type != self.second.slot_type

    @property
    def registration_ids(self) -> frozenset[str]:
        return frozenset((self.first.registration_id, self.second.registration_id))

    @property
    def key(self) -> tuple[frozenset[str], str, str]:
        return (self.registration_ids, self.day, self.column)

    @property
    def description(self) -> str:
        return (
            f"Course {self.first.course_number} ({self.first.slot_code}) and "
            f"course {self.second.course_number} ({self.second.slot_code}) both occupy "
            f"{self.day} {self.column}"
        )


@dataclass(frozen=True)
class ResolutionSuggestion:
    registration_id: str
    course_number: int
    current_combination: str
    suggested_combination: str

    @property
    def description(self) -> str:
        return f"Move course {self.course_number} from {self.current_combination} to {self.suggested_combination}"


@dataclass
class ConflictReport:
    conflicts: List[ConflictRecord] = field(default_factory=list)
    warnings: List[SlotWarning] = field(default_factory=list)
    suggested_resolutions: List[ResolutionSuggestion] = field(default_factory=list)

    @property
    def has_conflicts(self) -> bool:
        return bool(self.conflicts)


def _course_order(record: OccupancyRecord) -> tuple[int, str]:
    return (record.course_number, record.registration_id)


def expand_registration(registration: CourseRegistration) -> tuple[list[OccupancyRecord], list[SlotWarning]]:
    """Expand a registration's slot combination into grid occupancy.

    Unresolvable components contribute no occupancy; each one is reported as a
    ``SlotWarning`` instead of being dropped silently.
    """
    records: list[OccupancyRecord] = []
    warnings: list[SlotWarning] = []
    for code in split_slot_combination(registration.slot_combination):
        definition = resolve_slot(code)
        if definition is None:
            warnings.append(SlotWarning(registration.id, registration.course_number, code, "unknown_slot_code"))
            continue
        for occurrence in definition.occurrences:
            column = to_column_key(definition.type, occurrence.day, occurrence.raw_time)
            if column is None:
                warnings.append(SlotWarning(registration.id, registration.course_number, code, "unmapped_time"))
                continue
            records.append(
                OccupancyRecord(
                    registration_id=registration.id,
                    course_number=registration.course_number,
                    faculty_name=registration.faculty_name,
                    slot_combination=registration.slot_combination,
                    slot_code=definition.code,
                    slot_type=definition.type,
                    day=occurrence.day,
                    column=column,
                )
            )
    return records, warnings


class ConflictService:
    def __init__(self, registrations: Iterable[CourseRegistration]):
        self.registrations: List[CourseRegistration] = [
            item for item in registrations if split_slot_combination(item.slot_combination)
        ]

    def occupancy(self) -> tuple[list[OccupancyRecord], list[SlotWarning]]:
        records: list[OccupancyRecord] = []
        warnings: list[SlotWarning] = []
        for registration in self.registrations:
            course_records, course_warnings = expand_registration(registration)
            records.extend(course_records)
            warnings.extend(course_warnings)
        return records, warnings

    def detect_conflicts(self) -> ConflictReport:
        records, warnings = self.occupancy()
        for warning in warnings:
            logger.warning(warning.message)

        # Bucket by cell; only records sharing a cell can collide.
        records_by_cell: dict[Cell, list[OccupancyRecord]] = defaultdict(list)
        for record in records:
            records_by_cell[record.cell].append(record)

        conflicts: List[ConflictRecord] = []
        seen: set[tuple[frozenset[str], str, str]] = set()
        for cell_records in records_by_cell.values():
            # Lower course number is always ``first``, whatever the input order.
            cell_records.sort(key=_course_order)
            n = len(cell_records)
            for i in range(n):
                s1 = cell_records[i]
                for j in range(i + 1, n):
                    s2 = cell_records[j]
                    if s1.registration_id == s2.registration_id:
                        continue
                    conflict = ConflictRecord(first=s1, second=s2)
                    if conflict.key in seen:
                        continue
                    seen.add(conflict.key)
                    conflicts.append(conflict)

        conflicts.sort(
            key=lambda item: (
                _course_order(item.first),
                _course_order(item.second),
                WEEK_DAYS.index(item.day),
                COLUMN_KEYS.index(item.column),
            )
        )
        if conflicts:
            logger.info("Detected %d slot conflict(s) across %d course(s)", len(conflicts), len(self.registrations))
        return ConflictReport(conflicts=conflicts, warnings=warnings)

    def conflicts_involving(self, registration_id: str) -> List[ConflictRecord]:
        return [
            conflict
            for conflict in self.detect_conflicts().conflicts
            if registration_id in conflict.registration_ids
        ]

    def generate_resolutions(self, conflict: ConflictRecord, limit: int = 3) -> List[ResolutionSuggestion]:
        target = next(
            (item for item in self.registrations if item.id == conflict.second.registration_id),
            None,
        )
        if target is None or limit <= 0:
            return []

        records, _ = self.occupancy()
        blocked = {record.cell for record in records if record.registration_id != target.id}
        current = "+".join(split_slot_combination(target.slot_combination))
        candidates = LAB_COMBINATIONS if conflict.second.slot_type == SlotType.lab else THEORY_COMBINATIONS

        resolutions: List[ResolutionSuggestion] = []
        for combination in candidates:
            if combination == current:
                continue
            candidate_records, _ = expand_registration(replace(target, slot_combination=combination))
            if any(record.cell in blocked for record in candidate_records):
                continue
            resolutions.append(
                ResolutionSuggestion(
                    registration_id=target.id,
                    course_number=target.course_number,
                    current_combination=target.slot_combination,
                    suggested_combination=combination,
                )
            )
            if len(resolutions) >= limit:
                break
        return resolutions


def detect_conflicts(registrations: Iterable[CourseRegistration]) -> List[ConflictRecord]:
    return ConflictService(registrations).detect_conflicts().conflicts
