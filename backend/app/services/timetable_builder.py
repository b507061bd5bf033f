from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from enum import Enum
import logging
from typing import Iterable, Literal

from app.core.exceptions import EmptyRegistrationSetError, GenerationInProgressError
from app.services.conflict_service import ConflictRecord, ConflictService, OccupancyRecord, SlotWarning
from app.services.registration_store import CourseRegistration, CourseRegistrationStore
from app.services.slot_catalog import COLUMN_KEYS, WEEK_DAYS, SlotType

logger = logging.getLogger(__name__)


class GenerationState(str, Enum):
    idle = "idle"
    checking = "checking"
    generated = "generated"
    rejected = "rejected"


GenerationStatus = Literal["generated", "rejected", "superseded"]


@dataclass(frozen=True)
class GridCell:
    registration_id: str
    faculty_name: str
    slot_code: str
    course_number: int
    slot_combination: str
    slot_type: SlotType


@dataclass
class TimetableGrid:
    cells: dict[str, dict[str, GridCell | None]]
    registration_version: int = 0
    course_count: int = 0

    @classmethod
    def empty(cls, registration_version: int = 0) -> "TimetableGrid":
        return cls(
            cells={day: {column: None for column in COLUMN_KEYS} for day in WEEK_DAYS},
            registration_version=registration_version,
        )

    @property
    def days(self) -> tuple[str, ...]:
        return WEEK_DAYS

    @property
    def columns(self) -> tuple[str, ...]:
        return COLUMN_KEYS

    def cell(self, day: str, column: str) -> GridCell | None:
        return self.cells[day][column]

    def place(self, record: OccupancyRecord) -> None:
        existing = self.cells[record.day][record.column]
        if existing is not None:
            if existing.registration_id != record.registration_id:
                raise ValueError(f"Cell {record.day} {record.column} is already taken by course {existing.course_number}")
            # Paired lab codes (L1+L2) share their block; the first write wins.
            return
        self.cells[record.day][record.column] = GridCell(
            registration_id=record.registration_id,
            faculty_name=record.faculty_name,
            slot_code=record.slot_code,
            course_number=record.course_number,
            slot_combination=record.slot_combination,
            slot_type=record.slot_type,
        )


@dataclass
class GenerationResult:
    status: GenerationStatus
    grid: TimetableGrid | None = None
    conflicts: list[ConflictRecord] = field(default_factory=list)
    warnings: list[SlotWarning] = field(default_factory=list)
    registration_version: int = 0

    @property
    def rejected(self) -> bool:
        return self.status == "rejected"


def build_timetable(registrations: Iterable[CourseRegistration], registration_version: int = 0) -> GenerationResult:
    """Build the weekly grid, or refuse outright when any two courses collide.

    A rejected result never carries a grid, not even a partial one.
    """
    committed = [item for item in registrations if item.is_committed]
    if not committed:
        raise EmptyRegistrationSetError()

    service = ConflictService(committed)
    report = service.detect_conflicts()
    if report.has_conflicts:
        return GenerationResult(
            status="rejected",
            conflicts=report.conflicts,
            warnings=report.warnings,
            registration_version=registration_version,
        )

    grid = TimetableGrid.empty(registration_version)
    records, _ = service.occupancy()
    for record in records:
        grid.place(record)
    grid.course_count = len(committed)
    return GenerationResult(
        status="generated",
        grid=grid,
        warnings=report.warnings,
        registration_version=registration_version,
    )


class TimetableGenerator:
    """Runs generation requests for one registration store.

    Only one request may be pending at a time; a request whose store changed
    while it was pending is reported as superseded and its grid is dropped.
    """

    def __init__(self, store: CourseRegistrationStore, delay_seconds: float = 0.0) -> None:
        self._store = store
        self._delay_seconds = max(0.0, delay_seconds)
        self._lock = asyncio.Lock()
        self.state = GenerationState.idle
        self.latest: GenerationResult | None = None

    @property
    def in_progress(self) -> bool:
        return self._lock.locked()

    @property
    def is_stale(self) -> bool:
        return self.latest is not None and self.latest.registration_version != self._store.version

    async def generate(self) -> GenerationResult:
        if self._lock.locked():
            raise GenerationInProgressError()
        async with self._lock:
            version = self._store.version
            snapshot = self._store.snapshot()
            self.state = GenerationState.checking
            try:
                result = build_timetable(snapshot, registration_version=version)
            except EmptyRegistrationSetError:
                self.state = GenerationState.idle
                raise

            if result.status == "generated" and self._delay_seconds:
                await asyncio.sleep(self._delay_seconds)

            if self._store.version != version:
                logger.warning(
                    "Discarding timetable built from registration version %d; store is now at %d",
                    version,
                    self._store.version,
                )
                self.state = GenerationState.idle
                return GenerationResult(status="superseded", registration_version=version)

            self.latest = result
            if result.rejected:
                self.state = GenerationState.rejected
                logger.info("Timetable generation rejected with %d conflict(s)", len(result.conflicts))
            else:
                self.state = GenerationState.generated
                logger.info("Generated timetable for %d course(s)", result.grid.course_count)
            return result
