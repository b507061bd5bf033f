from __future__ import annotations

from collections import OrderedDict
from dataclasses import dataclass, field
import logging
from threading import Lock

from app.core.config import Settings
from app.core.exceptions import EmptyRegistrationSetError, UnknownSlotCodeError
from app.services.conflict_service import (
    ConflictRecord,
    ConflictReport,
    ConflictService,
    SlotWarning,
    expand_registration,
)
from app.services.registration_store import CourseRegistration, CourseRegistrationStore
from app.services.timetable_builder import TimetableGenerator

logger = logging.getLogger(__name__)


@dataclass
class CommitOutcome:
    registration: CourseRegistration
    conflicts: list[ConflictRecord] = field(default_factory=list)
    warnings: list[SlotWarning] = field(default_factory=list)


class PlannerSession:
    """One anonymous user's registrations plus their timetable generator."""

    def __init__(self, settings: Settings) -> None:
        self.store = CourseRegistrationStore(initial_rows=settings.default_course_rows)
        self.generator = TimetableGenerator(self.store, delay_seconds=settings.generation_delay_seconds)
        self._reject_unknown_slot_codes = settings.reject_unknown_slot_codes
        self._resolution_limit = settings.resolution_suggestion_limit

    def commit(self, registration_id: str) -> CommitOutcome:
        # Conflicts are advisory here; only generation is blocked by them.
        if self._reject_unknown_slot_codes:
            _, warnings = expand_registration(self.store.get(registration_id))
            if warnings:
                raise UnknownSlotCodeError(sorted({warning.slot_code for warning in warnings}), registration_id)

        registration = self.store.commit(registration_id)
        report = ConflictService(self.store.committed()).detect_conflicts()
        introduced = [item for item in report.conflicts if registration.id in item.registration_ids]
        warnings = [item for item in report.warnings if item.registration_id == registration.id]
        if introduced:
            logger.info(
                "Course %d saved with %d conflict(s)",
                registration.course_number,
                len(introduced),
            )
        return CommitOutcome(registration=registration, conflicts=introduced, warnings=warnings)

    def check_conflicts(self) -> ConflictReport:
        committed = self.store.committed()
        if not committed:
            raise EmptyRegistrationSetError()

        service = ConflictService(committed)
        report = service.detect_conflicts()
        seen: set[tuple[str, str]] = set()
        for conflict in report.conflicts:
            for resolution in service.generate_resolutions(conflict, limit=self._resolution_limit):
                key = (resolution.registration_id, resolution.suggested_combination)
                if key in seen:
                    continue
                seen.add(key)
                report.suggested_resolutions.append(resolution)
        return report


class PlannerRegistry:
    """Session id -> planner, evicting the least recently used beyond ``settings.max_planner_sessions``."""

    def __init__(self) -> None:
        self._sessions: OrderedDict[str, PlannerSession] = OrderedDict()
        self._lock = Lock()

    def __len__(self) -> int:
        return len(self._sessions)

    def get(self, session_id: str, settings: Settings) -> PlannerSession:
        with self._lock:
            session = self._sessions.get(session_id)
            if session is not None:
                self._sessions.move_to_end(session_id)
                return session

            session = PlannerSession(settings)
            self._sessions[session_id] = session
            logger.debug("Created planner session %s", session_id)
            while len(self._sessions) > max(1, settings.max_planner_sessions):
                evicted, _ = self._sessions.popitem(last=False)
                logger.info("Evicted idle planner session %s", evicted)
            return session

    def clear(self) -> None:
        with self._lock:
            self._sessions.clear()


_registry = PlannerRegistry()


def get_planner_session(session_id: str, settings: Settings) -> PlannerSession:
    return _registry.get(session_id, settings)


def clear_planner_sessions() -> None:
    _registry.clear()
