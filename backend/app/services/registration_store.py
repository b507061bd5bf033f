from __future__ import annotations

from dataclasses import dataclass, replace
import logging
from threading import Lock
from typing import Callable
import uuid

from app.core.exceptions import CannotDeleteLastError, CourseValidationError, ResourceNotFoundError
from app.services.slot_catalog import split_slot_combination

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = frozenset({"faculty_name", "slot_combination"})


@dataclass
class CourseRegistration:
    id: str
    course_number: int
    faculty_name: str = ""
    slot_combination: str = ""
    is_editing: bool = True

    @property
    def is_committed(self) -> bool:
        return (
            not self.is_editing
            and bool(self.faculty_name.strip())
            and bool(split_slot_combination(self.slot_combination))
        )


class CourseRegistrationStore:
    """Ordered registration list for one planner session.

    The store is the only writer of its list. Reads hand out copies, and every
    effective mutation bumps ``version`` so derived results can detect that
    they were computed from an older list.
    """

    def __init__(self, initial_rows: int = 0, id_factory: Callable[[], str] | None = None) -> None:
        self._registrations: list[CourseRegistration] = []
        self._id_factory = id_factory or (lambda: str(uuid.uuid4()))
        self._lock = Lock()
        self._version = 0
        for _ in range(max(0, initial_rows)):
            self.add()

    @property
    def version(self) -> int:
        return self._version

    def __len__(self) -> int:
        return len(self._registrations)

    def snapshot(self) -> list[CourseRegistration]:
        with self._lock:
            return [replace(item) for item in self._registrations]

    def committed(self) -> list[CourseRegistration]:
        return [item for item in self.snapshot() if item.is_committed]

    def get(self, registration_id: str) -> CourseRegistration:
        with self._lock:
            return replace(self._find(registration_id))

    def add(self) -> CourseRegistration:
        with self._lock:
            registration = CourseRegistration(
                id=self._id_factory(),
                course_number=len(self._registrations) + 1,
            )
            self._registrations.append(registration)
            self._version += 1
            return replace(registration)

    def update(self, registration_id: str, field: str, value: str) -> CourseRegistration:
        if field not in EDITABLE_FIELDS:
            raise CourseValidationError(
                f"Field {field!r} cannot be edited",
                details={"field": field, "allowed": sorted(EDITABLE_FIELDS)},
            )
        with self._lock:
            registration = self._find(registration_id)
            if registration.is_editing and getattr(registration, field) != value:
                setattr(registration, field, value)
                self._version += 1
            return replace(registration)

    def edit(self, registration_id: str) -> CourseRegistration:
        with self._lock:
            registration = self._find(registration_id)
            if not registration.is_editing:
                registration.is_editing = True
                self._version += 1
            return replace(registration)

    def commit(self, registration_id: str) -> CourseRegistration:
        with self._lock:
            registration = self._find(registration_id)
            missing = []
            if not registration.faculty_name.strip():
                missing.append("faculty_name")
            # "+" alone names no slot at all.
            if not split_slot_combination(registration.slot_combination):
                missing.append("slot_combination")
            if missing:
                raise CourseValidationError(
                    "Please fill both Faculty and Slot fields",
                    details={"registration_id": registration_id, "missing_fields": missing},
                )
            if registration.is_editing:
                registration.is_editing = False
                self._version += 1
            logger.debug("Committed course %d (%s)", registration.course_number, registration.slot_combination)
            return replace(registration)

    def delete(self, registration_id: str) -> list[CourseRegistration]:
        with self._lock:
            registration = self._find(registration_id)
            if len(self._registrations) == 1:
                raise CannotDeleteLastError(registration_id)
            self._registrations.remove(registration)
            for index, item in enumerate(self._registrations, start=1):
                item.course_number = index
            self._version += 1
            return [replace(item) for item in self._registrations]

    def _find(self, registration_id: str) -> CourseRegistration:
        for registration in self._registrations:
            if registration.id == registration_id:
                return registration
        raise ResourceNotFoundError("Course registration", registration_id)
