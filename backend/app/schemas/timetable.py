from __future__ import annotations

from typing import Literal

from pydantic import BaseModel

from app.schemas.conflict import ConflictDetail, SlotWarningOut
from app.services.slot_catalog import SlotType
from app.services.timetable_builder import GenerationState


class GridCellOut(BaseModel):
    registration_id: str
    faculty_name: str
    slot_code: str
    course_number: int
    slot_combination: str
    slot_type: SlotType

    model_config = {"from_attributes": True}


class TimetableGridOut(BaseModel):
    days: list[str]
    columns: list[str]
    cells: dict[str, dict[str, GridCellOut | None]]
    registration_version: int
    course_count: int

    model_config = {"from_attributes": True}


class GenerationOut(BaseModel):
    status: Literal["generated", "rejected", "superseded"]
    rejected: bool
    grid: TimetableGridOut | None = None
    conflicts: list[ConflictDetail]
    warnings: list[SlotWarningOut]
    registration_version: int

    model_config = {"from_attributes": True}


class TimetableOut(BaseModel):
    state: GenerationState
    stale: bool
    result: GenerationOut
