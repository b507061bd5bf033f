from typing import List, Literal

from pydantic import BaseModel

from app.services.slot_catalog import SlotType


class OccupancyOut(BaseModel):
    registration_id: str
    course_number: int
    faculty_name: str
    slot_combination: str
    slot_code: str
    slot_type: SlotType
    day: str
    column: str

    model_config = {"from_attributes": True}


class ConflictDetail(BaseModel):
    day: str
    column: str
    cross_category: bool  # Theory vs Lab on the same cell
    description: str
    first: OccupancyOut
    second: OccupancyOut

    model_config = {"from_attributes": True}


class SlotWarningOut(BaseModel):
    registration_id: str
    course_number: int
    slot_code: str
    reason: Literal["unknown_slot_code", "unmapped_time"]
    message: str

    model_config = {"from_attributes": True}


class ResolutionAction(BaseModel):
    registration_id: str
    course_number: int
    current_combination: str
    suggested_combination: str
    description: str

    model_config = {"from_attributes": True}


class ConflictReport(BaseModel):
    has_conflicts: bool
    conflicts: List[ConflictDetail]
    warnings: List[SlotWarningOut]
    suggested_resolutions: List[ResolutionAction]

    model_config = {"from_attributes": True}
