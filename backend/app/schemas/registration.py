from typing import Literal

from pydantic import BaseModel, Field

from app.schemas.conflict import ConflictDetail, SlotWarningOut


class RegistrationOut(BaseModel):
    id: str
    course_number: int
    faculty_name: str
    slot_combination: str
    is_editing: bool

    model_config = {"from_attributes": True}


class RegistrationUpdate(BaseModel):
    field: Literal["faculty_name", "slot_combination"]
    value: str = Field(max_length=200)


class CommitOut(BaseModel):
    registration: RegistrationOut
    conflicts: list[ConflictDetail]
    warnings: list[SlotWarningOut]

    model_config = {"from_attributes": True}
