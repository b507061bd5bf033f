from __future__ import annotations

from pydantic import BaseModel

from app.services.slot_catalog import SlotDefinition, SlotType, TimetableColumn, to_column_key


class SlotOccurrenceOut(BaseModel):
    day: str
    raw_time: str
    column: str | None


class SlotDefinitionOut(BaseModel):
    code: str
    type: SlotType
    occurrences: list[SlotOccurrenceOut]

    @classmethod
    def from_definition(cls, definition: SlotDefinition) -> "SlotDefinitionOut":
        return cls(
            code=definition.code,
            type=definition.type,
            occurrences=[
                SlotOccurrenceOut(
                    day=occurrence.day,
                    raw_time=occurrence.raw_time,
                    column=to_column_key(definition.type, occurrence.day, occurrence.raw_time),
                )
                for occurrence in definition.occurrences
            ],
        )


class TimetableColumnOut(BaseModel):
    key: str
    theory_window: tuple[str, str] | None
    lab_window: tuple[str, str] | None
    is_lunch: bool

    model_config = {"from_attributes": True}

    @classmethod
    def from_column(cls, column: TimetableColumn) -> "TimetableColumnOut":
        return cls.model_validate(column)


class CellSlotCodesOut(BaseModel):
    theory: list[str]
    lab: list[str]


class GridLayoutOut(BaseModel):
    days: list[str]
    columns: list[TimetableColumnOut]
    # day -> column -> slot codes that would land there; labels empty cells.
    slot_codes: dict[str, dict[str, CellSlotCodesOut]]
