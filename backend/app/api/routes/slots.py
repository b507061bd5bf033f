from fastapi import APIRouter, Query

from app.core.exceptions import ResourceNotFoundError
from app.schemas.slot import CellSlotCodesOut, GridLayoutOut, SlotDefinitionOut, TimetableColumnOut
from app.services.slot_catalog import (
    TIMETABLE_COLUMNS,
    WEEK_DAYS,
    SlotType,
    list_slots,
    resolve_slot,
    slot_codes_at,
    suggest_slots,
)

router = APIRouter()


@router.get("/", response_model=list[SlotDefinitionOut])
def list_catalog(slot_type: SlotType | None = Query(default=None, alias="type")) -> list[SlotDefinitionOut]:
    return [SlotDefinitionOut.from_definition(item) for item in list_slots(slot_type)]


@router.get("/layout", response_model=GridLayoutOut)
def grid_layout() -> GridLayoutOut:
    slot_codes = {
        day: {
            column.key: CellSlotCodesOut(
                theory=slot_codes_at(day, column.key, SlotType.theory),
                lab=slot_codes_at(day, column.key, SlotType.lab),
            )
            for column in TIMETABLE_COLUMNS
            if not column.is_lunch
        }
        for day in WEEK_DAYS
    }
    return GridLayoutOut(
        days=list(WEEK_DAYS),
        columns=[TimetableColumnOut.from_column(column) for column in TIMETABLE_COLUMNS],
        slot_codes=slot_codes,
    )


@router.get("/suggest", response_model=list[str])
def suggest(
    q: str = Query(default="", max_length=50),
    limit: int | None = Query(default=None, ge=1, le=100),
) -> list[str]:
    return suggest_slots(q, limit)


@router.get("/{code}", response_model=SlotDefinitionOut)
def get_slot(code: str) -> SlotDefinitionOut:
    definition = resolve_slot(code)
    if definition is None:
        raise ResourceNotFoundError("Slot", code)
    return SlotDefinitionOut.from_definition(definition)
