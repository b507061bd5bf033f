from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from app.core.config import get_settings
from app.services.slot_catalog import COLUMN_KEYS, SLOT_CATALOG, WEEK_DAYS, SlotType, list_slots

router = APIRouter()

settings = get_settings()


@router.get("/health")
def health() -> dict:
    return {"status": "ok"}


@router.get("/health/live")
def health_live() -> dict:
    return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}


@router.get("/health/ready")
def health_ready() -> JSONResponse:
    theory_count = len(list_slots(SlotType.theory))
    lab_count = len(list_slots(SlotType.lab))
    catalog_ok = theory_count > 0 and lab_count > 0 and len(COLUMN_KEYS) == 13

    payload = {
        "status": "ok" if catalog_ok else "degraded",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "catalog": {
            "ok": catalog_ok,
            "slots": len(SLOT_CATALOG),
            "theory_slots": theory_count,
            "lab_slots": lab_count,
            "days": list(WEEK_DAYS),
            "columns": len(COLUMN_KEYS),
        },
        "planner": {
            "default_course_rows": settings.default_course_rows,
            "generation_delay_seconds": settings.generation_delay_seconds,
            "reject_unknown_slot_codes": settings.reject_unknown_slot_codes,
        },
    }
    return JSONResponse(status_code=200 if catalog_ok else 503, content=payload)
