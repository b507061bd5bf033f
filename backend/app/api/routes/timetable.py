import logging

from fastapi import APIRouter, Depends

from app.api.deps import get_planner
from app.core.exceptions import ResourceNotFoundError
from app.schemas.conflict import ConflictReport
from app.schemas.timetable import GenerationOut, TimetableOut
from app.services.planner import PlannerSession

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/conflicts", response_model=ConflictReport)
def check_conflicts(planner: PlannerSession = Depends(get_planner)) -> ConflictReport:
    report = planner.check_conflicts()
    return ConflictReport.model_validate(report)


@router.post("/generate", response_model=GenerationOut)
async def generate_timetable(planner: PlannerSession = Depends(get_planner)) -> GenerationOut:
    result = await planner.generator.generate()
    if result.status == "superseded":
        logger.info("Timetable generation superseded by a newer edit")
    return GenerationOut.model_validate(result)


@router.get("/", response_model=TimetableOut)
def latest_timetable(planner: PlannerSession = Depends(get_planner)) -> TimetableOut:
    generator = planner.generator
    if generator.latest is None:
        raise ResourceNotFoundError("Timetable", "latest")
    return TimetableOut(
        state=generator.state,
        stale=generator.is_stale,
        result=GenerationOut.model_validate(generator.latest),
    )
