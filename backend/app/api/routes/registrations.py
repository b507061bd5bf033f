from fastapi import APIRouter, Depends, status

from app.api.deps import get_planner
from app.schemas.registration import CommitOut, RegistrationOut, RegistrationUpdate
from app.services.planner import PlannerSession

router = APIRouter()


@router.get("/", response_model=list[RegistrationOut])
def list_registrations(planner: PlannerSession = Depends(get_planner)) -> list[RegistrationOut]:
    return [RegistrationOut.model_validate(item) for item in planner.store.snapshot()]


@router.post("/", response_model=RegistrationOut, status_code=status.HTTP_201_CREATED)
def add_registration(planner: PlannerSession = Depends(get_planner)) -> RegistrationOut:
    return RegistrationOut.model_validate(planner.store.add())


@router.patch("/{registration_id}", response_model=RegistrationOut)
def update_registration(
    registration_id: str,
    payload: RegistrationUpdate,
    planner: PlannerSession = Depends(get_planner),
) -> RegistrationOut:
    registration = planner.store.update(registration_id, payload.field, payload.value)
    return RegistrationOut.model_validate(registration)


@router.post("/{registration_id}/edit", response_model=RegistrationOut)
def edit_registration(registration_id: str, planner: PlannerSession = Depends(get_planner)) -> RegistrationOut:
    return RegistrationOut.model_validate(planner.store.edit(registration_id))


@router.post("/{registration_id}/commit", response_model=CommitOut)
def commit_registration(registration_id: str, planner: PlannerSession = Depends(get_planner)) -> CommitOut:
    outcome = planner.commit(registration_id)
    return CommitOut.model_validate(outcome)


@router.delete("/{registration_id}", response_model=list[RegistrationOut])
def delete_registration(registration_id: str, planner: PlannerSession = Depends(get_planner)) -> list[RegistrationOut]:
    remaining = planner.store.delete(registration_id)
    return [RegistrationOut.model_validate(item) for item in remaining]
