from fastapi import Depends, Header

from app.core.config import Settings, get_settings
from app.services.planner import PlannerSession, get_planner_session

DEFAULT_SESSION_ID = "default"


def get_planner(
    x_planner_session: str = Header(default=DEFAULT_SESSION_ID, max_length=64),
    settings: Settings = Depends(get_settings),
) -> PlannerSession:
    session_id = x_planner_session.strip() or DEFAULT_SESSION_ID
    return get_planner_session(session_id, settings)
