import itertools

import pytest
from fastapi.testclient import TestClient #gives you a fake http client that can call your FastAPI routes without running a real server.

from app.main import app
from app.services.planner import clear_planner_sessions
from app.services.registration_store import CourseRegistration, CourseRegistrationStore


@pytest.fixture() #test client
def client(): #fake http client
    clear_planner_sessions() #every test starts from fresh planner sessions, otherwise registrations leak between tests.

    with TestClient(app) as test_client:
        yield test_client

    clear_planner_sessions()


@pytest.fixture()
def store():
    counter = itertools.count(1)
    return CourseRegistrationStore(id_factory=lambda: f"c{next(counter)}")


@pytest.fixture()
def committed():
    def build(registration_id, course_number, slot_combination, faculty_name=None):
        return CourseRegistration(
            id=registration_id,
            course_number=course_number,
            faculty_name=faculty_name or f"Prof {registration_id.upper()}",
            slot_combination=slot_combination,
            is_editing=False,
        )

    return build
