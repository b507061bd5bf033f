import pytest

from app.core.exceptions import CannotDeleteLastError, CourseValidationError, ResourceNotFoundError
from app.services.registration_store import CourseRegistrationStore


def _fill(store, registration_id, faculty, slot):
    store.update(registration_id, "faculty_name", faculty)
    store.update(registration_id, "slot_combination", slot)


def test_add_appends_blank_editable_rows(store):
    first = store.add()
    second = store.add()

    assert (first.course_number, second.course_number) == (1, 2)
    assert first.is_editing and second.is_editing
    assert first.faculty_name == "" and first.slot_combination == ""
    assert [item.id for item in store.snapshot()] == [first.id, second.id]


def test_initial_rows():
    store = CourseRegistrationStore(initial_rows=3)
    assert [item.course_number for item in store.snapshot()] == [1, 2, 3]
    assert len({item.id for item in store.snapshot()}) == 3


def test_update_only_applies_while_editing(store):
    registration = store.add()
    _fill(store, registration.id, "Prof A", "A1+TA1")
    store.commit(registration.id)
    version = store.version

    unchanged = store.update(registration.id, "faculty_name", "Prof Z")

    assert unchanged.faculty_name == "Prof A"
    assert store.version == version


def test_update_rejects_unknown_field(store):
    registration = store.add()
    with pytest.raises(CourseValidationError):
        store.update(registration.id, "course_number", "7")


def test_commit_requires_faculty_and_slot(store):
    registration = store.add()
    store.update(registration.id, "faculty_name", "Prof A")

    with pytest.raises(CourseValidationError) as exc_info:
        store.commit(registration.id)

    assert exc_info.value.details["missing_fields"] == ["slot_combination"]
    assert store.get(registration.id).is_editing


def test_commit_rejects_whitespace_only_fields(store):
    registration = store.add()
    _fill(store, registration.id, "   ", "A1")
    with pytest.raises(CourseValidationError):
        store.commit(registration.id)


@pytest.mark.parametrize("slot", ["+", " + ", "++"])
def test_commit_rejects_separator_only_slot(store, slot):
    registration = store.add()
    _fill(store, registration.id, "Prof A", slot)

    with pytest.raises(CourseValidationError) as exc_info:
        store.commit(registration.id)

    assert exc_info.value.details["missing_fields"] == ["slot_combination"]
    assert store.committed() == []


def test_commit_and_edit_round_trip(store):
    registration = store.add()
    _fill(store, registration.id, "Prof A", "A1")

    saved = store.commit(registration.id)
    assert not saved.is_editing
    assert saved.is_committed
    assert [item.id for item in store.committed()] == [registration.id]

    reopened = store.edit(registration.id)
    assert reopened.is_editing
    assert store.committed() == []


def test_delete_renumbers_and_keeps_ids(store):
    ids = [store.add().id for _ in range(4)]

    remaining = store.delete(ids[1])

    assert [item.id for item in remaining] == [ids[0], ids[2], ids[3]]
    assert [item.course_number for item in remaining] == [1, 2, 3]
    assert [item.course_number for item in store.snapshot()] == [1, 2, 3]


def test_delete_last_registration_is_refused(store):
    only = store.add()

    with pytest.raises(CannotDeleteLastError):
        store.delete(only.id)

    assert len(store) == 1


def test_add_after_delete_continues_numbering(store):
    first = store.add()
    store.add()
    store.delete(first.id)

    assert store.add().course_number == 2


def test_unknown_registration(store):
    store.add()
    with pytest.raises(ResourceNotFoundError):
        store.commit("missing")
    with pytest.raises(ResourceNotFoundError):
        store.delete("missing")


def test_snapshot_is_a_copy(store):
    registration = store.add()
    snapshot = store.snapshot()
    snapshot[0].faculty_name = "Mutated"

    assert store.get(registration.id).faculty_name == ""


def test_every_mutation_bumps_version(store):
    versions = [store.version]
    registration = store.add()
    versions.append(store.version)
    _fill(store, registration.id, "Prof A", "A1")
    versions.append(store.version)
    store.commit(registration.id)
    versions.append(store.version)
    store.edit(registration.id)
    versions.append(store.version)

    assert versions == sorted(versions)
    assert len(set(versions)) == len(versions)
