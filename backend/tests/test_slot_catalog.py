import pytest

from app.services.slot_catalog import (
    COLUMN_KEYS,
    LAB_COMBINATIONS,
    LUNCH_COLUMN,
    SLOT_CATALOG,
    THEORY_COMBINATIONS,
    SlotOccurrence,
    SlotType,
    list_slots,
    resolve_slot,
    slot_codes_at,
    split_slot_combination,
    suggest_slots,
    to_column_key,
)


def test_catalog_sizes():
    assert len(list_slots(SlotType.theory)) == 43
    assert len(list_slots(SlotType.lab)) == 60
    assert len(SLOT_CATALOG) == 103


def test_catalog_is_read_only():
    with pytest.raises(TypeError):
        SLOT_CATALOG["X1"] = SLOT_CATALOG["A1"]


def test_columns_are_ordered_with_lunch_in_the_middle():
    assert len(COLUMN_KEYS) == 13
    assert COLUMN_KEYS[:6] == ("08:00", "08:51", "09:51", "10:41", "11:40", "12:31")
    assert COLUMN_KEYS[6] == LUNCH_COLUMN
    assert COLUMN_KEYS[7:] == ("14:00", "14:51", "15:51", "16:41", "17:40", "18:31")


def test_resolve_slot_normalizes_code():
    definition = resolve_slot("  a1 ")
    assert definition is not None
    assert definition.code == "A1"
    assert definition.type == SlotType.theory
    assert definition.occurrences == (SlotOccurrence("MON", "08:00"), SlotOccurrence("WED", "09:00"))


def test_resolve_unknown_slot_returns_none():
    assert resolve_slot("Z9") is None
    assert resolve_slot("") is None


@pytest.mark.parametrize(
    "code,day,columns",
    [
        ("L1", "MON", ("08:00", "08:51")),
        ("L2", "MON", ("08:00", "08:51")),
        ("L7", "TUE", ("08:00", "08:51")),
        ("L30", "FRI", ("11:40", "12:31")),
        ("L31", "MON", ("14:00", "14:51")),
        ("L60", "FRI", ("17:40", "18:31")),
    ],
)
def test_lab_slots_occupy_a_two_column_block(code, day, columns):
    definition = resolve_slot(code)
    assert definition.type == SlotType.lab
    assert [occurrence.day for occurrence in definition.occurrences] == [day, day]
    assert tuple(occurrence.raw_time for occurrence in definition.occurrences) == columns


@pytest.mark.parametrize(
    "raw_time,column",
    [
        ("08:00", "08:00"),
        ("09:00", "08:51"),
        ("10:00", "09:51"),
        ("11:00", "10:41"),
        ("12:00", "11:40"),
        ("14:00", "14:00"),
        ("15:00", "14:51"),
        ("16:00", "15:51"),
        ("17:00", "16:41"),
        ("18:00", "17:40"),
        ("19:01", "18:31"),
    ],
)
def test_theory_lecture_hours_map_to_grid_columns(raw_time, column):
    assert to_column_key(SlotType.theory, "MON", raw_time) == column


def test_to_column_key_rejects_unmapped_values():
    assert to_column_key(SlotType.theory, "MON", "13:00") is None
    assert to_column_key(SlotType.theory, "SAT", "08:00") is None
    assert to_column_key(SlotType.lab, "MON", LUNCH_COLUMN) is None
    assert to_column_key(SlotType.lab, "MON", "09:00") is None


def test_lab_times_are_already_column_keys():
    assert to_column_key(SlotType.lab, "TUE", "12:31") == "12:31"
    assert to_column_key(SlotType.lab, "TUE", "08:51") == "08:51"


def test_every_catalog_occurrence_lands_on_the_grid():
    for definition in SLOT_CATALOG.values():
        for occurrence in definition.occurrences:
            assert to_column_key(definition.type, occurrence.day, occurrence.raw_time) is not None, definition.code


def test_split_slot_combination():
    assert split_slot_combination(" a1 + ta1 ++ ") == ["A1", "TA1"]
    assert split_slot_combination("") == []


def test_slot_codes_at_uses_normalized_columns():
    assert slot_codes_at("MON", "08:00", SlotType.theory) == ["A1"]
    assert slot_codes_at("WED", "08:51", SlotType.theory) == ["A1"]
    assert slot_codes_at("MON", "08:00", SlotType.lab) == ["L1", "L2"]
    assert slot_codes_at("MON", "18:31", SlotType.theory) == ["V1", "V3"]
    assert slot_codes_at("MON", LUNCH_COLUMN) == []


def test_suggest_slots_without_term_returns_common_combinations():
    assert suggest_slots() == list(THEORY_COMBINATIONS)
    assert suggest_slots("", limit=5) == list(THEORY_COMBINATIONS[:5])


def test_suggest_slots_filters_case_insensitively():
    matches = suggest_slots("l1")
    assert matches[0] == "L1+L2"
    assert len(matches) <= 15
    assert all("l1" in match.lower() for match in matches)
    assert "A1+TA1" in suggest_slots("ta1")


def test_lab_combinations_pair_consecutive_codes():
    assert LAB_COMBINATIONS[0] == "L1+L2"
    assert LAB_COMBINATIONS[-1] == "L59+L60"
    assert len(LAB_COMBINATIONS) == 30
