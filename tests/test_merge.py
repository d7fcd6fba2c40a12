import copy

from survey_api.services.merge import merge_participant_record, new_participant_record, utc_now_iso

EXISTING = {
    "id": "abc123",
    "name": "Sam",
    "created_at": "2025-01-01T10:00:00.000000Z",
    "updated_at": "2025-01-01T10:05:00.000000Z",
    "answers": [{"q": 1, "a": "no"}],
    "roles": {"lead": "Sam"},
    "photoMap": {"q3": "/uploads/abc123/1_x.jpg"},
}
NOW = "2025-02-01T09:00:00.000000Z"


def test_new_record_defaults():
    record = new_participant_record("abc123", None, NOW)
    assert record == {
        "id": "abc123",
        "name": None,
        "created_at": NOW,
        "answers": [],
        "roles": None,
        "photoMap": {},
    }
    assert new_participant_record("abc123", "", NOW)["name"] is None
    assert new_participant_record("abc123", "Kim", NOW)["name"] == "Kim"


def test_first_save_without_existing_record():
    merged = merge_participant_record("p1", None, {"answers": [1, 2]}, NOW)
    assert merged == {
        "id": "p1",
        "name": None,
        "created_at": NOW,
        "updated_at": NOW,
        "answers": [1, 2],
        "roles": None,
        "photoMap": {},
    }


def test_answers_only_keeps_other_fields():
    merged = merge_participant_record("abc123", EXISTING, {"answers": [{"q": 1, "a": "yes"}]}, NOW)
    assert merged["answers"] == [{"q": 1, "a": "yes"}]
    assert merged["roles"] == EXISTING["roles"]
    assert merged["photoMap"] == EXISTING["photoMap"]
    assert merged["name"] == "Sam"
    assert merged["created_at"] == EXISTING["created_at"]
    assert merged["updated_at"] == NOW


def test_replacement_is_whole_field():
    merged = merge_participant_record("abc123", EXISTING, {"roles": {"helper": "Kim"}, "photoMap": {}}, NOW)
    assert merged["roles"] == {"helper": "Kim"}
    assert merged["photoMap"] == {}
    assert merged["answers"] == EXISTING["answers"]


def test_non_list_answers_fall_back():
    merged = merge_participant_record("abc123", EXISTING, {"answers": {"q": 1}}, NOW)
    assert merged["answers"] == EXISTING["answers"]
    assert merge_participant_record("x", None, {"answers": "nope"}, NOW)["answers"] == []


def test_empty_name_and_nulls_fall_back():
    merged = merge_participant_record("abc123", EXISTING, {"name": "", "roles": None, "photoMap": None}, NOW)
    assert merged["name"] == "Sam"
    assert merged["roles"] == EXISTING["roles"]
    assert merged["photoMap"] == EXISTING["photoMap"]


def test_id_comes_from_caller_not_payload():
    merged = merge_participant_record("abc123", EXISTING, {"id": "hijack"}, NOW)
    assert merged["id"] == "abc123"


def test_inputs_are_not_mutated():
    existing = copy.deepcopy(EXISTING)
    payload = {"answers": [3], "name": "Alex"}
    merge_participant_record("abc123", existing, payload, NOW)
    assert existing == EXISTING
    assert payload == {"answers": [3], "name": "Alex"}


def test_utc_now_iso_format():
    value = utc_now_iso()
    assert value.endswith("Z")
    assert "T" in value
    assert len(value) == len("2025-01-01T10:00:00.000000Z")
