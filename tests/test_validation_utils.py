import pytest
from pydantic import ValidationError

from app.models.user import serialize_user
from app.schemas.user import UserPayload
from bson import ObjectId
from utils.validation_utils import format_hobbies, is_valid_object_id, parse_age, parse_hobbies


@pytest.mark.parametrize(
    "value, expected",
    [
        ("reading, coding, ", ["reading", "coding"]),
        ("x,y", ["x", "y"]),
        ("  solo  ", ["solo"]),
        ("", []),
        (" , ,", []),
        (None, []),
        (["  a", "", "b "], ["a", "b"]),
    ],
)
def test_parse_hobbies(value, expected):
    assert parse_hobbies(value) == expected


def test_format_hobbies():
    assert format_hobbies(["reading", "coding"]) == "reading, coding"
    assert format_hobbies([]) == ""
    assert format_hobbies(None) == ""


def test_is_valid_object_id():
    assert is_valid_object_id(str(ObjectId()))
    assert not is_valid_object_id("not-an-id")
    assert not is_valid_object_id("")


@pytest.mark.parametrize(
    "value, expected",
    [("30", 30), (" 7 ", 7), ("30.0", 30), ("30.5", None), ("abc", None), ("", None)],
)
def test_parse_age(value, expected):
    assert parse_age(value) == expected


def test_payload_rejects_non_string_hobbies():
    with pytest.raises(ValidationError):
        UserPayload(name="A", age=1, city="X", email="a@x.com", hobbies=[1, 2])


def test_payload_requires_non_empty_name():
    with pytest.raises(ValidationError):
        UserPayload(name="   ", age=1, city="X", email="a@x.com")


def test_serialize_user_exposes_both_id_keys():
    oid = ObjectId()
    record = serialize_user({"_id": oid, "name": "A", "age": 1, "city": "X", "email": "e", "__v": 0})
    assert record["_id"] == record["id"] == str(oid)
    assert record["hobbies"] == []
    assert "__v" not in record
    assert serialize_user(None) is None
