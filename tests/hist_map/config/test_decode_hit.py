from datetime import date

import pytest

from hist_map.config.decode import decode_hit
from hist_map.core.model import HitType
from hist_map.validation.errors import ValidationError


def _record(**overrides):
    record = {
        "type": 2,
        "date": "1941-09-08",
        "address": {"street": "Kievskaya", "houseNumber": 5},
        "position": {"lat": 59.9057, "lng": 30.3246},
        "description": "Badayev warehouses",
    }
    record.update(overrides)
    return record


def test_decode_hit_valid_record():
    hit = decode_hit(_record())

    assert hit.type is HitType.Incendiary
    assert hit.date == date(1941, 9, 8)
    assert hit.address.street == "Kievskaya"
    assert hit.address.house_number == 5
    assert hit.position.as_tuple() == (59.9057, 30.3246)
    assert hit.description == "Badayev warehouses"


def test_decode_hit_description_optional():
    raw = _record()
    del raw["description"]
    assert decode_hit(raw).description is None


def test_decode_hit_integer_coordinates_become_floats():
    hit = decode_hit(_record(position={"lat": 60, "lng": 30}))
    assert isinstance(hit.position.lat, float)


@pytest.mark.parametrize("bad_type", [3, -1, "1", None, True, 1.5])
def test_decode_hit_rejects_unknown_type(bad_type):
    with pytest.raises(ValidationError) as exc:
        decode_hit(_record(type=bad_type))
    assert [i.code for i in exc.value.issues] == ["unknown_hit_type"]
    assert exc.value.issues[0].path == "type"


def test_decode_hit_collects_all_issues():
    raw = _record(
        date="08.09.1941",
        address={"street": 12, "houseNumber": "5"},
        position={"lat": "north"},
    )

    with pytest.raises(ValidationError) as exc:
        decode_hit(raw)

    codes = [i.code for i in exc.value.issues]
    assert codes == [
        "invalid_date",
        "missing_street",
        "invalid_house_number",
        "invalid_position",
        "invalid_position",
    ]


def test_decode_hit_rejects_non_object():
    with pytest.raises(ValidationError):
        decode_hit(["not", "a", "record"])


def test_decode_hit_error_carries_record_index():
    with pytest.raises(ValidationError) as exc:
        decode_hit(_record(type=9), index=3)

    assert exc.value.record_index == 3
    assert str(exc.value).startswith("record 3: unknown_hit_type at type")
