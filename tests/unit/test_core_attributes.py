from dmc.core import attributes


def test_encode_produces_one_record_per_entry():
    records = attributes.encode({"firstName": "Alice", "score": 3, "vip": True})
    assert sorted(records, key=lambda r: r["name"]) == [
        {"name": "firstName", "value": "Alice"},
        {"name": "score", "value": 3},
        {"name": "vip", "value": True},
    ]


def test_encode_handles_missing_map():
    assert attributes.encode(None) == []
    assert attributes.encode({}) == []


def test_decode_round_trips_undotted_keys():
    original = {"firstName": "Alice", "score": 3, "vip": False}
    assert attributes.decode(attributes.encode(original)) == original


def test_decode_strips_namespace_prefix():
    assert attributes.decode([{"name": "ns.realname", "value": "x"}]) == {"realname": "x"}


def test_decode_keeps_only_second_segment_for_multiple_dots():
    assert attributes.decode([{"name": "a.b.c", "value": 1}]) == {"b": 1}


def test_decode_keeps_leading_dot_names():
    assert attributes.decode([{"name": ".hidden", "value": 1}]) == {".hidden": 1}


def test_decode_missing_records_is_empty_map():
    assert attributes.decode(None) == {}


def test_decode_accepts_single_record():
    assert attributes.decode({"name": "user.city", "value": "Berlin"}) == {"city": "Berlin"}


def test_attribute_records_accepts_wrapped_and_unwrapped_responses():
    records = [{"name": "city", "value": "Berlin"}]
    assert attributes.attribute_records({"attributes": records}) == records
    assert attributes.attribute_records(records) == records
    assert attributes.attribute_records(records[0]) == records
    assert attributes.attribute_records({"other": 1}) is None
    assert attributes.attribute_records(None) is None


def test_decode_response():
    response = {"attributes": [{"name": "group.name", "value": "News"}]}
    assert attributes.decode_response(response) == {"name": "News"}
    assert attributes.decode_response(None) == {}


def test_as_list():
    assert attributes.as_list(None) == []
    assert attributes.as_list("one") == ["one"]
    assert attributes.as_list(5) == [5]
    assert attributes.as_list(("a", "b")) == ["a", "b"]


def test_group_ids_from_memberships_skips_records_without_group():
    memberships = [{"groupId": 1, "userId": 9}, {"userId": 9}, {"groupId": 2}]
    assert attributes.group_ids_from_memberships(memberships) == [1, 2]
    assert attributes.group_ids_from_memberships({"groupId": 7}) == [7]
    assert attributes.group_ids_from_memberships(None) == []
