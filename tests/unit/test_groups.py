import pytest

GROUP = {"id": 7, "name": "Newsletter", "description": "Weekly news", "status": "ACTIVE"}


def test_get_group(dmc, soap):
    soap.respond("groupGet", {"group": GROUP})
    assert dmc.get_group(7) == GROUP
    assert soap.params("groupGet") == {"groupId": 7}


def test_get_group_fault(dmc, soap):
    soap.fault("groupGet")
    assert dmc.get_group(7) is False


def test_clone_group_returns_new_group(dmc, soap):
    clone = dict(GROUP, id=8, name="Newsletter (copy)")
    soap.respond("groupClone", {"group": clone})
    assert dmc.clone_group(7, {"name": "Newsletter (copy)"}) == clone
    assert soap.params("groupClone") == {"groupId": 7, "options": {"name": "Newsletter (copy)"}}


def test_get_group_attributes_decodes_namespaced_names(dmc, soap):
    soap.respond("groupGetAttributes", {"attributes": [
        {"name": "group.Name", "value": "Newsletter"},
        {"name": "group.Email", "value": "news@example.com"},
    ]})
    assert dmc.get_group_attributes(7) == {"Name": "Newsletter", "Email": "news@example.com"}


def test_get_group_attributes_without_attribute_list_is_false(dmc, soap):
    soap.respond("groupGetAttributes", {"other": "payload"})
    assert dmc.get_group_attributes(7) is False


def test_get_group_attributes_empty_list_is_false(dmc, soap):
    soap.respond("groupGetAttributes", {"attributes": []})
    assert dmc.get_group_attributes(7) is False


def test_set_group_attributes_encodes_map(dmc, soap):
    soap.respond("groupSetAttributes", {"result": True})
    assert dmc.set_group_attributes(7, {"Name": "News"}) is True
    assert soap.params("groupSetAttributes") == {
        "groupId": 7,
        "attributes": [{"name": "Name", "value": "News"}],
    }


def test_find_groups_by_attributes(dmc, soap):
    soap.respond("groupFindIdsByAttributes", {"groupIds": [7, 8]})
    assert dmc.find_groups_by_attributes({"Name": "News"}) == [7, 8]
    assert soap.params("groupFindIdsByAttributes") == {"attributes": [{"name": "Name", "value": "News"}]}


def test_find_groups_by_attributes_no_match(dmc, soap):
    soap.respond("groupFindIdsByAttributes", {"groupIds": []})
    assert dmc.find_groups_by_attributes({"Name": "None"}) is False


@pytest.mark.parametrize("reply, expected", [
    ({"messageIds": [1, 2]}, [1, 2]),
    ({"messageIds": 3}, [3]),
    ({"messageIds": None}, False),
])
def test_get_prepared_messages_normalizes_to_list(dmc, soap, reply, expected):
    soap.respond("groupGetPreparedMessages", reply)
    assert dmc.get_prepared_messages(7) == expected


class TestArchiveActivate:
    @pytest.mark.parametrize("method, operation, results_key", [
        ("archive_group", "groupArchive", "archivingResults"),
        ("activate_group", "groupActivate", "activatingResults"),
    ])
    def test_single_id_normalized_and_matched(self, dmc, soap, method, operation, results_key):
        soap.respond(operation, {results_key: {"entityKey": 7, "success": True}})
        assert getattr(dmc, method)(7) is True
        assert soap.params(operation) == {"groupIds": [7]}

    @pytest.mark.parametrize("method, operation, results_key", [
        ("archive_group", "groupArchive", "archivingResults"),
        ("activate_group", "groupActivate", "activatingResults"),
    ])
    def test_mismatched_id_is_false(self, dmc, soap, method, operation, results_key):
        soap.respond(operation, {results_key: {"entityKey": 99}})
        assert getattr(dmc, method)(7) is False

    def test_list_requires_every_id_acknowledged(self, dmc, soap):
        soap.respond("groupArchive", {"archivingResults": [{"entityKey": 7}, {"entityKey": 8}]})
        assert dmc.archive_group([7, 8]) is True
        assert soap.params("groupArchive") == {"groupIds": [7, 8]}

        soap.respond("groupArchive", {"archivingResults": [{"entityKey": 7}]})
        assert dmc.archive_group([7, 8]) is False

    def test_string_and_int_ids_compare_equal(self, dmc, soap):
        soap.respond("groupActivate", {"activatingResults": [{"entityKey": "7"}]})
        assert dmc.activate_group(7) is True

    def test_fault_is_false(self, dmc, soap):
        soap.fault("groupArchive")
        assert dmc.archive_group(7) is False
