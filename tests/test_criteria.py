from merchant_store.api.v1.stores import MAPPING_FIELDS
from merchant_store.schemas.criteria import CriteriaOrderBy, build_request, map_field


def test_map_field_passes_unknown_names_through():
    assert map_field(MAPPING_FIELDS, "name") == "storename"
    assert map_field(MAPPING_FIELDS, "readableAudit.user") == "auditSection.modifiedBy"
    assert map_field(MAPPING_FIELDS, "code") == "code"
    assert map_field(MAPPING_FIELDS, "columns[0][data]") == "columns[0][data]"


def test_defaults():
    criteria = build_request(MAPPING_FIELDS, {})

    assert criteria.start_index == 0
    assert criteria.max_count == 0
    assert criteria.code is None
    assert criteria.name is None
    assert criteria.search is None
    assert criteria.criteria_order_by_field is None
    assert criteria.filters == {}


def test_start_and_length_are_parsed_leniently():
    assert build_request(MAPPING_FIELDS, {"start": "10", "length": "25"}).max_count == 25
    criteria = build_request(MAPPING_FIELDS, {"start": "abc", "length": "-3"})
    assert criteria.start_index == 0
    assert criteria.max_count == 0


def test_code_and_name_filters():
    criteria = build_request(MAPPING_FIELDS, {"code": "shop", "name": "Corner", "lang": "fr"})

    assert criteria.code == "shop"
    assert criteria.name == "Corner"
    assert criteria.language == "fr"
    assert criteria.filters == {"code": "shop", "storename": "Corner", "lang": "fr"}


def test_datatables_search_and_ordering():
    criteria = build_request(MAPPING_FIELDS, {
        "search[value]": "corner",
        "order[0][column]": "1",
        "order[0][dir]": "desc",
        "columns[1][data]": "readableAudit.user",
    })

    assert criteria.search == "corner"
    assert criteria.criteria_order_by_field == "auditSection.modifiedBy"
    assert criteria.order_by == CriteriaOrderBy.DESC


def test_plain_ordering():
    criteria = build_request(MAPPING_FIELDS, {"orderBy": "name"})

    assert criteria.criteria_order_by_field == "storename"
    assert criteria.order_by == CriteriaOrderBy.ASC


def test_blank_search_is_ignored():
    assert build_request(MAPPING_FIELDS, {"search": "   "}).search is None
