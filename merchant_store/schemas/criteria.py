# merchant_store/schemas/criteria.py
"""
Query criteria for store listings.

Listing requests come either from plain API clients (``start``, ``length``,
``code``, ``search``, ``orderBy``) or from DataTables grids, which send
``search[value]``, ``order[0][column]``, ``columns[n][data]`` and a ``draw``
counter. Both shapes are folded into one :class:`MerchantStoreCriteria`.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Mapping, Optional


class CriteriaOrderBy(str, Enum):
    ASC = "ASC"
    DESC = "DESC"


@dataclass
class MerchantStoreCriteria:
    start_index: int = 0
    max_count: int = 0  # 0 = no limit
    code: Optional[str] = None
    name: Optional[str] = None
    search: Optional[str] = None
    language: Optional[str] = None
    criteria_order_by_field: Optional[str] = None
    order_by: CriteriaOrderBy = CriteriaOrderBy.ASC
    filters: Dict[str, str] = field(default_factory=dict)


def map_field(mapping_fields: Mapping[str, str], name: str) -> str:
    """Translate an external field name to its internal name."""
    return mapping_fields.get(name, name)


def _non_negative_int(value: Optional[str]) -> Optional[int]:
    if value is None:
        return None
    try:
        number = int(value)
    except (TypeError, ValueError):
        return None
    return number if number >= 0 else None


def _order_by(direction: Optional[str]) -> CriteriaOrderBy:
    if direction and direction.strip().upper() == CriteriaOrderBy.DESC.value:
        return CriteriaOrderBy.DESC
    return CriteriaOrderBy.ASC


def build_request(mapping_fields: Mapping[str, str], params: Mapping[str, str]) -> MerchantStoreCriteria:
    """Build listing criteria from raw query parameters."""
    criteria = MerchantStoreCriteria()

    for key, value in params.items():
        criteria.filters[map_field(mapping_fields, key)] = value

    criteria.code = criteria.filters.get("code") or None
    criteria.name = criteria.filters.get(map_field(mapping_fields, "name")) or None
    criteria.language = params.get("lang") or None

    start = _non_negative_int(params.get("start"))
    if start is not None:
        criteria.start_index = start
    count = _non_negative_int(params.get("length"))
    if count is not None:
        criteria.max_count = count

    search = params.get("search[value]") or params.get("search")
    criteria.search = search if search and search.strip() else None

    column = params.get("order[0][column]")
    if column is not None:
        column_name = params.get(f"columns[{column}][data]")
        if column_name:
            criteria.criteria_order_by_field = map_field(mapping_fields, column_name)
            criteria.order_by = _order_by(params.get("order[0][dir]"))
    elif params.get("orderBy"):
        criteria.criteria_order_by_field = map_field(mapping_fields, params["orderBy"])
        criteria.order_by = _order_by(params.get("orderDir"))

    return criteria
