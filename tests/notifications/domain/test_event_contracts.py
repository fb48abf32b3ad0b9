"""The shared Ordering event contracts must match the events Ordering raises."""

import pytest
from ordering.order import events as source
from protean.utils.reflection import declared_fields
from shared.events import ordering as contract


@pytest.mark.parametrize("name", ["RiderAssigned", "RiderReassigned", "OrderDelivered", "OrderCancelled"])
def test_contract_fields_match_source_event(name):
    source_fields = set(declared_fields(getattr(source, name))) - {"_metadata"}
    contract_fields = set(declared_fields(getattr(contract, name))) - {"_metadata"}
    assert contract_fields == source_fields


@pytest.mark.parametrize("name", ["RiderAssigned", "RiderReassigned", "OrderDelivered", "OrderCancelled"])
def test_contract_version_matches_source_event(name):
    assert getattr(contract, name).__version__ == getattr(source, name).__version__
