import pytest
from protean import current_domain
from protean.integrations.pytest import DomainFixture


@pytest.fixture(scope="session")
def ordering_bed():
    from ordering.domain import ordering

    bed = DomainFixture(ordering)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(ordering_bed):
    with ordering_bed.domain_context():
        yield
        for _, provider in current_domain.providers.items():
            provider._data_reset()
        current_domain.event_store.store._data_reset()


@pytest.fixture
def customer_id():
    from ordering.customer.registration import RegisterCustomer

    return current_domain.process(
        RegisterCustomer(
            name="Ali Khan",
            phone="0300-1234567",
            house_no="H-12",
            street_no="St 4",
            area="Gulberg",
            city="Lahore",
        ),
        asynchronous=False,
    )


@pytest.fixture
def walkin_customer_id():
    from ordering.customer.registration import RegisterCustomer

    return current_domain.process(RegisterCustomer(name="Walk-in", is_walkin=True), asynchronous=False)


@pytest.fixture
def rider_id():
    from ordering.rider.management import RegisterRider

    return current_domain.process(
        RegisterRider(name="Bilal", phone="0311-0000000", user_id="user-rider-1"),
        asynchronous=False,
    )


@pytest.fixture
def second_rider_id():
    from ordering.rider.management import RegisterRider

    return current_domain.process(RegisterRider(name="Imran", user_id="user-rider-2"), asynchronous=False)
