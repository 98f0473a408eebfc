import pytest
from protean.integrations.pytest import DomainFixture


@pytest.fixture(scope="session")
def workroom_bed():
    from workroom.domain import workroom

    bed = DomainFixture(workroom)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(workroom_bed):
    from protean import current_domain
    from workroom.numbering import reset_allocator
    from workroom.order.feed import reset_order_feed

    with workroom_bed.domain_context():
        yield

        # Clear all databases and drain the event store
        for _, provider in current_domain.providers.items():
            provider._data_reset()
        current_domain.event_store.store._data_reset()

    reset_order_feed()
    reset_allocator()
