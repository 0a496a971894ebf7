import pytest

from config import Config
from scholarly import create_app
from scholarly import operations as ops
from scholarly.models import Role
from scholarly.session import HubSession
from scholarly.store import HubStore, MemorySlot


class TestConfig(Config):
    TESTING = True
    SECRET_KEY = 'test-secret'
    WTF_CSRF_ENABLED = False
    STORE_BACKEND = 'memory'
    LOG_LEVEL = 'DEBUG'


@pytest.fixture
def store():
    return HubStore(MemorySlot())


@pytest.fixture
def app(store):
    return create_app(TestConfig, store=store)


@pytest.fixture
def client(app):
    return app.test_client()


def staff_of(hub):
    ctx = HubSession()
    ctx.enter(hub.id, Role.ADMIN)
    return ctx


def student_of(hub):
    ctx = HubSession()
    ctx.enter(hub.id, Role.STUDENT)
    return ctx


@pytest.fixture
def academy():
    """Hub A: student code S1, staff code A1, rooms R1 (doc1) and R2 (vid1).

    Returns (hubs, hub, r1, r2) with R2 created first so the stored order is
    [R1, R2].
    """
    hubs, hub = ops.create_hub(
        [],
        name='Academy',
        description='A school for testing',
        student_passphrase='S1',
        admin_passphrase='A1',
    )
    staff = staff_of(hub)
    hubs, r2 = ops.create_room(hubs, staff, hub.id, name='R2', teacher='Ms. Video')
    hubs, r1 = ops.create_room(hubs, staff, hub.id, name='R1', teacher='Mr. Doc')
    hubs, _ = ops.publish_resource(hubs, staff, hub.id, r1.id, type='DOCUMENT',
                                   title='doc1', description='Reading list', now=1000)
    hubs, _ = ops.publish_resource(hubs, staff, hub.id, r2.id, type='VIDEO',
                                   title='vid1', description='Recorded lecture',
                                   url='https://zoom.us/j/42', now=2000)
    hub = ops.find_hub(hubs, hub.id)
    return hubs, hub, hub.find_room(r1.id), hub.find_room(r2.id)


@pytest.fixture
def seeded_store(store, academy):
    hubs = academy[0]
    store.save(hubs)
    return store
