import os, sys, pytest
# Ensure backend directory is on path so 'tenant_authz' and 'scripts' can be imported
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)
from tenant_authz import create_app, get_db
from tenant_authz.models.authz import Base
# Import all model modules to ensure tables are registered before create_all
import tenant_authz.models.audit  # noqa: F401
from tenant_authz.models.roles import UserContext
from tenant_authz.services.cache import PermissionCache
from tenant_authz.services.policy import AuthorizationGate
from tenant_authz.services.role_catalog import RoleCatalogService
from tenant_authz.services.role_store import InMemoryRoleStore


@pytest.fixture(scope='session', autouse=True)
def app_instance():
    os.environ['DATABASE_URL'] = 'sqlite+pysqlite:///:memory:'
    app = create_app()
    # After app and blueprints are registered, ensure all tables exist
    with app.app_context():
        engine = get_db().get_bind()
        Base.metadata.create_all(engine)
    yield app


@pytest.fixture()
def client(app_instance):
    return app_instance.test_client()


class FakeClock:
    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


class CountingRoleStore(InMemoryRoleStore):
    def __init__(self):
        super().__init__()
        self.list_calls = 0

    def list_roles(self, shard, business_id, location_id, business_type):
        self.list_calls += 1
        return super().list_roles(shard, business_id, location_id, business_type)


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def role_store():
    return CountingRoleStore()


@pytest.fixture()
def role_catalog(role_store, clock):
    return RoleCatalogService(role_store=role_store, cache=PermissionCache(clock=clock))


@pytest.fixture()
def gate(role_catalog):
    return AuthorizationGate(role_catalog=role_catalog)


@pytest.fixture()
def make_user():
    def _make(*roles, user_id='u1', business_id='dental-clinic-7', location_id='loc-1'):
        return UserContext.build(user_id, roles, business_id, location_id)
    return _make
