import threading
from tenant_authz.models.roles import RoleData
from tenant_authz.services.cache import PermissionCache, make_key


def _roles():
    return [RoleData(name='viewer', display_name='Viewer', hierarchy=50)]


def test_make_key():
    assert make_key('biz', 'loc', 'gym') == 'biz-loc-gym'
    assert make_key('biz', None, 'gym') == 'biz--gym'


def test_entry_valid_until_expiry(clock):
    cache = PermissionCache(clock=clock)
    cache.put('k', _roles(), 300)
    clock.advance(299)
    assert cache.get('k')[0].name == 'viewer'
    clock.advance(1)
    assert cache.get('k') is None
    assert len(cache) == 0


def test_default_ttl_used(clock):
    cache = PermissionCache(default_ttl=10, clock=clock)
    cache.put('k', _roles())
    clock.advance(9.5)
    assert 'k' in cache
    clock.advance(1)
    assert 'k' not in cache


def test_invalidate_and_clear(clock):
    cache = PermissionCache(clock=clock)
    cache.put('a', _roles())
    cache.put('b', _roles())
    assert cache.invalidate('a') is True
    assert cache.invalidate('a') is False
    assert cache.get('a') is None
    cache.clear()
    assert cache.get('b') is None


def test_returned_list_is_a_copy(clock):
    cache = PermissionCache(clock=clock)
    cache.put('k', _roles())
    cache.get('k').clear()
    assert len(cache.get('k')) == 1


def test_concurrent_writers_last_write_wins():
    cache = PermissionCache()
    def writer(i):
        for _ in range(200):
            cache.put('k', [RoleData(name=f'r{i}', display_name='x', hierarchy=i)])
            cache.get('k')
    threads = [threading.Thread(target=writer, args=(i,)) for i in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    roles = cache.get('k')
    assert len(roles) == 1 and roles[0].name.startswith('r')


def test_cached_roles_are_isolated_from_callers(clock):
    cache = PermissionCache(clock=clock)
    roles = [RoleData(name='viewer', display_name='Viewer', hierarchy=50, permissions={'clients': ['read']})]
    cache.put('k', roles)
    roles[0].permissions['clients'].append('delete')
    handed_out = cache.get('k')
    assert handed_out[0].permissions['clients'] == ['read']
    handed_out[0].permissions['clients'].append('delete')
    handed_out[0].hierarchy = 100
    again = cache.get('k')[0]
    assert again.permissions['clients'] == ['read'] and again.hierarchy == 50
