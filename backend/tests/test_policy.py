import pytest
from tenant_authz.exceptions import PermissionDenied, SystemRoleProtected
from tenant_authz.models.roles import RoleData
from tenant_authz.services.policy import AuthorizationGate, staff_self_edit_rule
from tenant_authz.services.business_types import SubstringBusinessTypeResolver


def test_highest_role_by_hierarchy(gate, make_user):
    assert gate.get_highest_role(make_user('viewer', 'admin'), 'dental').name == 'admin'
    assert gate.get_highest_role(make_user('admin', 'viewer'), 'dental').name == 'admin'


def test_highest_role_first_seen_wins_ties(gate, role_catalog, make_user):
    role_catalog.save_role('dental-clinic-7', 'loc-1', 'dental',
                           RoleData(name='admin_alias', display_name='Alias', hierarchy=90,
                                    permissions={'clients': ['read']}), 'root')
    assert gate.get_highest_role(make_user('admin', 'admin_alias'), 'dental').name == 'admin'
    assert gate.get_highest_role(make_user('admin_alias', 'admin'), 'dental').name == 'admin_alias'


def test_unknown_and_inactive_roles_ignored(gate, role_catalog, make_user):
    role_catalog.save_role('dental-clinic-7', 'loc-1', 'dental',
                           RoleData(name='retired', display_name='Retired', hierarchy=99, active=False,
                                    permissions={'clients': ['delete']}), 'root')
    assert gate.get_highest_role(make_user('ghost'), 'dental') is None
    assert gate.get_highest_role(make_user('retired', 'viewer'), 'dental').name == 'viewer'
    assert gate.check_permission(make_user('retired'), 'dental', 'clients', 'delete') is False


def test_vertical_roles_only_resolve_in_their_vertical(gate, make_user):
    assert gate.get_highest_role(make_user('trainer'), 'dental') is None
    assert gate.get_highest_role(make_user('trainer', business_id='gym-north'), 'gym').name == 'trainer'


def test_dentist_matrix(gate, make_user):
    dentist = make_user('dentist')
    assert gate.check_permission(dentist, 'dental', 'clients', 'delete') is False
    assert gate.check_permission(dentist, 'dental', 'clients', 'update') is True
    assert gate.check_permission(dentist, 'dental', 'invoices', 'read') is False


def test_no_roles_denied(gate, make_user):
    assert gate.check_permission(make_user(), 'dental', 'clients', 'read') is False


def test_staff_level_cannot_update_staff_even_own_record(gate, make_user):
    # generic staff matrix grants only read/list on `staff`; the self-edit rule never widens a denial
    staff = make_user('staff', user_id='u1')
    assert gate.check_permission(staff, 'dental', 'staff', 'update') is False
    assert gate.check_permission(staff, 'dental', 'staff', 'update', resource_id='u1') is False
    assert gate.check_permission(staff, 'dental', 'staff', 'read', resource_id='u1') is True


def test_self_edit_rule_ignores_reads(gate, make_user):
    dentist = make_user('dentist', user_id='u1')
    assert gate.check_permission(dentist, 'dental', 'staff', 'read', resource_id='u2') is True


def test_self_edit_rule_for_mutations_below_manager(make_user):
    user = make_user('staff', user_id='u1')
    staff_role = RoleData(name='staff', display_name='Staff', hierarchy=70, permissions={'staff': ['update']})
    manager_role = RoleData(name='manager', display_name='Manager', hierarchy=80, permissions={'staff': ['update']})
    assert staff_self_edit_rule(user, staff_role, 'dental', 'staff', 'update', 'u1') is True
    assert staff_self_edit_rule(user, staff_role, 'dental', 'staff', 'update', 'u2') is False
    assert staff_self_edit_rule(user, staff_role, 'dental', 'staff', 'read', 'u2') is None
    assert staff_self_edit_rule(user, manager_role, 'dental', 'staff', 'update', 'u2') is None
    assert staff_self_edit_rule(user, staff_role, 'dental', 'clients', 'update', 'u2') is None


def test_staff_update_own_record_through_gate(gate, role_catalog, make_user):
    role_catalog.save_role('gym-north', 'loc-1', 'gym',
                           RoleData(name='coach', display_name='Coach', hierarchy=70,
                                    permissions={'staff': ['read', 'update', 'list']}), 'root')
    coach = make_user('coach', user_id='u1', business_id='gym-north')
    assert gate.check_permission(coach, 'gym', 'staff', 'update', resource_id='u1') is True
    assert gate.check_permission(coach, 'gym', 'staff', 'update', resource_id='u2') is False
    assert gate.check_permission(coach, 'gym', 'staff', 'update') is True


def test_manager_can_edit_other_staff(gate, make_user):
    manager = make_user('manager', user_id='u1')
    assert gate.check_permission(manager, 'dental', 'staff', 'update', resource_id='u2') is True


def test_override_rules_are_pluggable(role_catalog, make_user):
    def no_invoice_deletes(user, role, business_type, resource_name, action, resource_id):
        if resource_name == 'invoices' and action == 'delete':
            return False
        return None
    gate = AuthorizationGate(role_catalog=role_catalog)
    gate.add_override_rule(no_invoice_deletes)
    admin = make_user('admin')
    assert gate.check_permission(admin, 'dental', 'invoices', 'delete', resource_id='inv-1') is False
    assert gate.check_permission(admin, 'dental', 'invoices', 'update', resource_id='inv-1') is True
    bare = AuthorizationGate(role_catalog=role_catalog, override_rules=[])
    assert bare.check_permission(make_user('staff'), 'dental', 'staff', 'read', resource_id='x') is True


def test_internal_errors_fail_closed(gate, role_catalog, make_user, monkeypatch):
    def boom(*a, **k):
        raise RuntimeError('catalog exploded')
    monkeypatch.setattr(role_catalog, 'get_roles', boom)
    assert gate.check_permission(make_user('admin'), 'dental', 'clients', 'read') is False
    assert gate.get_highest_role(make_user('admin'), 'dental') is None
    assert gate.get_user_permissions(make_user('admin'), 'dental') == {}


def test_failing_override_rule_fails_closed(role_catalog, make_user):
    def broken(*a):
        raise KeyError('oops')
    gate = AuthorizationGate(role_catalog=role_catalog, override_rules=[broken])
    assert gate.check_permission(make_user('admin'), 'dental', 'clients', 'read', resource_id='c1') is False


def test_validate_permission_raises_with_context(gate, make_user):
    user = make_user('receptionist', user_id='u9')
    gate.validate_permission(user, 'dental', 'timeline', 'create')
    with pytest.raises(PermissionDenied) as exc:
        gate.validate_permission(user, 'dental', 'timeline', 'delete')
    err = exc.value
    assert (err.user_id, err.business_type, err.resource_name, err.action) == ('u9', 'dental', 'timeline', 'delete')


def test_end_to_end_receptionist(gate, make_user):
    business_type = SubstringBusinessTypeResolver().resolve('dental-clinic-7')
    assert business_type == 'dental'
    user = make_user('receptionist', business_id='dental-clinic-7')
    assert gate.check_permission(user, business_type, 'timeline', 'create') is True
    assert gate.check_permission(user, business_type, 'timeline', 'delete') is False


def test_introspection(gate, make_user):
    user = make_user('hygienist')
    perms = gate.get_user_permissions(user, 'dental')
    assert perms['clients'] == ['read', 'update', 'list']
    perms['clients'].append('delete')
    assert gate.get_available_actions(user, 'dental', 'clients') == ['read', 'update', 'list']
    assert gate.get_available_actions(user, 'dental', 'rooms') == []
    assert gate.get_available_actions(make_user('ghost'), 'dental', 'clients') == []
    hierarchy = gate.get_role_hierarchy('dental-clinic-7', 'loc-1', 'dental')
    assert hierarchy['super_admin'] == 100 and hierarchy['receptionist'] == 60
    assert len(gate.get_all_roles('dental-clinic-7', 'loc-1', 'dental')) == 8
    assert gate.supported_business_types() == ['dental', 'gym', 'hotel']
    assert 'rooms' in gate.resource_names('hotel')


def test_save_and_delete_require_role_permissions(gate, make_user):
    role = RoleData(name='assistant', display_name='Assistant', hierarchy=55, permissions={'clients': ['read']})
    with pytest.raises(PermissionDenied):
        gate.save_role(make_user('manager'), 'dental', role)
    saved = gate.save_role(make_user('admin', user_id='boss'), 'dental', role)
    assert saved.modified_by == 'boss'
    # admin matrix has no delete on roles; only super_admin may delete
    with pytest.raises(PermissionDenied):
        gate.delete_role(make_user('admin'), 'dental', 'assistant')
    assert gate.delete_role(make_user('super_admin'), 'dental', 'assistant') is True
    assert gate.delete_role(make_user('super_admin'), 'dental', 'assistant') is False
    with pytest.raises(SystemRoleProtected):
        gate.delete_role(make_user('super_admin'), 'dental', 'dentist')


def test_clear_role_cache_forces_refetch(gate, role_store, make_user):
    user = make_user('viewer')
    gate.check_permission(user, 'dental', 'clients', 'read')
    gate.check_permission(user, 'dental', 'clients', 'list')
    assert role_store.list_calls == 1
    gate.clear_role_cache('dental-clinic-7', 'loc-1', 'dental')
    gate.check_permission(user, 'dental', 'clients', 'read')
    assert role_store.list_calls == 2


def test_mutating_returned_roles_does_not_widen_access(gate, role_catalog, make_user):
    viewer = make_user('viewer')
    for role in gate.get_all_roles('dental-clinic-7', 'loc-1', 'dental'):
        if role.name == 'viewer':
            role.permissions['clients'].append('delete')
    gate.get_highest_role(viewer, 'dental').permissions['clients'].append('delete')
    role_catalog.get_role('dental-clinic-7', 'loc-1', 'dental', 'viewer').active = False
    assert gate.check_permission(viewer, 'dental', 'clients', 'delete') is False
    assert gate.check_permission(viewer, 'dental', 'clients', 'read') is True


def test_role_overwrite_is_gated_on_create_not_update(gate, role_catalog, make_user):
    role_catalog.save_role('dental-clinic-7', 'loc-1', 'dental',
                           RoleData(name='editor', display_name='Editor', hierarchy=85,
                                    permissions={'roles': ['read', 'update', 'list']}), 'root')
    role_catalog.save_role('dental-clinic-7', 'loc-1', 'dental',
                           RoleData(name='author', display_name='Author', hierarchy=86,
                                    permissions={'roles': ['create']}), 'root')
    existing = RoleData(name='editor', display_name='Editor v2', hierarchy=85,
                        permissions={'roles': ['read', 'update', 'list']})
    with pytest.raises(PermissionDenied) as exc:
        gate.save_role(make_user('editor'), 'dental', existing)
    assert exc.value.action == 'create'
    saved = gate.save_role(make_user('author', user_id='a1'), 'dental', existing)
    assert saved.display_name == 'Editor v2' and saved.modified_by == 'a1'
