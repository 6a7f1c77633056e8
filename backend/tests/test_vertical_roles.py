import pytest
from tenant_authz.services.vertical_roles import VerticalRoleCatalog, VERTICAL_ROLE_TABLE, check_vertical_hierarchies


def test_role_names_per_vertical():
    catalog = VerticalRoleCatalog()
    assert catalog.role_names('dental') == ['dentist', 'hygienist', 'receptionist']
    assert catalog.role_names('gym') == ['trainer', 'instructor']
    assert catalog.role_names('hotel') == ['concierge', 'housekeeper', 'front_desk']
    assert catalog.get('spa') == []


def test_vertical_roles_are_protected_system_roles_between_viewer_and_manager():
    catalog = VerticalRoleCatalog()
    for bt in VERTICAL_ROLE_TABLE:
        for role in catalog.get(bt):
            assert role.is_system_role and role.business_type_specific and role.active
            assert 50 < role.hierarchy < 80


def test_selected_matrices():
    dental = {r.name: r for r in VerticalRoleCatalog().get('dental')}
    assert dental['dentist'].permissions['clients'] == ['create', 'read', 'update', 'list']
    assert dental['hygienist'].permissions['clients'] == ['read', 'update', 'list']
    gym = {r.name: r for r in VerticalRoleCatalog().get('gym')}
    assert 'delete' in gym['trainer'].permissions['classes']
    assert 'delete' not in gym['instructor'].permissions['classes']
    hotel = {r.name: r for r in VerticalRoleCatalog().get('hotel')}
    assert hotel['housekeeper'].permissions == {'rooms': ['read', 'update', 'list'], 'timeline': ['read', 'update', 'list']}


def test_fresh_objects_per_call():
    catalog = VerticalRoleCatalog()
    first = catalog.get('gym')
    first[0].permissions['classes'].clear()
    assert catalog.get('gym')[0].permissions['classes']


def test_out_of_band_hierarchy_rejected():
    bad = {'gym': [{'name': 'owner', 'display_name': 'Owner', 'description': '', 'hierarchy': 85, 'permissions': {}}]}
    with pytest.raises(ValueError):
        check_vertical_hierarchies(bad)
    with pytest.raises(ValueError):
        VerticalRoleCatalog(bad)
