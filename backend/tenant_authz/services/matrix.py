from __future__ import annotations
"""Permission matrices (resource -> allowed actions) for the generic role levels.

Every level has a default action set plus per-resource overrides:

    admin    all actions; `roles` loses delete (system roles are never deletable this way)
    manager  create/read/update/list; `roles` read-only
    staff    create/read/update/list; `roles` and `staff` read-only
    viewer   read/list everywhere
"""
from typing import Dict, List, Optional

from tenant_authz.constants.permissions import ACTIONS, ALL_RESOURCE_NAMES, READ_ACTIONS
from tenant_authz.services.business_types import BusinessTypeResolver, SubstringBusinessTypeResolver

_WRITE_NO_DELETE = ['create', 'read', 'update', 'list']

LEVEL_RULES: Dict[str, Dict[str, object]] = {
    'admin': {'default': ACTIONS, 'overrides': {'roles': _WRITE_NO_DELETE}},
    'manager': {'default': _WRITE_NO_DELETE, 'overrides': {'roles': READ_ACTIONS}},
    'staff': {'default': _WRITE_NO_DELETE, 'overrides': {'roles': READ_ACTIONS, 'staff': READ_ACTIONS}},
    'viewer': {'default': READ_ACTIONS, 'overrides': {}},
}


class RolePermissionMatrixBuilder:
    def __init__(self, business_types: Optional[BusinessTypeResolver] = None):
        self.business_types = business_types or SubstringBusinessTypeResolver()

    def build_for_level(self, business_type: str, level: str) -> Dict[str, List[str]]:
        rule = LEVEL_RULES.get(level)
        if rule is None:
            return {}
        default = rule['default']
        overrides = rule['overrides']
        return {
            res: list(overrides.get(res, default))  # type: ignore[union-attr]
            for res in self.business_types.resource_catalog(business_type)
        }

    def build_super_admin(self) -> Dict[str, List[str]]:
        return {res: list(ACTIONS) for res in ALL_RESOURCE_NAMES}


def has_action(permissions: Dict[str, List[str]], resource_name: str, action: str) -> bool:
    allowed = permissions.get(resource_name)
    return bool(allowed) and action in allowed


__all__ = ['RolePermissionMatrixBuilder', 'LEVEL_RULES', 'has_action']
