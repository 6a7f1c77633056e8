from __future__ import annotations
"""Authorization gate: highest-role resolution, permission checks, resource overrides.

Every check fails closed. Errors raised while resolving roles are logged and turn
into a deny; only validate_permission raises, and only PermissionDenied.
"""
import logging
from typing import Callable, Dict, List, Optional, Sequence

from tenant_authz.constants.permissions import MANAGER_HIERARCHY, READ_ACTIONS
from tenant_authz.exceptions import PermissionDenied
from tenant_authz.models.roles import RoleData, UserContext
from tenant_authz.services.business_types import BusinessTypeResolver, SubstringBusinessTypeResolver
from tenant_authz.services.matrix import has_action
from tenant_authz.services.role_catalog import RoleCatalogService

logger = logging.getLogger(__name__)

# (user, role, business_type, resource_name, action, resource_id) -> True/False to decide, None to pass
OverrideRule = Callable[[UserContext, RoleData, str, str, str, str], Optional[bool]]


def staff_self_edit_rule(user, role, business_type, resource_name, action, resource_id):
    """Below manager level, staff records may only be mutated by their owner."""
    if resource_name != 'staff' or action in READ_ACTIONS:
        return None
    if role.hierarchy < MANAGER_HIERARCHY:
        return resource_id == user.user_id
    return None


DEFAULT_OVERRIDE_RULES: List[OverrideRule] = [staff_self_edit_rule]


class AuthorizationGate:
    def __init__(
        self,
        role_catalog: Optional[RoleCatalogService] = None,
        business_types: Optional[BusinessTypeResolver] = None,
        override_rules: Optional[Sequence[OverrideRule]] = None,
    ):
        self.role_catalog = role_catalog or RoleCatalogService()
        self.business_types = business_types or SubstringBusinessTypeResolver()
        self.override_rules = list(DEFAULT_OVERRIDE_RULES if override_rules is None else override_rules)

    # ---------------- Resolution ---------------- #
    def get_highest_role(self, user: UserContext, business_type: str) -> Optional[RoleData]:
        try:
            roles = self.role_catalog.get_roles(user.business_id, user.location_id, business_type)
            highest: Optional[RoleData] = None
            for role_name in user.roles:
                role = next((r for r in roles if r.name == role_name and r.active), None)
                if role and (highest is None or role.hierarchy > highest.hierarchy):
                    highest = role
            return highest
        except Exception:
            logger.exception('Error resolving highest role for user %s', getattr(user, 'user_id', None))
            return None

    # ---------------- Checks ---------------- #
    def check_permission(self, user: UserContext, business_type: str, resource_name: str, action: str,
                         resource_id: Optional[str] = None) -> bool:
        try:
            role = self.get_highest_role(user, business_type)
            if role is None:
                return False
            if not has_action(role.permissions, resource_name, action):
                return False
            if resource_id:
                return self._apply_overrides(user, role, business_type, resource_name, action, resource_id)
            return True
        except Exception:
            logger.exception('Permission check error (%s %s:%s)', business_type, resource_name, action)
            return False

    def validate_permission(self, user: UserContext, business_type: str, resource_name: str, action: str,
                            resource_id: Optional[str] = None):
        if not self.check_permission(user, business_type, resource_name, action, resource_id):
            raise PermissionDenied(user.user_id, business_type, resource_name, action)

    def _apply_overrides(self, user, role, business_type, resource_name, action, resource_id) -> bool:
        for rule in self.override_rules:
            verdict = rule(user, role, business_type, resource_name, action, resource_id)
            if verdict is not None:
                return bool(verdict)
        return True

    def add_override_rule(self, rule: OverrideRule):
        self.override_rules.append(rule)

    # ---------------- Introspection ---------------- #
    def get_user_permissions(self, user: UserContext, business_type: str) -> Dict[str, List[str]]:
        role = self.get_highest_role(user, business_type)
        if role is None:
            return {}
        return {res: list(acts) for res, acts in role.permissions.items()}

    def get_available_actions(self, user: UserContext, business_type: str, resource_name: str) -> List[str]:
        role = self.get_highest_role(user, business_type)
        if role is None:
            return []
        return role.actions_for(resource_name)

    def get_role_hierarchy(self, business_id: str, location_id: str, business_type: str) -> Dict[str, int]:
        return {r.name: r.hierarchy for r in self.role_catalog.get_roles(business_id, location_id, business_type)}

    def get_all_roles(self, business_id: str, location_id: str, business_type: str) -> List[RoleData]:
        return self.role_catalog.get_roles(business_id, location_id, business_type)

    def supported_business_types(self) -> List[str]:
        return self.business_types.supported_business_types()

    def resource_names(self, business_type: str) -> List[str]:
        return self.business_types.resource_catalog(business_type)

    def resolve_business_type(self, user: UserContext) -> str:
        return self.business_types.resolve(user.business_id)

    # ---------------- Role management ---------------- #
    def save_role(self, user: UserContext, business_type: str, role: RoleData) -> RoleData:
        """Create or overwrite a tenant role.

        Gated on `roles:create` for both new and existing names; `roles:update`
        is not consulted here.
        """
        self.validate_permission(user, business_type, 'roles', 'create')
        return self.role_catalog.save_role(user.business_id, user.location_id, business_type, role, user.user_id)

    def delete_role(self, user: UserContext, business_type: str, role_name: str) -> bool:
        self.validate_permission(user, business_type, 'roles', 'delete')
        return self.role_catalog.delete_role(user.business_id, user.location_id, business_type, role_name)

    def clear_role_cache(self, business_id: str, location_id: str, business_type: str):
        self.role_catalog.invalidate(business_id, location_id, business_type)


__all__ = ['AuthorizationGate', 'OverrideRule', 'staff_self_edit_rule', 'DEFAULT_OVERRIDE_RULES']
