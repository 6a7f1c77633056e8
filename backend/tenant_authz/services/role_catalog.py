from __future__ import annotations
"""Role catalog per tenant: generic system roles + vertical roles + stored custom roles.

Reads go through the PermissionCache. Mutations invalidate the tenant's cache entry
before returning so the next get_roles on this instance sees the change.
"""
import logging
from datetime import datetime, timezone
from typing import List, Optional

from tenant_authz.constants.permissions import ACTIONS, SYSTEM_ROLE_HIERARCHY
from tenant_authz.exceptions import InvalidRoleError, SystemRoleProtected
from tenant_authz.models.roles import RoleData
from tenant_authz.services.cache import PermissionCache, make_key
from tenant_authz.services.matrix import RolePermissionMatrixBuilder
from tenant_authz.services.role_store import InMemoryRoleStore, RoleStore
from tenant_authz.services.shards import ShardResolver, StaticShardResolver
from tenant_authz.services.vertical_roles import VerticalRoleCatalog

logger = logging.getLogger(__name__)

SYSTEM_ROLE_SPECS = [
    ('super_admin', 'Super Administrator', 'Full system access across all business types'),
    ('admin', 'Administrator', 'Full access within business type'),
    ('manager', 'Manager', 'Manage operations and staff'),
    ('staff', 'Staff', 'Basic operations'),
    ('viewer', 'Viewer', 'Read-only access'),
]


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class RoleCatalogService:
    def __init__(
        self,
        matrix_builder: Optional[RolePermissionMatrixBuilder] = None,
        vertical_roles: Optional[VerticalRoleCatalog] = None,
        shard_resolver: Optional[ShardResolver] = None,
        role_store: Optional[RoleStore] = None,
        cache: Optional[PermissionCache] = None,
        cache_ttl: Optional[int] = None,
    ):
        self.matrix_builder = matrix_builder or RolePermissionMatrixBuilder()
        self.vertical_roles = vertical_roles or VerticalRoleCatalog()
        self.shard_resolver = shard_resolver or StaticShardResolver()
        self.role_store = role_store if role_store is not None else InMemoryRoleStore()
        self.cache = cache if cache is not None else PermissionCache()
        self.cache_ttl = cache_ttl

    # ---------------- Catalog ---------------- #
    def system_roles(self, business_type: str) -> List[RoleData]:
        roles = []
        for name, display_name, description in SYSTEM_ROLE_SPECS:
            if name == 'super_admin':
                perms = self.matrix_builder.build_super_admin()
            else:
                perms = self.matrix_builder.build_for_level(business_type, name)
            roles.append(RoleData(
                name=name,
                display_name=display_name,
                description=description,
                hierarchy=SYSTEM_ROLE_HIERARCHY[name],
                permissions=perms,
                active=True,
                is_system_role=True,
                business_type_specific=name != 'super_admin',
            ))
        return roles

    def builtin_role_names(self, business_type: str) -> List[str]:
        return [spec[0] for spec in SYSTEM_ROLE_SPECS] + self.vertical_roles.role_names(business_type)

    def get_roles(self, business_id: str, location_id: str, business_type: str) -> List[RoleData]:
        key = make_key(business_id, location_id, business_type)
        cached = self.cache.get(key)
        if cached is not None:
            return cached
        try:
            shard = self.shard_resolver.resolve_shard(business_id, location_id)
            logger.debug('Using shard %s for roles of %s', shard.shard_id, key)
            custom = self.role_store.list_roles(shard, business_id, location_id or '', business_type)
        except Exception:
            logger.warning('Role catalog lookup failed for %s; serving system roles only', key, exc_info=True)
            return self.system_roles(business_type)
        roles = self.system_roles(business_type) + self.vertical_roles.get(business_type) + custom
        self.cache.put(key, roles, self.cache_ttl)
        return roles

    def get_role(self, business_id: str, location_id: str, business_type: str, name: str) -> Optional[RoleData]:
        for role in self.get_roles(business_id, location_id, business_type):
            if role.name == name:
                return role
        return None

    # ---------------- Mutations ---------------- #
    def validate_role(self, role: RoleData):
        if not role.name or not role.name.strip():
            raise InvalidRoleError('role name required')
        if not isinstance(role.hierarchy, int):
            raise InvalidRoleError('hierarchy must be int')
        for resource_name, actions in role.permissions.items():
            unknown = [a for a in actions if a not in ACTIONS]
            if unknown:
                raise InvalidRoleError(f"Unknown actions for {resource_name}: {sorted(unknown)}")

    def save_role(self, business_id: str, location_id: str, business_type: str, role: RoleData, user_id: str) -> RoleData:
        if role.name in self.builtin_role_names(business_type):
            raise SystemRoleProtected(role.name, 'modify')
        self.validate_role(role)
        now = _now_iso()
        stamped = role.copy(
            is_system_role=False,
            modified_by=user_id,
            modified_at=now,
            created_by=role.created_by or user_id,
            created_at=role.created_at or now,
        )
        shard = self.shard_resolver.resolve_shard(business_id, location_id)
        logger.info('Saving role %s for business %s on shard %s', role.name, business_id, shard.shard_id)
        saved = self.role_store.save_role(shard, business_id, location_id or '', business_type, stamped)
        self.invalidate(business_id, location_id, business_type)
        return saved

    def delete_role(self, business_id: str, location_id: str, business_type: str, name: str) -> bool:
        role = self.get_role(business_id, location_id, business_type, name)
        if role is None:
            return False
        if role.is_system_role:
            raise SystemRoleProtected(name, 'delete')
        shard = self.shard_resolver.resolve_shard(business_id, location_id)
        logger.info('Deleting role %s for business %s on shard %s', name, business_id, shard.shard_id)
        deleted = self.role_store.delete_role(shard, business_id, location_id or '', business_type, name)
        self.invalidate(business_id, location_id, business_type)
        return deleted

    def invalidate(self, business_id: str, location_id: str, business_type: str):
        self.cache.invalidate(make_key(business_id, location_id, business_type))


__all__ = ['RoleCatalogService', 'SYSTEM_ROLE_SPECS']
