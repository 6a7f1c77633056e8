from __future__ import annotations
"""Persistence seam for tenant-authored (non-system) roles.

The catalog service only ever talks to a RoleStore; which backend sits behind it
is a deployment decision. Every call receives the resolved shard so a sharded
backend can route, the bundled backends just record it.
"""
import threading
from typing import Callable, Dict, List, Tuple

from sqlalchemy import select, delete

from tenant_authz.models.authz import CustomRole
from tenant_authz.models.roles import RoleData
from tenant_authz.services.shards import ShardConnection

TenantKey = Tuple[str, str, str]


class RoleStore:
    def list_roles(self, shard: ShardConnection, business_id: str, location_id: str, business_type: str) -> List[RoleData]:
        raise NotImplementedError

    def save_role(self, shard: ShardConnection, business_id: str, location_id: str, business_type: str, role: RoleData) -> RoleData:
        raise NotImplementedError

    def delete_role(self, shard: ShardConnection, business_id: str, location_id: str, business_type: str, name: str) -> bool:
        raise NotImplementedError


class InMemoryRoleStore(RoleStore):
    def __init__(self):
        self._roles: Dict[TenantKey, Dict[str, RoleData]] = {}
        self._lock = threading.Lock()

    def list_roles(self, shard, business_id, location_id, business_type):
        with self._lock:
            bucket = self._roles.get((business_id, location_id, business_type), {})
            return [r.copy() for r in bucket.values()]

    def save_role(self, shard, business_id, location_id, business_type, role):
        with self._lock:
            bucket = self._roles.setdefault((business_id, location_id, business_type), {})
            bucket[role.name] = role.copy()
        return role

    def delete_role(self, shard, business_id, location_id, business_type, name):
        with self._lock:
            bucket = self._roles.get((business_id, location_id, business_type), {})
            return bucket.pop(name, None) is not None


def _row_to_role(row: CustomRole) -> RoleData:
    return RoleData(
        name=row.name,
        display_name=row.display_name,
        description=row.description or '',
        hierarchy=row.hierarchy,
        permissions={res: list(acts) for res, acts in (row.permissions or {}).items()},
        active=bool(row.active),
        is_system_role=False,
        business_type_specific=bool(row.business_type_specific),
        created_by=row.created_by,
        modified_by=row.modified_by,
        created_at=row.created_at,
        modified_at=row.modified_at,
    )


class SqlRoleStore(RoleStore):
    """SQLAlchemy-backed store over the custom_roles table.

    `session_factory` is the app's get_db (scoped session); this store commits its own writes.
    """

    def __init__(self, session_factory: Callable):
        self.session_factory = session_factory

    def _query(self, business_id, location_id, business_type):
        return select(CustomRole).where(
            CustomRole.business_id == business_id,
            CustomRole.location_id == (location_id or ''),
            CustomRole.business_type == business_type,
        )

    def list_roles(self, shard, business_id, location_id, business_type):
        session = self.session_factory()
        rows = session.execute(self._query(business_id, location_id, business_type).order_by(CustomRole.id.asc())).scalars().all()
        return [_row_to_role(r) for r in rows]

    def save_role(self, shard, business_id, location_id, business_type, role):
        session = self.session_factory()
        try:
            row = session.execute(
                self._query(business_id, location_id, business_type).where(CustomRole.name == role.name)
            ).scalar_one_or_none()
            data = role.to_dict()
            if row is None:
                row = CustomRole(
                    shard_id=shard.shard_id,
                    business_id=business_id,
                    location_id=location_id or '',
                    business_type=business_type,
                    name=role.name,
                )
                session.add(row)
            else:
                # creation stamps belong to the first save
                data.pop('created_by', None)
                data.pop('created_at', None)
            row.apply(data)
            session.commit()
        except Exception:
            session.rollback()
            raise
        return _row_to_role(row)

    def delete_role(self, shard, business_id, location_id, business_type, name):
        session = self.session_factory()
        try:
            result = session.execute(
                delete(CustomRole).where(
                    CustomRole.business_id == business_id,
                    CustomRole.location_id == (location_id or ''),
                    CustomRole.business_type == business_type,
                    CustomRole.name == name,
                )
            )
            session.commit()
        except Exception:
            session.rollback()
            raise
        return (result.rowcount or 0) > 0


__all__ = ['RoleStore', 'InMemoryRoleStore', 'SqlRoleStore']
