from __future__ import annotations
"""Tenant -> shard routing seam. The real router lives outside this package."""
from dataclasses import dataclass
from typing import Optional

from tenant_authz.exceptions import ShardLookupError


@dataclass(frozen=True)
class ShardConnection:
    shard_id: str
    connection_string: Optional[str] = None
    is_active: bool = True


class ShardResolver:
    def resolve_shard(self, business_id: str, location_id: Optional[str]) -> ShardConnection:
        raise NotImplementedError


class StaticShardResolver(ShardResolver):
    """Routes every tenant to one configured shard (single-database deployments, tests)."""

    def __init__(self, shard_id: str = 'shard-0', connection_string: Optional[str] = None):
        self.shard = ShardConnection(shard_id=shard_id, connection_string=connection_string)

    def resolve_shard(self, business_id: str, location_id: Optional[str]) -> ShardConnection:
        if not business_id or not isinstance(business_id, str):
            raise ShardLookupError(business_id, location_id, 'business id required')
        if not self.shard.is_active:
            raise ShardLookupError(business_id, location_id, f'shard {self.shard.shard_id} inactive')
        return self.shard


__all__ = ['ShardConnection', 'ShardResolver', 'StaticShardResolver']
