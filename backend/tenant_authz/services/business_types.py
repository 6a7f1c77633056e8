from __future__ import annotations
"""Tenant -> vertical classification and per-vertical resource catalogs.

SubstringBusinessTypeResolver infers the vertical from the business id itself.
It is a heuristic; MappingBusinessTypeResolver lets explicit tenant configuration
take precedence while keeping the same total, deterministic contract.
"""
from typing import Dict, List, Optional, Tuple

from tenant_authz.constants.permissions import BUSINESS_TYPES, DEFAULT_BUSINESS_TYPE, RESOURCE_CATALOGS

# Checked in order; first hit wins.
BUSINESS_TYPE_PATTERNS: List[Tuple[str, Tuple[str, ...]]] = [
    ('dental', ('dental', 'clinic')),
    ('gym', ('gym', 'fitness')),
    ('hotel', ('hotel', 'resort')),
]


class BusinessTypeResolver:
    def resolve(self, business_id: str) -> str:
        raise NotImplementedError

    def resource_catalog(self, business_type: str) -> List[str]:
        return list(RESOURCE_CATALOGS.get(business_type, []))

    def is_valid_resource(self, business_type: str, resource_name: str) -> bool:
        return resource_name in RESOURCE_CATALOGS.get(business_type, [])

    def supported_business_types(self) -> List[str]:
        return list(BUSINESS_TYPES)


class SubstringBusinessTypeResolver(BusinessTypeResolver):
    def resolve(self, business_id: str) -> str:
        lowered = business_id.lower() if isinstance(business_id, str) else ''
        for business_type, needles in BUSINESS_TYPE_PATTERNS:
            if any(n in lowered for n in needles):
                return business_type
        return DEFAULT_BUSINESS_TYPE


class MappingBusinessTypeResolver(BusinessTypeResolver):
    """Explicit business_id -> vertical table, heuristic fallback for unlisted tenants."""

    def __init__(self, mapping: Dict[str, str], fallback: Optional[BusinessTypeResolver] = None):
        unknown = {bt for bt in mapping.values() if bt not in BUSINESS_TYPES}
        if unknown:
            raise ValueError(f"Unknown business types in mapping: {sorted(unknown)}")
        self.mapping = dict(mapping)
        self.fallback = fallback or SubstringBusinessTypeResolver()

    def resolve(self, business_id: str) -> str:
        if business_id in self.mapping:
            return self.mapping[business_id]
        return self.fallback.resolve(business_id)


def parse_business_type_mapping(raw: Optional[str]) -> Dict[str, str]:
    """Parse 'biz-1=gym,biz-2=hotel' (TENANT_BUSINESS_TYPES env format)."""
    mapping: Dict[str, str] = {}
    if not raw:
        return mapping
    for chunk in raw.split(','):
        chunk = chunk.strip()
        if not chunk:
            continue
        if '=' not in chunk:
            raise ValueError(f"Invalid tenant mapping entry '{chunk}' (expected id=type)")
        business_id, business_type = chunk.split('=', 1)
        mapping[business_id.strip()] = business_type.strip().lower()
    return mapping


__all__ = [
    'BusinessTypeResolver', 'SubstringBusinessTypeResolver', 'MappingBusinessTypeResolver',
    'parse_business_type_mapping', 'BUSINESS_TYPE_PATTERNS',
]
