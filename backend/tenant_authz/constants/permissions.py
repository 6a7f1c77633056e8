"""Central enum-like definitions to avoid typos in vertical/resource/action strings.
Extend cautiously; never rename resource names silently since stored custom roles reference them.
"""
from __future__ import annotations
from typing import Dict, List

BUSINESS_TYPES = ['dental', 'gym', 'hotel']
DEFAULT_BUSINESS_TYPE = 'dental'

ACTIONS = ['create', 'read', 'update', 'delete', 'list']
READ_ACTIONS = ['read', 'list']

# Resources every vertical exposes
SHARED_RESOURCES = [
    'stocks', 'invoices', 'activities', 'reports', 'roles',
    'sales', 'workflows', 'permissions', 'userData', 'history',
]

VERTICAL_RESOURCES: Dict[str, List[str]] = {
    'dental': ['timeline', 'clients', 'services', 'staff'],
    'gym': ['timeline', 'members', 'packages', 'classes', 'equipment', 'staff'],
    'hotel': ['timeline', 'clients', 'rooms', 'services', 'staff'],
}


def build_resource_catalogs() -> Dict[str, List[str]]:
    return {bt: VERTICAL_RESOURCES[bt] + SHARED_RESOURCES for bt in BUSINESS_TYPES}

RESOURCE_CATALOGS = build_resource_catalogs()


def build_all_resource_names() -> List[str]:
    """Union of every vertical catalog, shared names first, no duplicates."""
    names: List[str] = list(SHARED_RESOURCES)
    for bt in BUSINESS_TYPES:
        for res in VERTICAL_RESOURCES[bt]:
            if res not in names:
                names.append(res)
    return names

ALL_RESOURCE_NAMES = build_all_resource_names()

# Generic role levels (name -> hierarchy). super_admin is vertical agnostic.
ROLE_LEVELS = ['admin', 'manager', 'staff', 'viewer']
SYSTEM_ROLE_HIERARCHY: Dict[str, int] = {
    'super_admin': 100,
    'admin': 90,
    'manager': 80,
    'staff': 70,
    'viewer': 50,
}
MANAGER_HIERARCHY = SYSTEM_ROLE_HIERARCHY['manager']
VIEWER_HIERARCHY = SYSTEM_ROLE_HIERARCHY['viewer']
