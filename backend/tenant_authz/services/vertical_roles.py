from __future__ import annotations
"""Hand-authored roles that exist only for one vertical.

Hierarchies must sit strictly between viewer (50) and manager (80); the table is
checked on import so a misplaced role fails loudly instead of outranking a manager.
"""
from typing import Any, Dict, List

from tenant_authz.constants.permissions import ACTIONS, MANAGER_HIERARCHY, VIEWER_HIERARCHY
from tenant_authz.models.roles import RoleData

CRUL = ['create', 'read', 'update', 'list']
RUL = ['read', 'update', 'list']
RL = ['read', 'list']
FULL = list(ACTIONS)

VERTICAL_ROLE_TABLE: Dict[str, List[Dict[str, Any]]] = {
    'dental': [
        {
            'name': 'dentist', 'display_name': 'Dentist',
            'description': 'Licensed dental practitioner', 'hierarchy': 75,
            'permissions': {'clients': CRUL, 'services': CRUL, 'timeline': CRUL, 'staff': RL, 'roles': RL},
        },
        {
            'name': 'hygienist', 'display_name': 'Dental Hygienist',
            'description': 'Dental hygiene specialist', 'hierarchy': 65,
            'permissions': {'clients': RUL, 'services': RL, 'timeline': CRUL, 'staff': RL},
        },
        {
            'name': 'receptionist', 'display_name': 'Receptionist',
            'description': 'Front desk and appointment management', 'hierarchy': 60,
            'permissions': {'clients': CRUL, 'timeline': CRUL, 'services': RL, 'staff': RL},
        },
    ],
    'gym': [
        {
            'name': 'trainer', 'display_name': 'Personal Trainer',
            'description': 'Fitness instructor and class manager', 'hierarchy': 75,
            'permissions': {'members': RUL, 'classes': FULL, 'equipment': RUL, 'timeline': CRUL, 'staff': RL},
        },
        {
            'name': 'instructor', 'display_name': 'Group Instructor',
            'description': 'Group fitness class instructor', 'hierarchy': 65,
            'permissions': {'members': RL, 'classes': CRUL, 'timeline': CRUL},
        },
    ],
    'hotel': [
        {
            'name': 'concierge', 'display_name': 'Concierge',
            'description': 'Guest services and assistance', 'hierarchy': 75,
            'permissions': {'clients': CRUL, 'rooms': RUL, 'services': CRUL, 'timeline': CRUL, 'staff': RL},
        },
        {
            'name': 'housekeeper', 'display_name': 'Housekeeper',
            'description': 'Room maintenance and cleaning', 'hierarchy': 60,
            'permissions': {'rooms': RUL, 'timeline': RUL},
        },
        {
            'name': 'front_desk', 'display_name': 'Front Desk',
            'description': 'Check-in/out and guest management', 'hierarchy': 65,
            'permissions': {'clients': CRUL, 'rooms': RUL, 'services': RL, 'timeline': CRUL},
        },
    ],
}


def check_vertical_hierarchies(table: Dict[str, List[Dict[str, Any]]]):
    for business_type, specs in table.items():
        for spec in specs:
            if not VIEWER_HIERARCHY < spec['hierarchy'] < MANAGER_HIERARCHY:
                raise ValueError(
                    f"{business_type} role '{spec['name']}' hierarchy {spec['hierarchy']} "
                    f"must be between {VIEWER_HIERARCHY} and {MANAGER_HIERARCHY}"
                )

check_vertical_hierarchies(VERTICAL_ROLE_TABLE)


class VerticalRoleCatalog:
    def __init__(self, table: Dict[str, List[Dict[str, Any]]] = VERTICAL_ROLE_TABLE):
        if table is not VERTICAL_ROLE_TABLE:
            check_vertical_hierarchies(table)
        self.table = table

    def get(self, business_type: str) -> List[RoleData]:
        return [
            RoleData(
                name=spec['name'],
                display_name=spec['display_name'],
                description=spec['description'],
                hierarchy=spec['hierarchy'],
                permissions={res: list(acts) for res, acts in spec['permissions'].items()},
                active=True,
                is_system_role=True,
                business_type_specific=True,
            )
            for spec in self.table.get(business_type, [])
        ]

    def role_names(self, business_type: str) -> List[str]:
        return [spec['name'] for spec in self.table.get(business_type, [])]


__all__ = ['VerticalRoleCatalog', 'VERTICAL_ROLE_TABLE', 'check_vertical_hierarchies']
