from __future__ import annotations
"""In-process value types shared by the role catalog, the cache and the gate."""
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterable, List, Optional, Tuple


@dataclass
class RoleData:
    name: str
    display_name: str
    hierarchy: int
    permissions: Dict[str, List[str]] = field(default_factory=dict)
    description: str = ''
    active: bool = True
    is_system_role: bool = False
    business_type_specific: bool = False
    created_by: Optional[str] = None
    modified_by: Optional[str] = None
    created_at: Optional[str] = None
    modified_at: Optional[str] = None

    def actions_for(self, resource_name: str) -> List[str]:
        return list(self.permissions.get(resource_name) or [])

    def copy(self, **changes) -> 'RoleData':
        perms = {res: list(acts) for res, acts in self.permissions.items()}
        return replace(self, permissions=changes.pop('permissions', perms), **changes)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'display_name': self.display_name,
            'description': self.description,
            'hierarchy': self.hierarchy,
            'permissions': {res: list(acts) for res, acts in self.permissions.items()},
            'active': self.active,
            'is_system_role': self.is_system_role,
            'business_type_specific': self.business_type_specific,
            'created_by': self.created_by,
            'modified_by': self.modified_by,
            'created_at': self.created_at,
            'modified_at': self.modified_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'RoleData':
        """Build from an API/JSON payload. Unknown keys are ignored."""
        perms = data.get('permissions') or {}
        if not isinstance(perms, dict):
            raise ValueError('permissions must be an object of resource -> actions')
        for resource_name, actions in perms.items():
            if actions is not None and not isinstance(actions, list):
                raise ValueError(f"permissions for {resource_name} must be a list of actions")
        return cls(
            name=data.get('name') or '',
            display_name=data.get('display_name') or data.get('name') or '',
            description=data.get('description') or '',
            hierarchy=int(data.get('hierarchy', 0)),
            permissions={res: list(acts or []) for res, acts in perms.items()},
            active=bool(data.get('active', True)),
            is_system_role=bool(data.get('is_system_role', False)),
            business_type_specific=bool(data.get('business_type_specific', False)),
            created_by=data.get('created_by'),
            modified_by=data.get('modified_by'),
            created_at=data.get('created_at'),
            modified_at=data.get('modified_at'),
        )


@dataclass(frozen=True)
class UserContext:
    """Caller identity for one authorization check.

    `roles` keeps the caller-supplied order; it decides ties in highest-role resolution.
    """
    user_id: str
    roles: Tuple[str, ...]
    business_id: str
    location_id: str = ''

    def __post_init__(self):
        object.__setattr__(self, 'roles', tuple(self.roles or ()))
        object.__setattr__(self, 'location_id', self.location_id or '')

    @classmethod
    def build(cls, user_id: str, roles: Iterable[str], business_id: str, location_id: Optional[str] = None) -> 'UserContext':
        return cls(user_id=str(user_id), roles=tuple(roles or ()), business_id=business_id, location_id=location_id or '')
