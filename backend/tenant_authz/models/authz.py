from __future__ import annotations
from sqlalchemy.orm import declarative_base, Mapped, mapped_column
from sqlalchemy import String, Integer, Boolean, JSON, UniqueConstraint, DateTime, text
from typing import Optional, Dict, Any, List

Base = declarative_base()

# --- Tenant-authored roles ---
# Built-in system and vertical roles are defined in code and never stored here.
class CustomRole(Base):
    __tablename__ = 'custom_roles'
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    shard_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    business_id: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    location_id: Mapped[str] = mapped_column(String(128), nullable=False, default='')
    business_type: Mapped[str] = mapped_column(String(16), nullable=False)
    name: Mapped[str] = mapped_column(String(64), nullable=False)
    display_name: Mapped[str] = mapped_column(String(128), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    hierarchy: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    permissions: Mapped[Dict[str, List[str]]] = mapped_column(JSON, default=dict)
    active: Mapped[bool] = mapped_column(Boolean, default=True)
    business_type_specific: Mapped[bool] = mapped_column(Boolean, default=True)
    created_by: Mapped[Optional[str]] = mapped_column(String(128), nullable=True)
    modified_by: Mapped[Optional[str]] = mapped_column(String(128), nullable=True)
    created_at: Mapped[Optional[str]] = mapped_column(String(40), nullable=True)
    modified_at: Mapped[Optional[str]] = mapped_column(String(40), nullable=True)
    updated_at: Mapped[str] = mapped_column(DateTime(timezone=True), server_default=text('CURRENT_TIMESTAMP'), server_onupdate=text('CURRENT_TIMESTAMP'))

    __table_args__ = (
        UniqueConstraint('business_id', 'location_id', 'business_type', 'name', name='uq_custom_role_tenant_name'),
    )

    def apply(self, data: Dict[str, Any]):
        for key in ('display_name', 'description', 'hierarchy', 'permissions', 'active',
                    'business_type_specific', 'created_by', 'modified_by', 'created_at', 'modified_at'):
            if key in data:
                setattr(self, key, data[key])
