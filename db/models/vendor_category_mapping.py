"""
db/models/vendor_category_mapping.py

Vendor name to spending category lookup table.
"""

from __future__ import annotations

import uuid

from sqlalchemy import Index, String, func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from db.base import Base


class VendorCategoryMapping(Base):
    __tablename__ = "vendor_category_mappings"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    vendor_name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Vendor name, unique regardless of case",
    )
    category: Mapped[str] = mapped_column(String(100), nullable=False)


# Functional index: lookups and uniqueness are case-insensitive.
Index(
    "uq_vendor_category_mappings_vendor_name_lower",
    func.lower(VendorCategoryMapping.vendor_name),
    unique=True,
)
