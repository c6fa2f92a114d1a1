"""
Seed the default vendor to category mappings from CLI.
"""

from __future__ import annotations

import argparse
import json
import logging

from app.repositories.vendor_mapping_repository import VendorMappingRepository
from app.services.vendor_mapping_seeder import seed_vendor_mappings
from db.session import SessionLocal


def main() -> int:
    parser = argparse.ArgumentParser(description="Seed default vendor category mappings.")
    parser.add_argument(
        "--log-level",
        dest="log_level",
        default="INFO",
        help="Logging level for the seeding run.",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, args.log_level.strip().upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    with SessionLocal() as db:
        inserted = seed_vendor_mappings(VendorMappingRepository(db))

    print(json.dumps({"inserted": inserted}, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
