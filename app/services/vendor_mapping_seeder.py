"""
app/services/vendor_mapping_seeder.py

Bootstrap data for the vendor to category mapping table.
"""

from __future__ import annotations

import logging

from app.repositories.vendor_mapping_repository import VendorMappingRepository

logger = logging.getLogger(__name__)

DEFAULT_VENDOR_MAPPINGS: tuple[tuple[str, str], ...] = (
    ("Amazon", "Shopping"),
    ("Flipkart", "Shopping"),
    ("Myntra", "Shopping"),
    ("Swiggy", "Food & Dining"),
    ("Zomato", "Food & Dining"),
    ("Dominos", "Food & Dining"),
    ("McDonald's", "Food & Dining"),
    ("Starbucks", "Food & Dining"),
    ("Uber", "Transport"),
    ("Ola", "Transport"),
    ("Rapido", "Transport"),
    ("IRCTC", "Transport"),
    ("MakeMyTrip", "Travel"),
    ("Goibibo", "Travel"),
    ("AirIndia", "Travel"),
    ("IndiGo", "Travel"),
    ("Netflix", "Entertainment"),
    ("Spotify", "Entertainment"),
    ("PrimeVideo", "Entertainment"),
    ("BookMyShow", "Entertainment"),
    ("Apollo Pharmacy", "Healthcare"),
    ("1mg", "Healthcare"),
    ("Netmeds", "Healthcare"),
    ("Max Healthcare", "Healthcare"),
    ("Airtel", "Utilities"),
    ("Jio", "Utilities"),
    ("BSES", "Utilities"),
    ("Tata Power", "Utilities"),
    ("HDFC Bank", "Finance"),
    ("ICICI Bank", "Finance"),
    ("SBI", "Finance"),
    ("Zerodha", "Finance"),
)


def seed_vendor_mappings(repository: VendorMappingRepository) -> int:
    """
    Insert the default mappings when the table is empty.

    Returns the number of rows inserted; 0 when mappings already exist.
    """
    if repository.count() > 0:
        logger.info("Vendor category mappings already seeded. Skipping.")
        return 0

    inserted = repository.add_all(DEFAULT_VENDOR_MAPPINGS)
    logger.info("Seeded %d vendor-category mappings.", inserted)
    return inserted
