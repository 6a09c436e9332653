#!/usr/bin/env python3
"""
Load medicines from a JSON file into the catalog (create or update by id).

Accepts either a list of entries or an object with an "items" list. Entries
use the same fields as the inventory API (id, name, brand, price, stock,
requires_prescription, category, ...). Prices are decimal amounts.

Usage:
    python scripts/seed_medicines.py --file medicines.json
"""
import argparse
import json
import os
import sys

# allow running from repo/scripts
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from pydantic import ValidationError

from app.db import SessionLocal, init_db
from app.domain.errors import CatalogException
from app.repositories.medicine_repo import MedicineRepository
from app.schemas.medicine_schema import MedicineIn


def _entries(data):
    if isinstance(data, dict):
        return data.get("items", [])
    if isinstance(data, list):
        return data
    return []


def seed_from_file(path: str) -> int:
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    db = SessionLocal()
    repo = MedicineRepository(db)
    written = 0
    try:
        for raw in _entries(data):
            try:
                medicine = MedicineIn.model_validate(raw).to_domain()
            except ValidationError as e:
                print(f"Skipping invalid entry {raw.get('id')!r}: {e.error_count()} error(s)")
                continue
            try:
                repo.update(medicine)
            except CatalogException:
                repo.create(medicine)
            written += 1
        db.commit()
        print("Seeded medicines:", written)
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
    return written


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    parser.add_argument("--file", "-f", required=True, help="Path to medicines json")
    args = parser.parse_args()
    if not os.path.exists(args.file):
        print("File not found:", args.file)
        sys.exit(1)
    init_db()
    seed_from_file(args.file)
