#!/usr/bin/env python3
"""
Seed a local JSON store with a demo barbershop.

Usage:
  python3 scripts/seed_local.py [--path ./data/store.json] [--reset]

Creates one barbershop with four services and two barbers, one on enumerated
start times and one on the default weekday interval, then prints the ids so
the API can be exercised with curl.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from barber_booking.application.exceptions import ConstraintViolation  # noqa: E402
from barber_booking.core.config import settings  # noqa: E402
from barber_booking.infrastructure.store.json_store import JsonSchedulingStore  # noqa: E402

SERVICES = [
    ("Haircut", "Fade or classic scissor cut.", 45.0, 45),
    ("Full beard", "Shaping with hot towel.", 35.0, 30),
    ("Neckline", "Neck and sideburn trim.", 15.0, 15),
    ("Combo (haircut + beard)", "The full package.", 70.0, 75),
]

ENUMERATED_DAYS = ["09:00", "10:00", "11:00", "14:00", "15:00", "16:00"]


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("--path", default=settings.STORE_PATH, help="JSON store file")
    parser.add_argument("--reset", action="store_true", help="delete the store file first")
    args = parser.parse_args()

    path = Path(args.path)
    if args.reset and path.exists():
        path.unlink()

    store = JsonSchedulingStore(str(path))
    try:
        shop = store.create_barbershop(slug="demo-barber", name="Demo Barbershop")
    except ConstraintViolation:
        print(f"{path} is already seeded, use --reset to start over")
        return 1
    for name, description, price, duration in SERVICES:
        service = store.create_service(shop.id, name, duration, price=price, description=description)
        print(f"service  {service.id}  {name} ({duration} min)")

    enumerated = store.create_barber(
        shop.id,
        "Joe Razor",
        "Classic cuts.",
        {"monday": list(ENUMERATED_DAYS), "tuesday": list(ENUMERATED_DAYS)},
    )
    interval = store.create_barber(shop.id, "Carl Scissors", "Fade specialist.", settings.DEFAULT_AVAILABILITY)

    print(f"barbershop  {shop.id}  /{shop.slug}")
    print(f"barber   {enumerated.id}  {enumerated.name} (enumerated)")
    print(f"barber   {interval.id}  {interval.name} (interval)")
    print(f"store written to {path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
