"""Merchant locations tagged with the risk level carried on each payload."""

import random
from typing import NamedTuple


class Location(NamedTuple):
    city: str
    country: str
    risk: str


DOMESTIC_LOCATIONS = [
    Location("Mumbai", "IN", "low"),
    Location("Delhi", "IN", "low"),
    Location("Bengaluru", "IN", "low"),
    Location("Chennai", "IN", "low"),
    Location("Pune", "IN", "low"),
    Location("Hyderabad", "IN", "low"),
    Location("Kolkata", "IN", "low"),
    Location("Dubai", "AE", "medium"),
    Location("Singapore", "SG", "low"),
    Location("London", "GB", "low"),
]

HIGH_RISK_LOCATIONS = [
    Location("Lagos", "NG", "high"),
    Location("Pyongyang", "KP", "high"),
    Location("Tehran", "IR", "high"),
    Location("Caracas", "VE", "high"),
    Location("Minsk", "BY", "high"),
]


def random_domestic_location() -> Location:
    return random.choice(DOMESTIC_LOCATIONS)


def random_high_risk_location() -> Location:
    return random.choice(HIGH_RISK_LOCATIONS)


def location_to_payload(location: Location) -> dict:
    return {"city": location.city, "country": location.country, "risk": location.risk}
