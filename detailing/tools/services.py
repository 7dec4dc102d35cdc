"""Detailing service catalog with pricing and durations."""

import logging
from typing import Optional

from detailing.schemas.availability_schema import Service

logger = logging.getLogger(__name__)

# Offered to every detailer until they add their own services.
DEFAULT_CATALOG: list[dict] = [
    {"name": "Full Detail", "price": 199.99, "duration_minutes": 180},
    {"name": "Exterior Wash", "price": 49.99, "duration_minutes": 60},
    {"name": "Interior Clean", "price": 89.99, "duration_minutes": 90},
    {"name": "Ceramic Coating", "price": 599.00, "duration_minutes": 360},
    {"name": "Paint Correction", "price": 349.00, "duration_minutes": None},
]

SERVICE_ALIASES: dict[str, str] = {
    "full": "Full Detail", "detail": "Full Detail", "complete": "Full Detail",
    "wash": "Exterior Wash", "exterior": "Exterior Wash", "hand wash": "Exterior Wash",
    "interior": "Interior Clean", "vacuum": "Interior Clean", "upholstery": "Interior Clean",
    "ceramic": "Ceramic Coating", "coating": "Ceramic Coating",
    "polish": "Paint Correction", "swirl": "Paint Correction", "scratch": "Paint Correction",
}

_custom_services: dict[str, dict[str, Service]] = {}


def _default_services() -> dict[str, Service]:
    return {entry["name"].lower(): Service(**entry) for entry in DEFAULT_CATALOG}


def _services_for(detailer_id: str) -> dict[str, Service]:
    services = _default_services()
    services.update(_custom_services.get(detailer_id, {}))
    return services


def get_all_services(detailer_id: str) -> list[Service]:
    """Return every service the detailer offers, catalog defaults first."""
    return list(_services_for(detailer_id).values())


def get_service(detailer_id: str, name: str) -> Optional[Service]:
    """Look up a service by name (case-insensitive). Returns None if not offered."""
    return _services_for(detailer_id).get(name.lower().strip())


def add_service(
    detailer_id: str, name: str, price: float, duration_minutes: Optional[int] = None
) -> Service:
    """Add a detailer-specific service.

    Raises:
        ValueError: If the detailer already offers a service with this name.
    """
    key = name.lower().strip()
    if key in _services_for(detailer_id):
        raise ValueError(f"Service '{name.strip()}' already exists for detailer {detailer_id}")
    service = Service(name=name.strip(), price=price, duration_minutes=duration_minutes)
    _custom_services.setdefault(detailer_id, {})[key] = service
    logger.info("Service added for %s: %s ($%.2f)", detailer_id, service.name, price)
    return service


def match_service(query: str) -> Optional[str]:
    """Match a free-text query to a catalog service name. Returns None if no match."""
    normalized = query.lower().strip()
    for entry in DEFAULT_CATALOG:
        if entry["name"].lower() == normalized:
            return entry["name"]
    for alias, name in SERVICE_ALIASES.items():
        if alias in normalized:
            return name
    return None


def reset() -> None:
    """Drop detailer-specific services. Used by test fixtures for isolation."""
    _custom_services.clear()
