from __future__ import annotations

from dataclasses import dataclass

from meetdesk.models.booking import LocationType


@dataclass(frozen=True, slots=True)
class LocationOption:
    label: str
    value: LocationType


# Declared order is the order clients render.
LOCATIONS: tuple[LocationOption, ...] = (
    LocationOption(label="Online Meeting", value=LocationType.ONLINE),
    LocationOption(label="Physical Meeting", value=LocationType.PHYSICAL),
    LocationOption(label="Premium Room", value=LocationType.PREMIUM),
)

GATED_LOCATIONS: frozenset[LocationType] = frozenset({LocationType.PREMIUM})


def is_gated(kind: LocationType) -> bool:
    return kind in GATED_LOCATIONS


def list_available_locations(has_premium_permission: bool) -> list[LocationOption]:
    """Locations a requester may choose from, in declared order.

    Gated kinds only appear when the requester holds the permission.
    """
    return [
        option
        for option in LOCATIONS
        if has_premium_permission or not is_gated(option.value)
    ]
