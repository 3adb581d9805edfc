from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union


@dataclass(frozen=True)
class Coordinate:
    """
    A latitude/longitude pair and whether a user set it by hand.
    While manually_set is True, automatic geocoding leaves the pair alone.
    """
    lat: Optional[float] = None
    lng: Optional[float] = None
    manually_set: bool = False

    @classmethod
    def from_value(cls, value: Union["Coordinate", Mapping[str, Any], None]) -> "Coordinate":
        """
        Accepts a Coordinate or a mapping with the keys lat, lng and manually_set.
        A mapping without manually_set is read as automatic.
        """
        if value is None:
            return cls()
        if isinstance(value, cls):
            return value
        if isinstance(value, Mapping):
            return cls(
                lat=_to_float(value.get("lat")),
                lng=_to_float(value.get("lng")),
                manually_set=bool(value.get("manually_set", False)),
            )
        raise TypeError(f"Cannot build a Coordinate from {type(value).__name__}")

    @property
    def is_empty(self) -> bool:
        return self.lat is None and self.lng is None

    def apply_edit(self, edited: "Coordinate") -> "Coordinate":
        """
        Result of saving an edited coordinate over this stored one.

        With the manual flag ticked the edited pair is kept. Otherwise the stored
        pair is kept as it is, the submitted numbers are ignored and automatic
        geocoding decides whether it changes.
        """
        if edited.manually_set:
            return Coordinate(lat=edited.lat, lng=edited.lng, manually_set=True)
        return Coordinate(lat=self.lat, lng=self.lng, manually_set=False)

    def as_dict(self) -> dict:
        return {"lat": self.lat, "lng": self.lng, "manually_set": self.manually_set}


def _to_float(value) -> Optional[float]:
    if value is None or value == "":
        return None
    return float(value)
