from dataclasses import dataclass, fields
from typing import Callable, List


@dataclass(frozen=True)
class Address:
    """
    Snapshot of the postal address columns of a record.
    Used to format the address and to compare it against earlier saved states.
    """
    address_line1: str = ""
    address_line2: str = ""
    city: str = ""
    region: str = ""
    postcode: str = ""
    country: str = ""

    @classmethod
    def from_record(cls, record):
        """
        Build a snapshot from any object carrying the address attributes.
        Missing or None attributes are read as empty strings.
        """
        return cls(**{
            field.name: getattr(record, field.name, None) or ""
            for field in fields(cls)
        })

    def parts(self, country_name: Callable[[str], str]) -> List[str]:
        """
        Non-empty address parts in display order, with the country code
        replaced by its name.
        """
        output = [
            value for value in (
                self.address_line1,
                self.address_line2,
                self.city,
                self.region,
                self.postcode,
            ) if value
        ]
        if self.country:
            output.append(country_name(self.country))
        return output

    def format(self, country_name: Callable[[str], str], separator: str = ", ") -> str:
        return separator.join(self.parts(country_name))

    def has_address(self) -> bool:
        return bool(self.address_line1 and self.country)

    def changed_fields(self, other: "Address") -> List[str]:
        """Names of the fields whose value differs from `other`."""
        return [
            field.name for field in fields(self)
            if getattr(self, field.name) != getattr(other, field.name)
        ]
