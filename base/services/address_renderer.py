"""
HTML rendering of addresses and static map previews.

Each country can register its own line layout in ADDRESS_FORMATS, countries
without an entry use the default layout.
"""
from typing import Callable, Dict, List, Optional
from urllib.parse import quote, urlencode

from django.utils.html import format_html, format_html_join
from django.utils.safestring import mark_safe

from base.values import Address

STATIC_MAP_URL = "https://maps.googleapis.com/maps/api/staticmap"
MAP_LINK_URL = "https://maps.google.com/maps"

AddressLines = Callable[[Address, str], List[str]]


def _join(*values: str, separator: str = " ") -> str:
    return separator.join(value for value in values if value)


def default_lines(address: Address, country_name: str) -> List[str]:
    lines = [address.address_line1, address.address_line2, address.city, address.region, address.postcode]
    lines.append(country_name)
    return [line for line in lines if line]


def city_region_postcode_lines(address: Address, country_name: str) -> List[str]:
    """US style: "Springfield, IL 62704" on one line."""
    locality = _join(address.city, _join(address.region, address.postcode), separator=", ")
    return [line for line in (address.address_line1, address.address_line2, locality, country_name) if line]


def postcode_city_lines(address: Address, country_name: str) -> List[str]:
    """Continental European style: "10115 Berlin" on one line."""
    locality = _join(address.postcode, address.city)
    return [line for line in (address.address_line1, address.address_line2, locality, address.region, country_name) if line]


def city_region_postcode_space_lines(address: Address, country_name: str) -> List[str]:
    """Australian style: "Sydney NSW 2000" on one line."""
    locality = _join(address.city, address.region, address.postcode)
    return [line for line in (address.address_line1, address.address_line2, locality, country_name) if line]


ADDRESS_FORMATS: Dict[str, AddressLines] = {
    "US": city_region_postcode_lines,
    "CA": city_region_postcode_lines,
    "AU": city_region_postcode_space_lines,
    "NZ": city_region_postcode_space_lines,
    "AT": postcode_city_lines,
    "BE": postcode_city_lines,
    "CH": postcode_city_lines,
    "DE": postcode_city_lines,
    "DK": postcode_city_lines,
    "ES": postcode_city_lines,
    "FR": postcode_city_lines,
    "IT": postcode_city_lines,
    "NL": postcode_city_lines,
    "NO": postcode_city_lines,
    "SE": postcode_city_lines,
}


def lines_for(country_code: Optional[str]) -> AddressLines:
    return ADDRESS_FORMATS.get((country_code or "").upper(), default_lines)


def render_address_html(address: Address, country_name: str, localised: bool = True) -> str:
    """
    Render an address as an <address> block with one line per part.

    Args:
        address: The address to render
        country_name: Display name of address.country
        localised: Use the country's own layout instead of the default one

    Returns:
        str: Safe HTML
    """
    layout = lines_for(address.country) if localised else default_lines
    lines = layout(address, country_name)
    return format_html(
        '<address class="address">{}</address>',
        format_html_join(mark_safe("<br>"), "{}", ((line,) for line in lines)),
    )


def static_map_url(full_address: str, width: int, height: int, api_key: Optional[str] = None) -> str:
    params = {
        "center": full_address,
        "markers": full_address,
        "size": f"{int(width)}x{int(height)}",
    }
    if api_key:
        params["key"] = api_key
    return f"{STATIC_MAP_URL}?{urlencode(params)}"


def map_link_url(full_address: str) -> str:
    return f"{MAP_LINK_URL}?q={quote(full_address)}"


def render_address_map(full_address: str, width: int, height: int, api_key: Optional[str] = None) -> str:
    """
    Render a static map image of the address, linking out to the full map.
    """
    return format_html(
        '<a class="address-map" href="{}"><img src="{}" width="{}" height="{}" alt="{}"></a>',
        map_link_url(full_address),
        static_map_url(full_address, width, height, api_key),
        int(width),
        int(height),
        full_address,
    )
