from django.conf import settings


def normalise_dimension(value):
    """
    Make a CSS width/height out of a map dimension.

    Numbers and unitless strings get a "px" suffix, values already carrying
    "px" or "%" are kept.

    Args:
        value (int|str): e.g. 400, "400", "400px" or "100%"

    Returns: The dimension as a CSS string, e.g. "400px"
    """
    value = str(value).strip()
    if value.endswith("px") or value.endswith("%"):
        return value
    return f"{value}px"


def addressable_setting(name, default=None):
    """
    Read one key of settings.ADDRESSABLE.
    """
    return getattr(settings, "ADDRESSABLE", {}).get(name, default)
