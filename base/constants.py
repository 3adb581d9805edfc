class Constants:
    DEFAULT_PAGE_SIZE = 10
    MAX_PAGE_SIZE = 100
    DEFAULT_POSTCODE_REGEX = r"^[0-9]+$"
    DEFAULT_ADDRESS_HISTORY_DEPTH = 5
    DEFAULT_GEOCODER = "google"
    DEFAULT_GEOCODER_TIMEOUT = 10
    DEFAULT_GEOCODER_CACHE_TTL = 86400 * 30  # 30 days
    DEFAULT_MAP_WIDTH = "400px"
    DEFAULT_MAP_HEIGHT = "250px"
    DEFAULT_MAP_ZOOM = 11
    MAP_PREVIEW_WIDTH = 400
    MAP_PREVIEW_HEIGHT = 250
    MAX_MAP_SIZE = 640  # static map API limit
    ADDRESS_TAB_LABEL = "Address"

    class FieldLength:
        ADDRESS_LINE = 255
        CITY = 64
        REGION = 64
        POSTCODE = 16
        COUNTRY = 2

    class FieldName:
        ADDRESS_LINE1 = "address_line1"
        ADDRESS_LINE2 = "address_line2"
        CITY = "city"
        REGION = "region"
        POSTCODE = "postcode"
        COUNTRY = "country"
        COORDINATE_LAT = "coordinate_lat"
        COORDINATE_LNG = "coordinate_lng"
        COORDINATE_MANUALLY_SET = "coordinate_manually_set"

    # Ordered as they appear in a formatted address
    ADDRESS_FIELDS = (
        FieldName.ADDRESS_LINE1,
        FieldName.ADDRESS_LINE2,
        FieldName.CITY,
        FieldName.REGION,
        FieldName.POSTCODE,
        FieldName.COUNTRY,
    )

    COORDINATE_FIELDS = (
        FieldName.COORDINATE_LAT,
        FieldName.COORDINATE_LNG,
        FieldName.COORDINATE_MANUALLY_SET,
    )
