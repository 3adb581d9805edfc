from .input_mode import INPUT_MODE
from .geocoder import GEOCODER
