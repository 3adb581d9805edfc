from .address import Address
from .coordinate import Coordinate
