from enum import Enum

class INPUT_MODE(Enum):
    """
    How an address field is presented and validated
    """
    FREE = "free"        # any text
    CHOICE = "choice"    # dropdown restricted to configured values
    LITERAL = "literal"  # force-set value, hidden from the form
