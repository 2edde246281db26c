"""
Utility functions for generating short codes.

Short codes are the externally visible aliases of long URLs. They are drawn
from a cryptographically secure random source, so concurrent callers can
generate codes without any shared state.
"""
import secrets
import string


# Default character set: [A-Za-z0-9], 62 characters
DEFAULT_CHARSET = string.ascii_uppercase + string.ascii_lowercase + string.digits
DEFAULT_LENGTH = 7


class InvalidArgumentError(ValueError):
    """Raised when a code generator argument is out of range."""


def generate_short_code(length: int = DEFAULT_LENGTH, charset: str = DEFAULT_CHARSET) -> str:
    """
    Generate a random short code.

    Each of the ``length`` random bytes is mapped onto the charset with
    ``byte % len(charset)``. When the charset size does not divide 256 this
    slightly favours the first characters (for 62 characters the first 8
    appear with probability 5/256 instead of 4/256).

    Args:
        length: Number of characters in the code (default: 7)
        charset: Characters to draw from (default: [A-Za-z0-9])

    Returns:
        Random code of exactly ``length`` characters from ``charset``

    Raises:
        InvalidArgumentError: If length is not positive or charset is empty

    Examples:
        >>> len(generate_short_code())
        7
        >>> set(generate_short_code(5, "ab")) <= {"a", "b"}
        True
    """
    if length <= 0:
        raise InvalidArgumentError("Length must be a positive integer.")
    if not charset:
        raise InvalidArgumentError("Charset must not be empty.")

    charset_length = len(charset)
    random_bytes = secrets.token_bytes(length)
    return "".join(charset[byte % charset_length] for byte in random_bytes)
