"""
Extension decoding errors
"""


class InvalidExtensionData(ValueError):
    """
    Raised when an extension body cannot be decoded.

    Covers fields that would read past the end of the buffer, declared
    lengths that disagree with the bytes present, and entries that overrun
    the list they belong to.
    """

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class TruncatedInput(InvalidExtensionData):
    """A fixed-width field or opaque blob runs past its bound."""
