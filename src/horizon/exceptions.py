"""Exceptions raised outside the pure comparison core."""


class HorizonError(Exception):
    """Base class for Horizon errors."""


class FeedFormatError(HorizonError):
    """A feed answered with a payload whose shape is not recognized."""

    def __init__(self, source: str, detail: str) -> None:
        super().__init__(f"{source}: {detail}")
        self.source = source
        self.detail = detail
