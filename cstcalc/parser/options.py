"""Parser configuration options."""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ParserOptions:
    """Feature flags controlling what the parser records in the CST."""

    node_location_tracking: bool = True
