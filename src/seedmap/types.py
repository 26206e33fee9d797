"""Core types for map generation."""

from pydantic import BaseModel


class Position(BaseModel, frozen=True):
    """Immutable 2D grid coordinate.

    Coordinate system: +X is East, +Y is South (row index).
    """

    x: int
    y: int

    def manhattan(self, other: "Position") -> int:
        """Sum of absolute coordinate differences."""
        return abs(self.x - other.x) + abs(self.y - other.y)

    def in_bounds(self, size: int) -> bool:
        """Whether the position lies inside a size x size grid."""
        return 0 <= self.x < size and 0 <= self.y < size

    def __hash__(self) -> int:
        return hash((self.x, self.y))

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"

    def __repr__(self) -> str:
        return f"Position(x={self.x}, y={self.y})"
