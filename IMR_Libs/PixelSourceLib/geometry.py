"""
Integer geometry used by pixel sources.

Classes:
    Point: An integer (x, y) coordinate
    Rectangle: Axis-aligned box with inclusive min and exclusive max corners
"""

from dataclasses import dataclass
from typing import Iterator, NamedTuple


class Point(NamedTuple):
    x: int
    y: int


@dataclass(frozen=True)
class Rectangle:
    """Axis-aligned integer rectangle.

    The rectangle covers min_x <= x < max_x and min_y <= y < max_y.
    A rectangle whose min equals its max is empty but valid.

    Attributes:
        min_x: Left edge (inclusive)
        min_y: Top edge (inclusive)
        max_x: Right edge (exclusive)
        max_y: Bottom edge (exclusive)
    """
    min_x: int
    min_y: int
    max_x: int
    max_y: int

    def __post_init__(self):
        """Validate that min <= max componentwise."""
        if self.min_x > self.max_x or self.min_y > self.max_y:
            raise ValueError(
                f"Rectangle min must not exceed max, got "
                f"({self.min_x}, {self.min_y})-({self.max_x}, {self.max_y})"
            )

    @classmethod
    def from_size(cls, width: int, height: int) -> "Rectangle":
        """Create a rectangle anchored at the origin."""
        return cls(0, 0, width, height)

    @property
    def min(self) -> Point:
        return Point(self.min_x, self.min_y)

    @property
    def max(self) -> Point:
        return Point(self.max_x, self.max_y)

    @property
    def width(self) -> int:
        return self.max_x - self.min_x

    @property
    def height(self) -> int:
        return self.max_y - self.min_y

    @property
    def size(self):
        return (self.width, self.height)

    def empty(self) -> bool:
        return self.min_x == self.max_x or self.min_y == self.max_y

    def contains(self, x: int, y: int) -> bool:
        return self.min_x <= x < self.max_x and self.min_y <= y < self.max_y

    def points(self) -> Iterator[Point]:
        """Yield every coordinate in row-major order."""
        for y in range(self.min_y, self.max_y):
            for x in range(self.min_x, self.max_x):
                yield Point(x, y)
