"""Input dataset model: one value array plus K parallel category levels."""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass, field
from typing import Any, Iterator, Sequence

DEFAULT_TITLE = "Sunburst"


class DatasetError(Exception):
    """Base class for malformed input datasets."""

    pass


class DatasetShapeError(DatasetError):
    """Raised when value and category arrays do not line up."""

    pass


class InvalidValueError(DatasetError):
    """Raised when a value is not a finite number."""

    pass


def check_shape(values: Sequence[Any], category_levels: Sequence[Sequence[str]]) -> None:
    """Reject inconsistent array lengths before anything is built.

    Raises:
        DatasetShapeError: If any level's length differs from len(values),
            or there are items but no category levels.
    """
    if not category_levels:
        if len(values) > 0:
            raise DatasetShapeError(
                f"At least one category level is required for {len(values)} values"
            )
        return

    for level, names in enumerate(category_levels):
        if isinstance(names, str) or not isinstance(names, Sequence):
            raise DatasetShapeError(
                f"Category level {level} must be a list of names, got {type(names).__name__}"
            )
        if len(names) != len(values):
            raise DatasetShapeError(
                f"Category level {level} has {len(names)} entries, "
                f"expected {len(values)} to match values"
            )


def check_values(values: Sequence[Any]) -> None:
    """Reject non-numeric and non-finite values.

    Raises:
        InvalidValueError: On the first bad value.
    """
    for i, value in enumerate(values):
        if isinstance(value, bool) or not isinstance(value, numbers.Real):
            raise InvalidValueError(
                f"Value at index {i} must be a number, got {value!r}"
            )
        if not math.isfinite(value):
            raise InvalidValueError(f"Value at index {i} is not finite: {value!r}")


@dataclass(frozen=True)
class Dataset:
    """A flat dataset of values and their category paths.

    ``category_levels[level][i]`` is the category that item ``i`` belongs to
    at depth ``level``.
    """

    values: tuple[float, ...]
    category_levels: tuple[tuple[str, ...], ...]
    title: str = DEFAULT_TITLE

    # Derived once from values
    total_sum: float = field(init=False)

    def __post_init__(self) -> None:
        check_shape(self.values, self.category_levels)
        check_values(self.values)
        object.__setattr__(self, "values", tuple(self.values))
        object.__setattr__(
            self,
            "category_levels",
            tuple(tuple(str(name) for name in level) for level in self.category_levels),
        )
        object.__setattr__(self, "total_sum", sum(self.values))

    @property
    def item_count(self) -> int:
        return len(self.values)

    @property
    def level_count(self) -> int:
        return len(self.category_levels)

    @property
    def is_empty(self) -> bool:
        return self.item_count == 0

    def path_of(self, index: int) -> tuple[str, ...]:
        """Category path of one item, first level first."""
        return tuple(level[index] for level in self.category_levels)

    def rows(self) -> Iterator[tuple[Any, ...]]:
        """Yield (category names..., value) for every item."""
        for i, value in enumerate(self.values):
            yield (*self.path_of(i), value)

    def column_headers(self) -> list[str]:
        """Headers for tabular display: one per level, then Value."""
        headers = [f"Category {i + 1}" for i in range(self.level_count)]
        headers.append("Value")
        return headers

    def reorder_levels(self, order: Sequence[int]) -> Dataset:
        """Return a copy with category levels permuted.

        Args:
            order: New level order as indices into the current levels;
                must be a permutation of range(level_count).

        Raises:
            DatasetShapeError: If order is not a permutation.
        """
        if sorted(order) != list(range(self.level_count)):
            raise DatasetShapeError(
                f"Level order {list(order)} is not a permutation of "
                f"0..{self.level_count - 1}"
            )
        return Dataset(
            values=self.values,
            category_levels=tuple(self.category_levels[i] for i in order),
            title=self.title,
        )

    def move_level_first(self, index: int) -> Dataset:
        """Return a copy with one level moved next to the root."""
        if not 0 <= index < self.level_count:
            raise DatasetShapeError(
                f"Level {index} out of range for {self.level_count} levels"
            )
        order = [index] + [i for i in range(self.level_count) if i != index]
        return self.reorder_levels(order)

    def to_dict(self) -> dict[str, Any]:
        """Convert to the input document shape (data / categories / title)."""
        return {
            "title": self.title,
            "data": list(self.values),
            "categories": [list(level) for level in self.category_levels],
        }


DEFAULT_VALUES = (5000, 10000, 3000, 7000)
DEFAULT_CATEGORY_LEVELS = (
    ("High Yield", "Global Index", "Bonds", "Value Stocks"),
    ("Interest", "Shares", "Interest", "Shares"),
)

DEFAULT_DATASET = Dataset(
    values=DEFAULT_VALUES,
    category_levels=DEFAULT_CATEGORY_LEVELS,
    title=DEFAULT_TITLE,
)
