"""Aggregation engine: flat (value, category path) items -> summed tree."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Sequence

from sunburst_chart.viz.models.dataset import (
    Dataset,
    DatasetError,
    check_shape,
    check_values,
)
from sunburst_chart.viz.models.tree import DEFAULT_ROOT_LABEL, CategoryNode, SunburstTree

logger = logging.getLogger(__name__)


class DuplicatePathError(DatasetError):
    """Raised when two items share a full category path under REJECT."""

    pass


class DuplicatePathPolicy(str, Enum):
    """What a leaf's value becomes when its full path repeats."""

    OVERWRITE = "overwrite"  # Last item wins (totals still accumulate)
    SUM = "sum"  # Leaf value accumulates
    REJECT = "reject"  # Raise before building


class LevelOrder(str, Enum):
    """Which category level sits next to the root."""

    ROOT_FIRST = "root-first"  # category_levels[0] is nearest the root
    LEAF_FIRST = "leaf-first"  # category_levels[-1] is nearest the root


class HierarchyAggregator:
    """Builds a CategoryNode tree from parallel value / category arrays.

    Each item walks from the root down its category path. A child is looked
    up by name among the current node's children only, so equal names under
    different parents stay separate nodes.
    """

    def __init__(
        self,
        root_label: str = DEFAULT_ROOT_LABEL,
        duplicate_paths: DuplicatePathPolicy = DuplicatePathPolicy.OVERWRITE,
        level_order: LevelOrder = LevelOrder.ROOT_FIRST,
    ) -> None:
        self.root_label = root_label
        self.duplicate_paths = DuplicatePathPolicy(duplicate_paths)
        self.level_order = LevelOrder(level_order)

    def build(
        self,
        values: Sequence[float],
        category_levels: Sequence[Sequence[str]],
    ) -> CategoryNode:
        """Aggregate values into a tree keyed by category levels.

        Args:
            values: One value per item
            category_levels: K levels, each holding one category name per item

        Returns:
            The root node; its total_value is the sum of all values

        Raises:
            DatasetShapeError: If array lengths are inconsistent
            InvalidValueError: If a value is not a finite number
            DuplicatePathError: If a full path repeats under REJECT
        """
        check_shape(values, category_levels)
        check_values(values)

        levels = list(category_levels)
        if self.level_order == LevelOrder.LEAF_FIRST:
            levels.reverse()

        if self.duplicate_paths == DuplicatePathPolicy.REJECT:
            self._reject_duplicates(len(values), levels)

        root = CategoryNode(name=self.root_label)

        for i, value in enumerate(values):
            if value < 0:
                logger.warning(f"Item {i} has negative value {value}; percentages will be skewed")

            cursor = root
            for level in levels:
                cursor, created = cursor.get_or_create_child(level[i])
                if created:
                    logger.debug(f"Created node '{cursor.name}' at depth {cursor.depth}")
                cursor.total_value += value

            if levels:
                self._assign_leaf_value(cursor, value, index=i)
            root.total_value += value

        logger.info(
            f"Built category tree: {len(values)} items, {len(levels)} levels, "
            f"total {root.total_value}"
        )
        return root

    def _assign_leaf_value(self, leaf: CategoryNode, value: float, *, index: int) -> None:
        """Set the leaf value, resolving a repeated full path per policy."""
        if leaf.value is None:
            leaf.value = value
            return

        if self.duplicate_paths == DuplicatePathPolicy.SUM:
            leaf.value += value
        else:
            logger.warning(
                f"Item {index} repeats path {' / '.join(map(str, leaf.path))}; "
                f"leaf value {leaf.value} replaced by {value}"
            )
            leaf.value = value

    def _reject_duplicates(self, item_count: int, levels: list[Sequence[str]]) -> None:
        seen: dict[tuple[str, ...], int] = {}
        for i in range(item_count):
            path = tuple(level[i] for level in levels)
            if path in seen:
                raise DuplicatePathError(
                    f"Items {seen[path]} and {i} share the category path "
                    f"{' / '.join(map(str, path))}"
                )
            seen[path] = i

    def aggregate(self, dataset: Dataset) -> SunburstTree:
        """Build the tree for a Dataset and wrap it with chart metadata."""
        root = self.build(dataset.values, dataset.category_levels)
        return SunburstTree(
            root=root,
            title=dataset.title,
            total_sum=dataset.total_sum,
            level_count=dataset.level_count,
        )


def build_hierarchy(
    values: Sequence[float],
    category_levels: Sequence[Sequence[str]],
    *,
    root_label: str = DEFAULT_ROOT_LABEL,
    duplicate_paths: DuplicatePathPolicy = DuplicatePathPolicy.OVERWRITE,
    level_order: LevelOrder = LevelOrder.ROOT_FIRST,
) -> CategoryNode:
    """Convenience function to build the category tree from raw arrays."""
    aggregator = HierarchyAggregator(
        root_label=root_label,
        duplicate_paths=duplicate_paths,
        level_order=level_order,
    )
    return aggregator.build(values, category_levels)


def aggregate_dataset(
    dataset: Dataset,
    *,
    root_label: str = DEFAULT_ROOT_LABEL,
    duplicate_paths: DuplicatePathPolicy = DuplicatePathPolicy.OVERWRITE,
    level_order: LevelOrder = LevelOrder.ROOT_FIRST,
) -> SunburstTree:
    """Convenience function to build a SunburstTree from a Dataset."""
    aggregator = HierarchyAggregator(
        root_label=root_label,
        duplicate_paths=duplicate_paths,
        level_order=level_order,
    )
    return aggregator.aggregate(dataset)
