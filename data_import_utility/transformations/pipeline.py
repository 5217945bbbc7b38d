"""Transformation pipeline for chaining value transformations.

The pipeline applies its transformations in order, each one receiving the
result of the previous step. Execution stops at the first failed result; the
failed result is returned as-is so its error message reaches the caller.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from .base import TransformationResult, ValueTransformation


class TransformationPipeline:
    """Ordered chain of value transformations.

    Example:
        >>> pipeline = TransformationPipeline()
        >>> pipeline.add_transformation(RegexMatchTransformation(r"\\d+"))
        >>> pipeline.add_transformation(InterpolateTransformation("${0}|${1}"))
        >>> result = await pipeline.execute(TransformationResult.from_value("280-190533-1"))
        >>> result.current_value
        '280|190533'
    """

    def __init__(self, transformations: Iterable[ValueTransformation] | None = None):
        self.transformations: list[ValueTransformation] = list(transformations or [])

    def add_transformation(
        self, transformation: ValueTransformation
    ) -> TransformationPipeline:
        """Add a transformation to the end of the chain.

        Returns:
            Self for method chaining
        """
        self.transformations.append(transformation)
        return self

    async def execute(self, result: TransformationResult) -> TransformationResult:
        """Run every transformation in order, stopping at the first failure."""
        current = result
        for transformation in self.transformations:
            if current.was_failure:
                break
            current = await transformation.apply(current)
        return current

    def clone(self) -> TransformationPipeline:
        return TransformationPipeline(t.clone() for t in self.transformations)

    def clear(self) -> None:
        """Clear all transformations from the pipeline."""
        self.transformations.clear()

    def __iter__(self) -> Iterator[ValueTransformation]:
        return iter(self.transformations)

    def __len__(self) -> int:
        """Return the number of transformations in the pipeline."""
        return len(self.transformations)

    def __repr__(self) -> str:
        """Return string representation of the pipeline."""
        names = [t.__class__.__name__ for t in self.transformations]
        return f"TransformationPipeline({names})"
