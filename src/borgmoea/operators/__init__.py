from .registry import (
    DEFAULT_OPERATORS,
    build_embedding,
    build_mutation,
    build_variation,
    build_variations,
    operator_label,
)

__all__ = [
    "DEFAULT_OPERATORS",
    "build_embedding",
    "build_mutation",
    "build_variation",
    "build_variations",
    "operator_label",
]
