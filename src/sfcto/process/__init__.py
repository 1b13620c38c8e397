from .interpreter import interpret_record, normalize_level_name
from .levels import (
    LevelGroup,
    collect_transforms,
    finalize_groups,
    group_elements,
    renumber_levels,
    resolve_levels,
)
from .parameters import split_parameters
from .statistics import StatisticsAggregator, format_summary
from .tokenizer import parse_header, parse_record, tokenize
from .transform import (
    format_transform,
    inverse_transform_point,
    transform_angle,
    transform_point,
    transform_points,
    validate_transform,
)

__all__ = [
    "interpret_record",
    "normalize_level_name",
    "LevelGroup",
    "collect_transforms",
    "finalize_groups",
    "group_elements",
    "renumber_levels",
    "resolve_levels",
    "split_parameters",
    "StatisticsAggregator",
    "format_summary",
    "parse_header",
    "parse_record",
    "tokenize",
    "format_transform",
    "inverse_transform_point",
    "transform_angle",
    "transform_point",
    "transform_points",
    "validate_transform",
]
