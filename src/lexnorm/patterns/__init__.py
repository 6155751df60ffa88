"""Pattern matching, extraction, reduction and pipeline composition."""

from .batch import apply_batch
from .compiler import Pattern, compile_pattern, pattern_from_word_set
from .errors import GroupReferenceError, LexnormError, PatternSyntaxError, ShapeViolation
from .extractor import (
    extract_all,
    extract_all_batch,
    extract_first,
    extract_first_batch,
    extract_groups,
)
from .matcher import Match, count_matches, detect, find_matches, first_match
from .pipeline import (
    Pipeline,
    PipelineResult,
    Step,
    StepKind,
    compose,
    extract_all_step,
    extract_first_step,
    remove_all_step,
    remove_first_step,
    replace_all_step,
    replace_first_step,
    split_step,
    squish_step,
    transform_step,
    validate_step,
)
from .reducer import (
    remove_all,
    remove_all_batch,
    remove_first,
    replace_all,
    replace_all_batch,
    replace_first,
    squish,
    squish_batch,
)

__all__ = [
    "Pattern",
    "compile_pattern",
    "pattern_from_word_set",
    "Match",
    "find_matches",
    "first_match",
    "detect",
    "count_matches",
    "extract_first",
    "extract_all",
    "extract_groups",
    "extract_first_batch",
    "extract_all_batch",
    "replace_first",
    "replace_all",
    "remove_first",
    "remove_all",
    "squish",
    "replace_all_batch",
    "remove_all_batch",
    "squish_batch",
    "apply_batch",
    "Pipeline",
    "PipelineResult",
    "Step",
    "StepKind",
    "compose",
    "extract_first_step",
    "extract_all_step",
    "replace_first_step",
    "replace_all_step",
    "remove_first_step",
    "remove_all_step",
    "squish_step",
    "transform_step",
    "validate_step",
    "split_step",
    "LexnormError",
    "PatternSyntaxError",
    "GroupReferenceError",
    "ShapeViolation",
]
