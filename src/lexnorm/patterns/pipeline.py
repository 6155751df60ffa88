"""Static left-to-right composition of pattern steps."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Iterable, List, Optional, Sequence, Tuple

from lexnorm.utils.logging import get_logger

from .batch import apply_batch
from .compiler import Pattern, compile_pattern
from .errors import ShapeViolation
from .extractor import extract_all, extract_first
from .matcher import PatternLike
from .reducer import _validate_template, remove_all, remove_first, replace_all, replace_first, squish


class StepKind(str, Enum):
    EXTRACT_FIRST = "extract_first"
    EXTRACT_ALL = "extract_all"
    REPLACE_FIRST = "replace_first"
    REPLACE_ALL = "replace_all"
    REMOVE_FIRST = "remove_first"
    REMOVE_ALL = "remove_all"
    SQUISH = "squish"
    TRANSFORM = "transform"
    VALIDATE = "validate"
    SPLIT = "split"


# Steps whose output is not a string; they may only end a pipeline.
_TERMINAL_KINDS = frozenset({StepKind.EXTRACT_ALL, StepKind.SPLIT})


@dataclass(frozen=True)
class Step:
    """One stateless transformation of a string.

    A step sees only its own input and parameters.  ``template`` is used by
    replace steps and doubles as the separator for remove steps.
    """

    name: str
    kind: StepKind
    pattern: Pattern | None = None
    template: str = ""
    func: Callable[[str], Any] | None = None
    expectation: str = ""

    def apply(self, text: str) -> Any:
        kind = self.kind
        if kind is StepKind.EXTRACT_FIRST:
            return extract_first(self.pattern, text)
        if kind is StepKind.EXTRACT_ALL:
            return extract_all(self.pattern, text)
        if kind is StepKind.REPLACE_FIRST:
            return replace_first(self.pattern, text, self.template)
        if kind is StepKind.REPLACE_ALL:
            return replace_all(self.pattern, text, self.template)
        if kind is StepKind.REMOVE_FIRST:
            return remove_first(self.pattern, text, separator=self.template)
        if kind is StepKind.REMOVE_ALL:
            return remove_all(self.pattern, text, separator=self.template)
        if kind is StepKind.SQUISH:
            return squish(text)
        if kind is StepKind.TRANSFORM:
            return self.func(text)
        if kind is StepKind.VALIDATE:
            return text if self.pattern.compiled.fullmatch(text) else None
        if kind is StepKind.SPLIT:
            parts = (squish(part) for part in self.pattern.compiled.split(text))
            return tuple(part for part in parts if part)
        raise ValueError(f"Unsupported step kind: {kind}")


def extract_first_step(pattern: PatternLike, *, name: str = "extract_first") -> Step:
    return Step(name=name, kind=StepKind.EXTRACT_FIRST, pattern=compile_pattern(pattern))


def extract_all_step(pattern: PatternLike, *, name: str = "extract_all") -> Step:
    return Step(name=name, kind=StepKind.EXTRACT_ALL, pattern=compile_pattern(pattern))


def replace_first_step(pattern: PatternLike, template: str, *, name: str = "replace_first") -> Step:
    compiled = compile_pattern(pattern)
    _validate_template(compiled, template)
    return Step(name=name, kind=StepKind.REPLACE_FIRST, pattern=compiled, template=template)


def replace_all_step(pattern: PatternLike, template: str, *, name: str = "replace_all") -> Step:
    compiled = compile_pattern(pattern)
    _validate_template(compiled, template)
    return Step(name=name, kind=StepKind.REPLACE_ALL, pattern=compiled, template=template)


def remove_first_step(pattern: PatternLike, *, separator: str = "", name: str = "remove_first") -> Step:
    return Step(
        name=name,
        kind=StepKind.REMOVE_FIRST,
        pattern=compile_pattern(pattern),
        template=separator,
    )


def remove_all_step(pattern: PatternLike, *, separator: str = "", name: str = "remove_all") -> Step:
    return Step(
        name=name,
        kind=StepKind.REMOVE_ALL,
        pattern=compile_pattern(pattern),
        template=separator,
    )


def squish_step(*, name: str = "squish") -> Step:
    return Step(name=name, kind=StepKind.SQUISH)


def transform_step(func: Callable[[str], Any], *, name: str = "transform") -> Step:
    return Step(name=name, kind=StepKind.TRANSFORM, func=func)


def validate_step(pattern: PatternLike, *, expectation: str = "", name: str = "validate") -> Step:
    """Require the whole current string to match *pattern*.

    A failed check ends the pipeline with ``None`` and a recorded
    :class:`ShapeViolation`.
    """

    compiled = compile_pattern(pattern)
    return Step(
        name=name,
        kind=StepKind.VALIDATE,
        pattern=compiled,
        expectation=expectation or compiled.source,
    )


def split_step(pattern: PatternLike, *, name: str = "split") -> Step:
    return Step(name=name, kind=StepKind.SPLIT, pattern=compile_pattern(pattern))


@dataclass(frozen=True)
class PipelineResult:
    """Outcome of one pipeline run with its intermediate strings."""

    value: Any
    trace: Tuple[Tuple[str, Any], ...] = ()
    violation: ShapeViolation | None = None

    @property
    def matched(self) -> bool:
        return self.value is not None


@dataclass(frozen=True)
class Pipeline:
    """Ordered, immutable sequence of steps applied left to right."""

    name: str
    steps: Tuple[Step, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        steps = tuple(self.steps)
        object.__setattr__(self, "steps", steps)
        for step in steps[:-1]:
            if step.kind in _TERMINAL_KINDS:
                raise ValueError(
                    f"Step {step.name!r} ({step.kind.value}) must be the last step of pipeline {self.name!r}"
                )

    def then(self, *steps: Step) -> "Pipeline":
        """Return a new pipeline with *steps* appended."""

        return Pipeline(name=self.name, steps=self.steps + tuple(steps))

    def trace(self, text: Optional[str]) -> PipelineResult:
        if text is None:
            return PipelineResult(value=None)

        log = get_logger(module=__name__, pipeline=self.name)
        current: Any = text
        history: List[Tuple[str, Any]] = []
        for step in self.steps:
            output = step.apply(current)
            history.append((step.name, output))
            if output is None:
                violation = None
                if step.kind is StepKind.VALIDATE:
                    violation = ShapeViolation(
                        pipeline=self.name,
                        step=step.name,
                        text=current,
                        expectation=step.expectation,
                    )
                    log.warning("Shape check failed", step=step.name, text=current[:120])
                else:
                    log.debug("No match; field is absent", step=step.name)
                return PipelineResult(value=None, trace=tuple(history), violation=violation)
            current = output
        return PipelineResult(value=current, trace=tuple(history))

    def run(self, text: Optional[str]) -> Any:
        return self.trace(text).value

    def run_batch(self, texts: Iterable[Optional[str]], *, max_workers: int = 1) -> List[Any]:
        return apply_batch(self.run, texts, max_workers=max_workers, label=self.name)

    def trace_batch(
        self, texts: Iterable[Optional[str]], *, max_workers: int = 1
    ) -> List[Optional[PipelineResult]]:
        return apply_batch(self.trace, texts, max_workers=max_workers, label=self.name)


def compose(name: str, steps: Sequence[Step]) -> Pipeline:
    return Pipeline(name=name, steps=tuple(steps))


__all__ = [
    "StepKind",
    "Step",
    "Pipeline",
    "PipelineResult",
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
]
