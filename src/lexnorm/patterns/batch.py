"""Element-wise batch application that preserves input length and order."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Iterable, List, Optional, TypeVar

from lexnorm.utils.logging import get_logger

from .errors import LexnormError

T = TypeVar("T")

_LOGGER = get_logger(module=__name__)


def _guarded(func: Callable[[str], T], label: str) -> Callable[[Optional[str]], Optional[T]]:
    def run(text: Optional[str]) -> Optional[T]:
        if text is None:
            return None
        try:
            return func(text)
        except LexnormError:
            # Pattern and template errors are configuration errors and abort the batch.
            raise
        except (TypeError, ValueError, AttributeError) as exc:
            _LOGGER.warning(
                "Element failed; recording absence",
                operation=label,
                error=str(exc),
                value_type=type(text).__name__,
            )
            return None

    return run


def apply_batch(
    func: Callable[[str], T],
    texts: Iterable[Optional[str]],
    *,
    max_workers: int = 1,
    label: str = "batch",
) -> List[Optional[T]]:
    """Apply *func* to each element of *texts*, returning exactly one output per input.

    ``None`` inputs yield ``None``.  An element whose processing raises a
    data-level error also yields ``None``; the rest of the batch continues.
    With ``max_workers > 1`` elements run on a thread pool; output position
    always matches input position.
    """

    if max_workers < 1:
        raise ValueError("max_workers must be at least 1")

    items = list(texts)
    guarded = _guarded(func, label)
    if max_workers == 1 or len(items) < 2:
        results = [guarded(item) for item in items]
    else:
        with ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="lexnorm") as pool:
            results = list(pool.map(guarded, items))

    _LOGGER.debug(
        "Applied batch operation",
        operation=label,
        size=len(items),
        absent=sum(1 for value in results if value is None),
    )
    return results


__all__ = ["apply_batch"]
