"""Left-to-right composition of fallible stages.

A stage is any callable taking one value and returning an `Either`, either
directly or as an awaitable. `pipe(f, g)` builds a stage that runs `f`, stops
at its failure, and otherwise feeds its success value to `g`:

```python
pipeline = pipe(add_headers(defaults), json_marshaller(marshaller), client)
outcome = await pipeline(request)
```

Composition reads in the same order the stages run. If every operand is
synchronous the composed stage is synchronous too; if any operand is async
the composed stage is a coroutine function, and sync operands inside it are
called without awaiting. A plain function that returns an awaitable (a task,
a future or a bare coroutine) is awaited as well, and the composed stage then
returns a coroutine for the rest of the chain. The combinator holds no state,
so a composed stage can be shared by any number of pipelines and concurrent
invocations.
"""

import inspect
import logging
from collections.abc import Awaitable, Callable
from functools import reduce
from typing import Any, TypeAlias, TypeVar

from api_sdk_creator.either import Either, Failure

logger = logging.getLogger(__name__)

A = TypeVar("A")
B = TypeVar("B")

Stage: TypeAlias = Callable[[A], Either[B]]
AsyncStage: TypeAlias = Callable[[A], Awaitable[Either[B]]]


def is_async_stage(stage: Callable[..., Any]) -> bool:
    """Whether calling `stage` returns an awaitable."""
    if inspect.iscoroutinefunction(stage):
        return True
    call = getattr(stage, "__call__", None)
    return call is not None and inspect.iscoroutinefunction(call)


def _stage_name(stage: Callable[..., Any]) -> str:
    return getattr(stage, "__qualname__", None) or type(stage).__qualname__


def _then(first: Callable[[Any], Any], second: Callable[[Any], Any], outcome: Either[Any]) -> Any:
    if isinstance(outcome, Failure):
        logger.debug(f"Stage {_stage_name(first)} failed, skipping {_stage_name(second)}: {outcome.error}")
        return outcome
    return second(outcome.value)


async def _resume(first: Callable[[Any], Any], second: Callable[[Any], Any], pending: Awaitable[Any]) -> Either[Any]:
    outcome = _then(first, second, await pending)
    if inspect.isawaitable(outcome):
        outcome = await outcome
    return outcome


def _pipe_two(first: Callable[[Any], Any], second: Callable[[Any], Any]) -> Callable[[Any], Any]:
    for stage in (first, second):
        if not callable(stage):
            raise TypeError(f"Pipeline stages must be callable, got {type(stage).__name__}")

    def piped(value: Any) -> Any:
        # Plain functions may still return a task or future.
        outcome = first(value)
        if inspect.isawaitable(outcome):
            return _resume(first, second, outcome)
        return _then(first, second, outcome)

    piped.__qualname__ = f"{_stage_name(first)} | {_stage_name(second)}"

    if not (is_async_stage(first) or is_async_stage(second)):
        return piped

    async def piped_async(value: Any) -> Either[Any]:
        outcome = piped(value)
        if inspect.isawaitable(outcome):
            outcome = await outcome
        return outcome

    piped_async.__qualname__ = piped.__qualname__
    return piped_async


def pipe(*stages: Callable[[Any], Any]) -> Callable[[Any], Any]:
    """Compose stages left to right, short-circuiting on the first failure.

    `pipe(f, g, k)` is `pipe(pipe(f, g), k)`; grouping does not change the
    outcome.

    Args:
        *stages: One or more stages.

    Returns:
        A stage running `stages` in order.

    Raises:
        TypeError: If no stages are given or a stage is not callable.
    """
    if not stages:
        raise TypeError("pipe() requires at least one stage")
    if len(stages) == 1:
        if not callable(stages[0]):
            raise TypeError(f"Pipeline stages must be callable, got {type(stages[0]).__name__}")
        return stages[0]
    return reduce(_pipe_two, stages)
