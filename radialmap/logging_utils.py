from __future__ import annotations

import dataclasses
import inspect
import logging
import reprlib
from functools import wraps
from typing import Any, Callable, Iterable, MutableMapping, Optional, Set, TypeVar, cast

import numpy as np

F = TypeVar("F", bound=Callable[..., Any])

_repr = reprlib.Repr()
_repr.maxother = 120
_repr.maxstring = 60
_repr.maxlist = 8
_repr.maxtuple = 8
_repr.maxdict = 8


def _summarize_array(value: np.ndarray, max_items: int) -> str:
    head = f"ndarray(shape={tuple(value.shape)})"
    if value.size == 0:
        return head
    if value.size <= max_items:
        return f"{head} values={_repr.repr(np.round(value, 3).tolist())}"
    return f"{head} min={float(value.min()):.4g} max={float(value.max()):.4g}"


def _summarize_record(value: Any) -> str:
    # Map records (Axis, Ring, Node, Viewport) are identified by id when they have one.
    ident = getattr(value, "id", None)
    name = type(value).__name__
    if ident is not None:
        return f"{name}({ident!r})"
    fields = ", ".join(
        f"{f.name}={_repr.repr(getattr(value, f.name))}" for f in dataclasses.fields(value)
    )
    return f"{name}({fields})"


def summarize(value: Any, *, max_items: int = 6) -> str:
    """Compact single-line description of ``value`` for DEBUG traces."""

    if isinstance(value, np.ndarray):
        return _summarize_array(value, max_items)
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return _summarize_record(value)
    if isinstance(value, dict):
        items = []
        for idx, (key, val) in enumerate(value.items()):
            if idx >= max_items:
                items.append(f"... ({len(value)} items)")
                break
            items.append(f"{summarize(key)}: {summarize(val)}")
        return "{" + ", ".join(items) + "}"
    if isinstance(value, (list, tuple)):
        opener, closer = ("(", ")") if isinstance(value, tuple) else ("[", "]")
        items = [summarize(item) for item in value[:max_items]]
        if len(value) > max_items:
            items.append(f"... ({len(value)} items)")
        return opener + ", ".join(items) + closer
    return _repr.repr(value)


def debug_log_call(
    logger: logging.Logger, *, name: Optional[str] = None, log_result: bool = True
) -> Callable[[F], F]:
    """Return a decorator that traces calls of the wrapped function at DEBUG."""

    def decorator(func: F) -> F:
        if getattr(func, "_debug_logging_wrapped", False):
            return func

        qualname = name or getattr(func, "__qualname__", func.__name__)

        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any):
            if not logger.isEnabledFor(logging.DEBUG):
                return func(*args, **kwargs)
            parts = [summarize(arg) for arg in args]
            parts.extend(f"{key}={summarize(val)}" for key, val in kwargs.items())
            logger.debug("-> %s(%s)", qualname, ", ".join(parts))
            result = func(*args, **kwargs)
            if log_result:
                logger.debug("<- %s = %s", qualname, summarize(result))
            return result

        setattr(wrapper, "_debug_logging_wrapped", True)
        return cast(F, wrapper)

    return decorator


def _wrap_class_methods(cls: type, logger: logging.Logger, skip: Set[str]) -> None:
    for attr_name, attr_value in list(cls.__dict__.items()):
        if attr_name.startswith("__"):
            continue
        qualified = f"{cls.__name__}.{attr_name}"
        if attr_name in skip or qualified in skip:
            continue
        if isinstance(attr_value, staticmethod):
            wrapped = debug_log_call(logger, name=qualified)(attr_value.__func__)
            setattr(cls, attr_name, staticmethod(wrapped))
        elif inspect.isfunction(attr_value) and attr_value.__module__ == cls.__module__:
            setattr(cls, attr_name, debug_log_call(logger, name=qualified)(attr_value))


def apply_debug_logging(
    namespace: MutableMapping[str, Any],
    *,
    logger: Optional[logging.Logger] = None,
    skip: Optional[Iterable[str]] = None,
    wrap_methods: bool = True,
) -> None:
    """Wrap the module-level functions (and class methods) of ``namespace`` with DEBUG tracing."""

    module_name = namespace.get("__name__")
    logger = logger or logging.getLogger(module_name or __name__)
    skip_set: Set[str] = set(skip or [])

    for name, value in list(namespace.items()):
        if name in skip_set:
            continue
        if inspect.isfunction(value) and value.__module__ == module_name:
            namespace[name] = debug_log_call(logger, name=name)(value)
        elif wrap_methods and inspect.isclass(value) and value.__module__ == module_name:
            _wrap_class_methods(value, logger, skip_set)
