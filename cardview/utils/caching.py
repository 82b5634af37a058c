from __future__ import annotations

from collections.abc import Callable
from functools import lru_cache, wraps
from typing import ParamSpec, TypeVar

try:
    import streamlit as st
except ModuleNotFoundError:  # pragma: no cover - Streamlit unavailable during some tests
    st = None  # type: ignore[assignment]

P = ParamSpec("P")
T = TypeVar("T")


def _lru_fallback(func: Callable[P, T], maxsize: int | None) -> Callable[P, T]:
    cached_func = lru_cache(maxsize=maxsize)(func)

    @wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
        return cached_func(*args, **kwargs)

    wrapper.clear = cached_func.cache_clear  # type: ignore[attr-defined]
    return wrapper


def cache_resource(func: Callable[P, T]) -> Callable[P, T]:
    """Decorate a function as a long-lived resource cache (settings stores, sinks).

    Falls back to functools.lru_cache when Streamlit is not installed so the API and
    tests share one instance per argument set.
    """
    if st is not None and hasattr(st, "cache_resource"):
        return st.cache_resource(show_spinner=False)(func)
    return _lru_fallback(func, None)


def cache_data(func: Callable[P, T]) -> Callable[P, T]:
    """Decorate a function for cached data computations such as parsing an upload."""
    if st is not None and hasattr(st, "cache_data"):
        return st.cache_data(show_spinner=False)(func)
    return _lru_fallback(func, 32)
