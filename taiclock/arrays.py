"""Helpers for array-based conversions.

Routine Listings
----------------
find_mapping_path
    Shortest chain of conversions between two formats.
apply_conversions
    Apply a chain of conversion functions.
InputAsArray
    Decorator that hands the wrapped function a flat numpy array and undoes
    the flattening (and scalar wrapping) on the way out.
"""

import collections
import inspect
import logging
from functools import wraps

import numpy as np
import pandas as pd

logger = logging.getLogger(__name__)


def find_mapping_path(map_, from_="tai", to="tai"):
    """Find the shortest chain of conversions from one format to another.

    Parameters
    ----------
    map_ : Mapping
        ``map_[src][dst]`` is the item that converts `src` into `dst`.
    from_, to : str
        Format names. When equal, at least one step is still taken, either a
        self entry or a round trip through another format.

    Returns
    -------
    list
        Items from `map_` in the order they are applied.

    """
    for name, label in ((from_, "from_"), (to, "to")):
        if name not in map_:
            raise ValueError(f"Unsupported time format {label}=[{name}]! Valid: {list(map_)}")

    # The start node is not marked as seen so that a round trip can end on it.
    seen = set()
    queue = collections.deque([(from_, [])])
    found = None
    while queue and found is None:
        src, route = queue.popleft()
        for dst in map_[src]:
            if dst == to:
                found = route + [(src, dst)]
                break
            if dst not in seen:
                seen.add(dst)
                queue.append((dst, route + [(src, dst)]))

    if found is None:
        raise ValueError(f"Unable to find path from [{from_}] to [{to}] in map=[{map_}]!")

    rendered = [map_[src][dst] for src, dst in found]
    logger.log(5, "Conversion [%s] -> [%s] via %s: %s", from_, to, found, rendered)
    return rendered


def apply_conversions(funcs, times, /, **kwargs):
    """Apply a set of time conversions."""
    for func in funcs:
        times = func(times, **kwargs)
    return times


class InputAsArray:
    """Decorator to guarantee the first argument is a non-scalar numpy array.

    Parameters
    ----------
    dtype : str or numpy.dtype
        Data type the first argument is cast to.
    filter_keywords : bool, optional
        Drop keywords the wrapped function does not accept. Default=True.
    defaults : dict, optional
        Keyword defaults applied before calling the wrapped function.

    """

    def __init__(self, dtype, filter_keywords=True, defaults=None):
        self.dtype = np.dtype(dtype)
        self.filter_keywords = filter_keywords
        self.defaults = dict(defaults or {})

    def __call__(self, func):
        argspec = inspect.getfullargspec(func)
        accepted = set(argspec.args) | set(argspec.kwonlyargs)

        @wraps(func)
        def internal(times, *args, **kwargs):
            times, was_scalar = self._standardize(times)
            shape = times.shape if times.ndim > 1 else None
            if shape is not None:
                times = times.ravel()

            kwargs = {**self.defaults, **kwargs}
            if self.filter_keywords:
                kwargs = {key: val for key, val in kwargs.items() if key in accepted}

            output = func(times, *args, **kwargs)
            if shape is not None:
                output = output.reshape(shape)
            return output[0] if was_scalar else output

        return internal

    def _standardize(self, times):
        """Return `times` as an array of `dtype` and whether it was a scalar."""
        if np.isscalar(times) or not np.iterable(times):
            return self._as_array([times]), True
        if isinstance(times, (np.ndarray, pd.Series)):
            # Series pass through untouched when the dtype already matches.
            return (times if times.dtype == self.dtype else self._as_array(np.asarray(times))), False
        return self._as_array(times), False

    def _as_array(self, values):
        """Build an array of `dtype` from a sequence."""
        if self.dtype == object:
            arr = np.empty(len(values), dtype=object)
            arr[:] = list(values)
            return arr
        if isinstance(values, np.ndarray):
            return values.astype(self.dtype)
        return np.array(values, dtype=self.dtype)


@InputAsArray(np.float64)
def noop_float64(times):
    """No-op float64 type."""
    return times


@InputAsArray(np.int64)
def noop_int64(times):
    """No-op int64 type."""
    return times


@InputAsArray(np.str_)
def noop_str(times):
    """No-op string type."""
    return times


@InputAsArray("M8[us]")
def noop_dt64(times):
    """No-op datetime type."""
    return times


@InputAsArray(object)
def noop_object(times):
    """No-op object type."""
    return times
