"""
Argconvert utilities.

- Unset: the "not provided" sentinel. Defaults optional keyword arguments
  (type=Unset) and marks value-cache slots that were not computed yet. Unlike
  None it can never be a legitimate argument value.
- mirror("attr"): read-only property over self._attr that hands out copies of
  list, dict and set values, so an owner's containers cannot be changed through
  its public fields.
"""
import functools
from collections.abc import Mapping, Sequence, Set
from typing import final


@final
class UnsetType:
    """
    Type of the Unset sentinel.

    UnsetType() always returns the same instance; copies and pickles keep the
    identity, the instance is falsy and the type cannot be subclassed.
    """

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __copy__(self):
        return self

    def __deepcopy__(self, memo, /):
        return self

    def __reduce__(self):
        return "Unset"

    def __init_subclass__(cls, **options):
        raise TypeError("type 'UnsetType' is not an acceptable base type")


def _detach(object):
    if isinstance(object, Sequence) and not isinstance(object, str):
        return [_detach(item) for item in object]
    if isinstance(object, Mapping):
        return {key: _detach(value) for key, value in object.items()}
    if isinstance(object, Set):
        return {_detach(item) for item in object}
    return object


def mirror(name, /):
    """
    Return a read-only property reading self._<name>.

    Example
        >>> class Configuration:
        ...     names = mirror("names")
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    def getter(self):
        return _detach(getattr(self, "_" + name))

    getter.__name__ = getter.__qualname__ = name
    return property(getter)


Unset = UnsetType()


__all__ = (
    "mirror",
    "UnsetType",
    "Unset",
)
