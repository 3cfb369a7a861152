"""
Argmap utilities shared by the argument model and the faults.

- Unset: "not provided" marker for defaults where None is a real value.
- coalesce(): turn Unset into a default, leave everything else alone.
- rename(): give generated callables readable names in reprs and tracebacks.
- mirror(): read-only property over a private "_name" field.
"""
import builtins
import functools
from collections.abc import Sequence, Mapping, Set
from typing import final


@final
class UnsetType:
    """
    type of the Unset marker; only one instance ever exists.

    Unset is falsy, prints as "Unset", survives copies, and composes into
    unions so it can be used in isinstance checks: isinstance(x, str | Unset).
    """

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __init_subclass__(cls, **options):
        raise TypeError("type 'UnsetType' is not an acceptable base type")

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __or__(self, other, /):
        try:
            return UnsetType | other
        except TypeError:
            return NotImplemented

    def __ror__(self, other, /):
        try:
            return other | UnsetType
        except TypeError:
            return NotImplemented

    def __copy__(self):
        return self

    def __deepcopy__(self, memo, /):
        return self


Unset = UnsetType()


def coalesce(object, default=None, /):
    """
    `default` when `object` is Unset, `object` otherwise (None and "" included).
    """
    return default if object is Unset else object


def rename(*parameters):
    """
    rename(callable, name) sets __name__ and __qualname__ and returns callable;
    rename(name) returns a decorator doing the same.
    """
    if len(parameters) == 1:
        name, = parameters
        if not isinstance(name, str):
            raise TypeError("rename() name must be a string")
        return functools.partial(_rename, name=name)
    if len(parameters) == 2:
        callable, name = parameters
        if not isinstance(name, str):
            raise TypeError("rename() name must be a string")
        return _rename(callable, name=name)
    raise TypeError("rename() takes 1 or 2 arguments but %d were given" % len(parameters))


def _rename(callable, *, name):
    if not builtins.callable(callable):
        raise TypeError("rename() target must be callable")
    callable.__name__ = callable.__qualname__ = name
    return callable


def _frozen(object):
    # tuples for sequences, frozensets for sets, shallow dict copies for mappings
    match object:
        case str():
            return object
        case Sequence():
            return tuple(_frozen(item) for item in object)
        case Mapping():
            return {key: _frozen(value) for key, value in object.items()}
        case Set():
            return frozenset(_frozen(item) for item in object)
    return object


def mirror(name, /):
    """
    read-only property returning a frozen view of self._<name>.

        class Flag:
            metavars = mirror("metavars")
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    @rename(name)
    def getter(self):
        return _frozen(getattr(self, "_" + name))

    return property(getter)


__all__ = (
    "UnsetType",
    "Unset",
    "coalesce",
    "rename",
    "mirror",
)
