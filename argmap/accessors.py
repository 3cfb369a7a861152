"""
Argmap accessors: typed reads from a parsed mapping.

The scanner returns plain dicts; these helpers check the shape of one entry
before handing it back, so host code gets a clear error instead of a value of
the wrong type.

    namespace = parser.parse("run -o out.txt --fast")
    name, options = get_command(namespace)      # ("run", {...})
    get_value(options, "out", 0)                # "out.txt"
    get_bool(options, "fast")                   # True
"""


def _lookup(mapping, key, expected, label):
    try:
        value = mapping[key]
    except KeyError:
        raise KeyError("no value stored under %r" % key) from None
    if not isinstance(value, expected):
        raise TypeError("value stored under %r is not %s" % (key, label))
    return value


def get_values(mapping, key, /):
    """
    values of a string flag.
    """
    return _lookup(mapping, key, list, "a list of values")


def get_value(mapping, key, index, /):
    """
    one value of a string flag; negative indices are rejected.
    """
    values = get_values(mapping, key)
    if not isinstance(index, int) or isinstance(index, bool):
        raise TypeError("get_value() index must be an integer")
    if not 0 <= index < len(values):
        raise IndexError("index %d out of range for %r (%d values)" % (index, key, len(values)))
    return values[index]


def get_bool(mapping, key, /):
    value = mapping.get(key, False)
    return value if isinstance(value, bool) else False


def get_positional(mapping, key, /):
    return _lookup(mapping, key, str, "a string")


def get_list(mapping, key, /):
    """
    values of a list flag (possibly empty).
    """
    return _lookup(mapping, key, list, "a list of values")


def get_command(mapping, /):
    """
    (name, nested mapping) of the command invoked at this level.

    at most one command is invoked per scope, since a command owns every token
    after it.
    """
    for key, value in mapping.items():
        if isinstance(value, dict):
            return key, value
    raise LookupError("no command was invoked")


def is_present(mapping, key, /):
    return key in mapping


__all__ = (
    "get_values",
    "get_value",
    "get_bool",
    "get_positional",
    "get_list",
    "get_command",
    "is_present",
)
