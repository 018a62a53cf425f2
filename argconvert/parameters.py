r"""
Argconvert parameter descriptions and factories.

Overview
- Category: the three parameter kinds (positional, keyword, flag).
- Configuration: one parameter's static description (names, category, defaults,
  position, argument-count bounds, help metadata).
- Parameter: pairs a Configuration with a conversion function and the value type
  that function produces; built through the Parameter.flag/keyword/positional
  factories and tuned with chaining mutators.

Argument-count bounds
- min_num_arguments and max_num_arguments are non-negative; a maximum of 0 means
  "unbounded". The pair is kept canonical: raising the minimum above a positive
  maximum raises the maximum, lowering the maximum below the minimum lowers the
  minimum.

Required parameters
- A non-flag parameter is required when its minimum exceeds the number of its
  default arguments (is_required()).

Declared value type
- Parameter.keyword/positional accept an explicit type=. When omitted the type is
  the converter itself if it is a class (int, float, str, ...), else the
  converter's return annotation when that is a class, else object. Flags are
  always bool. ParameterMap.conversion_function and ArgumentMap.get_value check
  requested types against it.

Example
    >>> verbose = Parameter.flag(["verbose", "v"]).describe("chatty output")
    >>> jobs = Parameter.keyword(int, ["jobs", "j"]).max_args(1).add_default("4")
    >>> source = Parameter.positional(str, "SOURCE", 0).min_args(1)
"""
import builtins
import copy
import functools
import operator
import typing
from collections.abc import Iterable
from enum import Enum

from . import converters
from .faults import ConfigurationError
from .utils import *

DEFAULT_PLACEHOLDER = "<ARG>"


class Category(Enum):
    """parameter categories; fixed for a parameter at construction."""
    POSITIONAL = "positional"
    KEYWORD = "keyword"
    FLAG = "flag"

    def __repr__(self):
        return "%s.%s" % (type(self).__name__, self.name)


def _sanitize_names(names, /):
    """
    Internal: validate a names collection and return it as a fresh list.

    Raises
    - TypeError: names is a bare string or contains non-strings.
    - ConfigurationError: names is empty or contains an empty string.
    """
    if isinstance(names, str) or not isinstance(names, Iterable):
        raise TypeError("parameter names must be given as a sequence of strings")
    names = list(names)
    if not names:
        raise ConfigurationError("all parameters must be given at least one name")
    for name in names:
        if not isinstance(name, str):
            raise TypeError("parameter names must be strings")
        if not name:
            raise ConfigurationError("all parameter names must be non-empty strings")
    return names


class Configuration:
    """
    Static description of one parameter.

    Instances are created by the Parameter factories; a ParameterMap stores a
    private copy on insertion, so later changes through the Parameter do not
    leak into a map.

    Read-only fields: category, default_arguments, position, min_num_arguments,
    max_num_arguments (container fields are returned as copies).
    Writable fields: names, description, placeholder.
    """

    category = mirror("category")
    default_arguments = mirror("default_arguments")
    position = mirror("position")
    min_num_arguments = mirror("min_num_arguments")
    max_num_arguments = mirror("max_num_arguments")

    __displayable__ = (
        "names",
        "category",
        "default_arguments",
        "position",
        "min_num_arguments",
        "max_num_arguments",
        "description",
        "placeholder",
    )

    def __init__(self, category, names, /, *, position=0, placeholder=DEFAULT_PLACEHOLDER):
        if not isinstance(category, Category):
            raise TypeError("configuration 'category' must be a Category")
        if not isinstance(position, int) or isinstance(position, bool):
            raise TypeError("configuration 'position' must be an integer")
        self._names = _sanitize_names(names)
        self._category = category
        self._default_arguments = []
        self._position = position
        self._min_num_arguments = 0
        self._max_num_arguments = 0
        self._description = ""
        self._placeholder = placeholder

    @property
    def names(self):
        return list(self._names)

    @names.setter
    def names(self, names):
        self._names = _sanitize_names(names)

    @property
    def primary_name(self):
        return self._names[0]

    @property
    def description(self):
        return self._description

    @description.setter
    def description(self, description):
        if not isinstance(description, str):
            raise TypeError("configuration 'description' must be a string")
        self._description = description

    @property
    def placeholder(self):
        return self._placeholder

    @placeholder.setter
    def placeholder(self, placeholder):
        if not isinstance(placeholder, str):
            raise TypeError("configuration 'placeholder' must be a string")
        self._placeholder = placeholder

    def is_required(self):
        """
        True when the parameter needs more arguments than its defaults provide.

        Always False for flags.
        """
        if self._category is Category.FLAG:
            return False
        return self._min_num_arguments > len(self._default_arguments)

    def add_default(self, argument, /):
        if not isinstance(argument, str):
            raise TypeError("default arguments must be strings")
        if not argument:
            raise ConfigurationError(
                "attempted to add empty default argument; (parameter name: %r)" % self.primary_name
            )
        self._default_arguments.append(argument)

    def set_default(self, arguments, /):
        arguments = list(arguments)
        for argument in arguments:
            if not isinstance(argument, str):
                raise TypeError("default arguments must be strings")
            if not argument:
                raise ConfigurationError(
                    "attempted to assign list of default arguments containing an empty argument;"
                    " (parameter name: %r)" % self.primary_name
                )
        self._default_arguments = arguments

    def min_args(self, min, /):
        """
        Set the minimum number of arguments.

        The maximum is raised to min when it is positive and below min.
        """
        if not isinstance(min, int) or isinstance(min, bool):
            raise TypeError("minimum number of arguments must be an integer")
        if min < 0:
            raise ConfigurationError(
                "cannot set negative minimum number of arguments: %d; (parameter name: %r)"
                % (min, self.primary_name)
            )
        self._min_num_arguments = min
        if 0 < self._max_num_arguments < min:
            self._max_num_arguments = min

    def max_args(self, max, /):
        """
        Set the maximum number of arguments (0 means unbounded).

        The minimum is lowered to max when it is larger than max.
        """
        if not isinstance(max, int) or isinstance(max, bool):
            raise TypeError("maximum number of arguments must be an integer")
        if max < 0:
            raise ConfigurationError(
                "cannot set negative maximum number of arguments: %d; (parameter name: %r)"
                % (max, self.primary_name)
            )
        self._max_num_arguments = max
        if self._min_num_arguments > max:
            self._min_num_arguments = max

    def __eq__(self, other):
        if not isinstance(other, Configuration):
            return NotImplemented
        return all(getattr(self, name) == getattr(other, name) for name in type(self).__displayable__)

    __hash__ = None

    def __copy__(self):
        clone = object.__new__(type(self))
        clone.__dict__.update(self.__dict__)
        clone._names = list(self._names)
        clone._default_arguments = list(self._default_arguments)
        return clone

    def __deepcopy__(self, memo, /):
        return self.__copy__()

    def __rich_repr__(self):
        for name in type(self).__displayable__:
            yield name, getattr(self, name)

    def __repr__(self):
        return "configuration(%s)" % ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))


def _resolve_type(converter, type, /):
    """
    Internal: work out the value type a converter produces.

    Order: explicit type, converter class, converter return annotation, object.
    """
    if type is not Unset:
        if not isinstance(type, builtins.type):
            raise TypeError("parameter 'type' must be a class")
        return type
    if converter is None:
        return object
    if isinstance(converter, builtins.type):
        return converter
    try:
        hint = typing.get_type_hints(converter).get("return", object)
    except (TypeError, NameError):
        # partials, builtins and unresolved forward references carry no usable hint
        return object
    return hint if isinstance(hint, builtins.type) else object


class Parameter[_T]:
    """
    A parameter definition: Configuration + conversion function + value type.

    Built only through the factories:
    - Parameter.flag(names)
    - Parameter.keyword(converter, names, *, type=Unset)
    - Parameter.positional(converter, name, position, *, type=Unset)

    The converter may be None, which stands for "no conversion available"; such a
    parameter can be registered and parsed, and only fails when values are
    requested.

    All mutators return the parameter itself so calls can be chained.
    """

    def __init__(self, configuration, converter, type, /):
        if not isinstance(configuration, Configuration):
            raise TypeError("parameter 'configuration' must be a Configuration")
        if converter is not None and not callable(converter):
            raise TypeError("parameter 'converter' must be callable or None")
        self._configuration = configuration
        self._converter = converter
        self._type = _resolve_type(converter, type)

    @classmethod
    def flag(cls, names, /):
        """
        Create a flag identified by names.

        Flags take no arguments of their own and have no placeholder; their
        converter is constant and always yields True.
        """
        configuration = Configuration(Category.FLAG, names, placeholder="")
        return cls(configuration, converters.flag, bool)

    @classmethod
    def keyword(cls, converter, names, /, *, type=Unset):
        """
        Create a keyword parameter identified by names, whose arguments follow
        one of its names on the command line.
        """
        configuration = Configuration(Category.KEYWORD, names)
        return cls(configuration, converter, type)

    @classmethod
    def positional(cls, converter, name, position, /, *, type=Unset):
        """
        Create a positional parameter called name at the given relative position.

        The position only orders positional parameters between themselves; it may
        be negative and does not need to be contiguous. The placeholder defaults
        to the name.
        """
        if not isinstance(name, str):
            raise TypeError("positional parameter name must be a string")
        configuration = Configuration(Category.POSITIONAL, [name], position=position, placeholder=name)
        return cls(configuration, converter, type)

    @property
    def configuration(self):
        return self._configuration

    @property
    def converter(self):
        return self._converter

    @property
    def type(self):
        return self._type

    def add_default(self, argument, /):
        self._configuration.add_default(argument)
        return self

    def set_default(self, arguments, /):
        self._configuration.set_default(arguments)
        return self

    def min_args(self, min, /):
        self._configuration.min_args(min)
        return self

    def max_args(self, max, /):
        self._configuration.max_args(max)
        return self

    def describe(self, description, /):
        self._configuration.description = description
        return self

    def placeholder(self, placeholder, /):
        self._configuration.placeholder = placeholder
        return self

    def __copy__(self):
        return type(self)(copy.copy(self._configuration), self._converter, self._type)

    def __deepcopy__(self, memo, /):
        return self.__copy__()

    def __repr__(self):
        return "parameter(configuration=%r, type=%s, converter=%s)" % (
            self._configuration,
            self._type.__qualname__,
            "yes" if self._converter is not None else "no",
        )


__all__ = (
    "DEFAULT_PLACEHOLDER",
    "Category",
    "Configuration",
    "Parameter",
)
