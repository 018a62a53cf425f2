"""
Argconvert argument map: raw arguments and typed values for a ParameterMap.

Overview
- ArgumentMap owns a private copy of a ParameterMap plus, for every parameter
  id, a list of raw string arguments and a sparse list of memoized values.
- Both outer lists always have exactly len(parameters) entries, indexed by id.
- Raw lists are filled by parse_args/parse_file, add_argument and
  set_default_arguments. Values are computed on demand by get_value and
  get_all_values, and a computed slot is never recomputed.

Flags
- A flag is "set" when its raw list is non-empty. The parsers record a set flag
  by appending the name it was matched with; those strings are never converted.
  The encoding is kept for compatibility with existing raw-argument views: query
  flags through is_set (or has_argument), never through get_value.

Example
    >>> arguments = ArgumentMap(parameters)
    >>> leftovers = parse_args(sys.argv, arguments)
    >>> arguments.set_default_arguments()
    >>> arguments.get_unfilled_parameters()
    []
    >>> arguments.get_value("jobs", type=int)
    4
"""
import copy
import functools
import operator

from .faults import AccessError, ValueAccessError
from .parameters import Category
from .registry import ParameterMap
from .utils import *


class ArgumentMap:
    """
    Runtime argument state built from one ParameterMap.

    Copies made with copy.copy/copy.deepcopy duplicate the parameter map, the
    raw argument lists and the value caches.
    """

    def __init__(self, parameters, /):
        if not isinstance(parameters, ParameterMap):
            raise TypeError("ArgumentMap() argument must be a ParameterMap")
        self._parameters = copy.copy(parameters)
        self._arguments = [[] for _ in range(len(self._parameters))]
        self._values = [[] for _ in range(len(self._parameters))]

    def __len__(self):
        return len(self._arguments)

    def size(self):
        return len(self._arguments)

    @property
    def parameters(self):
        """a copy of the parameter map; the owned map never grows after construction."""
        return copy.copy(self._parameters)

    @property
    def arguments(self):
        """raw argument lists indexed by parameter id (copies)."""
        return [list(arguments) for arguments in self._arguments]

    @property
    def values(self):
        """
        memoized value lists indexed by parameter id (copies).

        lists are only filled up to the highest position requested so far;
        positions skipped on the way hold Unset.
        """
        return [list(values) for values in self._values]

    def set_default_arguments(self):
        """
        Give every non-flag parameter without arguments its default arguments.

        Flags are never defaulted, so their state only reflects parsed input.
        """
        for id, configuration in enumerate(self._parameters):
            if configuration.category is not Category.FLAG and not self._arguments[id]:
                self._arguments[id] = configuration.default_arguments

    def add_argument(self, name, argument, /):
        """
        Append an argument to the parameter identified by name.

        Nothing happens when the parameter already holds its maximum number of
        arguments.
        """
        id = self._parameters.get_id(name)
        maximum = self._parameters.get_configuration(id).max_num_arguments
        if not isinstance(argument, str):
            raise TypeError("arguments must be strings")
        if maximum == 0 or len(self._arguments[id]) < maximum:
            self._arguments[id].append(argument)

    def get_unfilled_parameters(self):
        """
        Return the primary names, in id order, of the parameters holding fewer
        arguments than their minimum.
        """
        return [
            configuration.primary_name
            for id, configuration in enumerate(self._parameters)
            if configuration.min_num_arguments > len(self._arguments[id])
        ]

    def has_argument(self, name, /):
        return len(self._arguments[self._parameters.get_id(name)]) > 0

    def arguments_of(self, name, /):
        return list(self._arguments[self._parameters.get_id(name)])

    def is_set(self, name, /):
        """
        Return whether the flag identified by name was set.

        Raises ValueAccessError when name identifies a parameter that is not a flag.
        """
        id = self._parameters.get_id(name)
        if id not in self._parameters.flags:
            raise ValueAccessError(
                "parameter with name: %r is not a flag; call is_set only to check if a flag is set" % name,
                hint="use get_value or get_all_values for keyword and positional parameters",
            )
        return len(self._arguments[id]) > 0

    def _check(self, name, id, converter, /):
        """
        Internal: the converter and flag checks shared by get_value and get_all_values.
        """
        if converter is None:
            raise ValueAccessError("parameter identified by %r has no conversion function associated with it" % name)
        if id in self._parameters.flags:
            raise ValueAccessError(
                "attempted to read the value of flag named: %r" % name,
                hint="use is_set to test flag values",
            )

    def _compute(self, id, converter, position, /):
        values = self._values[id]
        if len(values) <= position:
            values.extend(Unset for _ in range(position + 1 - len(values)))
        if values[position] is Unset:
            values[position] = converter(self._arguments[id][position])
        return values[position]

    def get_value(self, name, /, position=0, type=Unset):
        """
        Return the converted argument at position for the parameter identified by name.

        Raises
        - AccessError: unknown name, or type differs from the declared type.
        - ValueAccessError: position out of range, no converter, or name is a flag.
        - whatever the conversion function raises, unchanged.
        """
        id = self._parameters.get_id(name)
        converter = self._parameters.conversion_function(name, type)
        if (
            not isinstance(position, int) or
            isinstance(position, bool) or
            not 0 <= position < len(self._arguments[id])
        ):
            raise ValueAccessError(
                "attempted to access argument at position %r for parameter named %r but only %d arguments were assigned"
                % (position, name, len(self._arguments[id]))
            )
        self._check(name, id, converter)
        return self._compute(id, converter, position)

    def get_all_values(self, name, /, type=Unset):
        """
        Return the converted values of every argument of the parameter identified by name.

        Same failures as get_value, checked once up front; an empty argument list
        yields an empty list.
        """
        id = self._parameters.get_id(name)
        converter = self._parameters.conversion_function(name, type)
        self._check(name, id, converter)
        return [self._compute(id, converter, position) for position in range(len(self._arguments[id]))]

    def _assign(self, collected, /):
        """
        Internal: merge arguments collected by a parser pass into the raw lists.

        For every id (in id order): when the raw list already holds arguments all
        collected arguments become leftovers; otherwise arguments are appended up
        to the parameter's maximum and the excess becomes leftovers.

        Returns the leftovers.
        """
        leftovers = []
        for id in sorted(collected):
            arguments = collected[id]
            maximum = self._parameters.get_configuration(id).max_num_arguments
            if self._arguments[id]:
                leftovers.extend(arguments)
            elif maximum and maximum < len(arguments):
                self._arguments[id].extend(arguments[:maximum])
                leftovers.extend(arguments[maximum:])
            else:
                self._arguments[id].extend(arguments)
        return leftovers

    def __copy__(self):
        clone = object.__new__(type(self))
        clone._parameters = copy.copy(self._parameters)
        clone._arguments = [list(arguments) for arguments in self._arguments]
        clone._values = [list(values) for values in self._values]
        return clone

    def __deepcopy__(self, memo, /):
        clone = self.__copy__()
        clone._values = copy.deepcopy(self._values, memo)
        return clone

    def __rich_repr__(self):
        yield "parameters", self._parameters
        yield "arguments", {
            configuration.primary_name: self._arguments[id] for id, configuration in enumerate(self._parameters)
        }
        yield "values", {
            configuration.primary_name: sum(value is not Unset for value in self._values[id])
            for id, configuration in enumerate(self._parameters)
        }

    def __repr__(self):
        return "argument-map(%s)" % ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))


__all__ = (
    "ArgumentMap",
)
