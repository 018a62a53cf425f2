"""
Argconvert parameter map: the append-only registry of parameters.

Overview
- ParameterMap stores parameter configurations together with their conversion
  functions and declared value types. Each parameter gets an integer id equal to
  its insertion order (0-based), stable for the lifetime of the map.
- Every name of every parameter maps to that parameter's id.
- Parameters are classified into index groups:
  • required_parameters: ids of required parameters (any category but flags),
  • positional_parameters: position -> id, iterated by ascending position,
  • keyword_parameters: ids of keyword parameters,
  • flags: ids of flags.

Insertion
- insert() validates every precondition (unique names, unique position for
  positionals) before touching any state; when a check fails a RegistrationError
  is raised and the map is left exactly as it was.

Lookups
- get_id/get_primary_name/get_configuration/conversion_function raise
  AccessError for unknown names and ids.
- contains/is_flag/is_keyword never raise: unknown names are simply not flags
  and not keywords, which allows speculative queries while scanning input.

Example
    >>> parameters = ParameterMap()
    >>> parameters(Parameter.flag(["verbose", "v"]))(Parameter.keyword(int, ["jobs", "j"]))
    >>> parameters.get_id("j")
    1
"""
import copy
import logging

from .faults import AccessError, RegistrationError
from .parameters import Category, Parameter
from .utils import *

logger = logging.getLogger(__name__)


class ParameterMap:
    """
    Append-only collection of parameters indexed by id and by every name.

    Parameters cannot be removed or renamed once inserted. Copies made with
    copy.copy/copy.deepcopy are independent maps.
    """

    def __init__(self):
        self._name_to_id = {}
        self._configurations = []
        self._converters = []
        self._types = []
        self._required_parameters = set()
        self._positional_parameters = {}
        self._keyword_parameters = set()
        self._flags = set()

    def __len__(self):
        return len(self._configurations)

    def size(self):
        return len(self._configurations)

    def __contains__(self, name):
        return self.contains(name)

    def __iter__(self):
        """iterate over copies of the stored configurations in id order."""
        return iter(list(map(copy.copy, self._configurations)))

    def contains(self, name, /):
        return name in self._name_to_id

    def is_flag(self, name, /):
        return self.contains(name) and self.get_id(name) in self._flags

    def is_keyword(self, name, /):
        return self.contains(name) and self.get_id(name) in self._keyword_parameters

    def get_id(self, name, /):
        try:
            return self._name_to_id[name]
        except (KeyError, TypeError):
            raise AccessError("unable to find parameter named: %r" % (name,)) from None

    def get_primary_name(self, id, /):
        return self.get_configuration(id).primary_name

    def get_configuration(self, key, /):
        """
        Return a copy of the configuration of the parameter identified by a name (str)
        or an id (int); changing the copy does not affect the map.
        """
        if isinstance(key, str):
            return copy.copy(self._configurations[self.get_id(key)])
        if isinstance(key, int) and not isinstance(key, bool) and 0 <= key < len(self._configurations):
            return copy.copy(self._configurations[key])
        raise AccessError("unable to find parameter with id: %r" % (key,))

    def conversion_function(self, name, /, type=Unset):
        """
        Return the converter of the parameter identified by name.

        When type is given it must be the parameter's declared value type;
        otherwise an AccessError is raised (checked recovery of the converter).
        """
        id = self.get_id(name)
        if type is not Unset and type is not self._types[id]:
            raise AccessError(
                "requested type %r does not match the type %r declared by parameter %r"
                % (getattr(type, "__qualname__", type), self._types[id].__qualname__, name)
            )
        return self._converters[id]

    def declared_type(self, name, /):
        return self._types[self.get_id(name)]

    @property
    def required_parameters(self):
        return frozenset(self._required_parameters)

    @property
    def positional_parameters(self):
        """position -> id, ordered by ascending position."""
        return dict(sorted(self._positional_parameters.items()))

    @property
    def keyword_parameters(self):
        return frozenset(self._keyword_parameters)

    @property
    def flags(self):
        return frozenset(self._flags)

    def insert(self, parameter, /):
        """
        Insert a parameter and return the map (for chaining).

        Raises
        - TypeError: parameter is not a Parameter.
        - RegistrationError: one of its names is already taken, or it is a
          positional parameter whose position is already taken. The map is
          unchanged in both cases.
        """
        if not isinstance(parameter, Parameter):
            raise TypeError("ParameterMap.insert() argument must be a Parameter")

        id = len(self._configurations)
        configuration = copy.copy(parameter.configuration)
        names = configuration.names
        category = configuration.category
        position = configuration.position

        # preconditions, read-only
        if not names:
            raise RegistrationError("parameter must be given at least one name")
        seen = set()
        for name in names:
            if name in self._name_to_id or name in seen:
                raise RegistrationError("name %r already taken by another parameter" % name)
            seen.add(name)
        if category is Category.POSITIONAL and position in self._positional_parameters:
            other = self._positional_parameters[position]
            raise RegistrationError(
                "position %d for parameter named %r already taken by parameter named: %r"
                % (position, names[0], self._configurations[other].primary_name)
            )

        # mutations, none of which can fail past this point
        for name in names:
            self._name_to_id[name] = id
        self._converters.append(parameter.converter)
        self._types.append(parameter.type)
        if configuration.is_required():
            self._required_parameters.add(id)
        match category:
            case Category.POSITIONAL:
                self._positional_parameters[position] = id
            case Category.KEYWORD:
                self._keyword_parameters.add(id)
            case Category.FLAG:
                self._flags.add(id)
        self._configurations.append(configuration)

        logger.debug("registered %s parameter %r with id %d", category.value, names[0], id)
        return self

    __call__ = insert

    def __copy__(self):
        clone = type(self)()
        clone._name_to_id = dict(self._name_to_id)
        clone._configurations = list(map(copy.copy, self._configurations))
        clone._converters = list(self._converters)
        clone._types = list(self._types)
        clone._required_parameters = set(self._required_parameters)
        clone._positional_parameters = dict(self._positional_parameters)
        clone._keyword_parameters = set(self._keyword_parameters)
        clone._flags = set(self._flags)
        return clone

    def __deepcopy__(self, memo, /):
        return self.__copy__()

    def __rich_repr__(self):
        def group(ids):
            return [self._configurations[id].names for id in sorted(ids)]

        yield "size", len(self)
        yield "required", group(self._required_parameters)
        yield "positional", [
            (position, self._configurations[id].names) for position, id in sorted(self._positional_parameters.items())
        ]
        yield "keyword", group(self._keyword_parameters)
        yield "flags", group(self._flags)

    def __repr__(self):
        return "parameter-map(%s)" % ", ".join("%s=%r" % pair for pair in self.__rich_repr__())


__all__ = (
    "ParameterMap",
)
