"""
Argconvert parsers: fill an ArgumentMap from argv or from a configuration file.

parse_args(argv, arguments)
- argv[0] is the program name and is skipped.
- "--name" names a flag (sets it) or a keyword parameter (opens its argument list).
- "-xyz" is a cluster of short names: every character must name a flag, except the
  last one, which may also name a keyword parameter (opening its argument list).
- "--" switches to positional-only mode for the rest of the input: every later
  token is a positional argument, hyphens included.
- Any other token is an argument: it goes to the open keyword parameter if there
  is one, otherwise to the current positional parameter; positional parameters are
  filled one after the other in ascending position order. Tokens that fit nowhere
  are leftovers.
- There is no "--name=value" form; keyword arguments are always separate tokens.

parse_file(stream, arguments)
- One "name=arg1 arg2 ..." assignment per line, arguments separated by spaces.
- Blank lines and lines starting with "#" are comments.
- Flags accept exactly TRUE/True/true/1 (set) or FALSE/False/false/0 (left alone).

Merging
- Both parsers collect arguments per parameter during their pass and merge them
  into the ArgumentMap at the end: a parameter that already holds arguments keeps
  them and all newly collected ones become leftovers; otherwise arguments are
  added up to the parameter's maximum and the excess becomes leftovers. Calling
  parse_file and then parse_args therefore lets the first writer win.

Errors
- ArgumentParsingError for malformed input. Arguments collected before the
  offending token or line are discarded along with the pass, but nothing already
  merged by an earlier pass is touched.

Both functions return the leftovers: unplaceable command-line tokens first, then
the excess of each parameter in id order.
"""
import difflib
import logging
import os
from collections import defaultdict

from .converters import TRUE_TOKENS, FALSE_TOKENS
from .faults import ArgumentParsingError
from .store import ArgumentMap

logger = logging.getLogger(__name__)

SEPARATOR = "--"
_WORDS = ("first", "second", "third", "fourth", "fifth")


def _ordinal(number):
    """ordinal label of a 1-based token index ("first", ..., "6th", "11th", "22nd")."""
    if 1 <= number <= len(_WORDS):
        return _WORDS[number - 1]
    if number % 100 in (11, 12, 13):
        return "%dth" % number
    return "%d%s" % (number, {1: "st", 2: "nd", 3: "rd"}.get(number % 10, "th"))


def _suggest(name, parameters, /, *, options=True):
    """
    build a hint for an unknown name from the closest known names.

    options=True restricts candidates to flags and keyword parameters and spells
    the suggestion as a command-line option; otherwise every name is a candidate.
    """
    ids = parameters.flags | parameters.keyword_parameters if options else range(len(parameters))
    candidates = [candidate for id in sorted(ids) for candidate in parameters.get_configuration(id).names]
    try:
        suggestion = difflib.get_close_matches(name, candidates, 5)[0]
    except IndexError:
        if options:
            return "options must name a flag or a keyword parameter"
        return "use the name of a registered parameter"
    if options:
        suggestion = ("-" if len(suggestion) == 1 else "--") + suggestion
    return "did you mean %r?" % suggestion


def _hyphens(token):
    if not token.startswith("-"):
        return 0
    if token.startswith("--"):
        return 2
    return 1


class _Scanner:
    """
    left-to-right state machine behind parse_args.

    state
    - cursor: index into the positional ids ordered by position; only moves forward.
    - keyword: id of the keyword parameter whose argument list is open, or None.
    - positional_open: the current positional parameter received an argument and
      can take more.
    - positional_only: set for good once the separator was seen.
    """

    def __init__(self, arguments):
        self.parameters = arguments.parameters
        self.positionals = list(self.parameters.positional_parameters.values())
        self.collected = defaultdict(list)
        self.leftovers = []
        self.cursor = 0
        self.keyword = None
        self.positional_open = False
        self.positional_only = False
        self.index = 0

    def _full(self, id):
        maximum = self.parameters.get_configuration(id).max_num_arguments
        return maximum > 0 and len(self.collected[id]) >= maximum

    def _close_keyword(self):
        self.keyword = None

    def _close_positional(self):
        if self.positional_open:
            self.cursor += 1
            self.positional_open = False

    def _add_positional(self, token):
        id = self.positionals[self.cursor]
        self.collected[id].append(token)
        if self._full(id):
            self.cursor += 1
            self.positional_open = False
        else:
            self.positional_open = True

    def _add_keyword(self, token):
        self.collected[self.keyword].append(token)
        if self._full(self.keyword):
            self._close_keyword()

    def _add_argument(self, token):
        if self.keyword is not None and not self.positional_only:
            self._add_keyword(token)
        elif self.cursor < len(self.positionals):
            self._add_positional(token)
        else:
            self.leftovers.append(token)

    def _set_flag(self, name):
        self.collected[self.parameters.get_id(name)].append(name)

    def _short_options(self, token):
        for offset, name in enumerate(token[1:], start=1):
            if self.parameters.is_flag(name):
                self._set_flag(name)
            elif offset == len(token) - 1 and self.parameters.is_keyword(name):
                self.keyword = self.parameters.get_id(name)
            else:
                raise ArgumentParsingError(
                    "invalid option: %r in option list: %r at %s position" % (name, token, _ordinal(self.index)),
                    hint="every character must name a flag; only the last one may name a keyword parameter",
                    token=token,
                    index=self.index,
                )

    def _long_option(self, token):
        name = token[2:]
        if self.parameters.is_flag(name):
            self._set_flag(name)
        elif self.parameters.is_keyword(name):
            self.keyword = self.parameters.get_id(name)
        else:
            raise ArgumentParsingError(
                "invalid argument: %r at %s position" % (token, _ordinal(self.index)),
                hint=_suggest(name, self.parameters),
                token=token,
                index=self.index,
            )

    def scan(self, token):
        self.index += 1
        if token == SEPARATOR and not self.positional_only:
            self._close_keyword()
            self.positional_only = True
            return
        if self.positional_only:
            self._add_argument(token)
            return
        match _hyphens(token):
            case 0:
                self._add_argument(token)
            case 1:
                self._close_keyword()
                self._close_positional()
                self._short_options(token)
            case 2:
                self._close_keyword()
                self._close_positional()
                self._long_option(token)


def parse_args(argv, arguments, /):
    """
    Parse a command line into arguments and return the leftovers.

    Parameters
    - argv: sequence of strings; argv[0] (the program name) is ignored.
    - arguments: ArgumentMap to fill.

    Raises
    - ArgumentParsingError: an option names no flag or keyword parameter, or a
      short-option cluster has a keyword parameter before its last character.
    """
    if not isinstance(arguments, ArgumentMap):
        raise TypeError("parse_args() second argument must be an ArgumentMap")
    if isinstance(argv, str):
        raise TypeError("parse_args() first argument must be a sequence of strings, not a string")

    scanner = _Scanner(arguments)
    for token in list(argv)[1:]:
        if not isinstance(token, str):
            raise TypeError("parse_args() tokens must be strings")
        scanner.scan(token)

    leftovers = scanner.leftovers + arguments._assign(scanner.collected)
    logger.debug("parsed %d command-line tokens, %d leftovers", scanner.index, len(leftovers))
    return leftovers


def _parse_lines(lines, arguments):
    parameters = arguments.parameters
    collected = defaultdict(list)

    for row, line in enumerate(lines, start=1):
        line = line.rstrip("\r\n")
        if not line or line.startswith("#"):
            continue

        name, equals, rest = line.partition("=")
        if not equals:
            raise ArgumentParsingError(
                "invalid configuration file formatting; non-empty lines which don't begin with '#' must contain '='."
                " row: %d, line: %r" % (row, line),
                hint="write one assignment per line, like name=value",
                row=row,
            )
        if not parameters.contains(name):
            raise ArgumentParsingError(
                "unknown parameter name in configuration file. row: %d, name: %r" % (row, name),
                hint=_suggest(name, parameters, options=False),
                row=row,
            )
        if not rest:
            raise ArgumentParsingError(
                "empty argument list in configuration file. row: %d, line: %r" % (row, line),
                hint="remove the line or give %r at least one argument" % name,
                row=row,
            )

        id = parameters.get_id(name)
        if parameters.is_flag(name):
            if rest in TRUE_TOKENS:
                collected[id].append(name)
            elif rest not in FALSE_TOKENS:
                raise ArgumentParsingError(
                    "invalid argument %r for flag: %r. row: %d" % (rest, name, row),
                    hint="flags accept one of %s" % ", ".join(TRUE_TOKENS + FALSE_TOKENS),
                    row=row,
                )
        else:
            collected[id].extend(piece for piece in rest.split(" ") if piece)

    return collected


def parse_file(stream, arguments, /):
    """
    Parse configuration lines into arguments and return the leftovers.

    Parameters
    - stream: an iterable of lines (open text file, io.StringIO, list of strings),
      or a path (str / os.PathLike) to a UTF-8 encoded file.
    - arguments: ArgumentMap to fill.

    Raises
    - ArgumentParsingError: a line has no '=', names an unknown parameter, has
      an empty argument list, or assigns something other than a boolean literal
      to a flag.
    """
    if not isinstance(arguments, ArgumentMap):
        raise TypeError("parse_file() second argument must be an ArgumentMap")

    if isinstance(stream, str | os.PathLike):
        with open(stream, encoding="utf-8") as file:
            collected = _parse_lines(file, arguments)
        logger.debug("read configuration file %s", os.fspath(stream))
    else:
        collected = _parse_lines(stream, arguments)

    leftovers = arguments._assign(collected)
    logger.debug("merged configuration for %d parameters, %d leftovers", len(collected), len(leftovers))
    return leftovers


__all__ = (
    "SEPARATOR",
    "parse_args",
    "parse_file",
)
