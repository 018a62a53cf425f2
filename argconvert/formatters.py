"""
Argconvert help strings.

Two renderers over the same read-only view of a ParameterMap:

- format_help(parameters, header, footer, width, parameter_indentation,
  description_indentation) -> str
  Plain text. Sections, each only present when it has entries:
    "Required parameters:"            required ids in id order
    "Optional positional parameters:" remaining positionals by position
    "Optional keyword parameters:"    remaining keywords in id order
    "Flags:"                          flags in id order
  Every entry is one signature line followed by its description, wrapped on
  spaces to width - description_indentation columns.

- HelpString(parameters, header, footer)
  A rich renderable with the same sections for console output. Colors can be
  overridden through a __styles__ mapping in __main__ and the program name
  through __prog__.

Neither renderer mutates the map.
"""
from collections import defaultdict

from rich.console import Group
from rich.padding import Padding
from rich.text import Text

from .faults import HelpStringError
from .parameters import Category
from .registry import ParameterMap


def _hyphens(name):
    return "-" if len(name) == 1 else "--"


def _names(configuration):
    return ", ".join(_hyphens(name) + name for name in configuration.names)


def _placeholder(configuration):
    if not configuration.placeholder:
        return ""
    if configuration.category is Category.POSITIONAL:
        return configuration.placeholder
    return " " + configuration.placeholder


def _defaults(configuration):
    if not configuration.default_arguments:
        return ""
    return " ( = %s)" % " ".join(configuration.default_arguments)


def _signature(configuration):
    match configuration.category:
        case Category.POSITIONAL:
            return _placeholder(configuration) + _defaults(configuration)
        case Category.KEYWORD:
            return _names(configuration) + _placeholder(configuration) + _defaults(configuration)
        case Category.FLAG:
            return _names(configuration)


def _wrap(description, width):
    """
    split a description into lines of at most width characters, breaking on spaces.

    a word longer than width is cut at width characters.
    """
    lines = []
    while description:
        if len(description) <= width:
            lines.append(description)
            break
        window = description[:width + 1]
        cut = window.rfind(" ")
        if cut > 0:
            lines.append(description[:cut])
            description = description[cut + 1:]
        elif cut == 0:
            description = description[1:]
        else:
            lines.append(description[:width])
            description = description[width:]
    return lines


def _sections(parameters):
    """
    yield (title, configurations) for every non-empty help section.
    """
    required = sorted(parameters.required_parameters)
    if required:
        yield "Required parameters", [parameters.get_configuration(id) for id in required]

    positionals = [
        parameters.get_configuration(id)
        for id in parameters.positional_parameters.values()
        if id not in parameters.required_parameters
    ]
    if positionals:
        yield "Optional positional parameters", positionals

    keywords = [
        parameters.get_configuration(id)
        for id in sorted(parameters.keyword_parameters)
        if id not in parameters.required_parameters
    ]
    if keywords:
        yield "Optional keyword parameters", keywords

    flags = [parameters.get_configuration(id) for id in sorted(parameters.flags)]
    if flags:
        yield "Flags", flags


def format_help(
        parameters,
        /,
        header="",
        footer="",
        width=80,
        parameter_indentation=4,
        description_indentation=8,
):
    """
    Return the plain-text help string for a ParameterMap.

    Raises
    - HelpStringError: width is not positive, an indentation is negative, or
      width does not exceed both indentations.
    """
    if not isinstance(parameters, ParameterMap):
        raise TypeError("format_help() first argument must be a ParameterMap")
    if (
        width <= 0 or
        parameter_indentation < 0 or
        description_indentation < 0 or
        width <= parameter_indentation or
        width <= description_indentation
    ):
        raise HelpStringError(
            "invalid help string formatting parameters (width = %r, parameter_indentation = %r,"
            " description_indentation = %r)" % (width, parameter_indentation, description_indentation)
        )

    result = [header]
    for title, configurations in _sections(parameters):
        result.append("\n%s:\n" % title)
        for configuration in configurations:
            result.append(" " * parameter_indentation + _signature(configuration) + "\n")
            for line in _wrap(configuration.description, width - description_indentation):
                result.append(" " * description_indentation + line + "\n")
    result.append(footer)
    return "".join(result)


class HelpString:
    """
    Rich renderable help for a ParameterMap.

    Usage
        >>> from rich.console import Console
        >>> Console().print(HelpString(parameters, header="usage: tool [options] SOURCE"))
    """

    def __init__(self, parameters, /, header="", footer=""):
        if not isinstance(parameters, ParameterMap):
            raise TypeError("HelpString() first argument must be a ParameterMap")
        self.parameters = parameters
        self.header = header
        self.footer = footer

    def __rich__(self):
        main = __import__("__main__")

        styles = defaultdict(str, {
            "program-name": "bold #FF4D94",  # magenta-pink brand pop
            "header-section": "bold #36C5F0",  # sky-blue
            "footer-section": "#737373",  # dim footer gray
            "group-label": "bold #FFFFFF",  # pure white headers
            "positional-name": "bold #FFD600",  # amber for positionals
            "keyword-name": "bold #00E6FF",  # cyan for keywords
            "flag-name": "bold #22C55E",  # green for flags
            "defaults": "italic #A3A3A3",
            "argument-description": "#9CA3AF",  # muted gray
        } | getattr(main, "__styles__", {}))

        renders = []
        if prog := getattr(main, "__prog__", None):
            renders.append(Text(prog, styles["program-name"]))
        if self.header:
            renders.append(Text(self.header, styles["header-section"]))

        for title, configurations in _sections(self.parameters):
            renders.append(Text.assemble("\n", (title + ":", styles["group-label"])))
            for configuration in configurations:
                style = styles[configuration.category.value + "-name"]
                signature = Text.assemble(
                    (_signature(configuration).removesuffix(_defaults(configuration)), style),
                    (_defaults(configuration), styles["defaults"]),
                )
                renders.append(Padding(signature, (0, 0, 0, 4)))
                if configuration.description:
                    renders.append(Padding(
                        Text(configuration.description, styles["argument-description"]),
                        (0, 0, 0, 8),
                    ))

        if self.footer:
            renders.append(Text(self.footer, styles["footer-section"]))
        return Group(*renders)


__all__ = (
    "format_help",
    "HelpString",
)
