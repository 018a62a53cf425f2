"""
Built-in conversion functions.

Every converter maps one raw argument string to a typed value and carries a
return annotation, so Parameter factories can infer the declared value type
without an explicit type= argument. Failures are plain ValueError raised by
the underlying parsing routine; they are never wrapped by argconvert.
"""

TRUE_TOKENS = ("TRUE", "True", "true", "1")
FALSE_TOKENS = ("FALSE", "False", "false", "0")


def flag(argument: str) -> bool:
    """constant converter used by flags; the argument is never inspected."""
    return True


def string(argument: str) -> str:
    return argument


def integer(argument: str) -> int:
    return int(argument.strip(), 10)


def unsigned(argument: str) -> int:
    """non-negative integer; a leading minus sign is rejected."""
    value = int(argument.strip(), 10)
    if value < 0:
        raise ValueError("invalid literal for unsigned integer: %r" % argument)
    return value


def floating(argument: str) -> float:
    return float(argument)


def boolean(argument: str) -> bool:
    """accepts the same literals as flags do in configuration files."""
    if argument in TRUE_TOKENS:
        return True
    if argument in FALSE_TOKENS:
        return False
    raise ValueError("invalid literal for boolean: %r" % argument)


__all__ = (
    "TRUE_TOKENS",
    "FALSE_TOKENS",
    "flag",
    "string",
    "integer",
    "unsigned",
    "floating",
    "boolean",
)
