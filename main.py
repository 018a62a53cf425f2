import os
import sys

from rich.console import Console
from rich.pretty import pprint

from argconvert import *

__prog__ = "argconvert-demo"

parameters = ParameterMap()
parameters(
    Parameter.positional(str, "SOURCE", 0).min_args(1).describe("file to read")
)(
    Parameter.positional(str, "DESTINATION", 1).add_default("out.txt").describe("file to write")
)(
    Parameter.keyword(converters.unsigned, ["jobs", "j"]).max_args(1).add_default("1").placeholder("<N>")
    .describe("number of worker processes")
)(
    Parameter.keyword(str, ["config", "c"]).max_args(1).placeholder("<FILE>")
    .describe("read further settings from a configuration file")
)(
    Parameter.flag(["verbose", "v"]).describe("show the parsed argument map")
)(
    Parameter.flag(["help", "h"]).describe("show this help and exit")
)


def main(argv):
    arguments = ArgumentMap(parameters)
    try:
        leftovers = parse_args(argv, arguments)
        if arguments.has_argument("config"):
            leftovers += parse_file(arguments.get_value("config"), arguments)
    except ArgumentError as error:
        trigger(error, shell=True)
        return

    if arguments.is_set("help"):
        Console().print(HelpString(parameters, header="usage: %s [options] SOURCE [DESTINATION]" % os.path.basename(argv[0])))
        return

    arguments.set_default_arguments()
    if unfilled := arguments.get_unfilled_parameters():
        trigger(ArgumentParsingError(
            "missing arguments for: %s" % ", ".join(unfilled),
            hint="run with --help to list the parameters",
        ), shell=True)
        return

    if arguments.is_set("verbose"):
        pprint(arguments)
        pprint(leftovers)
    pprint({
        "source": arguments.get_value("SOURCE", type=str),
        "destination": arguments.get_value("DESTINATION", type=str),
        "jobs": arguments.get_value("jobs", type=int),
    })


if __name__ == '__main__':
    main(sys.argv)
