# License: BSD3

"""
rfc-graph command line entry point
"""

import argparse
import sys

from .cmd import SUBCOMMAND_SECTIONS, SUBCOMMANDS
from .record import RfcGraphException
from .util import add_subcommand


def _epilog():
    "list of subcommands, by section"
    lines = []
    for descr, section in SUBCOMMAND_SECTIONS:
        names = [getattr(x, 'NAME', x.__name__.split('.')[-1])
                 for x in section]
        lines.append("%s: %s" % (descr, ", ".join(names)))
    return "\n".join(lines)


def mk_argparser():
    """
    Argument parser for all of the subcommands
    """
    arg_parser = argparse.ArgumentParser(
        description='Explore the update/obsolete relations between RFCs',
        epilog=_epilog(),
        formatter_class=argparse.RawDescriptionHelpFormatter)
    subparsers = arg_parser.add_subparsers(dest='subcommand',
                                           help='sub-command help')
    subparsers.required = True
    for module in SUBCOMMANDS:
        subparser = add_subcommand(subparsers, module)
        module.config_argparser(subparser)
    return arg_parser


def main(argv=None):
    """
    rfc-graph CLI entry point

    Inconsistencies in the index abort the program with a message
    naming the culprit.
    """
    args = mk_argparser().parse_args(argv)
    try:
        args.func(args)
    except RfcGraphException as oops:
        sys.exit(str(oops))
