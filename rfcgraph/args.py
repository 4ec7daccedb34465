# License: BSD3

"""
Command line options
"""

import argparse
import os
import sys

from .graph import Analysis
from .index import Reader

DEFAULT_INDEX = 'rfc-index.txt'


def min_size(string):
    """
    Non-negative component size. Used for argparse
    """
    try:
        size = int(string)
    except ValueError:
        size = -1
    if size < 0:
        msg = "%r is not a non-negative integer" % string
        raise argparse.ArgumentTypeError(msg)
    return size


def comma_idents(string):
    """
    Split a comma delimited list of document numbers, complaining if
    we find something that is not a number. Used for argparse
    """
    idents = [x.strip() for x in string.split(',') if x.strip()]
    for ident in idents:
        if not ident.isdigit():
            msg = "%r is not a document number" % ident
            raise argparse.ArgumentTypeError(msg)
    return idents


def add_usual_input_args(parser, components=True):
    """
    Augment a subcommand argparser with typical input arguments.

    :param components: also ask which components we are interested in
        (minimum size and roots)
    :type components: boolean
    """
    parser.add_argument('--index', '-i', metavar='FILE',
                        default=DEFAULT_INDEX,
                        help='RFC index file (default: %(default)s)')
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='Report progress on stderr')
    if components:
        parser.add_argument('--size', '-s', metavar='N',
                            type=min_size, default=0,
                            help='Minimum component size (default: 0)')
        parser.add_argument('--root', '-r', metavar='ID[,ID...]',
                            type=comma_idents, default=[],
                            help='Component roots (default: all documents)')


def read_graph(args):
    """
    Read the index specified in the command line arguments
    """
    if not os.path.isfile(args.index):
        sys.exit("No index file {index}".format(index=args.index))
    return Reader(args.index).slurp(verbose=args.verbose)


def read_analysis(args):
    """
    Read the index and find the components specified in the command
    line arguments
    """
    analysis = Analysis(read_graph(args))
    found = analysis.find_components(roots=args.root, min_size=args.size)
    if args.verbose:
        print("Found %d components (%d documents)" %
              (len(found), len(analysis.processed)), file=sys.stderr)
    return analysis
