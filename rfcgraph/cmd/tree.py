# License: BSD3

"""
Show every document related (directly or not) to a given one
"""

import argparse

from rfcgraph.graph import traverse

from ..args import (add_usual_input_args, read_graph)

NAME = 'tree'


def ident(string):
    """
    Document number. Used for argparse
    """
    if not string.isdigit():
        msg = "%r is not a document number" % string
        raise argparse.ArgumentTypeError(msg)
    return string


def config_argparser(parser):
    """
    Subcommand flags.

    You should create and pass in the subparser to which the flags
    are to be added.
    """
    parser.add_argument('start', metavar='ID', type=ident,
                        help='Document to start from (eg. 4346)')
    add_usual_input_args(parser, components=False)
    parser.set_defaults(func=main)


def main(args):
    """
    Subcommand main.

    You shouldn't need to call this yourself if you're using
    `config_argparser`
    """
    graph = read_graph(args)
    for record in traverse(graph, args.start):
        print(record)
