# License: BSD3

"""
Draw the components of the index as a graphviz graph

The graph is written to stdout unless you ask for an output file.
Documents are shaped by status and styled by how far they have been
superseded; dashed edges are obsoletions, plain ones updates.
"""

import codecs
import os
import sys

from rfcgraph.graph import DotGraph

from ..args import (add_usual_input_args, read_analysis)

NAME = 'graph'


def config_argparser(parser):
    """
    Subcommand flags.

    You should create and pass in the subparser to which the flags
    are to be added.
    """
    add_usual_input_args(parser)
    parser.add_argument('--timeline', '-t', action='store_true',
                        help='Rank documents by year and add a legend')
    parser.add_argument('--output', '-o', metavar='FILE',
                        help='Write the graph here instead of stdout')
    parser.add_argument('--draw', metavar='FORMAT',
                        help='Also run graphviz, saving a picture in this '
                        'format (eg. svg) next to the output file')
    parser.set_defaults(func=main)


def main(args):
    """
    Subcommand main.

    You shouldn't need to call this yourself if you're using
    `config_argparser`
    """
    if args.draw and not args.output:
        sys.exit("--draw requires --output")
    # build everything before opening the output so that we don't
    # leave a half-written file behind
    dot_graph = DotGraph(read_analysis(args), timeline=args.timeline)
    text = dot_graph.to_string()
    if not args.output:
        sys.stdout.write(text)
        return
    with codecs.open(args.output, 'w', 'utf-8') as fout:
        fout.write(text)
    if args.draw:
        picture = os.path.splitext(args.output)[0] + '.' + args.draw
        dot_graph.write_drawing(picture, fmt=args.draw)
    if args.verbose:
        print("Output written to", args.output, file=sys.stderr)

# vim: syntax=python:
