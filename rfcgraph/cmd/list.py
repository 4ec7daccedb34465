# License: BSD3

"""
List the components of the index (leader, size, title)
"""

from ..args import (add_usual_input_args, read_analysis)

NAME = 'list'


def config_argparser(parser):
    """
    Subcommand flags.

    You should create and pass in the subparser to which the flags
    are to be added.
    """
    add_usual_input_args(parser)
    parser.set_defaults(func=main)


def main(args):
    """
    Subcommand main.

    You shouldn't need to call this yourself if you're using
    `config_argparser`
    """
    analysis = read_analysis(args)
    for component in analysis.sorted_components():
        leader = component.leader
        print("%s\t%d\t%s" % (leader.ident, component.size, leader.title))
