# License: BSD3

"""
Count the documents in the components by classification and status
"""

from collections import Counter

from tabulate import tabulate

from rfcgraph.record import (Classification, LifecycleStatus)

from ..args import (add_usual_input_args, read_analysis)

NAME = 'count'

def config_argparser(parser):
    """
    Subcommand flags.

    You should create and pass in the subparser to which the flags
    are to be added.
    """
    add_usual_input_args(parser)
    parser.set_defaults(func=main)


def count_table(analysis):
    """
    Table of document counts (as a string), one row for each
    classification/status pair that occurs, followed by a total
    """
    counts = Counter((x.classification, x.status)
                     for x in analysis.processed_records())
    rows = []
    for classification in Classification:
        for status in LifecycleStatus:
            num = counts[(classification, status)]
            if num:
                rows.append([classification.name, status.legend, num])
    rows.append(['total', '', sum(counts.values())])
    headers = ['classification', 'status', 'documents']
    return tabulate(rows, headers=headers)


def main(args):
    """
    Subcommand main.

    You shouldn't need to call this yourself if you're using
    `config_argparser`
    """
    analysis = read_analysis(args)
    print("%d components" % len(analysis.components))
    print(count_table(analysis))
