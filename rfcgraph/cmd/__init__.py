"""
rfc-graph subcommands
"""

# License: BSD3

# pylint: disable=redefined-builtin
# (we have a command called list)
from . import (count,
               graph,
               list,
               tree)

# argparse doesn't support a way to group subcommands into sections,
# so we just abuse the command epilog
SUBCOMMAND_SECTIONS = [
    ('Drawing', [
        graph,
    ]),
    ('Querying', [
        list,
        tree,
        count,
    ]),
]

SUBCOMMANDS = []
for descr, section in SUBCOMMAND_SECTIONS:
    SUBCOMMANDS.extend(section)
