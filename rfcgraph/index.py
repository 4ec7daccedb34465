# License: BSD3

"""
Reading the RFC index file.

The index (`rfc-index.txt`) wraps each entry over several lines and
separates entries with blank lines. We glue the physical lines of each
entry back together before handing them to the parser.
"""

import codecs
import sys

from .graph import RfcGraph
from .parse import parse_record


def logical_records(lines):
    """
    Join blank-line delimited blocks of lines into single strings
    (stripping each line, and separating them by a space)

    :type lines: iterable of string
    :rtype: iterable of string
    """
    block = []
    for line in lines:
        line = line.strip()
        if line:
            block.append(line)
        elif block:
            yield " ".join(block)
            block = []
    if block:
        yield " ".join(block)


class Reader(object):
    """
    Reader for a single index file

    .. code-block:: python

        reader = Reader('rfc-index.txt')
        graph = reader.slurp()
        graph.get('0050').title

    :param path: path to the index file
    :type path: string
    """
    def __init__(self, path):
        self.path = path

    def records(self):
        """
        Logical records in the index (including the header and footer
        blurbs, which the parser will skip)
        """
        with codecs.open(self.path, 'r', 'utf-8') as stream:
            for text in logical_records(stream):
                yield text

    def slurp(self, verbose=False):
        """
        Read the whole index and return the graph of its documents,
        with classifications set.

        :param verbose: if True, print what we're reading to stderr
        :type verbose: boolean
        """
        graph = RfcGraph()
        counter = 0
        skipped = 0
        for text in self.records():
            record = parse_record(text)
            if record is None:
                skipped += 1
                continue
            graph.add(record)
            counter += 1
            if verbose and counter % 500 == 0:
                sys.stderr.write("\rSlurping index %s [%d]" %
                                 (self.path, counter))
        graph.set_classifications()
        if verbose:
            sys.stderr.write("\rSlurping index %s [%d done, %d skipped]\n" %
                             (self.path, counter, skipped))
        return graph
