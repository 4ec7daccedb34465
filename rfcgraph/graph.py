# -*- coding: utf-8 -*-
#
# License: BSD3

"""
Graph representation of the RFC index.
Classes of interest:

* RfcGraph: the documents of the index, keyed by number, with the
  relations between them. Use `RfcGraph.from_strings` (or
  `rfcgraph.index.Reader`) to build one.

* Analysis: connected components of the graph, and the documents and
  relations that belong to the components we care about.

* DotGraph: visual representation of an `Analysis`.

Relations
~~~~~~~~~
Each document knows who it updates/obsoletes (backwards relations) and
who updates/obsoletes it (forwards relations). For the purpose of
finding components, we ignore the direction and treat both as links
to a neighbour ::

            0045
              ^
      Updates |
              |
            0050 -------------> 0076
                  Obsoleted by

A relation can name a document which is not in the index. We treat
this as an inconsistency in the index and refuse to go any further
(`UnknownIdentifierException`).

Leaders
~~~~~~~
Every component is represented by its leader, the member with the
smallest number. Numbers are compared as strings, not integers, so
"100" comes before "50". The index pads numbers to four digits so this
only makes a difference past RFC 9999.
"""

from collections import defaultdict
from itertools import chain

import pydot

from .parse import parse_record
from .record import (Classification, Component, Edge, LifecycleStatus,
                     UnknownIdentifierException)


class RfcGraph(object):
    """
    The documents of an index, keyed by their number.

    You most likely want to use `RfcGraph.from_strings` instead of
    instantiating and filling an instance yourself. If you do fill it
    yourself, remember to call `set_classifications` once all of the
    records are in.
    """
    def __init__(self):
        self._records = {}
        self._classified = False

    @classmethod
    def from_records(cls, records):
        """
        Graph of the given records, with classifications set

        :type records: iterable of `Record`
        """
        graph = cls()
        for record in records:
            graph.add(record)
        graph.set_classifications()
        return graph

    @classmethod
    def from_strings(cls, texts):
        """
        Graph of the records in the given logical lines (lines which
        don't look like records are skipped)

        :type texts: iterable of string
        """
        records = (parse_record(x) for x in texts)
        return cls.from_records(x for x in records if x is not None)

    def add(self, record):
        """
        Add a record, replacing any other record with the same number
        """
        self._records[record.ident] = record

    def get(self, ident):
        """
        Record with the given number

        :raises UnknownIdentifierException: if we don't have one
        """
        try:
            return self._records[ident]
        except KeyError:
            raise UnknownIdentifierException(ident)

    def idents(self):
        """
        Document numbers, in (string) order
        """
        return sorted(self._records)

    def __contains__(self, ident):
        return ident in self._records

    def __len__(self):
        return len(self._records)

    def __iter__(self):
        return (self._records[k] for k in self.idents())

    def neighbours(self, record):
        """
        Numbers of the documents related to this one in either
        direction (forwards first, then backwards)
        """
        return sorted(record.forwards) + sorted(record.backwards)

    def set_classifications(self):
        """
        Escalate the classification of every document touched by a
        relation, on either end, to at least the kind of that relation.

        Only the first call has any effect. The result does not depend
        on the order we visit the records in.

        :raises UnknownIdentifierException: if a relation points
            outside of the index
        """
        if self._classified:
            return
        for record in self:
            relations = chain(record.forwards.items(),
                              record.backwards.items())
            for ident, kind in relations:
                record.escalate(kind)
                self.get(ident).escalate(kind)
        self._classified = True


def traverse(graph, start):
    """
    Every document reachable from `start`, relations taken in either
    direction, each exactly once, in depth-first order.

    :raises UnknownIdentifierException:
    :rtype: iterable of `Record`
    """
    seen = set()
    stack = [start]
    while stack:
        ident = stack.pop()
        if ident in seen:
            continue
        record = graph.get(ident)
        seen.add(ident)
        yield record
        # reversed so that we pop the neighbours in their natural order
        stack.extend(reversed(graph.neighbours(record)))


# ---------------------------------------------------------------------
# components
# ---------------------------------------------------------------------

class Analysis(object):
    """
    Connected components of a graph.

    Every document belongs to at most one *processed* component; we
    accumulate these along with the relations between their members,
    which is what `DotGraph` draws. Components which are too small are
    counted but not processed, so they may be counted again from
    another root.

    :param graph: graph with classifications set
    :type graph: `RfcGraph`
    """
    def __init__(self, graph):
        self.graph = graph
        self.processed = set()
        self.edges = set()
        self.components = []

    def count_component(self, ident, exclude=None):
        """
        Size and leader of the component of `ident`, not counting
        anything in `exclude` (by default, the processed documents).

        Returns `Component(None, 0)` if `ident` itself is excluded.

        :raises UnknownIdentifierException:
        :rtype: `Component`
        """
        if exclude is None:
            exclude = self.processed
        visited = set()
        stack = [ident]
        while stack:
            current = stack.pop()
            if current in exclude or current in visited:
                continue
            record = self.graph.get(current)
            visited.add(current)
            stack.extend(self.graph.neighbours(record))
        if not visited:
            return Component(None, 0)
        leader = self.graph.get(min(visited))
        return Component(leader, len(visited))

    def collect_edges(self, ident):
        """
        Mark the component of `ident` as processed, and remember the
        relations between its members.

        Relations always point from the superseded document to its
        successor, whichever side declared them.

        :raises UnknownIdentifierException:
        """
        stack = [ident]
        while stack:
            current = stack.pop()
            if current in self.processed:
                continue
            record = self.graph.get(current)
            self.processed.add(current)
            for other, kind in record.forwards.items():
                self.edges.add(Edge(current, other, kind))
                stack.append(other)
            for other, kind in record.backwards.items():
                self.edges.add(Edge(other, current, kind))
                stack.append(other)

    def find_components(self, roots=None, min_size=0):
        """
        Look for components with at least `min_size` members (and at
        least one), starting from each of the roots in turn. Process
        and return them.

        :param roots: document numbers to start from; all of the
            documents in the graph if empty or None
        :type roots: [string]

        :raises UnknownIdentifierException: if a root (or anything it
            leads to) is not in the graph
        :rtype: [`Component`]
        """
        if not roots:
            roots = self.graph.idents()
        found = []
        for root in roots:
            self.graph.get(root)
            component = self.count_component(root)
            if component.size > 0 and component.size >= min_size:
                found.append(component)
                self.collect_edges(component.leader.ident)
        self.components.extend(found)
        return found

    def processed_records(self):
        """
        Documents in the processed components, in (string) order
        """
        return [self.graph.get(x) for x in sorted(self.processed)]

    def sorted_components(self):
        """
        Components found so far, by leader
        """
        return sorted(self.components, key=lambda c: c.leader.ident)

    def sorted_edges(self):
        """
        Relations between processed documents, by source then target
        """
        return sorted(self.edges,
                      key=lambda e: (e.source, e.target, e.kind.value))


# ---------------------------------------------------------------------
# visualisation
# ---------------------------------------------------------------------

LEGEND = 'Legend'
"""
Name of the node anchoring the legend to the timeline
"""


class DotGraph(pydot.Dot):
    """
    A dot representation of the processed components of an analysis.
    The `to_string()` method is most likely to be of interest here.

    Documents are drawn with a shape that depends on their status, and
    a style that depends on their classification. We group documents
    with the same look so that we only need to set the node defaults
    once per group.

    With `timeline`, documents are also ranked by year of publication
    along a chain of year nodes, and we add a legend of the shapes.

    :param analysis: analysis with processed components
    :type analysis: `Analysis`

    :param timeline: rank documents by year
    :type timeline: boolean

    :raises MalformedDateException: (timeline only) if a document
        does not have a "Month Year" date
    """
    def __init__(self, analysis, timeline=False):
        super(DotGraph, self).__init__(graph_type='digraph')
        self.set_name('rfc')
        self.core = analysis
        records = analysis.processed_records()

        if timeline:
            ranks = defaultdict(list)
            for record in records:
                ranks[record.year()].append(record)
            if ranks:
                first, last = min(ranks), max(ranks)
                self._add_timeline(first, last)

        self._add_records(records)

        if timeline:
            if ranks:
                for year in range(first, last + 1):
                    if year in ranks:
                        self._add_rank([str(year)] +
                                       [x.ident for x in ranks[year]])
            self._add_legend()

        for edge in analysis.sorted_edges():
            self.add_edge(pydot.Edge(edge.source, edge.target,
                                     **edge.attrs()))

    def _add_defaults(self, attrs):
        "node defaults for subsequent nodes"
        self.add_node(pydot.Node('node', **attrs))

    def _add_timeline(self, first, last):
        self._add_defaults({'shape': 'plaintext'})
        for year in range(first, last):
            self.add_edge(pydot.Edge(str(year), str(year + 1)))
        self.add_edge(pydot.Edge(str(last), LEGEND, style='invis'))

    def _add_records(self, records):
        groups = defaultdict(list)
        for record in records:
            groups[(record.classification, record.status)].append(record)
        for classification in Classification:
            for status in LifecycleStatus:
                group = groups.get((classification, status))
                if not group:
                    continue
                attrs = status.node_attrs()
                attrs.update(classification.node_attrs())
                self._add_defaults(attrs)
                for record in group:
                    self.add_node(pydot.Node(record.ident))

    def _add_rank(self, names):
        subg = pydot.Subgraph(rank='same')
        for name in names:
            subg.add_node(pydot.Node(name))
        self.add_subgraph(subg)

    def _add_legend(self):
        for status in LifecycleStatus:
            attrs = status.node_attrs()
            attrs['style'] = 'solid'
            self._add_defaults(attrs)
            self.add_node(pydot.Node(status.legend))
        self._add_rank([LEGEND] + [x.legend for x in LifecycleStatus])

    def write_drawing(self, path, fmt='svg'):
        """
        Run graphviz on this graph, saving the picture to `path`
        """
        self.write(path, format=fmt)
