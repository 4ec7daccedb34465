"""
The rfcgraph library turns the RFC index (the flat, human-written
list of all RFCs) into a graph of which documents update or obsolete
which, and draws the connected parts of it with graphviz.

Layers
~~~~~~
* records (rfcgraph.record): documents of the index, and the closed
  vocabulary of relation kinds, classifications and statuses

* parsing (rfcgraph.parse, rfcgraph.index): from the text of the
  index to records

* graph (rfcgraph.graph): the documents keyed by number, their
  connected components, and the dot rendering of those components

* command line (rfcgraph.main, rfcgraph.cmd): the `rfc-graph` script
  and its subcommands ::

        cmd ------+
         |        |
         v        v
       index -> graph
         |        |
         v        v
       parse -> record

Anything wrong with the index (a reference to a document which is not
listed, an unknown status, ...) raises a `rfcgraph.record.RfcGraphException`.
We do not try to carry on: a graph with holes in it would be misleading.
"""
