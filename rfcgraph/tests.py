# -*- coding: utf-8 -*-
#
# License: BSD3
"""
Tests for rfcgraph
"""

from contextlib import redirect_stdout
import io
import os
import shutil
import tempfile
import unittest

from rfcgraph import parse as p
from rfcgraph.cmd.count import count_table
from rfcgraph.graph import (Analysis, DotGraph, RfcGraph, traverse)
from rfcgraph.index import (Reader, logical_records)
from rfcgraph.main import main
from rfcgraph.record import (Classification, Component, Edge,
                             LifecycleStatus, MalformedDateException,
                             Record, RelationKind,
                             UnknownIdentifierException,
                             UnrecognizedRelationKindException,
                             UnrecognizedStatusException,
                             relation_kind)


ex_index = """

                        RFC INDEX
                      -------------

(CREATED ON: 10/19/2026.)

This file contains citations for all RFCs in numeric order.

0014 Not Issued.

0045 New Protocol is Coming. J. Postel, S.D. Crocker. April 1970.
     (Format: TXT, HTML) (Updated by RFC0050) (Status: UNKNOWN) (DOI:
     10.17487/RFC0045)

0050 Comments on the Meyer File Transfer Protocol. R.E. Schantz.
     April 1970. (Format: TXT, HTML) (Updates RFC0045) (Obsoleted by
     RFC0076) (Status: UNKNOWN) (DOI: 10.17487/RFC0050)

0076 Connection by name: User oriented protocol. J. Bouknight, J.
     Madden, G.R. Grossman. October 1970. (Format: TXT, HTML) (Obsoletes
     RFC0050) (Status: HISTORIC) (DOI: 10.17487/RFC0076)

0100 Categorization and guide to NWG/RFCs. P.M. Karp. February 1971.
     (Format: TXT, HTML) (Status: UNKNOWN) (DOI: 10.17487/RFC0100)
"""

ex_record = ("0050 Comments on the Meyer File Transfer Protocol. "
             "R.E. Schantz. April 1970. (Format: TXT, HTML) "
             "(Updates RFC0045) (Obsoleted by RFC0076) (Status: UNKNOWN) "
             "(DOI: 10.17487/RFC0050)")

ex_newer = "100 Title A. Auth. May 1990. (Obsoletes RFC50)"
ex_older = ("50 Title B. Auth. April 1989. (Obsoleted by RFC100) "
            "(Status: HISTORIC)")


def ex_graph():
    "graph for the example index"
    return RfcGraph.from_strings(logical_records(ex_index.splitlines()))


def mk_record(ident, forwards=None, backwards=None, date='May 1990'):
    "record with a made-up title"
    return Record(ident, 'Title ' + ident, 'Author', date,
                  forwards=forwards, backwards=backwards)


# ---------------------------------------------------------------------
# parsing
# ---------------------------------------------------------------------

class RefsTest(unittest.TestCase):

    def test_list(self):
        self.assertEqual(['0001', '0002'], p.parse_refs('RFC0001, RFC0002'))

    def test_empty(self):
        self.assertEqual([], p.parse_refs(''))
        self.assertEqual([], p.parse_refs('RFC'))
        self.assertEqual([], p.parse_refs('STD0001'))

    def test_noise(self):
        expected = ['0001', '12']
        txt = 'RFC0001 and RFCxyz, then RFC12 too'
        self.assertEqual(expected, p.parse_refs(txt))


class ParamsTest(unittest.TestCase):

    def test_simple(self):
        expected = ['Format: TXT', 'Status: HISTORIC']
        txt = '(Format: TXT) (Status: HISTORIC)'
        self.assertEqual(expected, p.split_params(txt))

    def test_empty(self):
        self.assertEqual([], p.split_params(''))
        self.assertEqual([], p.split_params('no parens here'))

    def test_noise(self):
        self.assertEqual(['a'], p.split_params('junk (a) more (b'))
        self.assertEqual(['x'], p.split_params('()(x)'))

    def test_nested(self):
        # a token runs to the first closing paren
        self.assertEqual(['a (b'], p.split_params('(a (b) c)'))


class RulesTest(unittest.TestCase):

    def test_forwards(self):
        expected = p.Forwards({'0076': RelationKind.obsoleted})
        self.assertEqual(expected, p.forwards_rule('Obsoleted by RFC0076'))
        self.assertEqual(expected, p.classify_param('Obsoleted by RFC0076'))
        self.assertIsNone(p.forwards_rule('Obsoletes RFC0076'))

    def test_backwards(self):
        expected = p.Backwards({'0045': RelationKind.updated,
                                '0046': RelationKind.updated})
        txt = 'Updates RFC0045, RFC0046'
        self.assertEqual(expected, p.backwards_rule(txt))
        self.assertEqual(expected, p.classify_param(txt))
        self.assertIsNone(p.backwards_rule('Updated by RFC0045'))

    def test_status(self):
        expected = p.Status(LifecycleStatus.proposed_standard)
        txt = 'Status: PROPOSED STANDARD'
        self.assertEqual(expected, p.status_rule(txt))
        self.assertEqual(expected, p.classify_param(txt))

    def test_bad_status(self):
        self.assertRaises(UnrecognizedStatusException,
                          p.classify_param, 'Status: DRAFT')

    def test_param(self):
        txt = 'DOI: 10.17487/RFC0050'
        self.assertIsNone(p.forwards_rule(txt))
        self.assertIsNone(p.backwards_rule(txt))
        self.assertIsNone(p.status_rule(txt))
        self.assertEqual(p.Param(txt), p.classify_param(txt))

    def test_malformed_refs(self):
        # still a relation annotation, just an empty one
        self.assertEqual(p.Backwards({}), p.classify_param('Updates nothing'))


class RecordParseTest(unittest.TestCase):

    def test_record(self):
        rec = p.parse_record(ex_record)
        self.assertEqual('0050', rec.ident)
        self.assertEqual('Comments on the Meyer File Transfer Protocol',
                         rec.title)
        self.assertEqual('R.E. Schantz', rec.authors)
        self.assertEqual('April 1970', rec.date)
        self.assertEqual(LifecycleStatus.unknown, rec.status)
        self.assertEqual(Classification.current, rec.classification)
        self.assertEqual({'0076': RelationKind.obsoleted}, rec.forwards)
        self.assertEqual({'0045': RelationKind.updated}, rec.backwards)
        self.assertEqual(['Format: TXT, HTML', 'DOI: 10.17487/RFC0050'],
                         rec.params)

    def test_idempotent(self):
        self.assertEqual(p.parse_record(ex_record), p.parse_record(ex_record))

    def test_status(self):
        rec = p.parse_record(ex_older)
        self.assertEqual(LifecycleStatus.historic, rec.status)
        self.assertEqual({'100': RelationKind.obsoleted}, rec.forwards)
        self.assertEqual('April 1989', rec.date)

    def test_many_authors(self):
        txt = ("0076 Connection by name: User oriented protocol. "
               "J. Bouknight, J. Madden, G.R. Grossman. October 1970. "
               "(Format: TXT, HTML)")
        rec = p.parse_record(txt)
        self.assertEqual('J. Bouknight, J. Madden, G.R. Grossman',
                         rec.authors)
        self.assertEqual('October 1970', rec.date)

    def test_noise(self):
        self.assertIsNone(p.parse_record('RFC INDEX -------------'))
        self.assertIsNone(p.parse_record('0014 Not Issued.'))
        self.assertIsNone(p.parse_record(''))

    def test_bad_status(self):
        txt = "0001 Host Software. S. Crocker. April 1969. (Status: SOON)"
        self.assertRaises(UnrecognizedStatusException, p.parse_record, txt)

    def test_str(self):
        self.assertEqual('0050;Comments on the Meyer File Transfer Protocol',
                         str(p.parse_record(ex_record)))


class VocabularyTest(unittest.TestCase):

    def test_relation_kind(self):
        self.assertEqual(RelationKind.updated, relation_kind('Updates'))
        self.assertEqual(RelationKind.updated, relation_kind('Updated'))
        self.assertEqual(RelationKind.obsoleted, relation_kind('Obsoletes'))
        self.assertEqual(RelationKind.obsoleted, relation_kind('Obsoleted'))
        self.assertRaises(UnrecognizedRelationKindException,
                          relation_kind, 'Replaces')

    def test_status_table(self):
        self.assertEqual(LifecycleStatus.best_current_practice,
                         LifecycleStatus.from_index('BEST CURRENT PRACTICE'))
        self.assertEqual(LifecycleStatus.unknown,
                         LifecycleStatus.from_index('UNKNOWN'))
        self.assertRaises(UnrecognizedStatusException,
                          LifecycleStatus.from_index, 'historic')

    def test_escalate(self):
        rec = mk_record('1')
        rec.escalate(RelationKind.obsoleted)
        rec.escalate(RelationKind.updated)
        self.assertEqual(Classification.obsoleted, rec.classification)

    def test_year(self):
        self.assertEqual(1990, mk_record('1').year())
        for date in ['1 April 2008', 'April', 'April MCMXC']:
            rec = mk_record('1', date=date)
            self.assertRaises(MalformedDateException, rec.year)


class IndexTest(unittest.TestCase):

    def test_logical_records(self):
        lines = ['a\n', '   b  \n', '\n', '\n', 'c\n', 'd']
        self.assertEqual(['a b', 'c d'], list(logical_records(lines)))

    def test_reader(self):
        tdir = tempfile.mkdtemp()
        try:
            path = os.path.join(tdir, 'rfc-index.txt')
            with open(path, 'w') as fout:
                fout.write(ex_index)
            graph = Reader(path).slurp()
        finally:
            shutil.rmtree(tdir)
        self.assertEqual(['0045', '0050', '0076', '0100'], graph.idents())
        self.assertEqual(Classification.obsoleted,
                         graph.get('0050').classification)


# ---------------------------------------------------------------------
# graph
# ---------------------------------------------------------------------

class GraphTest(unittest.TestCase):

    def test_lookup(self):
        graph = ex_graph()
        self.assertEqual(4, len(graph))
        self.assertIn('0045', graph)
        self.assertEqual('0045', graph.get('0045').ident)
        self.assertRaises(UnknownIdentifierException, graph.get, '9999')

    def test_last_write_wins(self):
        graph = RfcGraph()
        graph.add(mk_record('1'))
        graph.add(Record('1', 'Other', 'Author', 'May 1990'))
        self.assertEqual('Other', graph.get('1').title)
        self.assertEqual(1, len(graph))

    def test_classifications(self):
        graph = ex_graph()
        self.assertEqual(Classification.updated,
                         graph.get('0045').classification)
        self.assertEqual(Classification.obsoleted,
                         graph.get('0050').classification)
        self.assertEqual(Classification.obsoleted,
                         graph.get('0076').classification)
        self.assertEqual(Classification.current,
                         graph.get('0100').classification)

    def test_classification_order(self):
        texts = list(logical_records(ex_index.splitlines()))
        graph1 = RfcGraph.from_strings(texts)
        graph2 = RfcGraph.from_strings(reversed(texts))
        for rec in graph1:
            self.assertEqual(rec.classification,
                             graph2.get(rec.ident).classification)

    def test_classification_once(self):
        graph = ex_graph()
        graph.get('0045').classification = Classification.current
        graph.set_classifications()
        self.assertEqual(Classification.current,
                         graph.get('0045').classification)

    def test_never_current_if_obsoleted(self):
        graph = ex_graph()
        for rec in graph:
            kinds = set(rec.forwards.values()) | set(rec.backwards.values())
            for other in graph:
                if rec.ident in other.forwards:
                    kinds.add(other.forwards[rec.ident])
                if rec.ident in other.backwards:
                    kinds.add(other.backwards[rec.ident])
            if RelationKind.obsoleted in kinds:
                self.assertEqual(Classification.obsoleted,
                                 rec.classification)
            elif kinds:
                self.assertEqual(Classification.updated, rec.classification)

    def test_unknown_reference(self):
        graph = RfcGraph()
        graph.add(mk_record('1', backwards={'2': RelationKind.updated}))
        self.assertRaises(UnknownIdentifierException,
                          graph.set_classifications)

    def test_example(self):
        graph = RfcGraph.from_strings([ex_newer, ex_older])
        older = graph.get('50')
        newer = graph.get('100')
        self.assertEqual(LifecycleStatus.historic, older.status)
        self.assertEqual(Classification.obsoleted, older.classification)
        self.assertEqual(Classification.obsoleted, newer.classification)
        for start in ['50', '100']:
            component = Analysis(graph).count_component(start)
            self.assertEqual(2, component.size)
            self.assertEqual('100', component.leader.ident)
        analysis = Analysis(graph)
        analysis.find_components()
        self.assertEqual(set([Edge('50', '100', RelationKind.obsoleted)]),
                         analysis.edges)


class TraverseTest(unittest.TestCase):

    def test_order(self):
        graph = ex_graph()
        expected = ['0076', '0050', '0045']
        self.assertEqual(expected, [x.ident for x in traverse(graph, '0076')])
        self.assertEqual(['0100'], [x.ident for x in traverse(graph, '0100')])

    def test_cycle(self):
        graph = RfcGraph.from_records([
            mk_record('1', forwards={'2': RelationKind.updated}),
            mk_record('2', forwards={'3': RelationKind.updated}),
            mk_record('3', forwards={'1': RelationKind.updated}),
        ])
        self.assertEqual(['1', '2', '3'],
                         [x.ident for x in traverse(graph, '1')])

    def test_symmetry(self):
        graph = ex_graph()
        for rec in graph:
            for other in rec.forwards:
                self.assertIn(other, graph.neighbours(rec))
                self.assertIn(rec.ident, graph.neighbours(graph.get(other)))

    def test_unknown(self):
        graph = RfcGraph()
        graph.add(mk_record('1', forwards={'2': RelationKind.updated}))
        walk = traverse(graph, '1')
        self.assertEqual('1', next(walk).ident)
        self.assertRaises(UnknownIdentifierException, next, walk)
        self.assertRaises(UnknownIdentifierException,
                          list, traverse(graph, '3'))


class AnalysisTest(unittest.TestCase):

    def mk_leader_graph(self):
        "component whose leader is not the numerically smallest"
        return RfcGraph.from_records([
            mk_record('100', forwards={'5': RelationKind.updated}),
            mk_record('5', backwards={'100': RelationKind.updated},
                      forwards={'23': RelationKind.obsoleted}),
            mk_record('23', backwards={'5': RelationKind.obsoleted}),
        ])

    def test_leader(self):
        graph = self.mk_leader_graph()
        for start in ['100', '5', '23']:
            component = Analysis(graph).count_component(start)
            self.assertEqual(Component(graph.get('100'), 3), component)

    def test_excluded(self):
        analysis = Analysis(ex_graph())
        analysis.find_components()
        self.assertEqual(Component(None, 0),
                         analysis.count_component('0050'))
        self.assertEqual(Component(None, 0),
                         analysis.count_component('0050',
                                                  exclude=set(['0050'])))

    def test_exclude_partial(self):
        analysis = Analysis(ex_graph())
        component = analysis.count_component('0076',
                                              exclude=set(['0045']))
        self.assertEqual(2, component.size)
        self.assertEqual('0050', component.leader.ident)

    def test_partition(self):
        graph = ex_graph()
        analysis = Analysis(graph)
        found = analysis.find_components(min_size=0)
        self.assertEqual(len(graph), sum(x.size for x in found))
        self.assertEqual(set(graph.idents()), analysis.processed)
        self.assertEqual(['0045', '0100'],
                         [x.leader.ident for x in found])

    def test_min_size(self):
        analysis = Analysis(ex_graph())
        found = analysis.find_components(min_size=2)
        self.assertEqual(1, len(found))
        self.assertEqual(3, found[0].size)
        self.assertEqual(set(['0045', '0050', '0076']), analysis.processed)
        self.assertEqual(['0045', '0050', '0076'],
                         [x.ident for x in analysis.processed_records()])

    def test_roots(self):
        analysis = Analysis(ex_graph())
        found = analysis.find_components(roots=['0076', '0050'])
        self.assertEqual([Component(analysis.graph.get('0045'), 3)], found)
        self.assertRaises(UnknownIdentifierException,
                          analysis.find_components, roots=['9999'])

    def test_edges(self):
        analysis = Analysis(ex_graph())
        analysis.find_components()
        expected = set([Edge('0045', '0050', RelationKind.updated),
                        Edge('0050', '0076', RelationKind.obsoleted)])
        self.assertEqual(expected, analysis.edges)

    def test_idempotent(self):
        graph = ex_graph()
        analysis1 = Analysis(graph)
        analysis1.find_components()
        analysis2 = Analysis(graph)
        analysis2.find_components()
        analysis2.find_components()
        self.assertEqual(analysis1.edges, analysis2.edges)
        self.assertEqual(analysis1.processed, analysis2.processed)

    def test_sorted_components(self):
        graph = self.mk_leader_graph()
        graph.add(mk_record('7'))
        analysis = Analysis(graph)
        analysis.find_components(roots=['7', '5'])
        self.assertEqual(['100', '7'],
                         [x.leader.ident for x in
                          analysis.sorted_components()])


# ---------------------------------------------------------------------
# visualisation
# ---------------------------------------------------------------------

class DotGraphTest(unittest.TestCase):

    def mk_analysis(self, min_size=0):
        analysis = Analysis(ex_graph())
        analysis.find_components(min_size=min_size)
        return analysis

    def test_deterministic(self):
        text1 = DotGraph(self.mk_analysis()).to_string()
        text2 = DotGraph(self.mk_analysis()).to_string()
        self.assertEqual(text1, text2)
        self.assertTrue(text1.startswith('digraph rfc {'))

    def test_edges(self):
        dot = DotGraph(self.mk_analysis())
        self.assertEqual(2, len(dot.get_edge_list()))
        updated = dot.get_edge('0045', '0050')
        obsoleted = dot.get_edge('0050', '0076')
        self.assertEqual(1, len(updated))
        self.assertEqual(1, len(obsoleted))
        self.assertIsNone(updated[0].get('style'))
        self.assertEqual('dashed', obsoleted[0].get('style'))
        text = dot.to_string()
        self.assertLess(text.index('0045 -> 0050'),
                        text.index('0050 -> 0076'))

    def test_sorted_edges(self):
        analysis = Analysis(RfcGraph())
        analysis.edges.update([Edge('2', '1', RelationKind.updated),
                               Edge('1', '3', RelationKind.updated),
                               Edge('1', '2', RelationKind.obsoleted)])
        self.assertEqual([('1', '2'), ('1', '3'), ('2', '1')],
                         [(e.source, e.target)
                          for e in analysis.sorted_edges()])

    def test_groups(self):
        dot = DotGraph(self.mk_analysis())
        defaults = dot.get_node('node')
        # (updated, unknown), (obsoleted, unknown), (obsoleted, historic),
        # (current, unknown)
        self.assertEqual(4, len(defaults))
        historic = [x.get_attributes() for x in defaults
                    if x.get('shape') == 'cylinder']
        self.assertEqual([{'shape': 'cylinder',
                           'style': 'dotted',
                           'fontname': 'Helvetica-Narrow'}], historic)
        for ident in ['0045', '0050', '0076', '0100']:
            self.assertEqual(1, len(dot.get_node(ident)))

    def test_only_processed(self):
        dot = DotGraph(self.mk_analysis(min_size=2))
        self.assertEqual([], dot.get_node('0100'))
        self.assertEqual(3, len(dot.get_node('node')))

    def test_timeline(self):
        dot = DotGraph(self.mk_analysis(), timeline=True)
        self.assertEqual(1, len(dot.get_edge('1970', '1971')))
        legend_edge = dot.get_edge('1971', 'Legend')
        self.assertEqual('invis', legend_edge[0].get('style'))
        ranks = dot.get_subgraph_list()
        self.assertEqual(3, len(ranks))
        for subg in ranks:
            self.assertEqual('same', subg.get('rank'))
        self.assertEqual(['1970', '0045', '0050', '0076'],
                         [x.get_name() for x in ranks[0].get_node_list()])
        self.assertEqual(['1971', '0100'],
                         [x.get_name() for x in ranks[1].get_node_list()])
        legend = [x.get_name() for x in ranks[2].get_node_list()]
        self.assertEqual(['Legend'] + [x.legend for x in LifecycleStatus],
                         legend)
        for status in LifecycleStatus:
            self.assertEqual(1, len(dot.get_node(status.legend)))

    def test_timeline_single_year(self):
        dot = DotGraph(self.mk_analysis(min_size=2), timeline=True)
        self.assertEqual(1, len(dot.get_edge('1970', 'Legend')))
        self.assertEqual([], dot.get_edge('1970', '1971'))

    def test_timeline_bad_date(self):
        graph = RfcGraph.from_records([
            mk_record('1', forwards={'2': RelationKind.updated}),
            mk_record('2', date='1 April 2008'),
        ])
        analysis = Analysis(graph)
        analysis.find_components()
        DotGraph(analysis)
        self.assertRaises(MalformedDateException,
                          DotGraph, analysis, timeline=True)

    def test_count_table(self):
        table = count_table(self.mk_analysis())
        self.assertIn('obsoleted', table)
        self.assertIn('Historic', table)
        self.assertIn('total', table)


# ---------------------------------------------------------------------
# command line
# ---------------------------------------------------------------------

class CommandLineTest(unittest.TestCase):

    def setUp(self):
        self.tdir = tempfile.mkdtemp()
        self.index = os.path.join(self.tdir, 'rfc-index.txt')
        with open(self.index, 'w') as fout:
            fout.write(ex_index)

    def tearDown(self):
        shutil.rmtree(self.tdir)

    def run_main(self, argv):
        "stdout of the command"
        out = io.StringIO()
        with redirect_stdout(out):
            main(argv)
        return out.getvalue()

    def test_list(self):
        expected = ("0045\t3\tNew Protocol is Coming\n"
                    "0100\t1\tCategorization and guide to NWG/RFCs\n")
        self.assertEqual(expected, self.run_main(['list', '-i', self.index]))
        expected = "0045\t3\tNew Protocol is Coming\n"
        self.assertEqual(expected,
                         self.run_main(['list', '-i', self.index, '-s', '2']))
        self.assertEqual(expected,
                         self.run_main(['list', '-i', self.index,
                                        '-r', '0050']))

    def test_tree(self):
        expected = ("0076;Connection by name: User oriented protocol\n"
                    "0050;Comments on the Meyer File Transfer Protocol\n"
                    "0045;New Protocol is Coming\n")
        self.assertEqual(expected,
                         self.run_main(['tree', '0076', '-i', self.index]))

    def test_graph(self):
        text = self.run_main(['graph', '-i', self.index, '-s', '2'])
        self.assertTrue(text.startswith('digraph rfc {'))
        self.assertIn('0050 -> 0076', text)
        self.assertNotIn('0100', text)

    def test_graph_output(self):
        output = os.path.join(self.tdir, 'rfc.dot')
        stdout = self.run_main(['graph', '-i', self.index, '-t',
                                '-o', output])
        self.assertEqual('', stdout)
        with open(output) as fin:
            text = fin.read()
        self.assertTrue(text.startswith('digraph rfc {'))
        self.assertIn('Legend', text)

    def test_count(self):
        text = self.run_main(['count', '-i', self.index])
        self.assertTrue(text.startswith('2 components'))

    def test_unknown(self):
        with self.assertRaises(SystemExit) as cm:
            self.run_main(['tree', '9999', '-i', self.index])
        self.assertEqual('Unknown RFC 9999', cm.exception.code)

    def test_dangling_reference(self):
        with open(self.index, 'a') as fout:
            fout.write("\n0200 Dangling. Someone. May 1971. "
                       "(Updates RFC0199)\n")
        with self.assertRaises(SystemExit) as cm:
            self.run_main(['list', '-i', self.index])
        self.assertEqual('Unknown RFC 0199', cm.exception.code)

    def test_bad_date(self):
        output = os.path.join(self.tdir, 'rfc.dot')
        with open(self.index, 'a') as fout:
            fout.write("\n0200 Joke. Someone. 1 April 1971. "
                       "(Updates RFC0100)\n")
        with self.assertRaises(SystemExit):
            self.run_main(['graph', '-i', self.index, '-t', '-o', output])
        self.assertFalse(os.path.exists(output))

    def test_missing_index(self):
        missing = os.path.join(self.tdir, 'nope.txt')
        with self.assertRaises(SystemExit) as cm:
            self.run_main(['list', '-i', missing])
        self.assertIn('nope.txt', cm.exception.code)

    def test_bad_args(self):
        for argv in [['list', '-s', '-1'],
                     ['list', '-r', '12,abc'],
                     ['tree', 'abc'],
                     ['graph', '-i', self.index, '--draw', 'svg']]:
            with self.assertRaises(SystemExit):
                self.run_main(argv)


if __name__ == '__main__':
    unittest.main()
