# License: BSD3

"""
Records of the RFC index and the vocabulary used to describe them.

Classes of interest:

* Record: one entry of the index, see `rfcgraph.parse.parse_record`
  to build one from a logical line of text

* Edge, Component: the results of the component analysis, see
  `rfcgraph.graph.Analysis`

Vocabulary
~~~~~~~~~~
The index tells us about two kinds of relation between documents,
"updates" and "obsoletes", each of which can be stated from either end
(`Updated by RFC0100` on the old document, `Updates RFC0050` on the new
one). The same ordering (updated < obsoleted) is used as a severity when
we classify documents, with `Classification.current` below both.

Documents also declare a formal status (`Status: PROPOSED STANDARD`)
which is independent of the classification and drawn from a closed
table; anything outside of that table is an error.
"""

from collections import namedtuple
from enum import Enum


# ---------------------------------------------------------------------
# errors
# ---------------------------------------------------------------------

class RfcGraphException(Exception):
    """
    Inconsistency in the index that makes the whole graph unreliable.
    These are not meant to be recovered from.
    """
    def __init__(self, msg):
        super(RfcGraphException, self).__init__(msg)


class UnknownIdentifierException(RfcGraphException):
    '''Reference to a document which is not in the index'''
    def __init__(self, ident):
        self.ident = ident
        super(UnknownIdentifierException, self).__init__(
            "Unknown RFC %s" % ident)


class UnrecognizedStatusException(RfcGraphException):
    '''Status annotation outside of the known table'''
    def __init__(self, value):
        self.value = value
        super(UnrecognizedStatusException, self).__init__(
            "Unknown status %s" % value)


class MalformedDateException(RfcGraphException):
    '''Date which is not of the form "Month Year"'''
    def __init__(self, ident, date):
        self.ident = ident
        self.date = date
        super(MalformedDateException, self).__init__(
            "Invalid RFC Date: %s (RFC %s)" % (date, ident))


class UnrecognizedRelationKindException(RfcGraphException):
    '''Relation word other than Updated/Updates/Obsoleted/Obsoletes'''
    def __init__(self, word):
        self.word = word
        super(UnrecognizedRelationKindException, self).__init__(
            "Invalid type %s" % word)


# ---------------------------------------------------------------------
# vocabulary
# ---------------------------------------------------------------------

class Classification(Enum):
    """
    How far a document has been superseded. Only ever escalates
    """
    current = 0
    updated = 1
    obsoleted = 2

    def node_attrs(self):
        "dot node attributes for documents of this classification"
        return dict(_CLASSIFICATION_ATTRS[self])


_CLASSIFICATION_ATTRS = {
    Classification.current: (('style', 'solid'),
                             ('fontname', 'Helvetica-Bold')),
    Classification.updated: (('style', 'solid'),
                             ('fontname', 'Helvetica')),
    Classification.obsoleted: (('style', 'dotted'),
                               ('fontname', 'Helvetica-Narrow')),
}


class RelationKind(Enum):
    """
    Kind of relation between two documents
    """
    updated = 1
    obsoleted = 2

    @property
    def classification(self):
        "the classification a document touched by this relation reaches"
        return Classification(self.value)

    def edge_attrs(self):
        "dot edge attributes for relations of this kind"
        if self is RelationKind.obsoleted:
            return {'style': 'dashed'}
        return {}


_RELATION_WORDS = {
    'Updated': RelationKind.updated,
    'Updates': RelationKind.updated,
    'Obsoleted': RelationKind.obsoleted,
    'Obsoletes': RelationKind.obsoleted,
}


def relation_kind(word):
    """
    Relation kind for the verb used in the index (either tense)

    :raises UnrecognizedRelationKindException: on any other word
    """
    try:
        return _RELATION_WORDS[word]
    except KeyError:
        raise UnrecognizedRelationKindException(word)


class LifecycleStatus(Enum):
    """
    Formal status of a document, as declared in the index
    """
    unknown = 0
    historic = 1
    experimental = 2
    informational = 3
    draft_standard = 4
    proposed_standard = 5
    internet_standard = 6
    best_current_practice = 7

    @classmethod
    def from_index(cls, value):
        """
        Status for its spelling in the index (eg. "PROPOSED STANDARD")

        :raises UnrecognizedStatusException: if the table does not
            know about this value
        """
        for status in cls:
            if _STATUS_INFO[status][0] == value:
                return status
        raise UnrecognizedStatusException(value)

    @property
    def legend(self):
        "name of the legend node for this status"
        return _STATUS_INFO[self][1]

    @property
    def shape(self):
        "dot node shape"
        return _STATUS_INFO[self][2]

    def node_attrs(self):
        "dot node attributes for documents with this status"
        return {'shape': self.shape}


# index spelling, legend name, shape
_STATUS_INFO = {
    LifecycleStatus.unknown:
    ('UNKNOWN', 'Unknown', 'none'),
    LifecycleStatus.historic:
    ('HISTORIC', 'Historic', 'cylinder'),
    LifecycleStatus.experimental:
    ('EXPERIMENTAL', 'Experimental', 'parallelogram'),
    LifecycleStatus.informational:
    ('INFORMATIONAL', 'Informational', 'house'),
    LifecycleStatus.draft_standard:
    ('DRAFT STANDARD', 'DraftStandard', 'polygon'),
    LifecycleStatus.proposed_standard:
    ('PROPOSED STANDARD', 'ProposedStandard', 'oval'),
    LifecycleStatus.internet_standard:
    ('INTERNET STANDARD', 'InternetStandard', 'box'),
    LifecycleStatus.best_current_practice:
    ('BEST CURRENT PRACTICE', 'BestCurrentPractice', 'trapezium'),
}


# ---------------------------------------------------------------------
# records
# ---------------------------------------------------------------------

class Record(object):
    """
    A single document from the index.

    :param ident: document number as written in the index (a string of
        digits, eg. "0050"; we never convert it to an int)
    :type ident: string

    :param forwards: documents this one is updated/obsoleted by
    :type forwards: dict from identifier to `RelationKind`

    :param backwards: documents this one updates/obsoletes
    :type backwards: dict from identifier to `RelationKind`

    :param params: parenthesised annotations we did not recognise,
        in the order they appear (eg. "Format: TXT, HTML")
    :type params: [string]
    """
    def __init__(self, ident, title, authors, date,
                 status=LifecycleStatus.unknown,
                 forwards=None, backwards=None, params=None):
        self.ident = ident
        self.title = title
        self.authors = authors
        self.date = date
        self.status = status
        self.classification = Classification.current
        self.forwards = forwards if forwards is not None else {}
        self.backwards = backwards if backwards is not None else {}
        self.params = params if params is not None else []

    def escalate(self, kind):
        """
        Raise our classification to at least that of the relation kind
        """
        target = kind.classification
        if target.value > self.classification.value:
            self.classification = target

    def year(self):
        """
        Year of publication (second half of a "Month Year" date)

        :raises MalformedDateException:
        """
        parts = self.date.split(' ')
        if len(parts) != 2:
            raise MalformedDateException(self.ident, self.date)
        try:
            return int(parts[1])
        except ValueError:
            raise MalformedDateException(self.ident, self.date)

    def __str__(self):
        return "%s;%s" % (self.ident, self.title)

    def __repr__(self):
        return "Record(%s)" % self.ident

    def __eq__(self, other):
        return (isinstance(other, self.__class__)
                and self.__dict__ == other.__dict__)

    def __ne__(self, other):
        return not self == other


class Edge(namedtuple('Edge', 'source target kind')):
    """
    Directed relation between two documents, pointing from the older
    document to the newer one. The tuple is its own identity: two
    edges with the same source, target and kind are the same edge
    """
    def attrs(self):
        "dot attributes for this edge"
        return self.kind.edge_attrs()


Component = namedtuple('Component', 'leader size')
