# License: BSD3

"""
Parser for entries of the RFC index.

The function `parse_record` takes a single logical record (all the
physical lines of one entry joined by spaces, see `rfcgraph.index`) and
returns a `rfcgraph.record.Record`, or None if the text does not look
like an entry at all (headers, footers, "Not Issued" entries). A typical
entry reads ::

    0050 Comments on the Meyer File Transfer Protocol. R.E. Schantz.
    April 1970. (Format: TXT, HTML) (Updates RFC0045) (Obsoleted by
    RFC0076) (Status: UNKNOWN) (DOI: 10.17487/RFC0050)

Everything up to the last full stop is the descriptive text (title,
authors, date); the rest is a sequence of parenthesised annotations.
Each annotation is matched against a list of rules, in order, the first
match winning:

+---------------------------+---------------+---------------------+
| rule                      | example       | result              |
+===========================+===============+=====================+
| `forwards_rule`           | Obsoleted by  | `Forwards`          |
+---------------------------+---------------+---------------------+
| `backwards_rule`          | Updates       | `Backwards`         |
+---------------------------+---------------+---------------------+
| `status_rule`             | Status:       | `Status`            |
+---------------------------+---------------+---------------------+
| (none of the above)       | Format:       | `Param`             |
+---------------------------+---------------+---------------------+
"""

from collections import namedtuple
import re

from funcparserlib.lexer import make_tokenizer
import funcparserlib.parser as fp

from .record import (Record, LifecycleStatus, relation_kind)


# ---------------------------------------------------------------------
# funcparserlib utilities
# ---------------------------------------------------------------------

def _tok(kind):
    """
    Parser for a single token of the given type, returning its text
    """
    return fp.some(lambda t: t.type == kind) >> (lambda t: t.value)


def _mkstr(xs):
    return "".join(xs)


_any = fp.some(lambda _: True)


# ---------------------------------------------------------------------
# references
# ---------------------------------------------------------------------

_tokenize_refs = make_tokenizer([
    ('REF', (r'RFC[0-9]+',)),
    ('OTHER', (r'[^R]+|R',)),
])

_other = _tok('OTHER')
_ref = _tok('REF') >> (lambda x: x[len('RFC'):])
_refs = (fp.many(fp.skip(fp.many(_other)) + _ref) +
         fp.skip(fp.many(_other)) +
         fp.skip(fp.finished))


def parse_refs(text):
    """
    Document numbers mentioned in a reference list, in order of
    appearance ("RFC0045, RFC0046" => ["0045", "0046"]).

    Anything that is not a reference is ignored. A list without any
    references is not an error; we just return the empty list.
    """
    return _refs.parse(list(_tokenize_refs(text)))


# ---------------------------------------------------------------------
# annotations
# ---------------------------------------------------------------------
#
# The annotations are a loose sequence of parenthesised tokens, eg.
# "(Format: TXT) (Status: HISTORIC)". Each token runs from an opening
# paren to the next closing paren (so it may contain an opening paren
# but not a closing one). Text in between tokens is skipped, as is any
# trailing text which does not form a complete token.

_tokenize_params = make_tokenizer([
    ('LPAREN', (r'\(',)),
    ('RPAREN', (r'\)',)),
    ('TEXT', (r'[^()]+',)),
])

_lparen = _tok('LPAREN')
_rparen = _tok('RPAREN')
_text = _tok('TEXT')

# "()" cannot hold a token, treat it like any other noise
_noise = fp.many(_text | _rparen | _lparen + _rparen)
_param = (fp.skip(_noise) +
          fp.skip(_lparen) +
          (fp.oneplus(_text | _lparen) >> _mkstr) +
          fp.skip(_rparen))
_params = (fp.many(_param) +
           fp.skip(fp.many(_any)) +
           fp.skip(fp.finished))


def split_params(text):
    """
    Contents of the parenthesised tokens in the annotation part of
    an entry, in order, eg. "(Format: TXT) (Status: HISTORIC)" =>
    ["Format: TXT", "Status: HISTORIC"]
    """
    return _params.parse(list(_tokenize_params(text)))


class Forwards(namedtuple('Forwards', 'relations')):
    '''"Obsoleted by RFC0100": the record is superseded by others'''
    def apply_to(self, record):
        "fold this annotation into the record"
        record.forwards.update(self.relations)


class Backwards(namedtuple('Backwards', 'relations')):
    '''"Obsoletes RFC0050": the record supersedes others'''
    def apply_to(self, record):
        "fold this annotation into the record"
        record.backwards.update(self.relations)


class Status(namedtuple('Status', 'status')):
    '''"Status: HISTORIC"'''
    def apply_to(self, record):
        "fold this annotation into the record"
        record.status = self.status


class Param(namedtuple('Param', 'text')):
    '''any other annotation, kept verbatim'''
    def apply_to(self, record):
        "fold this annotation into the record"
        record.params.append(self.text)


_FORWARD_RE = re.compile(r'(Obsoleted|Updated) by (.*)')
_BACKWARD_RE = re.compile(r'(Obsoletes|Updates) (.*)')
_STATUS_RE = re.compile(r'Status:\s*(.*)')


def _relations(match):
    kind = relation_kind(match.group(1))
    return dict((ref, kind) for ref in parse_refs(match.group(2)))


def forwards_rule(param):
    """
    `Forwards` if the annotation says who updates/obsoletes us,
    None otherwise
    """
    match = _FORWARD_RE.search(param)
    if match is None:
        return None
    return Forwards(_relations(match))


def backwards_rule(param):
    """
    `Backwards` if the annotation says who we update/obsolete,
    None otherwise
    """
    match = _BACKWARD_RE.search(param)
    if match is None:
        return None
    return Backwards(_relations(match))


def status_rule(param):
    """
    `Status` if the annotation declares the status of the document,
    None otherwise

    :raises UnrecognizedStatusException: if the annotation is a status
        but not one we know about
    """
    match = _STATUS_RE.search(param)
    if match is None:
        return None
    return Status(LifecycleStatus.from_index(match.group(1)))


RULES = [forwards_rule,
         backwards_rule,
         status_rule]
"""
Annotation rules, in the order we try them
"""


def classify_param(param):
    """
    Interpretation of a single annotation: the result of the first
    rule in `RULES` that matches, or a `Param` if none do
    """
    for rule in RULES:
        res = rule(param)
        if res is not None:
            return res
    return Param(param)


# ---------------------------------------------------------------------
# records
# ---------------------------------------------------------------------

_RECORD_RE = re.compile(r'^([0-9]+) (.+)\. (.*)')


def parse_record(text):
    """
    Read a logical record from the index.

    Returns None if the text does not have the shape of an entry;
    these are just to be skipped.

    :raises UnrecognizedStatusException:
    """
    match = _RECORD_RE.match(text)
    if match is None:
        return None
    ident, description, annotations = match.groups()
    parts = description.split(". ")
    record = Record(ident,
                    title=parts[0],
                    authors=". ".join(parts[1:-1]),
                    date=parts[-1])
    for param in split_params(annotations):
        classify_param(param).apply_to(record)
    return record
