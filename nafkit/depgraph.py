# Author: Eric Kow
# License: BSD3

"""
Dependency graph view of a document.

Besides the obvious navigation (which dependencies leave or reach a
term, what is the head of a group of terms), this offers *dependency
paths* between terms and a small pattern language to match them.

Dependency paths
----------------
A path between two terms is the list of dependencies walked to get from
one to the other: up from the first term to a common ancestor, then down
to the second term. To match paths against patterns, we encode them as
strings. Each dependency label is given a letter (`a` for the first label
we ever see, `b` for the second, and so on; this alphabet is shared by
the whole process). A path is encoded as ::

    _<step>_<step>_..._

where each step consists of one `+x` or `-x` per dash-separated part of
the dependency label, `+` meaning that we walked the dependency in its
own direction (from governor to dependent), `-` meaning the opposite.

Patterns
--------
A pattern is a sequence of *tokens*, each an optional `-` followed by
either a letter of the alphabet or a full dependency label (eg. `nsubj`).
Each token matches one step containing that (signed) letter. Whitespace
is ignored, and any other character is taken to be a regular expression
operator. So `-nsubj dobj` matches going up an `nsubj` dependency and
then down a `dobj` one; `-nsubj+` one or more `nsubj` dependencies up.

A run of two or more letters is always read as a dependency label,
never as a sequence of single letters: to match the step `a` then the
step `b`, write `a b`, not `ab`.
"""

# pylint: disable=protected-access

import re
import threading

import funcparserlib.parser as fp
import pydot

from .layers import AnnotationType

_DEP_PATH_CHARS = {}
_DEP_PATH_CHARS_LOCK = threading.Lock()

_DEP_PATH_REGEXS = {}
_DEP_PATH_REGEXS_LOCK = threading.Lock()


def dep_path_char(label):
    """
    Letter standing for a dependency label in encoded paths (allocating
    one if we have not seen the label before). Labels are not case
    sensitive
    """
    key = label.lower()
    with _DEP_PATH_CHARS_LOCK:
        letter = _DEP_PATH_CHARS.get(key)
        if letter is None:
            letter = 'a'
            for char in _DEP_PATH_CHARS.values():
                if char >= letter:
                    letter = chr(ord(char) + 1)
            _DEP_PATH_CHARS[key] = letter
        return letter


def reset_dep_path_alphabet():
    """
    Forget all letter allocations and compiled patterns.
    Only meant for tests
    """
    with _DEP_PATH_REGEXS_LOCK:
        _DEP_PATH_REGEXS.clear()
    with _DEP_PATH_CHARS_LOCK:
        _DEP_PATH_CHARS.clear()


def encode_dep_path(from_term, path):
    """
    String encoding of a dependency path walked from the given term
    """
    res = ['_']
    term = from_term
    for dep in path:
        if dep.from_term is term:
            sign = '+'
            term = dep.to_term
        else:
            sign = '-'
            term = dep.from_term
        for label in dep.rfunc.split('-'):
            res.append(sign + dep_path_char(label))
        res.append('_')
    return ''.join(res)


# ---------------------------------------------------------------------
# pattern parsing
# ---------------------------------------------------------------------

_const = lambda x: lambda _: x
_unarg = lambda f: lambda x: f(*x)


def _token_regex(sign, word):
    """
    Regular expression for one step of a path
    """
    if len(word) == 1:
        letter = word.lower()
    else:
        letter = dep_path_char(word)
    return '([^_]*' + re.escape((sign or '+') + letter) + '[^_]*_)'


_letters = fp.oneplus(fp.some(lambda c: c.isalpha())) >> ''.join
_token = fp.maybe(fp.a('-')) + _letters >> _unarg(_token_regex)
_space = fp.some(lambda c: c.isspace()) >> _const('')
_literal = fp.some(lambda c: not c.isalpha() and not c.isspace())
_pattern = fp.many(_token | _space | _literal) + fp.skip(fp.finished) >> (
    lambda parts: '_' + ''.join(parts))


def dep_path_regex(pattern):
    """
    Compiled regular expression for a path pattern (see module doc)
    """
    with _DEP_PATH_REGEXS_LOCK:
        regex = _DEP_PATH_REGEXS.get(pattern)
        if regex is None:
            regex = re.compile(_pattern.parse(pattern))
            _DEP_PATH_REGEXS[pattern] = regex
        return regex


# ---------------------------------------------------------------------
# graph
# ---------------------------------------------------------------------


class DepGraph(object):
    """
    Read-only view on the dependencies of an annotation container
    """
    def __init__(self, container):
        self._container = container

    def deps(self):
        "All dependencies, in insertion order"
        return self._container.annotations(AnnotationType.DEP)

    def deps_by_term(self, term):
        "Dependencies from or to the term"
        return self._container.referencing(term, AnnotationType.DEP)

    def deps_from_term(self, term):
        "Dependencies governed by the term"
        return [x for x in self.deps_by_term(term) if x.from_term is term]

    def dep_to_term(self, term):
        """
        The dependency the term is the dependent of (None for roots)
        """
        for dep in self.deps_by_term(term):
            if dep.to_term is term:
                return dep
        return None

    def terms_head(self, terms):
        """
        The single term of the group that is not governed by another
        term of the group (None if there is no such term, or more
        than one)
        """
        members = []
        for term in terms:
            if term not in members:
                members.append(term)
        root = None
        for term in members:
            dep = self.dep_to_term(term)
            if dep is None or dep.from_term not in members:
                if root is None:
                    root = term
                else:
                    return None
        return root

    def terms_by_dep_ancestors(self, ancestors, pattern=None):
        """
        The given terms and all the terms below them, breadth-first.

        If a pattern is given, keep only those descendants whose path
        from their ancestor matches it
        """
        ancestors = list(ancestors)
        if pattern is not None:
            res = []
            for term in ancestors:
                for desc in self.terms_by_dep_ancestors([term]):
                    path = self.dep_path(term, desc)
                    if desc not in res and \
                            self.match_dep_path(term, path, pattern):
                        res.append(desc)
            return res
        res = []
        for term in ancestors:
            if term not in res:
                res.append(term)
        queue = list(res)
        while queue:
            term = queue.pop(0)
            for dep in self.deps_from_term(term):
                if dep.to_term not in res:
                    res.append(dep.to_term)
                    queue.append(dep.to_term)
        return res

    def _chain_up(self, term):
        "dependencies from a term up to its root"
        seen = set([term])
        dep = self.dep_to_term(term)
        while dep is not None and dep.from_term not in seen:
            yield dep
            seen.add(dep.from_term)
            dep = self.dep_to_term(dep.from_term)

    def dep_path(self, from_term, to_term):
        """
        Dependencies to walk from one term to the other: up from
        `from_term` to the closest common ancestor, then down to
        `to_term`.

        Returns
        -------
        path : list of Dep, or None
            Empty if the terms are the same one, None if they are not
            connected
        """
        if from_term is to_term:
            return []
        to_path = []
        for dep in self._chain_up(to_term):
            to_path.append(dep)
            if dep.from_term is from_term:
                return list(reversed(to_path))
        from_path = []
        for dep in self._chain_up(from_term):
            from_path.append(dep)
            if dep.from_term is to_term:
                return from_path
            for i, to_dep in enumerate(to_path):
                if dep.from_term is to_dep.from_term:
                    return from_path + list(reversed(to_path[:i + 1]))
        return None

    def match_dep_path(self, from_term, path, pattern):
        """
        True if the path walked from the term matches the pattern
        (see module doc)
        """
        if path is None:
            return False
        encoded = encode_dep_path(from_term, path)
        return dep_path_regex(pattern).fullmatch(encoded) is not None


class DepDotGraph(pydot.Dot):
    """
    A dot representation of the dependencies for visualisation:
    terms as nodes, dependencies as labelled arcs from governor to
    dependent. The `to_string()` method is most likely to be of
    interest here

    Parameters
    ----------
    depgraph : DepGraph
    terms : list of Term, optional
        Restrict the drawing to these terms (and the dependencies
        between them)
    """
    def __init__(self, depgraph, terms=None):
        super(DepDotGraph, self).__init__(graph_type='digraph')
        self.core = depgraph
        # no arcs for dependencies with a detached end
        deps = [x for x in depgraph.deps()
                if x.from_term is not None and x.to_term is not None]
        if terms is None:
            terms = []
            for dep in deps:
                for term in (dep.from_term, dep.to_term):
                    if term not in terms:
                        terms.append(term)
        for term in terms:
            self._add_term(term)
        for dep in deps:
            if dep.from_term in terms and dep.to_term in terms:
                self._add_dep(dep)

    @staticmethod
    def _dot_id(term):
        "quoted node id for a term"
        return '"%s"' % term.id

    def _add_term(self, term):
        attrs = {'label': '"%s"' % str(term).replace('"', '\\"'),
                 'shape': 'plaintext'}
        self.add_node(pydot.Node(self._dot_id(term), **attrs))

    def _add_dep(self, dep):
        attrs = {'label': dep.rfunc}
        self.add_edge(pydot.Edge(self._dot_id(dep.from_term),
                                 self._dot_id(dep.to_term), **attrs))
