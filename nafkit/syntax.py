# Author: Eric Kow
# License: BSD3

"""
Syntactic annotations: chunks, dependencies and constituency trees.

Constituency trees can be built from (and viewed as) NLTK trees, so
that bracketed parser output can be laid over existing terms
"""

# pylint: disable=protected-access

from collections import deque

import nltk.tree

from .annotation import (Annotation, IdentifiableAnnotation,
                         AnnotationException, as_span, _refs)
from .layers import AnnotationType


class Chunk(IdentifiableAnnotation):
    """
    A phrase over a non-empty span of terms, optionally with a head
    """
    ANNOTATION_TYPE = AnnotationType.CHUNK
    _ATTRIBUTES = (('phrase', 'phrase'),
                   ('case', 'case'))

    def __init__(self, anno_id=None, span=None, phrase=None):
        IdentifiableAnnotation.__init__(self, anno_id)
        self.span = as_span(span)
        if self.span.is_empty():
            raise AnnotationException("A chunk must cover at least "
                                      "one term")
        self.phrase = phrase
        self.case = None

    def __str__(self):
        return str(self.span)

    @property
    def head(self):
        "Head term of the chunk (None if not set)"
        return self.span.head

    def add_term(self, term, is_head=False):
        "Extend the chunk with one more term"
        self.span.add_target(term, is_head)
        self._index_late(term)

    def referenced(self):
        return _refs((AnnotationType.TERM, self.span))


class Dep(Annotation):
    """
    A dependency relation from a governing term to a dependent one.
    Dependencies have no identifier
    """
    ANNOTATION_TYPE = AnnotationType.DEP
    _ATTRIBUTES = (('rfunc', 'rfunc'),
                   ('case', 'case'))

    def __init__(self, from_term, to_term, rfunc, case=None):
        Annotation.__init__(self)
        if from_term is None or to_term is None:
            raise AnnotationException("A dependency needs both ends")
        self.from_term = from_term
        self.to_term = to_term
        self.rfunc = rfunc
        self.case = case

    def __str__(self):
        return '%s(%s, %s)' % (self.rfunc, self.from_term, self.to_term)

    def __repr__(self):
        return '<Dep %s %s->%s>' % (self.rfunc,
                                    getattr(self.from_term, 'id', None),
                                    getattr(self.to_term, 'id', None))

    def referenced(self):
        return _refs((AnnotationType.TERM, [self.from_term, self.to_term]))


class TreeNode(IdentifiableAnnotation):
    """
    Node of a constituency tree.

    Every node but the root is connected to its parent by an edge,
    which has an identifier of its own (`edge_id`), and may be
    flagged as the head of its parent
    """
    def __init__(self, anno_id=None):
        IdentifiableAnnotation.__init__(self, anno_id)
        self.edge_id = None
        self.head = False

    def is_terminal(self):
        "True for leaves"
        return False

    def has_edge_id(self):
        "True if the edge to our parent has an identifier"
        return self.edge_id is not None

    def is_head(self):
        "True if we are the head child of our parent"
        return self.head

    def nodes(self):
        """
        This node and every node below it, depth-first, pre-order
        """
        yield self


class NonTerminal(TreeNode):
    """
    Labelled internal node of a constituency tree
    """
    ANNOTATION_TYPE = AnnotationType.NON_TERMINAL
    _ATTRIBUTES = (('label', 'label'),)

    def __init__(self, anno_id=None, label=None):
        TreeNode.__init__(self, anno_id)
        self.label = label
        self.children = []

    def __str__(self):
        return ' '.join(str(x) for x in self.children)

    def add_child(self, child, is_head=False):
        """
        Append a node to the right of our current children
        """
        if is_head:
            child.head = True
        self.children.append(child)
        self._adopt(child)
        return child

    def head_child(self):
        "First child flagged as head (None if there is none)"
        for child in self.children:
            if child.head:
                return child
        return None

    def nodes(self):
        yield self
        for child in self.children:
            for node in child.nodes():
                yield node

    def referenced(self):
        return _refs((AnnotationType.NON_TERMINAL,
                      [x for x in self.children if not x.is_terminal()]),
                     (AnnotationType.TERMINAL,
                      [x for x in self.children if x.is_terminal()]))

    def sub_annotations(self):
        return [(x.atype, x) for x in self.children]

    def _anchor(self):
        for child in self.children:
            wf = child._anchor()
            if wf is not None:
                return wf
        return None


class Terminal(TreeNode):
    """
    Leaf of a constituency tree, covering a span of terms
    """
    ANNOTATION_TYPE = AnnotationType.TERMINAL

    def __init__(self, anno_id=None, span=None):
        TreeNode.__init__(self, anno_id)
        self.span = as_span(span)

    def __str__(self):
        return str(self.span)

    def is_terminal(self):
        return True

    def referenced(self):
        return _refs((AnnotationType.TERM, self.span))


class Tree(IdentifiableAnnotation):
    """
    A constituency tree, known by its root node
    """
    ANNOTATION_TYPE = AnnotationType.TREE
    _ATTRIBUTES = (('type', 'type'),)

    def __init__(self, root, type=None, anno_id=None):
        # pylint: disable=redefined-builtin
        IdentifiableAnnotation.__init__(self, anno_id)
        if root is None:
            raise AnnotationException("A tree needs a root")
        self.root = root
        self.type = type
        root._parent = self

    def __str__(self):
        return str(self.root)

    def nodes(self):
        "Every node of the tree, depth-first, pre-order"
        return self.root.nodes()

    def referenced(self):
        return _refs((self.root.atype, [self.root]))

    def sub_annotations(self):
        return [(self.root.atype, self.root)]

    def _anchor(self):
        return self.root._anchor()

    @classmethod
    def from_nltk(cls, ntree, terms, type=None):
        """Build a tree by laying an NLTK tree over some terms.

        The terms should correspond 1:1 to the leaves of the NLTK tree;
        each leaf becomes a terminal over the matching term, each
        internal node a non-terminal with the same label.

        Parameters
        ----------
        ntree : nltk.Tree
        terms : iterable of Term

        Returns
        -------
        tree : Tree
        """
        # pylint: disable=redefined-builtin
        terms = deque(terms)
        if len(ntree.leaves()) != len(terms):
            raise AnnotationException('Must have same number of terms '
                                      '(%d) as leaves in the tree (%d)' %
                                      (len(terms), len(ntree.leaves())))

        def step(node):
            """Recursive helper for tree building"""
            if not isinstance(node, nltk.tree.Tree):
                return Terminal(span=[terms.popleft()])
            nterm = NonTerminal(label=node.label())
            for kid in node:
                nterm.add_child(step(kid))
            return nterm
        return cls(step(ntree), type=type)

    @classmethod
    def from_parentheses(cls, text, terms, type=None):
        """
        Build a tree from a bracketed parse, eg. `(S (NP I) (VP run))`.
        See `from_nltk`
        """
        # pylint: disable=redefined-builtin
        return cls.from_nltk(nltk.tree.Tree.fromstring(text), terms,
                             type=type)

    def to_nltk(self):
        """
        Return an NLTK view of this tree, with the surface form of
        the terms as leaves
        """
        def step(node):
            """Recursive helper for tree conversion"""
            if node.is_terminal():
                return str(node)
            return nltk.tree.Tree(node.label,
                                  [step(kid) for kid in node.children])
        if self.root.is_terminal():
            return nltk.tree.Tree('', [step(self.root)])
        return step(self.root)
