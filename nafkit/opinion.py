# Author: Eric Kow
# License: BSD3

"""
Opinions (who thinks what about what) and attributed statements
(who said what, and how we know)
"""

# pylint: disable=too-few-public-methods, protected-access

from .annotation import (Annotation, IdentifiableAnnotation,
                         AnnotationException, as_span, _refs)
from .layers import AnnotationType


class _TermSpanPart(Annotation):
    """
    Part of an opinion or statement, over a span of terms.
    Parts have no identifier; they are known by their owner
    """
    def __init__(self, span=None):
        Annotation.__init__(self)
        self.span = as_span(span)

    def __str__(self):
        return str(self.span)

    def add_term(self, term, is_head=False):
        "Extend the part with one more term"
        self.span.add_target(term, is_head)
        self._index_late(term)

    def referenced(self):
        return _refs((AnnotationType.TERM, self.span))


class OpinionHolder(_TermSpanPart):
    "Who holds the opinion"
    ANNOTATION_TYPE = AnnotationType.OPINION_HOLDER
    _ATTRIBUTES = (('type', 'type'),)

    def __init__(self, span=None, type=None):
        # pylint: disable=redefined-builtin
        _TermSpanPart.__init__(self, span)
        self.type = type


class OpinionTarget(_TermSpanPart):
    "What the opinion is about"
    ANNOTATION_TYPE = AnnotationType.OPINION_TARGET


class OpinionExpression(_TermSpanPart):
    "How the opinion is expressed"
    ANNOTATION_TYPE = AnnotationType.OPINION_EXPRESSION
    _ATTRIBUTES = (('polarity', 'polarity'),
                   ('strength', 'strength'),
                   ('subjectivity', 'subjectivity'),
                   ('semantic_type', 'sentiment_semantic_type'),
                   ('product_feature', 'sentiment_product_feature'))

    def __init__(self, span=None, polarity=None, strength=None,
                 subjectivity=None, semantic_type=None,
                 product_feature=None):
        _TermSpanPart.__init__(self, span)
        self.polarity = polarity
        self.strength = strength
        self.subjectivity = subjectivity
        self.semantic_type = semantic_type
        self.product_feature = product_feature


class Opinion(IdentifiableAnnotation):
    """
    An opinion, made of an optional holder, target and expression
    """
    ANNOTATION_TYPE = AnnotationType.OPINION

    def __init__(self, anno_id=None):
        IdentifiableAnnotation.__init__(self, anno_id)
        self.holder = None
        self.target = None
        self.expression = None

    def __str__(self):
        return '%s / %s / %s' % (self.holder, self.target, self.expression)

    def create_holder(self, span, type=None):
        "Set a fresh opinion holder and return it"
        # pylint: disable=redefined-builtin
        self._disown(self.holder)
        self.holder = self._adopt(OpinionHolder(span, type=type))
        return self.holder

    def create_target(self, span):
        "Set a fresh opinion target and return it"
        self._disown(self.target)
        self.target = self._adopt(OpinionTarget(span))
        return self.target

    def create_expression(self, span, **kwargs):
        """
        Set a fresh opinion expression and return it.
        Keyword arguments are those of `OpinionExpression`
        """
        self._disown(self.expression)
        self.expression = self._adopt(OpinionExpression(span, **kwargs))
        return self.expression

    def _parts(self):
        "(type, part) for each part that is set"
        return [(x.atype, x) for x in (self.holder, self.target,
                                       self.expression)
                if x is not None]

    def referenced(self):
        return _refs(*[(t, [x]) for t, x in self._parts()])

    def sub_annotations(self):
        return self._parts()


class StatementTarget(_TermSpanPart):
    "What was stated"
    ANNOTATION_TYPE = AnnotationType.STATEMENT_TARGET


class StatementSource(_TermSpanPart):
    "Who stated it"
    ANNOTATION_TYPE = AnnotationType.STATEMENT_SOURCE


class StatementCue(_TermSpanPart):
    "What signals that something was stated (eg. a reporting verb)"
    ANNOTATION_TYPE = AnnotationType.STATEMENT_CUE


class Statement(IdentifiableAnnotation):
    """
    An attributed statement: what was said (mandatory), and optionally
    by whom, and what tells us so
    """
    ANNOTATION_TYPE = AnnotationType.STATEMENT

    def __init__(self, target, anno_id=None):
        IdentifiableAnnotation.__init__(self, anno_id)
        if target is None:
            raise AnnotationException("A statement needs a target")
        self.target = None
        self.source = None
        self.cue = None
        self.set_target(target)

    def __str__(self):
        return str(self.target)

    def set_target(self, target):
        "Replace what was stated"
        self._disown(self.target, keep=target)
        self.target = self._adopt(target)

    def set_source(self, source):
        "Set who stated it"
        self._disown(self.source, keep=source)
        self.source = self._adopt(source)

    def set_cue(self, cue):
        "Set what signals the statement"
        self._disown(self.cue, keep=cue)
        self.cue = self._adopt(cue)

    def _parts(self):
        "(type, part) for each part that is set"
        return [(x.atype, x) for x in (self.target, self.source, self.cue)
                if x is not None]

    def referenced(self):
        return _refs(*[(t, [x]) for t, x in self._parts()])

    def sub_annotations(self):
        return self._parts()
