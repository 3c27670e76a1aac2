# Author: Eric Kow
# License: BSD3

"""
Word forms and the lexical annotations built directly over them:
terms, multiword compounds, markables
"""

# pylint: disable=too-many-instance-attributes, protected-access

from .annotation import (Annotation, IdentifiableAnnotation,
                         WithExternalRefs, AnnotationException,
                         as_span, _refs)
from .layers import AnnotationType


class WF(IdentifiableAnnotation):
    """
    Word form: a token of the raw text.

    Unlike other annotations, a word form knows its own position
    (offset, sentence, paragraph) rather than deriving it from what
    it refers to. The paragraph may be left unset; the container then
    takes it from the preceding word forms
    """
    ANNOTATION_TYPE = AnnotationType.WF
    _ATTRIBUTES = (('offset', 'offset'),
                   ('length', 'length'),
                   ('sent', 'sent'),
                   ('para', 'para'),
                   ('page', 'page'),
                   ('xpath', 'xpath'))

    # plain attributes, shadowing the derived ones of Annotation
    offset = None
    sent = None
    para = None

    def __init__(self, anno_id, offset, length, form, sent,
                 para=None, page=None, xpath=None):
        IdentifiableAnnotation.__init__(self, anno_id)
        self.offset = offset
        self.length = length
        self.form = form
        self.sent = sent
        self.para = para
        self.page = page
        self.xpath = xpath

    def __str__(self):
        return self.form

    def _anchor(self):
        return self


class Sentiment(Annotation):
    """
    Sentiment-related information attached to a term
    """
    ANNOTATION_TYPE = AnnotationType.SENTIMENT
    _ATTRIBUTES = (('resource', 'resource'),
                   ('polarity', 'polarity'),
                   ('strength', 'strength'),
                   ('subjectivity', 'subjectivity'),
                   ('semantic_type', 'sentiment_semantic_type'),
                   ('modifier', 'sentiment_modifier'),
                   ('marker', 'sentiment_marker'),
                   ('product_feature', 'sentiment_product_feature'))

    def __init__(self, polarity=None, resource=None):
        Annotation.__init__(self)
        self.resource = resource
        self.polarity = polarity
        self.strength = None
        self.subjectivity = None
        self.semantic_type = None
        self.modifier = None
        self.marker = None
        self.product_feature = None

    def __str__(self):
        if self.resource is None:
            return self.polarity or ''
        return '%s: %s' % (self.resource, self.polarity)


class Term(IdentifiableAnnotation, WithExternalRefs):
    """
    A lexical unit over one or more word forms.

    A term may be broken down into component terms (eg. the parts of
    a German compound noun), one of which may be singled out as the
    head. Components belong to exactly one compound and take their
    position in the text from it.

    Parameters
    ----------
    anno_id : string or None
    span : Span or list of WF
    """
    ANNOTATION_TYPE = AnnotationType.TERM
    _ATTRIBUTES = (('type', 'type'),
                   ('lemma', 'lemma'),
                   ('pos', 'pos'),
                   ('morphofeat', 'morphofeat'),
                   ('case', 'case'))

    def __init__(self, anno_id=None, span=None):
        IdentifiableAnnotation.__init__(self, anno_id)
        self.span = as_span(span)
        self.type = None
        self.lemma = None
        self.pos = None
        self.morphofeat = None
        self.case = None
        self.sentiment = None
        self.components = []
        self.head = None
        self.compound = None
        self.external_refs = []

    def __str__(self):
        return str(self.span)

    def referenced(self):
        return _refs((AnnotationType.WF, self.span),
                     (AnnotationType.COMPONENT, self.components))

    def sub_annotations(self):
        subs = []
        if self.sentiment is not None:
            subs.append((AnnotationType.SENTIMENT, self.sentiment))
        subs.extend((AnnotationType.COMPONENT, x) for x in self.components)
        return subs

    def _anchor(self):
        if self.compound is not None:
            return self.compound._anchor()
        first = self.span.first_target()
        if first is None and self.components:
            first = self.components[0].span.first_target()
        return first

    def is_component(self):
        "True if this term is part of some compound"
        return self.compound is not None

    def create_sentiment(self, polarity=None, resource=None):
        """
        Attach a fresh sentiment to the term (replacing any former one)
        and return it
        """
        self.set_sentiment(Sentiment(polarity=polarity, resource=resource))
        return self.sentiment

    def set_sentiment(self, sentiment):
        "Attach (or with None, detach) a sentiment"
        self._disown(self.sentiment, keep=sentiment)
        self.sentiment = sentiment
        if sentiment is not None:
            self._adopt(sentiment)

    def add_component(self, component, is_head=False):
        """
        Make a term one of our components (and possibly our head)
        """
        if component.compound is not None and component.compound is not self:
            raise AnnotationException("%r is already a component of %r" %
                                      (component, component.compound))
        component.atype = AnnotationType.COMPONENT
        component.compound = self
        self.components.append(component)
        if is_head:
            self.head = component
        self._adopt(component)
        return component

    def set_head(self, component):
        "Single out one of our components as the head"
        if not any(x is component for x in self.components):
            raise AnnotationException("Head %r is not a component of %r" %
                                      (component, self))
        self.head = component


class Compound(Term):
    """
    A multiword expression, made of component terms (which carry the
    word forms)

    Parameters
    ----------
    anno_id : string or None
    components : list of Term
    head : Term, optional
        Must be one of the components
    """
    ANNOTATION_TYPE = AnnotationType.MW

    def __init__(self, anno_id=None, components=None, head=None):
        Term.__init__(self, anno_id)
        for component in components or []:
            self.add_component(component)
        if head is not None:
            self.set_head(head)

    def __str__(self):
        return ' '.join(str(x) for x in self.components)


class Mark(IdentifiableAnnotation, WithExternalRefs):
    """
    A markable: an arbitrary span of word forms singled out by some external
    resource, with optional lexical information of its own
    """
    ANNOTATION_TYPE = AnnotationType.MARK
    _ATTRIBUTES = (('type', 'type'),
                   ('lemma', 'lemma'),
                   ('pos', 'pos'),
                   ('morphofeat', 'morphofeat'),
                   ('case', 'case'),
                   ('source', 'source'))

    def __init__(self, anno_id=None, span=None):
        IdentifiableAnnotation.__init__(self, anno_id)
        self.span = as_span(span)
        self.type = None
        self.lemma = None
        self.pos = None
        self.morphofeat = None
        self.case = None
        self.source = None
        self.external_refs = []

    def __str__(self):
        return str(self.span)

    def referenced(self):
        return _refs((AnnotationType.WF, self.span))
