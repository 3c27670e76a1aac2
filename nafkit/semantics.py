# Author: Eric Kow
# License: BSD3

"""
Semantic annotations: entities and coreference, semantic roles,
features (properties and categories), linked entities, relations,
topics and factuality
"""

# pylint: disable=too-few-public-methods, protected-access

from .annotation import (Annotation, IdentifiableAnnotation,
                         WithExternalRefs, AnnotationException,
                         as_span, _refs)
from .layers import AnnotationType


def _mention_spans(spans, what):
    """
    Check the mentions of an entity-like annotation: there must be at
    least one, and none may be empty
    """
    spans = [as_span(x) for x in spans or []]
    if not spans:
        raise AnnotationException("%s must have at least one span" % what)
    for i, span in enumerate(spans):
        if span.is_empty():
            raise AnnotationException("%s has no terms in span %d" %
                                      (what, i))
    return spans


class _WithMentions(IdentifiableAnnotation, WithExternalRefs):
    """
    Annotation over a list of term spans (the mentions)
    """
    def __init__(self, anno_id, spans):
        IdentifiableAnnotation.__init__(self, anno_id)
        self.spans = _mention_spans(spans, self.__class__.__name__)
        self.external_refs = []

    def __str__(self):
        return ' / '.join(str(x) for x in self.spans)

    @property
    def terms(self):
        "Every term of every mention, in order"
        return [t for span in self.spans for t in span]

    def add_span(self, span):
        "Add a mention (which must not be empty)"
        span = as_span(span)
        if span.is_empty():
            raise AnnotationException("%s has no terms in span %d" %
                                      (self.__class__.__name__,
                                       len(self.spans)))
        self.spans.append(span)
        self._index_late(*span.targets)
        return span

    def referenced(self):
        return _refs((AnnotationType.TERM, self.terms))


class Entity(_WithMentions):
    """
    Named entity, with all its mentions in the text
    """
    ANNOTATION_TYPE = AnnotationType.ENTITY
    _ATTRIBUTES = (('type', 'type'),
                   ('source', 'source'))

    def __init__(self, anno_id=None, spans=None, type=None):
        # pylint: disable=redefined-builtin
        _WithMentions.__init__(self, anno_id, spans)
        self.type = type
        self.source = None


class Coref(_WithMentions):
    """
    Cluster of coreferring term spans
    """
    ANNOTATION_TYPE = AnnotationType.COREF
    _ATTRIBUTES = (('type', 'type'),)

    def __init__(self, anno_id=None, spans=None, type=None):
        # pylint: disable=redefined-builtin
        _WithMentions.__init__(self, anno_id, spans)
        self.type = type


class Role(IdentifiableAnnotation, WithExternalRefs):
    """
    Semantic role of a predicate, over a span of terms
    """
    ANNOTATION_TYPE = AnnotationType.ROLE
    _ATTRIBUTES = (('sem_role', 'semRole'),
                   ('confidence', 'confidence'))

    def __init__(self, anno_id=None, sem_role=None, span=None):
        IdentifiableAnnotation.__init__(self, anno_id)
        self.sem_role = sem_role
        self.span = as_span(span)
        self.confidence = None
        self.external_refs = []

    def __str__(self):
        return '%s: %s' % (self.sem_role, self.span)

    def referenced(self):
        return _refs((AnnotationType.TERM, self.span))


class Predicate(IdentifiableAnnotation, WithExternalRefs):
    """
    Semantic role labelling predicate, over a span of terms, with
    its roles
    """
    ANNOTATION_TYPE = AnnotationType.PREDICATE
    _ATTRIBUTES = (('uri', 'uri'),
                   ('confidence', 'confidence'))

    def __init__(self, anno_id=None, span=None):
        IdentifiableAnnotation.__init__(self, anno_id)
        self.span = as_span(span)
        self.uri = None
        self.confidence = None
        self.roles = []
        self.external_refs = []

    def __str__(self):
        return str(self.span)

    def add_role(self, role):
        "Attach a role to the predicate"
        self.roles.append(role)
        return self._adopt(role)

    def remove_role(self, role):
        "Detach a role (no-op if it is not ours)"
        if not any(x is role for x in self.roles):
            return
        self.roles = [x for x in self.roles if x is not role]
        self._disown(role)

    def referenced(self):
        return _refs((AnnotationType.TERM, self.span),
                     (AnnotationType.ROLE, self.roles))

    def sub_annotations(self):
        return [(AnnotationType.ROLE, x) for x in self.roles]


class Feature(IdentifiableAnnotation, WithExternalRefs):
    """
    Property or category of the document, expressed by some term
    spans. Whether it is one or the other is its `atype`
    """
    ANNOTATION_TYPE = AnnotationType.PROPERTY
    _ATTRIBUTES = (('lemma', 'lemma'),)

    def __init__(self, anno_id=None, lemma=None, spans=None,
                 atype=AnnotationType.PROPERTY):
        IdentifiableAnnotation.__init__(self, anno_id)
        if atype not in (AnnotationType.PROPERTY, AnnotationType.CATEGORY):
            raise AnnotationException("A feature is either a property "
                                      "or a category, not %s" % atype)
        self.atype = atype
        self.lemma = lemma
        self.spans = [as_span(x) for x in spans or []]
        self.external_refs = []

    def __str__(self):
        return self.lemma or ''

    def is_category(self):
        "True for categories, False for properties"
        return self.atype is AnnotationType.CATEGORY

    def add_span(self, span):
        "Add a reference to the feature"
        span = as_span(span)
        self.spans.append(span)
        self._index_late(*span.targets)
        return span

    def referenced(self):
        return _refs((AnnotationType.TERM,
                      [t for span in self.spans for t in span]))


class LinkedEntity(IdentifiableAnnotation):
    """
    Span of word forms linked to an entry of a knowledge base
    """
    ANNOTATION_TYPE = AnnotationType.LINKED_ENTITY
    _ATTRIBUTES = (('resource', 'resource'),
                   ('reference', 'reference'),
                   ('confidence', 'confidence'))

    def __init__(self, anno_id=None, span=None):
        IdentifiableAnnotation.__init__(self, anno_id)
        self.span = as_span(span)
        self.resource = None
        self.reference = None
        self.confidence = None

    def __str__(self):
        return str(self.span)

    def referenced(self):
        return _refs((AnnotationType.WF, self.span))


class Relation(IdentifiableAnnotation):
    """
    Generic relation between two entities and/or features
    """
    ANNOTATION_TYPE = AnnotationType.RELATION
    _ATTRIBUTES = (('confidence', 'confidence'),)

    def __init__(self, from_anno, to_anno, anno_id=None):
        IdentifiableAnnotation.__init__(self, anno_id)
        if from_anno is None or to_anno is None:
            raise AnnotationException("A relation needs both ends")
        self.from_anno = from_anno
        self.to_anno = to_anno
        self.confidence = None

    def __str__(self):
        return '%s -> %s' % (self.from_anno, self.to_anno)

    def referenced(self):
        return _refs(*[(x.atype, [x]) for x in (self.from_anno, self.to_anno)
                       if x is not None])


class Topic(IdentifiableAnnotation):
    """
    What the document (as a whole) is about
    """
    ANNOTATION_TYPE = AnnotationType.TOPIC
    _ATTRIBUTES = (('probability', 'probability'),
                   ('source', 'source'),
                   ('method', 'method'),
                   ('confidence', 'confidence'),
                   ('uri', 'uri'))

    def __init__(self, value, anno_id=None):
        IdentifiableAnnotation.__init__(self, anno_id)
        self.value = value
        self.probability = None
        self.source = None
        self.method = None
        self.confidence = None
        self.uri = None

    def __str__(self):
        return self.value


class FactVal(Annotation):
    """
    One factuality judgement, according to some resource
    """
    _ATTRIBUTES = (('value', 'value'),
                   ('resource', 'resource'),
                   ('confidence', 'confidence'),
                   ('source', 'source'))

    def __init__(self, value, resource, confidence=None, source=None):
        Annotation.__init__(self)
        self.value = value
        self.resource = resource
        self.confidence = confidence
        self.source = source

    def __str__(self):
        return '%s: %s' % (self.resource, self.value)


class Factuality(IdentifiableAnnotation):
    """
    Factuality of an event, over a span of terms
    """
    ANNOTATION_TYPE = AnnotationType.FACTUALITY

    def __init__(self, anno_id=None, span=None):
        IdentifiableAnnotation.__init__(self, anno_id)
        self.span = as_span(span)
        self.fact_vals = []

    def __str__(self):
        return str(self.span)

    def add_fact_val(self, fact_val):
        "Add a factuality judgement"
        fact_val._parent = self
        self.fact_vals.append(fact_val)
        return fact_val

    def max_fact_val(self):
        """
        The judgement we are most confident in (None if there are
        no judgements with a confidence)
        """
        rated = [x for x in self.fact_vals if x.confidence is not None]
        if not rated:
            return None
        return max(rated, key=lambda x: float(x.confidence))

    def referenced(self):
        return _refs((AnnotationType.TERM, self.span))


class Factvalue(Annotation):
    """
    Factuality prediction for a single word form (older, word-based
    flavour of factuality). Has no identifier of its own
    """
    ANNOTATION_TYPE = AnnotationType.FACTVALUE
    _ATTRIBUTES = (('prediction', 'prediction'),
                   ('confidence', 'confidence'))

    def __init__(self, wf, prediction, confidence=None):
        Annotation.__init__(self)
        if wf is None:
            raise AnnotationException("A factvalue needs a word form")
        self.wf = wf
        self.prediction = prediction
        self.confidence = confidence

    def __str__(self):
        return '%s: %s' % (self.wf, self.prediction)

    def referenced(self):
        return _refs((AnnotationType.WF, [self.wf]))
