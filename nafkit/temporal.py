# Author: Eric Kow
# License: BSD3

"""
Temporal and causal annotations: time expressions, temporal links
between events and times, causal links between events, and anchoring
of events in time
"""

# pylint: disable=too-many-instance-attributes, protected-access

from .annotation import (IdentifiableAnnotation, AnnotationException,
                         as_span, _refs)
from .layers import AnnotationType


class Timex3(IdentifiableAnnotation):
    """
    TimeML temporal expression, over a (possibly missing) span of
    word forms. May be bounded by other time expressions
    """
    ANNOTATION_TYPE = AnnotationType.TIMEX3
    _ATTRIBUTES = (('type', 'type'),
                   ('quant', 'quant'),
                   ('freq', 'freq'),
                   ('function_in_document', 'functionInDocument'),
                   ('temporal_function', 'temporalFunction'),
                   ('value', 'value'),
                   ('value_from_function', 'valueFromFunction'),
                   ('mod', 'mod'),
                   ('anchor_time_id', 'anchorTimeID'),
                   ('comment', 'comment'))

    def __init__(self, anno_id=None, type=None, span=None):
        # pylint: disable=redefined-builtin
        IdentifiableAnnotation.__init__(self, anno_id)
        self.type = type
        self.span = as_span(span)
        self.begin_point = None
        self.end_point = None
        self.quant = None
        self.freq = None
        self.function_in_document = None
        self.temporal_function = None
        self.value = None
        self.value_from_function = None
        self.mod = None
        self.anchor_time_id = None
        self.comment = None

    def __str__(self):
        if self.span.is_empty():
            return self.value or ''
        return str(self.span)

    def set_begin_point(self, timex):
        "Time expression this one starts at"
        if self.begin_point is not self.end_point:
            self._unindex_late(self.begin_point)
        self.begin_point = timex
        self._index_late(timex)

    def set_end_point(self, timex):
        "Time expression this one ends at"
        if self.end_point is not self.begin_point:
            self._unindex_late(self.end_point)
        self.end_point = timex
        self._index_late(timex)

    def referenced(self):
        return _refs((AnnotationType.WF, self.span),
                     (AnnotationType.TIMEX3, [self.begin_point,
                                              self.end_point]))

    def _anchor(self):
        return self.span.first_target()


_TLINK_ENDPOINT_TYPES = {
    AnnotationType.PREDICATE: 'event',
    AnnotationType.TIMEX3: 'timex',
}


def _endpoint_type(anno):
    "fromType/toType of a temporal link end"
    try:
        return _TLINK_ENDPOINT_TYPES[anno.atype]
    except KeyError:
        raise AnnotationException("Temporal links join predicates and "
                                  "time expressions, not %r" % anno)


class TLink(IdentifiableAnnotation):
    """
    Temporal relation between two events (predicates) and/or time
    expressions
    """
    ANNOTATION_TYPE = AnnotationType.TLINK
    _ATTRIBUTES = (('rel_type', 'relType'),)

    def __init__(self, from_anno, to_anno, rel_type, anno_id=None):
        IdentifiableAnnotation.__init__(self, anno_id)
        if from_anno is None or to_anno is None:
            raise AnnotationException("A temporal link needs both ends")
        _endpoint_type(from_anno)
        _endpoint_type(to_anno)
        self.from_anno = from_anno
        self.to_anno = to_anno
        self.rel_type = rel_type

    def __str__(self):
        return '%s %s %s' % (self.from_anno, self.rel_type, self.to_anno)

    @property
    def from_type(self):
        "'event' or 'timex'"
        return _endpoint_type(self.from_anno)

    @property
    def to_type(self):
        "'event' or 'timex'"
        return _endpoint_type(self.to_anno)

    def referenced(self):
        return _refs(*[(x.atype, [x]) for x in (self.from_anno, self.to_anno)
                       if x is not None])


class CLink(IdentifiableAnnotation):
    """
    Causal relation between two events (predicates)
    """
    ANNOTATION_TYPE = AnnotationType.CLINK
    _ATTRIBUTES = (('rel_type', 'relType'),)

    def __init__(self, from_pred, to_pred, rel_type=None, anno_id=None):
        IdentifiableAnnotation.__init__(self, anno_id)
        if from_pred is None or to_pred is None:
            raise AnnotationException("A causal link needs both ends")
        self.from_pred = from_pred
        self.to_pred = to_pred
        self.rel_type = rel_type

    def __str__(self):
        return '%s -> %s' % (self.from_pred, self.to_pred)

    def referenced(self):
        return _refs((AnnotationType.PREDICATE,
                      [self.from_pred, self.to_pred]))


class PredicateAnchor(IdentifiableAnnotation):
    """
    Anchoring of some predicates in time: a time point and/or an
    interval given by its begin and end points
    """
    ANNOTATION_TYPE = AnnotationType.PREDICATE_ANCHOR

    def __init__(self, anno_id=None, span=None,
                 anchor_time=None, begin_point=None, end_point=None):
        IdentifiableAnnotation.__init__(self, anno_id)
        self.span = as_span(span)
        self.anchor_time = anchor_time
        self.begin_point = begin_point
        self.end_point = end_point

    def __str__(self):
        return str(self.span)

    def referenced(self):
        return _refs((AnnotationType.PREDICATE, self.span),
                     (AnnotationType.TIMEX3, [self.anchor_time,
                                              self.begin_point,
                                              self.end_point]))
