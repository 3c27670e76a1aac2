# Author: Eric Kow
# License: BSD3

"""
Low-level representation of NAF annotations.

An annotation is a piece of analysis laid over the text: a word form, a
term, a chunk of terms, a cluster of coreferring term spans, and so on.
Annotations point at one another (a chunk points at terms, a term at word
forms); every annotation declares what it points at through
`Annotation.referenced`, and that is all the container needs to index
and query them uniformly.

The annotations themselves make little attempt to interpret the
information stored in them. Higher-level questions (which sentence is this
in, what refers to this term, ...) are answered by
`nafkit.container.AnnotationContainer`.
"""

# pylint: disable=too-few-public-methods, protected-access

from collections import OrderedDict


class AnnotationException(Exception):
    """
    An annotation was built or modified in a way that breaks one of
    the model's invariants (eg. a chunk without any term)
    """
    def __init__(self, *args, **kw):
        super(AnnotationException, self).__init__(*args, **kw)


class CharSpan(object):
    """
    What portion of the raw text an annotation covers, in character
    offsets, interpreted like Python slice indices ::

          h   o   w   d   y
        0   1   2   3   4   5

    So `(0,5)` covers the whole word above, and `(1,2)` picks out the
    letter "o"
    """
    def __init__(self, start, end):
        self.char_start = start
        self.char_end = end

    def __str__(self):
        return '(%d,%d)' % (self.char_start, self.char_end)

    def __repr__(self):
        return 'CharSpan(%d, %d)' % (self.char_start, self.char_end)

    def __eq__(self, other):
        return (isinstance(other, CharSpan) and
                self.char_start == other.char_start and
                self.char_end == other.char_end)

    def __ne__(self, other):
        return not self == other

    def __hash__(self):
        return hash((self.char_start, self.char_end))

    def length(self):
        """
        Return the length of this span
        """
        return self.char_end - self.char_start

    def encloses(self, other):
        """
        Return True if this span includes the argument

        Note that `x.encloses(x) == True` and `x.encloses(None) == False`
        """
        if other is None:
            return False
        return (self.char_start <= other.char_start and
                self.char_end >= other.char_end)

    @classmethod
    def merge_all(cls, spans):
        """
        Return a span that stretches from the beginning to the end
        of all the spans in the list
        """
        spans = list(spans)
        if not spans:
            raise ValueError("must have at least one span")
        return cls(min(x.char_start for x in spans),
                   max(x.char_end for x in spans))


class Span(object):
    """
    An ordered selection of annotations of one kind (word forms, terms,
    predicates...), optionally singling one of them out as the head.

    Two spans are equal if they select the very same annotations (by
    identity) in the same order, with the same head.
    """
    def __init__(self, targets=None, head=None):
        self._targets = list(targets) if targets is not None else []
        self.head = None
        if head is not None:
            self.set_head(head)

    def __repr__(self):
        return 'Span(%r, head=%r)' % (self._targets, self.head)

    def __str__(self):
        return ' '.join(str(x) for x in self._targets)

    def __len__(self):
        return len(self._targets)

    def __iter__(self):
        return iter(self._targets)

    def __contains__(self, target):
        return any(x is target for x in self._targets)

    def __eq__(self, other):
        if not isinstance(other, Span):
            return False
        return (len(self._targets) == len(other._targets) and
                all(x is y for x, y in zip(self._targets, other._targets)) and
                self.head is other.head)

    def __ne__(self, other):
        return not self == other

    __hash__ = None

    @property
    def targets(self):
        """
        The selected annotations, in insertion order (a copy: use
        `add_target` to extend the span)
        """
        return list(self._targets)

    def add_target(self, target, is_head=False):
        """
        Append an annotation to the span. If `is_head` is set, the new
        target becomes the head, replacing any previous one
        """
        self._targets.append(target)
        if is_head:
            self.head = target

    def add_targets(self, targets):
        "Append several (non-head) annotations"
        self._targets.extend(targets)

    def set_head(self, target):
        """
        Single out one of the targets as the head
        """
        if target not in self:
            raise AnnotationException("Span head %r is not one of its "
                                      "targets" % target)
        self.head = target

    def has_head(self):
        "True if some target is singled out as head"
        return self.head is not None

    def size(self):
        "Number of targets"
        return len(self._targets)

    def is_empty(self):
        "True if the span selects nothing"
        return not self._targets

    def first_target(self):
        "First target in insertion order (None if empty)"
        return self._targets[0] if self._targets else None

    def last_target(self):
        "Last target in insertion order (None if empty)"
        return self._targets[-1] if self._targets else None

    @property
    def offset(self):
        """
        Character offset of the span, ie. that of its first target
        """
        first = self.first_target()
        return None if first is None else first.offset

    def discard(self, dropped):
        """
        Remove every target that belongs to the `dropped` collection
        (dropping the head as well if it is one of them)
        """
        self._targets = [x for x in self._targets if x not in dropped]
        if self.head is not None and self.head in dropped:
            self.head = None


def as_span(targets):
    """
    Accept either a ready-made span or a plain sequence of targets
    """
    if targets is None:
        return Span()
    elif isinstance(targets, Span):
        return targets
    else:
        return Span(targets)


def _refs(*pairs):
    """
    Build a referenced-annotations mapping out of (type, annotations)
    pairs, leaving out missing annotations and empty entries
    """
    res = OrderedDict()
    for atype, annos in pairs:
        annos = [x for x in annos if x is not None]
        if annos:
            res.setdefault(atype, []).extend(annos)
    return res


class Annotation(object):
    """
    Any sort of annotation.

    Subclasses are expected to override

    * `referenced`: what this annotation directly points at
    * `sub_annotations`: the annotations nested inside this one which
      have no life of their own (roles of a predicate, nodes of a tree...)

    and to list their plain attributes in `_ATTRIBUTES` as
    `(python_name, serialised_name)` pairs.

    Attributes
    ----------
    atype : AnnotationType
        What kind of annotation this is. Usually fixed by the class
        (see `ANNOTATION_TYPE`), but some classes serve several types
        (a term can be a component of another term; features can be
        properties or categories)
    """
    ANNOTATION_TYPE = None
    _ATTRIBUTES = ()

    def __init__(self):
        self.atype = self.ANNOTATION_TYPE
        self._container = None
        self._parent = None

    def referenced(self):
        """
        Annotations this annotation directly points at.

        Returns
        -------
        res : OrderedDict from AnnotationType to list of Annotation
            Only non-empty entries are present
        """
        return OrderedDict()

    def sub_annotations(self):
        """
        Annotations owned by this one, as (AnnotationType, Annotation)
        pairs. These get registered in a container along with their
        owner, but never appear in a layer of their own
        """
        return []

    def referenced_deep(self):
        """
        Everything reachable from this annotation by following its
        references (not including the annotation itself), grouped by
        type, each group in depth-first discovery order
        """
        res = OrderedDict()
        seen = set([self])

        def visit(anno):
            "depth-first walk"
            for atype, targets in anno.referenced().items():
                for target in targets:
                    if target in seen:
                        continue
                    seen.add(target)
                    res.setdefault(atype, []).append(target)
                    visit(target)

        visit(self)
        return res

    def _anchor(self):
        """
        The word form that determines where this annotation sits in the
        text: the first one reached by following references in
        declaration order
        """
        for targets in self.referenced().values():
            for target in targets:
                wf = target._anchor()
                if wf is not None:
                    return wf
        return None

    @property
    def offset(self):
        "Character offset of the annotation (None if it has no text)"
        wf = self._anchor()
        return None if wf is None else wf.offset

    @property
    def sent(self):
        "Sentence number of the annotation (None if it has no text)"
        wf = self._anchor()
        return None if wf is None else wf.sent

    @property
    def para(self):
        "Paragraph number carried by the anchoring word form, if any"
        wf = self._anchor()
        return None if wf is None else wf.para

    def char_span(self):
        """
        Return the span from the first character of the earliest word
        form this annotation covers to the last character of the latest.

        Corner case: annotations that cover no text give None
        """
        wfs = self.referenced_deep().get(self._wf_type(), [])
        if self._anchor() is self:
            wfs = [self]
        if not wfs:
            return None
        return CharSpan.merge_all(CharSpan(x.offset, x.offset + x.length)
                                  for x in wfs)

    @staticmethod
    def _wf_type():
        "(deferred to avoid a circular import)"
        from .layers import AnnotationType
        return AnnotationType.WF

    def attributes(self):
        """
        The plain (string-like) attributes of the annotation that are
        set, keyed by their serialised name
        """
        res = OrderedDict()
        for pyname, name in self._ATTRIBUTES:
            val = getattr(self, pyname)
            if val is not None:
                res[name] = val
        return res

    def set_attributes(self, attrs):
        """
        Set the plain attributes of the annotation from a mapping keyed
        by serialised name (eg. the attributes of an XML element).
        Names we do not know about are ignored
        """
        for pyname, name in self._ATTRIBUTES:
            if name in attrs:
                setattr(self, pyname, attrs[name])

    @property
    def parent(self):
        "Annotation this one is nested in (None for top annotations)"
        return self._parent

    def position(self):
        """
        Position of a nested annotation among the siblings of the same
        kind in its parent (None for annotations that are not nested)
        """
        if self._parent is None:
            return None
        return self._parent._position_of(self)

    def _position_of(self, sub):
        "see `position`"
        if isinstance(sub, ExternalRef):
            siblings = getattr(self, 'external_refs', [])
        else:
            siblings = [x for _, x in self.sub_annotations()
                        if x.atype is sub.atype]
        for i, sibling in enumerate(siblings):
            if sibling is sub:
                return i
        return None

    def _index_late(self, *targets):
        """
        Let our container (if any) know that we now also point at the
        given annotations
        """
        if self._container is None:
            return
        for target in targets:
            if target is not None:
                self._container.index_annotation_references(
                    self.atype, self, target)

    def _adopt(self, sub):
        """
        Take ownership of a nested annotation
        """
        if sub is None:
            return None
        sub._parent = self
        self._index_late(sub)
        return sub

    def _disown(self, sub, keep=None):
        """
        Give up a nested annotation that we are about to replace with
        `keep` (or drop), taking it out of our container if any
        """
        if sub is None or sub is keep:
            return
        if self._container is not None:
            self._container.unregister(sub)
        sub._parent = None

    def _unindex_late(self, *targets):
        """
        Let our container (if any) know that we no longer point at the
        given annotations
        """
        if self._container is None:
            return
        for target in targets:
            if target is not None:
                self._container.unindex_annotation_references(
                    self.atype, self, target)

    def _detach(self, dropped):
        """
        Forget any reference to an annotation in `dropped` (a set).
        Spans lose the corresponding targets, single references are
        reset to None
        """
        for key, val in list(vars(self).items()):
            if key in ('_container', '_parent'):
                continue
            if isinstance(val, Span):
                val.discard(dropped)
            elif isinstance(val, Annotation):
                if val in dropped:
                    setattr(self, key, None)
            elif isinstance(val, list):
                kept = []
                for item in val:
                    if isinstance(item, Span):
                        item.discard(dropped)
                    elif isinstance(item, Annotation) and item in dropped:
                        continue
                    kept.append(item)
                val[:] = kept


class IdentifiableAnnotation(Annotation):
    """
    An annotation with a stable string identifier.

    The identifier may be left as None at construction time; a container
    will then mint one when the annotation is added to it
    """
    def __init__(self, anno_id=None):
        Annotation.__init__(self)
        self.id = anno_id

    def __repr__(self):
        return '<%s %s>' % (self.__class__.__name__, self.id)


class WithExternalRefs(object):
    """
    Mixin for annotations that can be tied to entries of external
    resources (lexicons, ontologies, knowledge bases).
    Classes using it must initialise `self.external_refs = []`
    """
    def add_external_ref(self, ref):
        """
        Attach an external reference, returning it
        """
        ref._parent = self
        self.external_refs.append(ref)
        return ref

    def add_external_refs(self, refs):
        "Attach several external references"
        for ref in refs:
            self.add_external_ref(ref)


class ExternalRef(Annotation, WithExternalRefs):
    """
    Pointer to an entry in an external resource, eg. a WordNet synset
    or a DBpedia page. May carry more specific external references
    of its own
    """
    _ATTRIBUTES = (('resource', 'resource'),
                   ('reference', 'reference'),
                   ('confidence', 'confidence'),
                   ('reftype', 'reftype'),
                   ('status', 'status'),
                   ('source', 'source'),
                   ('timestamp', 'timestamp'))

    def __init__(self, resource, reference=None, confidence=None):
        Annotation.__init__(self)
        self.resource = resource
        self.reference = reference
        self.confidence = confidence
        self.reftype = None
        self.status = None
        self.source = None
        self.timestamp = None
        self.external_refs = []

    def __repr__(self):
        return 'ExternalRef(%r, %r)' % (self.resource, self.reference)
