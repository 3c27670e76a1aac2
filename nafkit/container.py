# Author: Eric Kow
# License: BSD3

"""
The annotation container: where every annotation of a document lives.

The container keeps annotations by type, by layer (for top-level
annotations) and by identifier, and it keeps the *reverse* of the
references declared by the annotations, ie. for each annotation, which
other annotations point at it. This is what lets us answer questions
like "which coreference clusters involve this word form" without
having to know anything in particular about coreference clusters.

Everything is kept in insertion order.
"""

# pylint: disable=protected-access

from collections import OrderedDict, deque
from enum import Enum
import warnings

from .annotation import Annotation, AnnotationException
from .ids import IdManager
from .layers import (AnnotationType, Layer, LAYER_2_TYPES,
                     is_identifiable_type, layer_of)


class DuplicateIdException(AnnotationException):
    """
    An identifier is already taken by some other annotation
    """
    def __init__(self, *args, **kw):
        super(DuplicateIdException, self).__init__(*args, **kw)


class DanglingReferenceException(AnnotationException):
    """
    Removing a layer would leave annotations outside of it pointing
    into it
    """
    def __init__(self, *args, **kw):
        super(DanglingReferenceException, self).__init__(*args, **kw)


class DanglingPolicy(Enum):
    """
    What to do with references from surviving annotations when we
    remove a layer they point into

    * KEEP: leave them alone, warning about it
    * REFUSE: raise `DanglingReferenceException` (the container is left
      untouched)
    * DETACH: make the survivors forget the removed annotations (spans
      lose targets, single references become None)
    """
    KEEP = 'keep'
    REFUSE = 'refuse'
    DETACH = 'detach'


def _types_of(what):
    """
    Annotation types selected by an annotation type or a layer
    """
    if isinstance(what, Layer):
        return LAYER_2_TYPES.get(what, ())
    elif isinstance(what, AnnotationType):
        return (what,)
    else:
        raise ValueError("Expected an annotation type or a layer, "
                         "not %r" % (what,))


class _TextIndex(object):
    """
    Sentence and paragraph bookkeeping, derived from the word forms.
    Rebuilt from scratch whenever the container changes
    """
    def __init__(self, wfs):
        self.wf_para = {}
        self.sent_wfs = OrderedDict()
        self.sent_para = OrderedDict()
        self.para_sents = OrderedDict()
        self.buckets = {}
        para = 1
        for wf in wfs:
            if wf.para is not None:
                para = wf.para
            self.wf_para[wf] = para
            if wf.sent is None:
                continue
            if wf.sent not in self.sent_wfs:
                self.sent_wfs[wf.sent] = []
                self.sent_para[wf.sent] = para
                self.para_sents.setdefault(para, []).append(wf.sent)
            self.sent_wfs[wf.sent].append(wf)


class AnnotationContainer(object):
    """
    Store for the annotations of a document.

    Parameters
    ----------
    dangling_policy : DanglingPolicy
        What `remove` does by default with references into the
        removed layer

    Attributes
    ----------
    id_manager : IdManager
        Used to mint identifiers for annotations added without one
    raw_text : string or None
        Raw text of the document, kept as is
    """
    def __init__(self, dangling_policy=DanglingPolicy.KEEP):
        self.dangling_policy = dangling_policy
        self.id_manager = IdManager()
        self.raw_text = None
        self._by_type = {}
        self._by_layer = {}
        self._by_id = {}
        self._referencing = {}
        self._members = set()
        self._unknown_layers = []
        self._text_index = None

    # ------------------------------------------------------------
    # adding
    # ------------------------------------------------------------

    def add(self, anno, atype=None):
        """
        Add an annotation (along with its sub-annotations) to the
        container, minting identifiers for whatever needs one and
        lacks it.

        Adding an annotation that is already in the container does
        nothing.

        Parameters
        ----------
        anno : Annotation
        atype : AnnotationType, optional
            Overrides the type of the annotation (eg. to add a Feature
            as a category)

        Returns
        -------
        anno : Annotation
        """
        return self._add(anno, atype, None)

    def add_at(self, anno, index, atype=None):
        """
        Add an annotation as in `add`, but at the given position among
        the annotations of its type rather than at the end
        """
        return self._add(anno, atype, index)

    def _add(self, anno, atype, index):
        "add or add_at"
        if anno in self._members:
            return anno
        if atype is not None:
            anno.atype = atype
        if anno.atype is None:
            raise AnnotationException("%r has no annotation type" % anno)
        type_list = self._by_type.get(anno.atype, [])
        if index is not None and index < len(type_list):
            successor = type_list[index]
        else:
            successor = None
        self._register(anno, index)
        layer = layer_of(anno.atype)
        if layer is not None:
            layer_list = self._by_layer.setdefault(layer, [])
            if successor is None:
                layer_list.append(anno)
            else:
                pos = next(i for i, x in enumerate(layer_list)
                           if x is successor)
                layer_list.insert(pos, anno)
        return anno

    def _walk(self, anno):
        """
        The annotation and (recursively) its sub-annotations
        """
        yield anno
        for stype, sub in anno.sub_annotations():
            sub.atype = stype
            for subsub in self._walk(sub):
                yield subsub

    def _register(self, anno, index=None):
        """
        Put an annotation and its not yet known sub-annotations in the
        type and id stores, and record their references
        """
        annos = [x for x in self._walk(anno) if x not in self._members]
        self._check_ids(annos)
        for new in annos:
            self._reconcile_ids(new)
        for new in annos:
            self._mint_ids(new)
        for new in annos:
            type_list = self._by_type.setdefault(new.atype, [])
            if new is anno and index is not None:
                type_list.insert(index, new)
            else:
                type_list.append(new)
            if is_identifiable_type(new.atype):
                self._by_id.setdefault(new.id, []).append(new)
            self._members.add(new)
            new._container = self
        for new in annos:
            for target in self._flat_references(new):
                self._add_referencing(target, new.atype, new)
        self._text_index = None

    def _check_ids(self, annos):
        """
        fail (before any change) if we would bind some id twice within
        one annotation type
        """
        fresh = {}
        for anno in annos:
            if not is_identifiable_type(anno.atype) or anno.id is None:
                continue
            key = (anno.atype, anno.id)
            known = fresh.get(key)
            if known is None:
                known = next((x for x in self._by_id.get(anno.id, [])
                              if x.atype is anno.atype), None)
            if known is not None and known is not anno:
                raise DuplicateIdException("Identifier %s is already used "
                                           "by %r" % (anno.id, known))
            fresh[key] = anno

    @staticmethod
    def _is_tree_child(anno):
        "tree nodes with a parent node"
        return (anno._parent is not None and
                anno._parent.atype is AnnotationType.NON_TERMINAL)

    def _reconcile_ids(self, anno):
        "make sure we never mint the ids the caller chose"
        if is_identifiable_type(anno.atype) and anno.id is not None:
            self.id_manager.reconcile(anno.atype, anno.id)
        if self._is_tree_child(anno) and anno.edge_id is not None:
            self.id_manager.reconcile(AnnotationType.EDGE, anno.edge_id)

    def _mint_ids(self, anno):
        "give ids to whatever needs one"
        if is_identifiable_type(anno.atype) and anno.id is None:
            anno.id = self.id_manager.next_id(anno.atype)
        if self._is_tree_child(anno) and anno.edge_id is None:
            anno.edge_id = self.id_manager.next_id(AnnotationType.EDGE)

    @staticmethod
    def _flat_references(anno):
        "everything an annotation directly points at"
        return [x for targets in anno.referenced().values() for x in targets]

    def _add_referencing(self, target, atype, anno):
        "record that `anno` (of type `atype`) points at `target`"
        by_type = self._referencing.setdefault(target, OrderedDict())
        referers = by_type.setdefault(atype, [])
        if anno not in referers:
            referers.append(anno)

    def index_annotation_references(self, atype, anno, target):
        """
        Take note that an annotation now also points at some target.

        This is for references created after the annotation was added
        (eg. a tree node adopting a new child). If the target is a
        sub-annotation of the annotation and is not in the container
        yet, it gets added along the way
        """
        if target not in self._members and target._parent is anno:
            self._register(target)
        self._add_referencing(target, atype, anno)
        self._text_index = None

    # ------------------------------------------------------------
    # raw text, unknown layers
    # ------------------------------------------------------------

    def add_unknown_layer(self, element):
        """
        Keep an XML element we do not know how to interpret, so that
        it can be written back out as it was
        """
        self._unknown_layers.append(element)

    def get_unknown_layers(self):
        "Elements saved with `add_unknown_layer`, in order"
        return list(self._unknown_layers)

    # ------------------------------------------------------------
    # queries
    # ------------------------------------------------------------

    def __contains__(self, anno):
        return anno in self._members

    def annotation_by_id(self, anno_id, atype=None):
        """
        The annotation with the given identifier (None if there is none).

        Identifiers are only unique within an annotation type. Without
        a type, we return whichever annotation took the identifier
        first
        """
        for anno in self._by_id.get(anno_id, []):
            if atype is None or anno.atype is atype:
                return anno
        return None

    def annotations(self, what):
        """
        All annotations of a type, or of a layer, in insertion order

        Parameters
        ----------
        what : AnnotationType or Layer
        """
        if isinstance(what, Layer):
            return list(self._by_layer.get(what, []))
        _types_of(what)
        return list(self._by_type.get(what, []))

    def is_empty(self, what):
        "True if we have no annotations of the type or layer"
        if isinstance(what, Layer):
            return not self._by_layer.get(what)
        return not self._by_type.get(what)

    def layers(self):
        "Layers with at least one annotation, in first-use order"
        return [x for x, annos in self._by_layer.items() if annos]

    def annotations_by(self, targets, what):
        """
        Annotations of a type (or layer) that point at any of the
        targets, directly or through other annotations.

        An annotation counts as pointing at itself, so asking for the
        terms that point at a term gives that term back.

        Parameters
        ----------
        targets : Annotation or iterable of Annotation
        what : AnnotationType or Layer

        Returns
        -------
        annos : list of Annotation
            In insertion order, without duplicates
        """
        if isinstance(targets, Annotation):
            targets = [targets]
        reached = set(targets)
        queue = deque(reached)
        while queue:
            target = queue.popleft()
            for referers in self._referencing.get(target, {}).values():
                for anno in referers:
                    if anno not in reached:
                        reached.add(anno)
                        queue.append(anno)
        return [x for x in self.annotations(what) if x in reached]

    def referencing(self, target, atype=None):
        """
        Annotations that point directly at the target (only those of
        the given type if one is supplied)
        """
        by_type = self._referencing.get(target, {})
        if atype is not None:
            return list(by_type.get(atype, []))
        return [x for referers in by_type.values() for x in referers]

    def _index(self):
        "sentence/paragraph bookkeeping, rebuilt if stale"
        if self._text_index is None:
            self._text_index = _TextIndex(
                self._by_type.get(AnnotationType.WF, []))
        return self._text_index

    def para_of(self, anno):
        """
        Paragraph an annotation is in, ie. that of its first word form.
        Word forms without an explicit paragraph are in the paragraph of
        the preceding one
        """
        wf = anno._anchor()
        if wf is None:
            return None
        return self._index().wf_para.get(wf, wf.para)

    def _buckets(self, what, by_para):
        """
        Annotations of a type or layer grouped by sentence (or paragraph)
        """
        index = self._index()
        key = (what, by_para)
        if key not in index.buckets:
            res = OrderedDict()
            for anno in self.annotations(what):
                num = self.para_of(anno) if by_para else anno.sent
                if num is not None:
                    res.setdefault(num, []).append(anno)
            index.buckets[key] = res
        return index.buckets[key]

    def annotations_by_sent(self, sent, what):
        """
        Annotations of a type or layer in the given sentence. An
        annotation over several sentences is in that of its first word
        form
        """
        return list(self._buckets(what, False).get(sent, []))

    def annotations_by_para(self, para, what):
        """
        Annotations of a type or layer in the given paragraph (see
        `para_of`)
        """
        return list(self._buckets(what, True).get(para, []))

    def sentences(self, what=AnnotationType.WF):
        """
        Annotations of a type or layer, as one list per sentence
        (in the order in which the sentences appear in the text)
        """
        buckets = self._buckets(what, False)
        return [list(buckets[x]) for x in self._index().sent_wfs
                if x in buckets]

    def paragraphs(self, what=AnnotationType.WF):
        """
        Annotations of a type or layer, as one list per paragraph
        """
        buckets = self._buckets(what, True)
        return [list(buckets[x]) for x in self._index().para_sents
                if x in buckets]

    def sentence_numbers(self):
        "Sentence numbers, in text order"
        return list(self._index().sent_wfs)

    def paragraph_numbers(self):
        "Paragraph numbers, in text order"
        return list(self._index().para_sents)

    def first_sentence(self):
        "Lowest sentence number (None if there is no text)"
        sents = self.sentence_numbers()
        return min(sents) if sents else None

    def num_sentences(self):
        "Number of distinct sentences"
        return len(self._index().sent_wfs)

    def first_paragraph(self):
        "Lowest paragraph number (None if there is no text)"
        paras = self.paragraph_numbers()
        return min(paras) if paras else None

    def num_paragraphs(self):
        "Number of distinct paragraphs"
        return len(self._index().para_sents)

    def sents_by_para(self, para):
        "Numbers of the sentences of a paragraph, in text order"
        return list(self._index().para_sents.get(para, []))

    def para_of_sent(self, sent):
        "Paragraph of a sentence (that of its first word form)"
        return self._index().sent_para.get(sent)

    # ------------------------------------------------------------
    # removing
    # ------------------------------------------------------------

    def remove(self, layer, policy=None):
        """
        Drop every annotation of a layer (and their sub-annotations)

        Parameters
        ----------
        layer : Layer
        policy : DanglingPolicy, optional
            What to do with references to the dropped annotations from
            annotations we keep (defaults to the container-wide policy)

        Returns
        -------
        dropped : list of Annotation
            The top-level annotations that were removed
        """
        policy = policy or self.dangling_policy
        tops = self._by_layer.get(layer, [])
        dropped = set(x for top in tops for x in self._walk(top))
        survivors = []
        for target in dropped:
            for anno in self.referencing(target):
                if anno not in dropped and anno not in survivors:
                    survivors.append(anno)
        if survivors:
            if policy is DanglingPolicy.REFUSE:
                raise DanglingReferenceException(
                    "Cannot remove layer %s: still referenced by %r" %
                    (layer.value, survivors))
            elif policy is DanglingPolicy.DETACH:
                for anno in survivors:
                    anno._detach(dropped)
            else:
                warnings.warn("Removing layer %s leaves %d annotation(s) "
                              "with references into it" %
                              (layer.value, len(survivors)))
        self._by_layer[layer] = []
        self._forget(dropped)
        return list(tops)

    def unregister(self, anno):
        """
        Forget a sub-annotation (and its own sub-annotations) that its
        owner no longer holds, eg. an opinion holder that was replaced
        or a role taken off its predicate
        """
        gone = set(x for x in self._walk(anno) if x in self._members)
        if gone:
            self._forget(gone)

    def unindex_annotation_references(self, atype, anno, target):
        """
        Take note that an annotation no longer points at some target
        (the reverse of `index_annotation_references`)
        """
        referers = self._referencing.get(target, {}).get(atype, [])
        referers[:] = [x for x in referers if x is not anno]
        self._text_index = None

    def _forget(self, dropped):
        "take a set of annotations out of every store"
        for atype in list(self._by_type):
            self._by_type[atype] = [x for x in self._by_type[atype]
                                    if x not in dropped]
        for anno_id in list(self._by_id):
            kept = [x for x in self._by_id[anno_id] if x not in dropped]
            if kept:
                self._by_id[anno_id] = kept
            else:
                del self._by_id[anno_id]
        for target in list(self._referencing):
            if target in dropped:
                del self._referencing[target]
                continue
            for referers in self._referencing[target].values():
                referers[:] = [x for x in referers if x not in dropped]
        for anno in dropped:
            anno._container = None
        self._members -= dropped
        self._text_index = None
