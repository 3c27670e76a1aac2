# Author: Eric Kow
# License: BSD3

"""
NAF documents: an annotation container plus the document header
(language, version, file description, public information, and which
linguistic processors produced which layer)
"""

# pylint: disable=too-many-instance-attributes, too-many-public-methods
# pylint: disable=protected-access

from collections import OrderedDict
import datetime
import socket

from .container import AnnotationContainer, DanglingPolicy
from .depgraph import DepGraph
from .layers import (TOP_TYPES, is_identifiable_type,
                     is_paragraph_level_type, is_sentence_level_type)


def create_timestamp():
    """
    Current time in the local timezone, in the format used for
    linguistic processor timestamps (eg. `2015-03-02T14:01:22+0100`)
    """
    now = datetime.datetime.now().astimezone()
    return now.strftime('%Y-%m-%dT%H:%M:%S%z')


class _Record(object):
    """
    Plain bag of optional fields, equal to any record of the same class
    with the same field values
    """
    FIELDS = ()

    def __init__(self, **kwargs):
        for field in self.FIELDS:
            setattr(self, field, kwargs.pop(field, None))
        if kwargs:
            raise TypeError("Unexpected fields: %s" % ', '.join(kwargs))

    def __eq__(self, other):
        return (type(self) is type(other) and
                all(getattr(self, x) == getattr(other, x)
                    for x in self.FIELDS))

    def __ne__(self, other):
        return not self == other

    __hash__ = None

    def __repr__(self):
        fields = ('%s=%r' % (x, getattr(self, x)) for x in self.FIELDS
                  if getattr(self, x) is not None)
        return '%s(%s)' % (self.__class__.__name__, ', '.join(fields))


class FileDesc(_Record):
    """
    Bibliographic description of the source file
    """
    FIELDS = ('author', 'title', 'publisher', 'section', 'location',
               'magazine', 'filename', 'filetype', 'pages',
               'creationtime')


class Public(_Record):
    """
    Public identification of the document
    """
    FIELDS = ('public_id', 'uri')


class LinguisticProcessor(object):
    """
    Which tool (and version) produced a layer, and when.

    Two processors are equal if they are for the same layer and have
    the same name and version
    """
    def __init__(self, layer, name, version=None):
        self.layer = layer
        self.name = name
        self.version = version
        self.timestamp = None
        self.begin_timestamp = None
        self.end_timestamp = None
        self.hostname = None

    def __eq__(self, other):
        return (isinstance(other, LinguisticProcessor) and
                self.layer == other.layer and
                self.name == other.name and
                self.version == other.version)

    def __ne__(self, other):
        return not self == other

    __hash__ = None

    def __repr__(self):
        return 'LinguisticProcessor(%r, %r, %r)' % (self.layer, self.name,
                                                     self.version)

    def set_timestamp(self, timestamp=None):
        "Set the timestamp (to now if none is given)"
        self.timestamp = timestamp or create_timestamp()

    def set_begin_timestamp(self, timestamp=None):
        """
        Set the begin timestamp (to now if none is given). Also records
        the name of the current host, unless we already have one
        """
        self.begin_timestamp = timestamp or create_timestamp()
        if self.hostname is None:
            self.hostname = socket.gethostname()

    def set_end_timestamp(self, timestamp=None):
        "Set the end timestamp (to now if none is given)"
        self.end_timestamp = timestamp or create_timestamp()


class Document(object):
    """
    A NAF document.

    Parameters
    ----------
    lang : string, optional
        Language of the document (eg. `en`)
    version : string, optional
        NAF version
    dangling_policy : DanglingPolicy
        What removing a layer does by default with references into it
        (see `nafkit.container.DanglingPolicy`)

    Attributes
    ----------
    lps : OrderedDict from string to list of LinguisticProcessor
        Processors for each layer (by layer name), in insertion order
    container : AnnotationContainer
    """
    def __init__(self, lang=None, version=None,
                 dangling_policy=DanglingPolicy.KEEP):
        self.lang = lang
        self.version = version
        self.file_desc = None
        self.public = None
        self.lps = OrderedDict()
        self.container = AnnotationContainer(dangling_policy=dangling_policy)

    # ------------------------------------------------------------
    # header
    # ------------------------------------------------------------

    def create_file_desc(self, **kwargs):
        "Set a fresh file description and return it"
        self.file_desc = FileDesc(**kwargs)
        return self.file_desc

    def create_public(self, **kwargs):
        "Set a fresh public information record and return it"
        self.public = Public(**kwargs)
        return self.public

    def add_linguistic_processor(self, layer, name, version=None):
        """
        Record a new processor for a layer (no timestamp is set)
        """
        lproc = LinguisticProcessor(layer, name, version=version)
        self.lps.setdefault(layer, []).append(lproc)
        return lproc

    def add_linguistic_processors(self, lps):
        """
        Copy processor records from a mapping like our own `lps`
        """
        for layer, layer_lps in lps.items():
            for lproc in layer_lps:
                new = self.add_linguistic_processor(layer, lproc.name,
                                                    version=lproc.version)
                new.timestamp = lproc.timestamp
                new.begin_timestamp = lproc.begin_timestamp
                new.end_timestamp = lproc.end_timestamp
                new.hostname = lproc.hostname

    def linguistic_processors(self):
        "All processors, layer by layer"
        return [x for layer_lps in self.lps.values() for x in layer_lps]

    def linguistic_processor_exists(self, layer, name, version=None):
        """
        True if the layer has a processor with that name and version
        (or, if no version is given, with that name and no version)
        """
        return any(x.name == name and x.version == version
                   for x in self.lps.get(layer, []))

    # ------------------------------------------------------------
    # annotations
    # ------------------------------------------------------------

    @property
    def raw_text(self):
        "Raw text of the document (None if unknown)"
        return self.container.raw_text

    @raw_text.setter
    def raw_text(self, text):
        self.container.raw_text = text

    def add(self, anno, atype=None):
        "See `AnnotationContainer.add`"
        return self.container.add(anno, atype)

    def add_existing_annotation(self, anno, atype=None):
        """
        Add an annotation coming from some other document, giving it
        (and its sub-annotations) fresh identifiers from this document
        """
        if anno in self.container:
            return anno
        if atype is not None:
            anno.atype = atype
        for sub in self.container._walk(anno):
            if is_identifiable_type(sub.atype):
                sub.id = None
            if hasattr(sub, 'edge_id'):
                sub.edge_id = None
            sub._container = None
        return self.container.add(anno)

    def annotation_by_id(self, anno_id, atype=None):
        "See `AnnotationContainer.annotation_by_id`"
        return self.container.annotation_by_id(anno_id, atype)

    def annotations(self, what):
        "See `AnnotationContainer.annotations`"
        return self.container.annotations(what)

    def annotations_by(self, targets, what):
        "See `AnnotationContainer.annotations_by`"
        return self.container.annotations_by(targets, what)

    def annotations_by_sent(self, sent, what):
        "See `AnnotationContainer.annotations_by_sent`"
        return self.container.annotations_by_sent(sent, what)

    def annotations_by_para(self, para, what):
        "See `AnnotationContainer.annotations_by_para`"
        return self.container.annotations_by_para(para, what)

    def sentences(self, *args):
        "See `AnnotationContainer.sentences`"
        return self.container.sentences(*args)

    def paragraphs(self, *args):
        "See `AnnotationContainer.paragraphs`"
        return self.container.paragraphs(*args)

    def first_sentence(self):
        "See `AnnotationContainer.first_sentence`"
        return self.container.first_sentence()

    def num_sentences(self):
        "See `AnnotationContainer.num_sentences`"
        return self.container.num_sentences()

    def first_paragraph(self):
        "See `AnnotationContainer.first_paragraph`"
        return self.container.first_paragraph()

    def num_paragraphs(self):
        "See `AnnotationContainer.num_paragraphs`"
        return self.container.num_paragraphs()

    def sents_by_para(self, para):
        "See `AnnotationContainer.sents_by_para`"
        return self.container.sents_by_para(para)

    def remove(self, layer, policy=None):
        "See `AnnotationContainer.remove`"
        return self.container.remove(layer, policy=policy)

    def add_unknown_layer(self, element):
        "See `AnnotationContainer.add_unknown_layer`"
        self.container.add_unknown_layer(element)

    def get_unknown_layers(self):
        "See `AnnotationContainer.get_unknown_layers`"
        return self.container.get_unknown_layers()

    def text(self, anno):
        """
        The text an annotation covers: the slice of the raw text from
        its first to its last character if we have the raw text, the
        annotation rendered as a string otherwise
        """
        span = anno.char_span()
        if self.raw_text is None or span is None:
            return str(anno)
        return self.raw_text[span.char_start:span.char_end]

    # ------------------------------------------------------------
    # split and join
    # ------------------------------------------------------------

    def _fresh(self):
        "empty document with our language, version and raw text"
        doc = Document(self.lang, self.version,
                       dangling_policy=self.container.dangling_policy)
        doc.raw_text = self.raw_text
        return doc

    def split_in_sentences(self):
        """
        One document per sentence, each holding the sentence-level
        annotations of that sentence.

        The annotations are shared with this document (and get new
        identifiers along the way), so this document should not be
        used afterwards
        """
        groups = []
        for para in self.container.paragraph_numbers():
            for sent in self.sents_by_para(para):
                groups.append([(x, self.annotations_by_sent(sent, x))
                               for x in TOP_TYPES
                               if is_sentence_level_type(x)])
        return [self._fill(groups_) for groups_ in groups]

    def split_in_paragraphs(self):
        """
        One document per paragraph, each holding the paragraph-level
        annotations of that paragraph. See `split_in_sentences`
        """
        groups = []
        for para in self.container.paragraph_numbers():
            groups.append([(x, self.annotations_by_para(para, x))
                           for x in TOP_TYPES
                           if is_paragraph_level_type(x)])
        return [self._fill(groups_) for groups_ in groups]

    def _fill(self, groups):
        "new document with the given (type, annotations) pairs"
        doc = self._fresh()
        for atype, annos in groups:
            for anno in annos:
                doc.add_existing_annotation(anno, atype)
        return doc

    @staticmethod
    def join(docs):
        """
        A single document holding the annotations of all the given
        documents (which should not be used afterwards), with the
        language, version and raw text of the first
        """
        docs = list(docs)
        if not docs:
            raise ValueError("Need at least one document to join")
        joined = docs[0]._fresh()
        for doc in docs:
            for atype in TOP_TYPES:
                for anno in doc.annotations(atype):
                    joined.add_existing_annotation(anno, atype)
        return joined

    # ------------------------------------------------------------
    # dependencies
    # ------------------------------------------------------------

    def depgraph(self):
        "A dependency graph view of this document"
        return DepGraph(self.container)

    def deps_from_term(self, term):
        "See `DepGraph.deps_from_term`"
        return self.depgraph().deps_from_term(term)

    def dep_to_term(self, term):
        "See `DepGraph.dep_to_term`"
        return self.depgraph().dep_to_term(term)

    def deps_by_term(self, term):
        "See `DepGraph.deps_by_term`"
        return self.depgraph().deps_by_term(term)

    def terms_head(self, terms):
        "See `DepGraph.terms_head`"
        return self.depgraph().terms_head(terms)

    def terms_by_dep_ancestors(self, terms, pattern=None):
        "See `DepGraph.terms_by_dep_ancestors`"
        return self.depgraph().terms_by_dep_ancestors(terms, pattern)

    def dep_path(self, from_term, to_term):
        "See `DepGraph.dep_path`"
        return self.depgraph().dep_path(from_term, to_term)

    def match_dep_path(self, from_term, path, pattern):
        "See `DepGraph.match_dep_path`"
        return self.depgraph().match_dep_path(from_term, path, pattern)
