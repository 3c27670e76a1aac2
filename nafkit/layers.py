# Author: Eric Kow
# License: BSD3

"""
Catalog of NAF layers and annotation types.

Everything here is fixed: which annotation types exist, which of them
are *top* types (ie. live directly in a layer), which layer each top
type belongs to, how identifiers of each type are spelled, and which
capabilities each type has (identifiable, sentence-scoped,
paragraph-scoped).

Annotation classes do not need to know any of this; the container and
the document consult these tables instead of asking the classes.
"""

from enum import Enum

from frozendict import frozendict


class Layer(Enum):
    """
    Named buckets of top-level annotations
    """
    TEXT = 'text'
    TERMS = 'terms'
    ENTITIES = 'entities'
    CHUNKS = 'chunks'
    DEPS = 'deps'
    CONSTITUENCY = 'constituency'
    COREFERENCES = 'coreferences'
    OPINIONS = 'opinions'
    CAUSAL_RELATIONS = 'causalRelations'
    TEMPORAL_RELATIONS = 'temporalRelations'
    SRL = 'srl'
    TIME_EXPRESSIONS = 'timeExpressions'
    FACTUALITIES = 'factualities'
    FACTUALITY_LAYER = 'factualitylayer'
    MARKABLES = 'markables'
    PROPERTIES = 'properties'
    CATEGORIES = 'categories'
    RELATIONS = 'relations'
    LINKED_ENTITIES = 'linkedEntities'
    TOPICS = 'topics'
    ATTRIBUTION = 'attribution'


class AnnotationType(Enum):
    """
    Every kind of annotation the model knows about, top-level or not
    """
    WF = 'wf'
    TERM = 'term'
    MW = 'mw'
    COMPONENT = 'component'
    SENTIMENT = 'sentiment'
    ENTITY = 'entity'
    CHUNK = 'chunk'
    DEP = 'dep'
    TREE = 'tree'
    NON_TERMINAL = 'nt'
    TERMINAL = 't'
    EDGE = 'edge'
    COREF = 'coref'
    OPINION = 'opinion'
    OPINION_HOLDER = 'opinion_holder'
    OPINION_TARGET = 'opinion_target'
    OPINION_EXPRESSION = 'opinion_expression'
    CLINK = 'clink'
    TLINK = 'tlink'
    PREDICATE_ANCHOR = 'predicateAnchor'
    PREDICATE = 'predicate'
    ROLE = 'role'
    TIMEX3 = 'timex3'
    FACTUALITY = 'factuality'
    FACTVALUE = 'factvalue'
    MARK = 'mark'
    PROPERTY = 'property'
    CATEGORY = 'category'
    LINKED_ENTITY = 'linkedEntity'
    RELATION = 'relation'
    TOPIC = 'topic'
    STATEMENT = 'statement'
    STATEMENT_TARGET = 'statement_target'
    STATEMENT_SOURCE = 'statement_source'
    STATEMENT_CUE = 'statement_cue'


_T = AnnotationType

TOP_TYPES = (
    _T.WF,
    _T.TERM,
    _T.MW,
    _T.ENTITY,
    _T.CHUNK,
    _T.DEP,
    _T.TREE,
    _T.COREF,
    _T.OPINION,
    _T.CLINK,
    _T.TLINK,
    _T.PREDICATE_ANCHOR,
    _T.PREDICATE,
    _T.TIMEX3,
    _T.FACTUALITY,
    _T.FACTVALUE,
    _T.MARK,
    _T.PROPERTY,
    _T.CATEGORY,
    _T.LINKED_ENTITY,
    _T.RELATION,
    _T.TOPIC,
    _T.STATEMENT,
)
"""
Annotation types whose instances appear in a layer, in the order
used whenever we walk over all of them (split, join, serialisation)
"""

TYPE_2_LAYER = frozendict([
    (_T.WF, Layer.TEXT),
    (_T.TERM, Layer.TERMS),
    (_T.MW, Layer.TERMS),
    (_T.ENTITY, Layer.ENTITIES),
    (_T.CHUNK, Layer.CHUNKS),
    (_T.DEP, Layer.DEPS),
    (_T.TREE, Layer.CONSTITUENCY),
    (_T.COREF, Layer.COREFERENCES),
    (_T.OPINION, Layer.OPINIONS),
    (_T.CLINK, Layer.CAUSAL_RELATIONS),
    (_T.TLINK, Layer.TEMPORAL_RELATIONS),
    (_T.PREDICATE_ANCHOR, Layer.TEMPORAL_RELATIONS),
    (_T.PREDICATE, Layer.SRL),
    (_T.TIMEX3, Layer.TIME_EXPRESSIONS),
    (_T.FACTUALITY, Layer.FACTUALITIES),
    (_T.FACTVALUE, Layer.FACTUALITY_LAYER),
    (_T.MARK, Layer.MARKABLES),
    (_T.PROPERTY, Layer.PROPERTIES),
    (_T.CATEGORY, Layer.CATEGORIES),
    (_T.LINKED_ENTITY, Layer.LINKED_ENTITIES),
    (_T.RELATION, Layer.RELATIONS),
    (_T.TOPIC, Layer.TOPICS),
    (_T.STATEMENT, Layer.ATTRIBUTION),
])
"Layer of every top annotation type (and only those)"


def _invert(type_2_layer):
    "layer -> ordered tuple of its top types"
    res = {}
    for atype in TOP_TYPES:
        layer = type_2_layer[atype]
        res[layer] = res.get(layer, ()) + (atype,)
    return frozendict(res)


LAYER_2_TYPES = _invert(TYPE_2_LAYER)
"Top annotation types of every layer, in `TOP_TYPES` order"

ID_PREFIXES = frozendict([
    (_T.WF, 'w'),
    (_T.TERM, 't'),
    (_T.MW, 'mw'),
    (_T.COMPONENT, 'tc'),
    (_T.ENTITY, 'e'),
    (_T.CHUNK, 'c'),
    (_T.TREE, 'tree'),
    (_T.NON_TERMINAL, 'nter'),
    (_T.TERMINAL, 'ter'),
    (_T.EDGE, 'tre'),
    (_T.COREF, 'coref'),
    (_T.OPINION, 'o'),
    (_T.CLINK, 'clink'),
    (_T.TLINK, 'tlink'),
    (_T.PREDICATE_ANCHOR, 'an'),
    (_T.PREDICATE, 'pr'),
    (_T.ROLE, 'rl'),
    (_T.TIMEX3, 'tmx'),
    (_T.FACTUALITY, 'f'),
    (_T.MARK, 'm'),
    (_T.PROPERTY, 'p'),
    (_T.CATEGORY, 'cat'),
    (_T.LINKED_ENTITY, 'le'),
    (_T.RELATION, 'r'),
    (_T.TOPIC, 'top'),
    (_T.STATEMENT, 'st'),
])
"""
Prefix of generated identifiers. EDGE has a prefix but is not an
annotation type of its own: it numbers the edges of constituency trees.
"""

IDENTIFIABLE_TYPES = frozenset(t for t in ID_PREFIXES if t is not _T.EDGE)

SENTENCE_LEVEL_TYPES = frozenset([
    _T.WF,
    _T.TERM,
    _T.MW,
    _T.CHUNK,
    _T.DEP,
    _T.TREE,
    _T.PREDICATE,
    _T.TIMEX3,
    _T.FACTUALITY,
    _T.FACTVALUE,
    _T.MARK,
    _T.LINKED_ENTITY,
])
"Top types whose instances are confined to a single sentence"

PARAGRAPH_LEVEL_TYPES = SENTENCE_LEVEL_TYPES | frozenset([
    _T.ENTITY,
    _T.COREF,
    _T.OPINION,
    _T.CLINK,
    _T.TLINK,
    _T.PREDICATE_ANCHOR,
    _T.PROPERTY,
    _T.CATEGORY,
    _T.RELATION,
    _T.STATEMENT,
])
"Top types whose instances are confined to a single paragraph"


def layer_of(atype):
    """
    Layer of a top annotation type, or None for sub-annotation types
    """
    return TYPE_2_LAYER.get(atype)


def is_top_type(atype):
    "True if instances of this type live directly in a layer"
    return atype in TYPE_2_LAYER


def is_identifiable_type(atype):
    "True if instances of this type carry a stable string identifier"
    return atype in IDENTIFIABLE_TYPES


def is_sentence_level_type(atype):
    "True if instances of this (top) type never cross a sentence"
    return atype in SENTENCE_LEVEL_TYPES


def is_paragraph_level_type(atype):
    "True if instances of this (top) type never cross a paragraph"
    return atype in PARAGRAPH_LEVEL_TYPES
