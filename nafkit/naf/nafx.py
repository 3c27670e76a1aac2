# Author: Eric Kow
# License: BSD3

"""
NAF XML input and output.

Reading goes layer by layer, in an order where every layer only
refers to layers read before it (word forms, then terms, then
whatever is built over terms, ...), so that target ids can be
resolved as we go. Elements we do not know about are kept as they are
and written back after the known layers.

Informal summary of the format ::

    <NAF xml:lang="en" version="v3">
      <nafHeader>
        <fileDesc .../> <public .../>
        <linguisticProcessors layer="terms"> <lp name="..."/> ...
      </nafHeader>
      <raw>...</raw>
      <text> <wf id="w1" offset="0" length="3" sent="1">The</wf> ...
      <terms> <term id="t1" lemma="the"><span><target id="w1"/></span>
      ...
"""

import copy
import xml.etree.ElementTree as ET

from ..annotation import ExternalRef, Span
from ..document import Document, FileDesc
from ..internalutil import (on_single_element, required_attr, int_attr,
                            indent_xml, NafXmlException)
from ..layers import AnnotationType
from ..lexical import WF, Term, Compound, Mark
from ..opinion import (Opinion, Statement,
                       StatementTarget, StatementSource, StatementCue)
from ..semantics import (Entity, Coref, Predicate, Role, Feature,
                         LinkedEntity, Relation, Topic,
                         Factuality, FactVal, Factvalue)
from ..syntax import Chunk, Dep, Tree, NonTerminal, Terminal
from ..temporal import Timex3, TLink, CLink, PredicateAnchor

_XML_LANG = '{http://www.w3.org/XML/1998/namespace}lang'


class NafOutputSettings(object):
    """
    How to write NAF files out

    Parameters
    ----------
    indent : bool
        Pretty-print the XML (two spaces per level)
    encoding : string
        Character encoding of written files
    """
    def __init__(self, indent=True, encoding='utf-8'):
        self.indent = indent
        self.encoding = encoding


DEFAULT_OUTPUT_SETTINGS = NafOutputSettings()


# ---------------------------------------------------------------------
# XML to internal structure
# ---------------------------------------------------------------------

def _lookup(doc, anno_id, atype=None):
    "annotation an id read from the file stands for"
    anno = doc.annotation_by_id(anno_id, atype)
    if anno is None:
        raise NafXmlException("Reference to unknown annotation %s" % anno_id)
    return anno


def _lookup_opt(doc, anno_id):
    "as `_lookup`, but None for None"
    return None if anno_id is None else _lookup(doc, anno_id)


def _read_Span(doc, node):
    span = Span()
    for tgt in node.findall('target'):
        span.add_target(_lookup(doc, required_attr(tgt, 'id')),
                        is_head=tgt.get('head') == 'yes')
    return span


def _read_inner_span(doc, node, mandatory=False):
    "the `<span>` child of a node (empty span if optional and missing)"
    return on_single_element(node, None if mandatory else Span(),
                             lambda x: _read_Span(doc, x), 'span')


def _read_ExternalRef(node):
    ref = ExternalRef(node.get('resource'))
    ref.set_attributes(node.attrib)
    for sub in node.findall('externalRef'):
        ref.add_external_ref(_read_ExternalRef(sub))
    return ref


def _read_external_refs(node, anno):
    for ref in node.findall('externalReferences/externalRef'):
        anno.add_external_ref(_read_ExternalRef(ref))


def _read_header(doc, node):
    fdesc = node.find('fileDesc')
    if fdesc is not None:
        doc.create_file_desc(**dict((x, fdesc.get(x))
                                    for x in FileDesc.FIELDS))
    public = node.find('public')
    if public is not None:
        doc.create_public(public_id=public.get('publicId'),
                          uri=public.get('uri'))
    for lps in node.findall('linguisticProcessors'):
        layer = required_attr(lps, 'layer')
        for lp_node in lps.findall('lp'):
            lproc = doc.add_linguistic_processor(
                layer, required_attr(lp_node, 'name'),
                version=lp_node.get('version'))
            lproc.timestamp = lp_node.get('timestamp')
            lproc.begin_timestamp = lp_node.get('beginTimestamp')
            lproc.end_timestamp = lp_node.get('endTimestamp')
            lproc.hostname = lp_node.get('hostname')


def _read_WF(node):
    form = node.text or ''
    offset = int_attr(node, 'offset')
    if offset is None:
        raise NafXmlException("<wf> element without an offset "
                              "attribute: %s" % node.get('id'))
    length = int_attr(node, 'length')
    return WF(required_attr(node, 'id'),
              offset,
              len(form) if length is None else length,
              form,
              int_attr(node, 'sent'),
              para=int_attr(node, 'para'),
              page=int_attr(node, 'page'),
              xpath=node.get('xpath'))


def _read_text(doc, node):
    for wf_node in node.findall('wf'):
        doc.add(_read_WF(wf_node))


def _fill_Term(doc, node, term):
    "everything about a term (or compound) but its id and span"
    term.set_attributes(node.attrib)
    sentiment = node.find('sentiment')
    if sentiment is not None:
        term.create_sentiment().set_attributes(sentiment.attrib)
    for comp_node in node.findall('component'):
        comp = Term(required_attr(comp_node, 'id'),
                    _read_inner_span(doc, comp_node))
        _fill_Term(doc, comp_node, comp)
        term.add_component(comp)
    head = node.get('head')
    if head is not None:
        heads = [x for x in term.components if x.id == head]
        if not heads:
            raise NafXmlException("Head %s of %s is not one of its "
                                  "components" % (head, term.id))
        term.set_head(heads[0])
    _read_external_refs(node, term)
    return term


def _read_terms(doc, node):
    for term_node in node.findall('term'):
        term = Term(required_attr(term_node, 'id'),
                    _read_inner_span(doc, term_node))
        doc.add(_fill_Term(doc, term_node, term))


def _read_multiwords(doc, node):
    for mw_node in node.findall('mw'):
        compound = Compound(required_attr(mw_node, 'id'))
        doc.add(_fill_Term(doc, mw_node, compound))


def _read_deps(doc, node):
    for dep_node in node.findall('dep'):
        doc.add(Dep(_lookup(doc, required_attr(dep_node, 'from'),
                            AnnotationType.TERM),
                    _lookup(doc, required_attr(dep_node, 'to'),
                            AnnotationType.TERM),
                    required_attr(dep_node, 'rfunc'),
                    case=dep_node.get('case')))


def _read_chunks(doc, node):
    for chunk_node in node.findall('chunk'):
        chunk = Chunk(required_attr(chunk_node, 'id'),
                      _read_inner_span(doc, chunk_node, mandatory=True))
        chunk.set_attributes(chunk_node.attrib)
        head = chunk_node.get('head')
        if head is not None:
            chunk.span.set_head(_lookup(doc, head, AnnotationType.TERM))
        doc.add(chunk)


def _read_entities(doc, node):
    for ent_node in node.findall('entity'):
        spans = [_read_Span(doc, x)
                 for x in ent_node.findall('references/span')]
        entity = Entity(required_attr(ent_node, 'id'), spans)
        entity.set_attributes(ent_node.attrib)
        _read_external_refs(ent_node, entity)
        doc.add(entity)


def _read_coreferences(doc, node):
    for coref_node in node.findall('coref'):
        spans = [_read_Span(doc, x) for x in coref_node.findall('span')]
        coref = Coref(required_attr(coref_node, 'id'), spans)
        coref.set_attributes(coref_node.attrib)
        _read_external_refs(coref_node, coref)
        doc.add(coref)


def _read_Tree(doc, node):
    nodes = {}
    for nt_node in node.findall('nt'):
        nterm = NonTerminal(required_attr(nt_node, 'id'))
        nterm.set_attributes(nt_node.attrib)
        nodes[nterm.id] = nterm
    for t_node in node.findall('t'):
        term = Terminal(required_attr(t_node, 'id'),
                        _read_inner_span(doc, t_node))
        nodes[term.id] = term
    children = set()
    for edge in node.findall('edge'):
        child_id = required_attr(edge, 'from')
        parent_id = required_attr(edge, 'to')
        if child_id not in nodes or parent_id not in nodes:
            raise NafXmlException("Edge %s connects unknown tree nodes" %
                                  edge.get('id'))
        child = nodes[child_id]
        parent = nodes[parent_id]
        if parent.is_terminal():
            raise NafXmlException("Edge %s goes into terminal %s" %
                                  (edge.get('id'), parent_id))
        child.edge_id = edge.get('id')
        parent.add_child(child, is_head=edge.get('head') == 'yes')
        children.add(child_id)
    roots = [x for x in nodes.values() if x.id not in children]
    if len(roots) != 1:
        raise NafXmlException("Expected a tree with exactly one root "
                              "(got %d)" % len(roots))
    return Tree(roots[0], type=node.get('type'), anno_id=node.get('id'))


def _read_constituency(doc, node):
    for tree_node in node.findall('tree'):
        doc.add(_read_Tree(doc, tree_node))


def _read_srl(doc, node):
    for pred_node in node.findall('predicate'):
        pred = Predicate(required_attr(pred_node, 'id'),
                         _read_inner_span(doc, pred_node))
        pred.set_attributes(pred_node.attrib)
        _read_external_refs(pred_node, pred)
        for role_node in pred_node.findall('role'):
            role = Role(required_attr(role_node, 'id'),
                        span=_read_inner_span(doc, role_node))
            role.set_attributes(role_node.attrib)
            _read_external_refs(role_node, role)
            pred.add_role(role)
        doc.add(pred)


def _read_timeExpressions(doc, node):
    timexes = []
    for timex_node in node.findall('timex3'):
        timex = Timex3(required_attr(timex_node, 'id'),
                       span=_read_inner_span(doc, timex_node))
        timex.set_attributes(timex_node.attrib)
        doc.add(timex)
        timexes.append((timex, timex_node))
    # begin and end points may point forward
    for timex, timex_node in timexes:
        begin = timex_node.get('beginPoint')
        if begin is not None:
            timex.set_begin_point(_lookup(doc, begin))
        end = timex_node.get('endPoint')
        if end is not None:
            timex.set_end_point(_lookup(doc, end))


def _read_temporalRelations(doc, node):
    for child in node:
        if child.tag == 'tlink':
            doc.add(TLink(_lookup(doc, required_attr(child, 'from')),
                          _lookup(doc, required_attr(child, 'to')),
                          child.get('relType'),
                          anno_id=required_attr(child, 'id')))
        elif child.tag == 'predicateAnchor':
            doc.add(PredicateAnchor(
                required_attr(child, 'id'),
                _read_inner_span(doc, child),
                anchor_time=_lookup_opt(doc, child.get('anchorTime')),
                begin_point=_lookup_opt(doc, child.get('beginPoint')),
                end_point=_lookup_opt(doc, child.get('endPoint'))))


def _read_causalRelations(doc, node):
    for clink_node in node.findall('clink'):
        doc.add(CLink(_lookup(doc, required_attr(clink_node, 'from')),
                      _lookup(doc, required_attr(clink_node, 'to')),
                      rel_type=clink_node.get('relType'),
                      anno_id=required_attr(clink_node, 'id')))


def _read_opinions(doc, node):
    for op_node in node.findall('opinion'):
        opinion = Opinion(required_attr(op_node, 'id'))
        holder = op_node.find('opinion_holder')
        if holder is not None:
            opinion.create_holder(_read_inner_span(doc, holder),
                                  type=holder.get('type'))
        target = op_node.find('opinion_target')
        if target is not None:
            opinion.create_target(_read_inner_span(doc, target))
        expr = op_node.find('opinion_expression')
        if expr is not None:
            opinion.create_expression(
                _read_inner_span(doc, expr)).set_attributes(expr.attrib)
        doc.add(opinion)


def _read_factualities(doc, node):
    for fact_node in node.findall('factuality'):
        fact = Factuality(required_attr(fact_node, 'id'),
                          _read_inner_span(doc, fact_node))
        for val_node in fact_node.findall('factVal'):
            fact.add_fact_val(FactVal(val_node.get('value'),
                                      val_node.get('resource'),
                                      confidence=val_node.get('confidence'),
                                      source=val_node.get('source')))
        doc.add(fact)


def _read_factualitylayer(doc, node):
    for val_node in node.findall('factvalue'):
        doc.add(Factvalue(_lookup(doc, required_attr(val_node, 'id')),
                          val_node.get('prediction'),
                          confidence=val_node.get('confidence')))


def _read_markables(doc, node):
    for mark_node in node.findall('mark'):
        mark = Mark(required_attr(mark_node, 'id'),
                    _read_inner_span(doc, mark_node))
        mark.set_attributes(mark_node.attrib)
        _read_external_refs(mark_node, mark)
        doc.add(mark)


def _read_features(doc, node):
    for path, atype in (('properties/property', AnnotationType.PROPERTY),
                        ('categories/category', AnnotationType.CATEGORY)):
        for feat_node in node.findall(path):
            spans = [_read_Span(doc, x)
                     for x in feat_node.findall('references/span')]
            feat = Feature(required_attr(feat_node, 'id'),
                           lemma=feat_node.get('lemma'),
                           spans=spans,
                           atype=atype)
            _read_external_refs(feat_node, feat)
            doc.add(feat)


def _read_linkedEntities(doc, node):
    for ent_node in node.findall('linkedEntity'):
        entity = LinkedEntity(required_attr(ent_node, 'id'),
                              _read_inner_span(doc, ent_node))
        entity.set_attributes(ent_node.attrib)
        doc.add(entity)


def _read_relations(doc, node):
    for rel_node in node.findall('relation'):
        rel = Relation(_lookup(doc, required_attr(rel_node, 'from')),
                       _lookup(doc, required_attr(rel_node, 'to')),
                       anno_id=required_attr(rel_node, 'id'))
        rel.set_attributes(rel_node.attrib)
        doc.add(rel)


def _read_topics(doc, node):
    for topic_node in node.findall('topic'):
        topic = Topic((topic_node.text or '').strip(),
                      anno_id=topic_node.get('id'))
        topic.set_attributes(topic_node.attrib)
        doc.add(topic)


def _read_attribution(doc, node):
    def part(cls):
        "statement part from its element"
        return lambda x: cls(_read_inner_span(doc, x))

    for st_node in node.findall('statement'):
        statement = Statement(
            on_single_element(st_node, None, part(StatementTarget),
                              'statement_target'),
            anno_id=required_attr(st_node, 'id'))
        source = st_node.find('statement_source')
        if source is not None:
            statement.set_source(part(StatementSource)(source))
        cue = st_node.find('statement_cue')
        if cue is not None:
            statement.set_cue(part(StatementCue)(cue))
        doc.add(statement)


_LAYER_READERS = [
    ('text', _read_text),
    ('terms', _read_terms),
    ('multiwords', _read_multiwords),
    ('deps', _read_deps),
    ('chunks', _read_chunks),
    ('entities', _read_entities),
    ('coreferences', _read_coreferences),
    ('constituency', _read_constituency),
    ('srl', _read_srl),
    ('timeExpressions', _read_timeExpressions),
    ('temporalRelations', _read_temporalRelations),
    ('causalRelations', _read_causalRelations),
    ('opinions', _read_opinions),
    ('factualities', _read_factualities),
    ('factualitylayer', _read_factualitylayer),
    ('markables', _read_markables),
    ('features', _read_features),
    ('linkedEntities', _read_linkedEntities),
    ('relations', _read_relations),
    ('topics', _read_topics),
    ('attribution', _read_attribution),
]
"Known layer elements, in an order where references only go backwards"

_KNOWN_ELEMENTS = frozenset(['nafHeader', 'raw'] +
                            [x for x, _ in _LAYER_READERS])


def read_naf_xml(root):
    """
    Document from the root `<NAF>` element of an XML tree
    """
    if root.tag != 'NAF':
        raise NafXmlException("Expected a NAF element, not %s" % root.tag)
    doc = Document(lang=root.get(_XML_LANG), version=root.get('version'))
    header = root.find('nafHeader')
    if header is not None:
        _read_header(doc, header)
    raw = root.find('raw')
    if raw is not None:
        doc.raw_text = raw.text or ''
    for name, reader in _LAYER_READERS:
        for node in root.findall(name):
            reader(doc, node)
    for node in root:
        if node.tag not in _KNOWN_ELEMENTS:
            doc.add_unknown_layer(node)
    return doc


def read_naf(source):
    """
    Read a NAF document from a file name or file object
    """
    return read_naf_xml(ET.parse(source).getroot())


def read_naf_string(text):
    """
    Read a NAF document from a string
    """
    return read_naf_xml(ET.fromstring(text))


# ---------------------------------------------------------------------
# internal structure to XML
# ---------------------------------------------------------------------

def _set_attrs(elm, anno):
    "copy the plain attributes of an annotation onto an element"
    for name, val in anno.attributes().items():
        elm.set(name, str(val))
    return elm


def _anno_xml(name, anno):
    "element with the id (if any) and plain attributes of an annotation"
    elm = ET.Element(name)
    anno_id = getattr(anno, 'id', None)
    if anno_id is not None:
        elm.set('id', anno_id)
    return _set_attrs(elm, anno)


def _Span_xml(span, name='span'):
    elm = ET.Element(name)
    for target in span:
        tgt = ET.SubElement(elm, 'target', id=target.id)
        if target is span.head:
            tgt.set('head', 'yes')
    return elm


def _ExternalRef_xml(ref):
    elm = _set_attrs(ET.Element('externalRef'), ref)
    for sub in ref.external_refs:
        elm.append(_ExternalRef_xml(sub))
    return elm


def _add_external_refs(elm, anno):
    if anno.external_refs:
        refs = ET.SubElement(elm, 'externalReferences')
        for ref in anno.external_refs:
            refs.append(_ExternalRef_xml(ref))
    return elm


def _WF_xml(wf):
    elm = _anno_xml('wf', wf)
    elm.text = wf.form
    return elm


def _Term_xml(term, name='term'):
    elm = _anno_xml(name, term)
    if term.head is not None:
        elm.set('head', term.head.id)
    if term.sentiment is not None:
        elm.append(_set_attrs(ET.Element('sentiment'), term.sentiment))
    if not term.span.is_empty():
        elm.append(_Span_xml(term.span))
    for comp in term.components:
        elm.append(_Term_xml(comp, 'component'))
    return _add_external_refs(elm, term)


def _Dep_xml(dep):
    elm = ET.Element('dep')
    elm.set('from', dep.from_term.id)
    elm.set('to', dep.to_term.id)
    return _set_attrs(elm, dep)


def _Chunk_xml(chunk):
    elm = _anno_xml('chunk', chunk)
    if chunk.head is not None:
        elm.set('head', chunk.head.id)
    elm.append(_Span_xml(chunk.span))
    return elm


def _Entity_xml(entity):
    elm = _anno_xml('entity', entity)
    refs = ET.SubElement(elm, 'references')
    for span in entity.spans:
        refs.append(_Span_xml(span))
    return _add_external_refs(elm, entity)


def _Coref_xml(coref):
    elm = _anno_xml('coref', coref)
    for span in coref.spans:
        elm.append(_Span_xml(span))
    return _add_external_refs(elm, coref)


def _Tree_xml(tree):
    elm = _anno_xml('tree', tree)
    nodes = list(tree.nodes())
    for node in nodes:
        if not node.is_terminal():
            elm.append(_anno_xml('nt', node))
    for node in nodes:
        if node.is_terminal():
            t_elm = _anno_xml('t', node)
            t_elm.append(_Span_xml(node.span))
            elm.append(t_elm)
    for node in nodes:
        if node.is_terminal():
            continue
        for child in node.children:
            edge = ET.SubElement(elm, 'edge')
            if child.has_edge_id():
                edge.set('id', child.edge_id)
            edge.set('from', child.id)
            edge.set('to', node.id)
            if child.is_head():
                edge.set('head', 'yes')
    return elm


def _Role_xml(role):
    elm = _anno_xml('role', role)
    _add_external_refs(elm, role)
    elm.append(_Span_xml(role.span))
    return elm


def _Predicate_xml(pred):
    elm = _anno_xml('predicate', pred)
    _add_external_refs(elm, pred)
    elm.append(_Span_xml(pred.span))
    for role in pred.roles:
        elm.append(_Role_xml(role))
    return elm


def _Timex3_xml(timex):
    elm = _anno_xml('timex3', timex)
    if timex.begin_point is not None:
        elm.set('beginPoint', timex.begin_point.id)
    if timex.end_point is not None:
        elm.set('endPoint', timex.end_point.id)
    if not timex.span.is_empty():
        elm.append(_Span_xml(timex.span))
    return elm


def _TLink_xml(tlink):
    elm = ET.Element('tlink', id=tlink.id)
    elm.set('from', tlink.from_anno.id)
    elm.set('to', tlink.to_anno.id)
    elm.set('fromType', tlink.from_type)
    elm.set('toType', tlink.to_type)
    return _set_attrs(elm, tlink)


def _PredicateAnchor_xml(anchor):
    elm = _anno_xml('predicateAnchor', anchor)
    for name, timex in (('anchorTime', anchor.anchor_time),
                        ('beginPoint', anchor.begin_point),
                        ('endPoint', anchor.end_point)):
        if timex is not None:
            elm.set(name, timex.id)
    elm.append(_Span_xml(anchor.span))
    return elm


def _CLink_xml(clink):
    elm = ET.Element('clink', id=clink.id)
    elm.set('from', clink.from_pred.id)
    elm.set('to', clink.to_pred.id)
    return _set_attrs(elm, clink)


def _part_xml(name, part):
    "holder/target/expression of an opinion, parts of a statement"
    elm = _set_attrs(ET.Element(name), part)
    elm.append(_Span_xml(part.span))
    return elm


def _Opinion_xml(opinion):
    elm = _anno_xml('opinion', opinion)
    for name, part in (('opinion_holder', opinion.holder),
                       ('opinion_target', opinion.target),
                       ('opinion_expression', opinion.expression)):
        if part is not None:
            elm.append(_part_xml(name, part))
    return elm


def _Factuality_xml(fact):
    elm = _anno_xml('factuality', fact)
    elm.append(_Span_xml(fact.span))
    for fact_val in fact.fact_vals:
        elm.append(_set_attrs(ET.Element('factVal'), fact_val))
    return elm


def _Factvalue_xml(fact):
    return _set_attrs(ET.Element('factvalue', id=fact.wf.id), fact)


def _Mark_xml(mark):
    elm = _anno_xml('mark', mark)
    elm.append(_Span_xml(mark.span))
    return _add_external_refs(elm, mark)


def _Feature_xml(feat):
    elm = _anno_xml('category' if feat.is_category() else 'property', feat)
    refs = ET.SubElement(elm, 'references')
    for span in feat.spans:
        refs.append(_Span_xml(span))
    return _add_external_refs(elm, feat)


def _LinkedEntity_xml(entity):
    elm = _anno_xml('linkedEntity', entity)
    elm.append(_Span_xml(entity.span))
    return elm


def _Relation_xml(rel):
    elm = ET.Element('relation', id=rel.id)
    elm.set('from', rel.from_anno.id)
    elm.set('to', rel.to_anno.id)
    return _set_attrs(elm, rel)


def _Topic_xml(topic):
    elm = _anno_xml('topic', topic)
    elm.text = topic.value
    return elm


def _Statement_xml(statement):
    elm = _anno_xml('statement', statement)
    for name, part in (('statement_target', statement.target),
                       ('statement_source', statement.source),
                       ('statement_cue', statement.cue)):
        if part is not None:
            elm.append(_part_xml(name, part))
    return elm


def _header_xml(doc):
    elm = ET.Element('nafHeader')
    if doc.file_desc is not None:
        fdesc = ET.SubElement(elm, 'fileDesc')
        for field in FileDesc.FIELDS:
            val = getattr(doc.file_desc, field)
            if val is not None:
                fdesc.set(field, str(val))
    if doc.public is not None:
        public = ET.SubElement(elm, 'public')
        if doc.public.public_id is not None:
            public.set('publicId', doc.public.public_id)
        if doc.public.uri is not None:
            public.set('uri', doc.public.uri)
    for layer, lps in doc.lps.items():
        lps_elm = ET.SubElement(elm, 'linguisticProcessors', layer=layer)
        for lproc in lps:
            lp_elm = ET.SubElement(lps_elm, 'lp', name=lproc.name)
            for name, val in (('version', lproc.version),
                              ('timestamp', lproc.timestamp),
                              ('beginTimestamp', lproc.begin_timestamp),
                              ('endTimestamp', lproc.end_timestamp),
                              ('hostname', lproc.hostname)):
                if val is not None:
                    lp_elm.set(name, val)
    return elm


def _layer_xml(name, annos, item_xml):
    "layer element holding one element per annotation (None if empty)"
    if not annos:
        return None
    elm = ET.Element(name)
    for anno in annos:
        elm.append(item_xml(anno))
    return elm


def _features_xml(doc):
    properties = _layer_xml('properties',
                            doc.annotations(AnnotationType.PROPERTY),
                            _Feature_xml)
    categories = _layer_xml('categories',
                            doc.annotations(AnnotationType.CATEGORY),
                            _Feature_xml)
    if properties is None and categories is None:
        return None
    elm = ET.Element('features')
    for sub in (properties, categories):
        if sub is not None:
            elm.append(sub)
    return elm


def _temporal_relations_xml(doc):
    elm = ET.Element('temporalRelations')
    for tlink in doc.annotations(AnnotationType.TLINK):
        elm.append(_TLink_xml(tlink))
    for anchor in doc.annotations(AnnotationType.PREDICATE_ANCHOR):
        elm.append(_PredicateAnchor_xml(anchor))
    return elm if len(elm) else None


def _layers_xml(doc):
    "layer elements, in NAF order (None for empty layers)"
    atype = AnnotationType
    yield _layer_xml('text', doc.annotations(atype.WF), _WF_xml)
    yield _layer_xml('terms', doc.annotations(atype.TERM), _Term_xml)
    yield _layer_xml('multiwords', doc.annotations(atype.MW),
                     lambda x: _Term_xml(x, 'mw'))
    yield _layer_xml('deps', doc.annotations(atype.DEP), _Dep_xml)
    yield _layer_xml('chunks', doc.annotations(atype.CHUNK), _Chunk_xml)
    yield _layer_xml('entities', doc.annotations(atype.ENTITY), _Entity_xml)
    yield _layer_xml('coreferences', doc.annotations(atype.COREF),
                     _Coref_xml)
    yield _layer_xml('constituency', doc.annotations(atype.TREE), _Tree_xml)
    yield _layer_xml('srl', doc.annotations(atype.PREDICATE),
                     _Predicate_xml)
    yield _layer_xml('timeExpressions', doc.annotations(atype.TIMEX3),
                     _Timex3_xml)
    yield _temporal_relations_xml(doc)
    yield _layer_xml('causalRelations', doc.annotations(atype.CLINK),
                     _CLink_xml)
    yield _layer_xml('opinions', doc.annotations(atype.OPINION),
                     _Opinion_xml)
    yield _layer_xml('factualities', doc.annotations(atype.FACTUALITY),
                     _Factuality_xml)
    yield _layer_xml('factualitylayer', doc.annotations(atype.FACTVALUE),
                     _Factvalue_xml)
    yield _layer_xml('markables', doc.annotations(atype.MARK), _Mark_xml)
    yield _features_xml(doc)
    yield _layer_xml('linkedEntities', doc.annotations(atype.LINKED_ENTITY),
                     _LinkedEntity_xml)
    yield _layer_xml('relations', doc.annotations(atype.RELATION),
                     _Relation_xml)
    yield _layer_xml('topics', doc.annotations(atype.TOPIC), _Topic_xml)
    yield _layer_xml('attribution', doc.annotations(atype.STATEMENT),
                     _Statement_xml)


def naf_to_xml(doc, settings=DEFAULT_OUTPUT_SETTINGS):
    """
    Root `<NAF>` element for a document
    """
    root = ET.Element('NAF')
    if doc.lang is not None:
        root.set(_XML_LANG, doc.lang)
    if doc.version is not None:
        root.set('version', doc.version)
    root.append(_header_xml(doc))
    if doc.raw_text is not None:
        ET.SubElement(root, 'raw').text = doc.raw_text
    for elm in _layers_xml(doc):
        if elm is not None:
            root.append(elm)
    for elm in doc.get_unknown_layers():
        root.append(copy.deepcopy(elm))
    if settings.indent:
        indent_xml(root)
    return root


def naf_to_string(doc, settings=DEFAULT_OUTPUT_SETTINGS):
    """
    NAF document as an XML string (without XML declaration)
    """
    return ET.tostring(naf_to_xml(doc, settings), encoding='unicode')


def write_naf(doc, filename, settings=DEFAULT_OUTPUT_SETTINGS):
    """
    Write a NAF document to a file
    """
    xml = naf_to_xml(doc, settings)
    ET.ElementTree(xml).write(filename,
                              encoding=settings.encoding,
                              xml_declaration=True)
