# Author: Eric Kow
# License: BSD3
# pylint: disable=too-many-public-methods, invalid-name

"""
Tests for NAF input/output and the naf-util subcommands
"""

import argparse
import contextlib
import io
import os
import shutil
import tempfile
import unittest

from nafkit.document import Document
from nafkit.internalutil import NafXmlException
from nafkit.layers import AnnotationType, Layer
from nafkit.lexical import WF, Term
from nafkit.naf.nafx import (NafOutputSettings, naf_to_string, naf_to_xml,
                             read_naf, read_naf_string, write_naf)
from nafkit.naf.util.cmd import depgraph, join, split, stats
from nafkit.syntax import Chunk

EXAMPLE = """<NAF xml:lang="en" version="v3">
  <nafHeader>
    <fileDesc title="Example" filename="example.txt"/>
    <public publicId="doc1" uri="http://example.com/doc1"/>
    <linguisticProcessors layer="terms">
      <lp name="tagger" version="1.0" timestamp="2015-03-02T14:01:22+0100"/>
    </linguisticProcessors>
  </nafHeader>
  <raw>John eats apples. He likes them.</raw>
  <text>
    <wf id="w1" offset="0" length="4" sent="1" para="1">John</wf>
    <wf id="w2" offset="5" length="4" sent="1">eats</wf>
    <wf id="w3" offset="10" length="6" sent="1">apples</wf>
    <wf id="w4" offset="16" length="1" sent="1">.</wf>
    <wf id="w5" offset="18" length="2" sent="2" para="2">He</wf>
    <wf id="w6" offset="21" length="5" sent="2">likes</wf>
    <wf id="w7" offset="27" length="4" sent="2">them</wf>
    <wf id="w8" offset="31" length="1" sent="2">.</wf>
  </text>
  <terms>
    <term id="t1" lemma="John" pos="R"><span><target id="w1"/></span></term>
    <term id="t2" lemma="eat" pos="V"><span><target id="w2"/></span></term>
    <term id="t3" lemma="apple" pos="N" head="tc1">
      <sentiment polarity="positive" resource="lexicon"/>
      <span><target id="w3"/></span>
      <component id="tc1" lemma="apple">
        <span><target id="w3"/></span>
      </component>
      <externalReferences>
        <externalRef resource="wordnet" reference="apple.n.01">
          <externalRef resource="wordnet" reference="fruit.n.01"/>
        </externalRef>
      </externalReferences>
    </term>
    <term id="t4" lemma="." pos="O"><span><target id="w4"/></span></term>
    <term id="t5" lemma="he" pos="Q"><span><target id="w5"/></span></term>
    <term id="t6" lemma="like" pos="V"><span><target id="w6"/></span></term>
    <term id="t7" lemma="they" pos="Q"><span><target id="w7"/></span></term>
    <term id="t8" lemma="." pos="O"><span><target id="w8"/></span></term>
  </terms>
  <deps>
    <dep from="t2" to="t1" rfunc="nsubj"/>
    <dep from="t2" to="t3" rfunc="obj"/>
  </deps>
  <chunks>
    <chunk id="c1" head="t1" phrase="NP"><span><target id="t1"/></span></chunk>
  </chunks>
  <entities>
    <entity id="e1" type="PERSON">
      <references><span><target id="t1"/></span></references>
      <externalReferences>
        <externalRef resource="dbpedia" reference="John"/>
      </externalReferences>
    </entity>
  </entities>
  <coreferences>
    <coref id="co1" type="entity">
      <span><target id="t1"/></span>
      <span><target id="t5"/></span>
    </coref>
  </coreferences>
  <constituency>
    <tree type="parse">
      <nt id="nter1" label="S"/>
      <nt id="nter2" label="NP"/>
      <t id="ter1"><span><target id="t1"/></span></t>
      <t id="ter2"><span><target id="t2"/></span></t>
      <edge id="tre1" from="nter2" to="nter1"/>
      <edge id="tre2" from="ter1" to="nter2" head="yes"/>
      <edge id="tre3" from="ter2" to="nter1" head="yes"/>
    </tree>
  </constituency>
  <srl>
    <predicate id="pr1" uri="eat.01">
      <span><target id="t2"/></span>
      <role id="rl1" semRole="A0"><span><target id="t1"/></span></role>
    </predicate>
  </srl>
  <timeExpressions>
    <timex3 id="tmx0" type="DATE" value="2015-03-02"
            functionInDocument="CREATION_TIME"/>
  </timeExpressions>
  <temporalRelations>
    <tlink id="tlink1" from="pr1" to="tmx0"
           fromType="event" toType="timex" relType="BEFORE"/>
    <predicateAnchor id="an1" anchorTime="tmx0">
      <span><target id="pr1"/></span>
    </predicateAnchor>
  </temporalRelations>
  <opinions>
    <opinion id="o1">
      <opinion_holder type="speaker">
        <span><target id="t5"/></span>
      </opinion_holder>
      <opinion_target><span><target id="t7"/></span></opinion_target>
      <opinion_expression polarity="positive" strength="1">
        <span><target id="t6"/></span>
      </opinion_expression>
    </opinion>
  </opinions>
  <factualities>
    <factuality id="f1">
      <span><target id="t2"/></span>
      <factVal value="CT+" resource="factbank" confidence="0.9"/>
    </factuality>
  </factualities>
  <markables>
    <mark id="m1" lemma="apple" source="wordnet">
      <span><target id="w3"/></span>
    </mark>
  </markables>
  <features>
    <properties>
      <property id="p1" lemma="taste">
        <references><span><target id="t6"/></span></references>
      </property>
    </properties>
  </features>
  <linkedEntities>
    <linkedEntity id="le1" resource="dbpedia" reference="Apple"
                  confidence="0.8">
      <span><target id="w3"/></span>
    </linkedEntity>
  </linkedEntities>
  <relations>
    <relation id="r1" from="e1" to="p1" confidence="0.5"/>
  </relations>
  <topics>
    <topic probability="0.7" source="model">Food</topic>
  </topics>
  <attribution>
    <statement id="st1">
      <statement_target>
        <span><target id="t6"/><target id="t7"/></span>
      </statement_target>
      <statement_source><span><target id="t5"/></span></statement_source>
    </statement>
  </attribution>
  <myLayer><thing id="x1"/></myLayer>
</NAF>
"""


def ids(doc, what):
    "identifiers (or text) of the annotations of a type or layer"
    return [getattr(x, "id", None) or str(x) for x in doc.annotations(what)]


class ReadTest(unittest.TestCase):
    "reading the example document"

    def setUp(self):
        self.doc = read_naf_string(EXAMPLE)

    def test_header(self):
        doc = self.doc
        self.assertEqual('en', doc.lang)
        self.assertEqual('v3', doc.version)
        self.assertEqual('Example', doc.file_desc.title)
        self.assertEqual('doc1', doc.public.public_id)
        lproc = doc.lps['terms'][0]
        self.assertEqual('tagger', lproc.name)
        self.assertEqual('2015-03-02T14:01:22+0100', lproc.timestamp)
        self.assertEqual('John eats apples. He likes them.', doc.raw_text)

    def test_text(self):
        doc = self.doc
        self.assertEqual(8, len(doc.annotations(Layer.TEXT)))
        self.assertEqual(2, doc.num_sentences())
        self.assertEqual(2, doc.num_paragraphs())
        self.assertEqual([1], doc.sents_by_para(1))

    def test_terms(self):
        doc = self.doc
        term = doc.annotation_by_id('t3')
        comp = doc.annotation_by_id('tc1')
        self.assertEqual('apple', term.lemma)
        self.assertEqual('positive', term.sentiment.polarity)
        self.assertIs(comp, term.head)
        self.assertIs(term, comp.compound)
        ref = term.external_refs[0]
        self.assertEqual('apple.n.01', ref.reference)
        self.assertEqual('fruit.n.01', ref.external_refs[0].reference)
        self.assertEqual('apples', doc.text(term))

    def test_syntax(self):
        doc = self.doc
        t1, t2, t3 = [doc.annotation_by_id(x) for x in ('t1', 't2', 't3')]
        chunk = doc.annotation_by_id('c1')
        self.assertIs(t1, chunk.head)
        self.assertEqual('NP', chunk.phrase)
        self.assertEqual(['nsubj', 'obj'],
                         [x.rfunc for x in doc.dep_path(t1, t3)])
        self.assertEqual(2, len(doc.deps_from_term(t2)))
        tree = doc.annotations(AnnotationType.TREE)[0]
        self.assertEqual('parse', tree.type)
        self.assertEqual('S', tree.root.label)
        self.assertEqual(['nter2', 'ter2'],
                         [x.id for x in tree.root.children])
        self.assertEqual('tre3', doc.annotation_by_id('ter2').edge_id)
        self.assertTrue(doc.annotation_by_id('ter1').is_head())
        self.assertFalse(doc.annotation_by_id('nter2').is_head())

    def test_semantics(self):
        doc = self.doc
        w1 = doc.annotation_by_id('w1')
        self.assertEqual(['e1'], [x.id for x in doc.annotations_by(
            w1, AnnotationType.ENTITY)])
        self.assertEqual(['co1'], [x.id for x in doc.annotations_by(
            doc.annotation_by_id('t5'), AnnotationType.COREF)])
        pred = doc.annotation_by_id('pr1')
        self.assertEqual('eat.01', pred.uri)
        self.assertEqual('A0', pred.roles[0].sem_role)
        relation = doc.annotation_by_id('r1')
        self.assertIs(doc.annotation_by_id('e1'), relation.from_anno)
        self.assertIs(doc.annotation_by_id('p1'), relation.to_anno)
        fact = doc.annotation_by_id('f1')
        self.assertEqual('CT+', fact.max_fact_val().value)
        self.assertEqual('Apple', doc.annotation_by_id('le1').reference)
        self.assertEqual('wordnet', doc.annotation_by_id('m1').source)
        topic = doc.annotations(Layer.TOPICS)[0]
        self.assertEqual('Food', topic.value)
        self.assertEqual('top1', topic.id)

    def test_temporal(self):
        doc = self.doc
        tlink = doc.annotation_by_id('tlink1')
        self.assertEqual('event', tlink.from_type)
        self.assertEqual('timex', tlink.to_type)
        self.assertEqual('BEFORE', tlink.rel_type)
        anchor = doc.annotation_by_id('an1')
        self.assertIs(doc.annotation_by_id('tmx0'), anchor.anchor_time)
        self.assertEqual('2015-03-02', str(anchor.anchor_time))

    def test_opinions(self):
        doc = self.doc
        opinion = doc.annotation_by_id('o1')
        self.assertEqual('speaker', opinion.holder.type)
        self.assertEqual('positive', opinion.expression.polarity)
        self.assertEqual(['o1'], [x.id for x in doc.annotations_by(
            doc.annotation_by_id('w7'), Layer.OPINIONS)])
        statement = doc.annotation_by_id('st1')
        self.assertEqual('them', str(statement.target).split()[-1])
        self.assertEqual(None, statement.cue)

    def test_unknown_layers(self):
        layers = self.doc.get_unknown_layers()
        self.assertEqual(['myLayer'], [x.tag for x in layers])

    def test_minting_after_read(self):
        term = self.doc.add(Term(span=[self.doc.annotation_by_id('w8')]))
        self.assertEqual('t9', term.id)

    def test_same_id_in_two_types(self):
        text = ('<NAF><text><wf id="w1" offset="0" sent="1">x</wf></text>'
                '<terms><term id="t1"><span><target id="w1"/></span></term>'
                '</terms><chunks><chunk id="c1">'
                '<span><target id="t1"/></span></chunk></chunks>'
                '<coreferences><coref id="c1">'
                '<span><target id="t1"/></span></coref></coreferences>'
                '</NAF>')
        doc = read_naf_string(text)
        self.assertEqual(['c1'], ids(doc, AnnotationType.CHUNK))
        self.assertEqual(['c1'], ids(doc, AnnotationType.COREF))
        coref = doc.annotations(AnnotationType.COREF)[0]
        self.assertIs(coref, doc.annotation_by_id('c1', AnnotationType.COREF))
        again = read_naf_string(naf_to_string(doc))
        self.assertEqual(['c1'], ids(again, AnnotationType.COREF))
        self.assertEqual(['c1'], ids(again, AnnotationType.CHUNK))


class WriteTest(unittest.TestCase):
    "writing NAF back out"

    def test_round_trip(self):
        doc = read_naf_string(EXAMPLE)
        text = naf_to_string(doc)
        doc2 = read_naf_string(text)
        for layer in Layer:
            self.assertEqual(ids(doc, layer), ids(doc2, layer))
        self.assertEqual(text, naf_to_string(doc2))
        self.assertIn('<myLayer>', text)
        self.assertIn('xml:lang="en"', text)

    def test_built_in_code(self):
        doc = Document('fr', 'v3')
        doc.raw_text = 'le chat'
        w1 = doc.add(WF(None, 0, 2, 'le', 1))
        w2 = doc.add(WF(None, 3, 4, 'chat', 1))
        t1 = doc.add(Term(span=[w1]))
        t2 = doc.add(Term(span=[w2]))
        doc.add(Chunk(span=[t1, t2], phrase='NP'))
        doc.add_linguistic_processor('text', 'tokeniser').set_timestamp()
        xml = naf_to_xml(doc, NafOutputSettings(indent=False))
        self.assertEqual('NAF', xml.tag)
        self.assertEqual(['nafHeader', 'raw', 'text', 'terms', 'chunks'],
                         [x.tag for x in xml])
        self.assertEqual('w2', xml.find('text')[1].get('id'))
        doc2 = read_naf_string(naf_to_string(doc))
        self.assertEqual(['c1'], ids(doc2, Layer.CHUNKS))
        self.assertEqual('le chat',
                         doc2.text(doc2.annotation_by_id('c1')))

    def test_write_file(self):
        tmpdir = tempfile.mkdtemp()
        try:
            path = os.path.join(tmpdir, 'example.naf')
            write_naf(read_naf_string(EXAMPLE), path)
            doc = read_naf(path)
            self.assertEqual(8, len(doc.annotations(Layer.TERMS)))
        finally:
            shutil.rmtree(tmpdir)


class BadXmlTest(unittest.TestCase):
    "input we refuse to read"

    def test_not_naf(self):
        self.assertRaises(NafXmlException, read_naf_string, '<KAF/>')

    def test_missing_id(self):
        bad = ('<NAF><text><wf offset="0" sent="1">x</wf></text></NAF>')
        self.assertRaises(NafXmlException, read_naf_string, bad)

    def test_unknown_target(self):
        bad = ('<NAF><text><wf id="w1" offset="0" sent="1">x</wf></text>'
               '<terms><term id="t1"><span><target id="w9"/></span></term>'
               '</terms></NAF>')
        self.assertRaises(NafXmlException, read_naf_string, bad)

    def test_two_roots(self):
        bad = ('<NAF><text><wf id="w1" offset="0" sent="1">x</wf></text>'
               '<terms><term id="t1"><span><target id="w1"/></span></term>'
               '</terms><constituency><tree>'
               '<nt id="nter1" label="S"/><nt id="nter2" label="S"/>'
               '</tree></constituency></NAF>')
        self.assertRaises(NafXmlException, read_naf_string, bad)


# ---------------------------------------------------------------------
# naf-util
# ---------------------------------------------------------------------


class CommandTest(unittest.TestCase):
    "naf-util subcommands, run on the example"

    def setUp(self):
        self.tmpdir = tempfile.mkdtemp()
        self.path = os.path.join(self.tmpdir, 'example.naf')
        with open(self.path, 'w') as ofile:
            ofile.write(EXAMPLE)
        self.outdir = os.path.join(self.tmpdir, 'out')

    def tearDown(self):
        shutil.rmtree(self.tmpdir)

    def run_quietly(self, module, **kwargs):
        "run a subcommand, returning what it prints"
        out = io.StringIO()
        with contextlib.redirect_stdout(out), \
                contextlib.redirect_stderr(io.StringIO()):
            module.main(argparse.Namespace(**kwargs))
        return out.getvalue()

    def test_stats(self):
        counts = stats.layer_counts(read_naf(self.path))
        self.assertEqual(2, counts['sentences'])
        self.assertEqual(8, counts['terms'])
        self.assertEqual(2, counts['deps'])
        out = self.run_quietly(stats, inputs=[self.path])
        self.assertIn('all together', out)
        self.assertIn('timeExpressions', out)

    def test_split(self):
        self.run_quietly(split, inputs=[self.path], output=self.outdir,
                         by='sentence')
        self.assertEqual(['example.sentence1.naf', 'example.sentence2.naf'],
                         sorted(os.listdir(self.outdir)))
        part = read_naf(os.path.join(self.outdir, 'example.sentence2.naf'))
        self.assertEqual(['w1', 'w2', 'w3', 'w4'], ids(part, Layer.TEXT))
        self.assertEqual('He', str(part.annotation_by_id('w1')))
        self.assertEqual('tagger', part.lps['terms'][0].name)

    def test_join(self):
        self.run_quietly(split, inputs=[self.path], output=self.outdir,
                         by='sentence')
        parts = [os.path.join(self.outdir, 'example.sentence%d.naf' % i)
                 for i in (1, 2)]
        joined_path = os.path.join(self.tmpdir, 'joined.naf')
        self.run_quietly(join, inputs=parts, output=joined_path)
        joined = read_naf(joined_path)
        self.assertEqual(8, len(joined.annotations(Layer.TEXT)))
        self.assertEqual(2, joined.num_sentences())

    def test_depgraph(self):
        self.run_quietly(depgraph, input=self.path, sentence=1,
                         output=self.outdir)
        with open(os.path.join(self.outdir, 'example.s1.dot')) as ifile:
            dot = ifile.read()
        self.assertIn('nsubj', dot)
