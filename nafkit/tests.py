# Author: Eric Kow
# License: BSD3
# pylint: disable=too-many-public-methods, invalid-name

"""
Tests for nafkit
"""

import re
import unittest
import warnings

import nltk.tree

from nafkit.annotation import AnnotationException, CharSpan, Span
from nafkit.container import (AnnotationContainer, DanglingPolicy,
                              DanglingReferenceException,
                              DuplicateIdException)
from nafkit.depgraph import (DepDotGraph, DepGraph, dep_path_char,
                             encode_dep_path, reset_dep_path_alphabet)
from nafkit.document import Document, create_timestamp
from nafkit.ids import IdManager, numeric_tail
from nafkit.layers import (AnnotationType, Layer, ID_PREFIXES,
                           is_identifiable_type, layer_of)
from nafkit.lexical import WF, Term, Compound
from nafkit.opinion import (Opinion, Statement, StatementSource,
                            StatementTarget)
from nafkit.semantics import (Coref, Entity, Predicate, Role,
                              Factuality, FactVal, Feature)
from nafkit.syntax import Chunk, Dep, NonTerminal, Terminal, Tree
from nafkit.temporal import Timex3, TLink

# ---------------------------------------------------------------------
# helpers
# ---------------------------------------------------------------------


def mk_wf(num, offset, form, sent, para=None):
    "word form wN"
    return WF('w%d' % num, offset, len(form), form, sent, para=para)


class TwoTermsTest(unittest.TestCase):
    """
    Two word forms in sentence 2 (`a` at 3, `b` at 5), each with a term
    """
    def setUp(self):
        self.container = AnnotationContainer()
        self.w1 = WF('w1', 3, 1, 'a', 2)
        self.w2 = WF('w2', 5, 1, 'b', 2)
        self.t1 = Term('t1', [self.w1])
        self.t2 = Term('t2', [self.w2])
        for anno in (self.w1, self.w2, self.t1, self.t2):
            self.container.add(anno)


# ---------------------------------------------------------------------
# catalog, ids
# ---------------------------------------------------------------------


def test_layer_catalog():
    assert layer_of(AnnotationType.TERM) is Layer.TERMS
    assert layer_of(AnnotationType.MW) is Layer.TERMS
    assert layer_of(AnnotationType.ROLE) is None
    assert not is_identifiable_type(AnnotationType.DEP)
    assert is_identifiable_type(AnnotationType.ROLE)
    assert ID_PREFIXES[AnnotationType.EDGE] == 'tre'


class IdManagerTest(unittest.TestCase):
    "tests for nafkit.ids"

    def test_numeric_tail(self):
        self.assertEqual(17, numeric_tail('w17'))
        self.assertEqual(3, numeric_tail('tre3'))
        self.assertEqual(None, numeric_tail('foo'))

    def test_sequence(self):
        ids = IdManager()
        self.assertEqual('t1', ids.next_id(AnnotationType.TERM))
        self.assertEqual('t2', ids.next_id(AnnotationType.TERM))
        self.assertEqual('w1', ids.next_id(AnnotationType.WF))

    def test_reconcile(self):
        ids = IdManager()
        ids.reconcile(AnnotationType.WF, 'w5')
        ids.reconcile(AnnotationType.WF, 'w2')
        ids.reconcile(AnnotationType.WF, 'nonsense')
        self.assertEqual(5, ids.counter(AnnotationType.WF))
        self.assertEqual('w6', ids.next_id(AnnotationType.WF))

    def test_reconcile_from_container(self):
        container = AnnotationContainer()
        container.add(WF('w17', 0, 1, 'x', 1))
        self.assertEqual('w18',
                         container.id_manager.next_id(AnnotationType.WF))

    def test_minted_after_reconciled(self):
        container = AnnotationContainer()
        container.add(WF('w17', 0, 1, 'x', 1))
        wf = container.add(WF(None, 2, 1, 'y', 1))
        self.assertEqual('w18', wf.id)


# ---------------------------------------------------------------------
# spans
# ---------------------------------------------------------------------


class SpanTest(unittest.TestCase):
    "tests for nafkit.annotation.Span"

    def setUp(self):
        self.w1 = mk_wf(1, 0, 'the', 1)
        self.w2 = mk_wf(2, 4, 'cat', 1)
        self.w3 = mk_wf(3, 8, 'sat', 1)

    def test_basics(self):
        span = Span([self.w1, self.w2], head=self.w2)
        self.assertTrue(span.has_head())
        self.assertIs(self.w2, span.head)
        self.assertEqual(2, span.size())
        self.assertIs(self.w1, span.first_target())
        self.assertIs(self.w2, span.last_target())
        self.assertEqual(0, span.offset)
        self.assertEqual('the cat', str(span))

    def test_empty(self):
        span = Span()
        self.assertTrue(span.is_empty())
        self.assertEqual(None, span.first_target())
        self.assertEqual(None, span.offset)

    def test_head_overwrite(self):
        span = Span([self.w1], head=self.w1)
        span.add_target(self.w2, is_head=True)
        self.assertIs(self.w2, span.head)
        span.add_target(self.w3)
        self.assertIs(self.w2, span.head)

    def test_head_must_be_target(self):
        span = Span([self.w1])
        self.assertRaises(AnnotationException, span.set_head, self.w2)

    def test_equality(self):
        self.assertEqual(Span([self.w1, self.w2]), Span([self.w1, self.w2]))
        self.assertNotEqual(Span([self.w1, self.w2]), Span([self.w2, self.w1]))
        self.assertNotEqual(Span([self.w1], head=self.w1), Span([self.w1]))

    def test_targets_copy(self):
        span = Span([self.w1])
        span.targets.append(self.w2)
        self.assertEqual(1, len(span))


def test_char_span():
    span = CharSpan(3, 6)
    assert span.length() == 3
    assert span.encloses(CharSpan(4, 5))
    assert not span.encloses(None)
    assert CharSpan.merge_all([CharSpan(5, 6), CharSpan(3, 4)]) == span


# ---------------------------------------------------------------------
# container
# ---------------------------------------------------------------------


class ContainerTest(TwoTermsTest):
    "tests for nafkit.container"

    def test_terms(self):
        container = self.container
        self.assertEqual([self.t1, self.t2],
                         container.annotations(Layer.TERMS))
        self.assertIs(self.t1, container.annotation_by_id('t1'))
        self.assertEqual([self.t1],
                         container.annotations_by(self.t1, Layer.TERMS))
        self.assertEqual([self.t1],
                         container.annotations_by(self.w1,
                                                  AnnotationType.TERM))

    def test_lookup_miss(self):
        container = self.container
        self.assertEqual(None, container.annotation_by_id('t99'))
        self.assertEqual([], container.annotations(AnnotationType.CHUNK))
        self.assertEqual([], container.annotations_by_sent(7, Layer.TERMS))
        self.assertEqual([], container.referencing(self.t1))

    def test_readd_is_noop(self):
        self.container.add(self.t1)
        self.assertEqual([self.t1, self.t2],
                         self.container.annotations(AnnotationType.TERM))

    def test_duplicate_id(self):
        self.assertRaises(DuplicateIdException,
                          self.container.add, Term('t1', [self.w2]))
        self.assertEqual(2, len(self.container.annotations(Layer.TERMS)))

    def test_ids_unique_per_type(self):
        container = self.container
        chunk = container.add(Chunk('c1', [self.t1]))
        coref = container.add(Coref('c1', [[self.t1, self.t2]]))
        self.assertIs(chunk, container.annotation_by_id('c1'))
        self.assertIs(chunk,
                      container.annotation_by_id('c1', AnnotationType.CHUNK))
        self.assertIs(coref,
                      container.annotation_by_id('c1', AnnotationType.COREF))
        self.assertEqual(None,
                         container.annotation_by_id('c1', AnnotationType.MARK))
        self.assertRaises(DuplicateIdException,
                          container.add, Coref('c1', [[self.t2]]))
        self.assertEqual([coref], container.annotations(AnnotationType.COREF))
        container.remove(Layer.CHUNKS)
        self.assertIs(coref, container.annotation_by_id('c1'))

    def test_annotations_by_several_targets(self):
        container = self.container
        chunk1 = container.add(Chunk(span=[self.t2]))
        chunk2 = container.add(Chunk(span=[self.t1, self.t2]))
        chunk3 = container.add(Chunk(span=[self.t1]))
        self.assertEqual([chunk1, chunk2, chunk3],
                         container.annotations_by([self.t1, self.t2],
                                                  AnnotationType.CHUNK))
        self.assertEqual([chunk1, chunk2, chunk3],
                         container.annotations_by([self.t2, self.t1, self.t2],
                                                  AnnotationType.CHUNK))
        self.assertEqual([chunk2, chunk3],
                         container.annotations_by([self.t1],
                                                  AnnotationType.CHUNK))
        self.assertEqual([self.t1, self.t2],
                         container.annotations_by((self.w2, self.w1),
                                                  Layer.TERMS))
        self.assertEqual([], container.annotations_by([],
                                                      AnnotationType.CHUNK))

    def test_add_at(self):
        term = Term('t5', [self.w1])
        self.container.add_at(term, 0)
        self.assertEqual([term, self.t1, self.t2],
                         self.container.annotations(AnnotationType.TERM))
        self.assertEqual([term, self.t1, self.t2],
                         self.container.annotations(Layer.TERMS))

    def test_minted_ids(self):
        chunk = self.container.add(Chunk(span=[self.t1, self.t2]))
        self.assertEqual('c1', chunk.id)
        self.assertIs(chunk, self.container.annotation_by_id('c1'))

    def test_coref(self):
        coref = Coref('c1', [[self.t1, self.t2]])
        self.container.add(coref)
        self.assertEqual([coref],
                         self.container.annotations_by(self.t1,
                                                       AnnotationType.COREF))
        self.assertEqual([coref],
                         self.container.annotations_by(self.w1,
                                                       AnnotationType.COREF))

    def test_coref_add_span(self):
        w3 = self.container.add(WF('w3', 7, 1, 'c', 2))
        t3 = self.container.add(Term('t3', [w3]))
        coref = self.container.add(Coref(spans=[[self.t1]]))
        coref.add_span([t3])
        self.assertEqual([coref],
                         self.container.annotations_by(w3,
                                                       AnnotationType.COREF))

    def test_referencing(self):
        chunk = self.container.add(Chunk(span=[self.t1]))
        dep = self.container.add(Dep(self.t2, self.t1, 'det'))
        self.assertEqual([chunk, dep], self.container.referencing(self.t1))
        self.assertEqual([dep],
                         self.container.referencing(self.t1,
                                                    AnnotationType.DEP))

    def test_layers(self):
        self.container.add(Chunk(span=[self.t1]))
        self.assertEqual([Layer.TEXT, Layer.TERMS, Layer.CHUNKS],
                         self.container.layers())
        self.assertTrue(self.container.is_empty(Layer.DEPS))

    def test_unknown_layers(self):
        self.container.add_unknown_layer('whatever')
        self.assertEqual(['whatever'], self.container.get_unknown_layers())


class TreeTest(TwoTermsTest):
    "constituency trees"

    def mk_tree(self):
        "(ROOT (NP a) (VP b)), VP being the head"
        self.ter1 = Terminal('ter1', [self.t1])
        self.ter2 = Terminal('ter2', [self.t2])
        self.nter2 = NonTerminal('nter2', 'NP')
        self.nter3 = NonTerminal('nter3', 'VP')
        self.nter1 = NonTerminal('nter1', 'ROOT')
        self.nter2.add_child(self.ter1)
        self.nter3.add_child(self.ter2)
        self.nter1.add_child(self.nter2)
        self.nter1.add_child(self.nter3, is_head=True)
        return Tree(self.nter1, type='type1')

    def test_referenced_deep(self):
        tree = self.mk_tree()
        expected = {AnnotationType.WF: [self.w1, self.w2],
                    AnnotationType.TERM: [self.t1, self.t2],
                    AnnotationType.TERMINAL: [self.ter1, self.ter2],
                    AnnotationType.NON_TERMINAL: [self.nter1, self.nter2,
                                                  self.nter3]}
        self.assertEqual(expected, dict(tree.referenced_deep()))
        self.assertEqual(3, tree.offset)
        self.assertEqual(2, tree.sent)
        self.assertIs(self.nter3, self.nter1.head_child())

    def test_edge_ids(self):
        tree = self.container.add(self.mk_tree())
        self.assertEqual('tree1', tree.id)
        self.assertFalse(self.nter1.has_edge_id())
        for node in (self.nter2, self.nter3, self.ter1, self.ter2):
            self.assertTrue(node.has_edge_id())
            self.assertTrue(node.edge_id.startswith('tre'))
        self.assertEqual([tree],
                         self.container.annotations_by(self.w2,
                                                       AnnotationType.TREE))
        self.assertIs(self.ter1, self.container.annotation_by_id('ter1'))

    def test_add_child_late(self):
        w3 = self.container.add(WF('w3', 7, 1, 'c', 2))
        t3 = self.container.add(Term('t3', [w3]))
        tree = self.container.add(self.mk_tree())
        ter3 = Terminal(span=[t3])
        self.nter3.add_child(ter3)
        self.assertEqual('ter3', ter3.id)
        self.assertTrue(ter3.has_edge_id())
        self.assertEqual([tree],
                         self.container.annotations_by(w3,
                                                       AnnotationType.TREE))

    def test_from_parentheses(self):
        tree = Tree.from_parentheses('(S (NP a) (VP b))', [self.t1, self.t2])
        self.assertEqual('S', tree.root.label)
        self.assertEqual(nltk.tree.Tree.fromstring('(S (NP a) (VP b))'),
                         tree.to_nltk())
        self.assertEqual(3, tree.offset)

    def test_from_parentheses_mismatch(self):
        self.assertRaises(AnnotationException, Tree.from_parentheses,
                          '(S a b c)', [self.t1, self.t2])


class AnnotationTest(TwoTermsTest):
    "specific annotation types"

    def test_char_span(self):
        term = Term('t3', [self.w1, self.w2])
        self.assertEqual(CharSpan(3, 6), term.char_span())
        self.assertEqual(CharSpan(3, 4), self.w1.char_span())

    def test_preconditions(self):
        self.assertRaises(AnnotationException, Chunk, 'c1', [])
        self.assertRaises(AnnotationException, Coref, 'co1', [])
        self.assertRaises(AnnotationException, Entity, 'e1', [[]])
        self.assertRaises(AnnotationException, TLink, self.t1, self.t2,
                          'BEFORE')
        self.assertRaises(AnnotationException, Dep, self.t1, None, 'det')

    def test_empty_mention(self):
        self.assertRaises(AnnotationException, Coref, 'co1',
                          [[self.t1], []])
        self.assertRaises(AnnotationException, Entity, 'e1',
                          [[self.t1], [self.t2], Span()])
        coref = Coref('co1', [[self.t1]])
        self.assertRaises(AnnotationException, coref.add_span, [])
        self.assertEqual(1, len(coref.spans))

    def test_compound(self):
        comp1 = Term(span=[self.w1])
        comp2 = Term(span=[self.w2])
        compound = self.container.add(Compound(components=[comp1, comp2],
                                               head=comp2))
        self.assertEqual('mw1', compound.id)
        self.assertEqual(AnnotationType.COMPONENT, comp1.atype)
        self.assertEqual('tc1', comp1.id)
        self.assertTrue(comp1.is_component())
        self.assertIs(comp2, compound.head)
        self.assertEqual(3, comp2.offset)
        self.assertEqual([compound],
                         self.container.annotations_by(self.w2,
                                                       AnnotationType.MW))
        self.assertEqual([compound],
                         self.container.annotations(Layer.TERMS)[2:])

    def test_component_of_another(self):
        comp = Term(span=[self.w1])
        Compound(components=[comp])
        self.assertRaises(AnnotationException, Compound, None, [comp])

    def test_sentiment(self):
        sentiment = self.t1.create_sentiment(polarity='positive')
        self.assertIs(self.t1, sentiment.parent)
        self.assertEqual('positive', str(sentiment))

    def test_predicate_roles(self):
        pred = self.container.add(Predicate(span=[self.t1]))
        role = pred.add_role(Role(sem_role='A0', span=[self.t2]))
        self.assertEqual('rl1', role.id)
        self.assertIs(role, self.container.annotation_by_id('rl1'))
        self.assertEqual(0, role.position())
        self.assertEqual([pred],
                         self.container.annotations_by(
                             self.t2, AnnotationType.PREDICATE))
        self.assertEqual([], self.container.annotations(Layer.SRL)[1:])

    def test_opinion(self):
        opinion = Opinion()
        opinion.create_holder([self.t1], type='speaker')
        opinion.create_expression([self.t2], polarity='negative')
        self.container.add(opinion)
        self.assertEqual([opinion], self.container.annotations(Layer.OPINIONS))
        self.assertEqual([opinion],
                         self.container.annotations_by(
                             self.w1, AnnotationType.OPINION))
        self.assertIs(opinion, opinion.holder.parent)
        self.assertEqual(None, opinion.target)
        self.assertEqual(3, opinion.offset)

    def test_statement(self):
        statement = self.container.add(
            Statement(StatementTarget([self.t2])))
        self.assertEqual('st1', statement.id)
        self.assertEqual(5, statement.offset)

    def test_tlink(self):
        timex = self.container.add(Timex3(type='DATE', span=[self.w2]))
        pred = self.container.add(Predicate(span=[self.t1]))
        tlink = self.container.add(TLink(pred, timex, 'BEFORE'))
        self.assertEqual('event', tlink.from_type)
        self.assertEqual('timex', tlink.to_type)
        self.assertEqual([tlink],
                         self.container.annotations_by(
                             self.w2, AnnotationType.TLINK))

    def test_factuality(self):
        fact = Factuality(span=[self.t1])
        fact.add_fact_val(FactVal('CT+', 'factbank', confidence='0.2'))
        best = fact.add_fact_val(FactVal('PR+', 'factbank',
                                         confidence='0.7'))
        fact.add_fact_val(FactVal('Uu', 'other'))
        self.assertIs(best, fact.max_fact_val())

    def test_feature(self):
        feat = Feature(lemma='price', spans=[[self.t1]],
                       atype=AnnotationType.CATEGORY)
        self.container.add(feat)
        self.assertTrue(feat.is_category())
        self.assertEqual('cat1', feat.id)
        self.assertEqual([feat], self.container.annotations(Layer.CATEGORIES))
        self.assertRaises(AnnotationException, Feature,
                          atype=AnnotationType.TERM)


class ReplacementTest(TwoTermsTest):
    "replacing or dropping the nested parts of contained annotations"

    def test_opinion_holder(self):
        container = self.container
        opinion = container.add(Opinion())
        old = opinion.create_holder([self.t1])
        new = opinion.create_holder([self.t2], type='speaker')
        self.assertEqual([], container.annotations_by(self.t1,
                                                      AnnotationType.OPINION))
        self.assertEqual([opinion],
                         container.annotations_by(self.t2,
                                                  AnnotationType.OPINION))
        self.assertEqual([new],
                         container.annotations(AnnotationType.OPINION_HOLDER))
        self.assertNotIn(old, container)
        self.assertEqual(None, old.parent)
        self.assertEqual([self.t2],
                         opinion.referenced_deep()[AnnotationType.TERM])

    def test_opinion_target_and_expression(self):
        container = self.container
        opinion = container.add(Opinion())
        opinion.create_target([self.t1])
        opinion.create_expression([self.t1], polarity='positive')
        opinion.create_target([self.t2])
        opinion.create_expression([self.t2], polarity='negative')
        self.assertEqual([], container.annotations_by(self.w1,
                                                      Layer.OPINIONS))
        self.assertEqual([opinion.expression],
                         container.annotations(
                             AnnotationType.OPINION_EXPRESSION))
        self.assertEqual(1, len(container.annotations(
            AnnotationType.OPINION_TARGET)))

    def test_statement_parts(self):
        container = self.container
        statement = container.add(Statement(StatementTarget([self.t1])))
        old = statement.target
        statement.set_target(StatementTarget([self.t2]))
        statement.set_source(StatementSource([self.t1]))
        statement.set_source(StatementSource([self.t2]))
        self.assertEqual([], container.annotations_by(
            self.w1, AnnotationType.STATEMENT))
        self.assertEqual([statement.target],
                         container.annotations(
                             AnnotationType.STATEMENT_TARGET))
        self.assertEqual([statement.source],
                         container.annotations(
                             AnnotationType.STATEMENT_SOURCE))
        self.assertNotIn(old, container)
        # setting the same part again keeps it
        statement.set_target(statement.target)
        self.assertIn(statement.target, container)

    def test_sentiment(self):
        old = self.t1.create_sentiment(polarity='positive')
        new = self.t1.create_sentiment(polarity='negative')
        self.assertEqual([new],
                         self.container.annotations(AnnotationType.SENTIMENT))
        self.assertEqual(None, old.parent)
        self.t1.set_sentiment(None)
        self.assertEqual([],
                         self.container.annotations(AnnotationType.SENTIMENT))

    def test_remove_role(self):
        container = self.container
        pred = container.add(Predicate('pr1', [self.t1]))
        role = pred.add_role(Role('rl1', 'A0', [self.t2]))
        pred.remove_role(Role('rl9', 'A1', [self.t1]))
        self.assertEqual([role], pred.roles)
        pred.remove_role(role)
        self.assertEqual([], pred.roles)
        self.assertEqual(None, role.parent)
        self.assertEqual(None, container.annotation_by_id('rl1'))
        self.assertEqual([], container.annotations(AnnotationType.ROLE))
        self.assertEqual([], container.annotations_by(
            self.t2, AnnotationType.PREDICATE))
        self.assertEqual([pred], container.annotations_by(
            self.t1, AnnotationType.PREDICATE))
        again = pred.add_role(role)
        self.assertIs(role, container.annotation_by_id('rl1'))
        self.assertEqual([pred], container.annotations_by(
            self.t2, AnnotationType.PREDICATE))
        self.assertIs(pred, again.parent)

    def test_timex_points(self):
        container = self.container
        date1 = container.add(Timex3(type='DATE', span=[self.w1]))
        date2 = container.add(Timex3(type='DATE', span=[self.w2]))
        duration = container.add(Timex3(type='DURATION'))
        duration.set_begin_point(date1)
        duration.set_end_point(date1)
        duration.set_begin_point(date2)
        self.assertEqual([duration], container.referencing(date1))
        duration.set_end_point(date2)
        self.assertEqual([], container.referencing(date1))
        self.assertEqual([date1],
                         container.annotations_by(self.w1,
                                                  AnnotationType.TIMEX3))
        self.assertEqual([duration], container.referencing(date2))


# ---------------------------------------------------------------------
# sentences and paragraphs
# ---------------------------------------------------------------------


class ParagraphTest(unittest.TestCase):
    """
    Paragraph 1: sentence 1 (w1, w2)
    Paragraph 2: sentences 2 (w3) and 3 (w4)
    """
    def setUp(self):
        self.container = AnnotationContainer()
        self.wfs = [mk_wf(1, 0, 'a', 1, para=1),
                    mk_wf(2, 2, 'b', 1),
                    mk_wf(3, 4, 'c', 2, para=2),
                    mk_wf(4, 6, 'd', 3)]
        self.terms = [Term(span=[x]) for x in self.wfs]
        for anno in self.wfs + self.terms:
            self.container.add(anno)

    def test_numbers(self):
        container = self.container
        self.assertEqual(3, container.num_sentences())
        self.assertEqual(2, container.num_paragraphs())
        self.assertEqual(1, container.first_sentence())
        self.assertEqual(1, container.first_paragraph())
        self.assertEqual([2, 3], container.sents_by_para(2))
        self.assertEqual(2, container.para_of_sent(3))

    def test_derived_paragraph(self):
        w4 = self.wfs[3]
        self.assertEqual(None, w4.para)
        self.assertEqual(2, self.container.para_of(w4))
        self.assertEqual(2, self.container.para_of(self.terms[3]))

    def test_groupings(self):
        w1, w2, w3, w4 = self.wfs
        self.assertEqual([[w1, w2], [w3], [w4]], self.container.sentences())
        self.assertEqual([[w1, w2], [w3, w4]], self.container.paragraphs())
        self.assertEqual(self.terms[2:],
                         self.container.annotations_by_para(
                             2, AnnotationType.TERM))
        self.assertEqual(self.terms[:2],
                         self.container.annotations_by_sent(1, Layer.TERMS))

    def test_index_follows_changes(self):
        self.assertEqual(3, self.container.num_sentences())
        self.container.add(mk_wf(5, 8, 'e', 4))
        self.assertEqual(4, self.container.num_sentences())
        self.assertEqual([3, 4], self.container.sents_by_para(2)[1:])


# ---------------------------------------------------------------------
# removal
# ---------------------------------------------------------------------


class RemoveTest(TwoTermsTest):
    "removing layers under the various dangling reference policies"

    def setUp(self):
        super(RemoveTest, self).setUp()
        self.chunk = self.container.add(Chunk(span=[self.t1, self.t2]))
        self.dep = self.container.add(Dep(self.t1, self.t2, 'det'))

    def test_no_dangling(self):
        with warnings.catch_warnings():
            warnings.simplefilter('error')
            dropped = self.container.remove(Layer.CHUNKS)
        self.assertEqual([self.chunk], dropped)
        self.assertEqual([], self.container.annotations(Layer.CHUNKS))
        self.assertEqual(None, self.container.annotation_by_id(self.chunk.id))
        self.assertEqual([self.dep], self.container.referencing(self.t1))

    def test_keep(self):
        with self.assertWarns(UserWarning):
            self.container.remove(Layer.TERMS)
        self.assertEqual([], self.container.annotations(Layer.TERMS))
        self.assertEqual(None, self.container.annotation_by_id('t1'))
        self.assertIs(self.t1, self.chunk.span.first_target())

    def test_refuse(self):
        self.assertRaises(DanglingReferenceException,
                          self.container.remove, Layer.TERMS,
                          policy=DanglingPolicy.REFUSE)
        self.assertEqual([self.t1, self.t2],
                         self.container.annotations(Layer.TERMS))
        self.assertIs(self.t1, self.container.annotation_by_id('t1'))

    def test_detach(self):
        container = AnnotationContainer(dangling_policy=DanglingPolicy.DETACH)
        w1 = container.add(WF('w1', 3, 1, 'a', 2))
        t1 = container.add(Term('t1', [w1]))
        chunk = container.add(Chunk(span=[t1]))
        dep = container.add(Dep(t1, t1, 'self'))
        container.remove(Layer.TERMS)
        self.assertTrue(chunk.span.is_empty())
        self.assertEqual(None, dep.from_term)
        self.assertEqual(None, dep.to_term)

    def test_detach_then_draw(self):
        self.container.remove(Layer.TERMS, policy=DanglingPolicy.DETACH)
        self.assertEqual(None, self.dep.from_term)
        graph = DepDotGraph(DepGraph(self.container))
        self.assertNotIn('det', graph.to_string())


# ---------------------------------------------------------------------
# documents
# ---------------------------------------------------------------------


def mk_two_sentence_doc():
    """
    Sentence 1: `the cat` (one chunk), sentence 2: `sat` (one chunk)
    """
    doc = Document('en', 'v3')
    doc.raw_text = 'the cat sat'
    wfs = [doc.add(mk_wf(1, 0, 'the', 1)),
           doc.add(mk_wf(2, 4, 'cat', 1)),
           doc.add(mk_wf(3, 8, 'sat', 2))]
    terms = [doc.add(Term(span=[x])) for x in wfs]
    doc.add(Chunk(span=terms[:2], phrase='NP'))
    doc.add(Chunk(span=terms[2:], phrase='VP'))
    return doc


def mk_nested_doc():
    """
    Sentence 1: `a b`, sentence 2: `c`, each with a constituency tree
    and a predicate with one role
    """
    doc = Document('en', 'v3')
    wfs = [doc.add(mk_wf(1, 0, 'a', 1)),
           doc.add(mk_wf(2, 2, 'b', 1)),
           doc.add(mk_wf(3, 4, 'c', 2))]
    terms = [doc.add(Term(span=[x])) for x in wfs]
    doc.add(Tree.from_parentheses('(S (NP a) (VP b))', terms[:2]))
    doc.add(Tree.from_parentheses('(S (VP c))', terms[2:]))
    for pred_term, role_term in ((terms[1], terms[0]), (terms[2], terms[2])):
        pred = doc.add(Predicate(span=[pred_term]))
        pred.add_role(Role(sem_role='A0', span=[role_term]))
    return doc


class DocumentTest(unittest.TestCase):
    "tests for nafkit.document"

    def test_timestamp(self):
        pattern = r'^\d{4}-\d\d-\d\dT\d\d:\d\d:\d\d[+-]\d{4}$'
        self.assertTrue(re.match(pattern, create_timestamp()))

    def test_linguistic_processors(self):
        doc = Document('en')
        lproc = doc.add_linguistic_processor('terms', 'tagger', '1.0')
        doc.add_linguistic_processor('terms', 'lemmatiser')
        self.assertTrue(doc.linguistic_processor_exists('terms', 'tagger',
                                                        '1.0'))
        self.assertTrue(doc.linguistic_processor_exists('terms',
                                                        'lemmatiser'))
        self.assertFalse(doc.linguistic_processor_exists('terms', 'tagger'))
        self.assertFalse(doc.linguistic_processor_exists('deps', 'tagger',
                                                         '1.0'))
        lproc.set_begin_timestamp('2015-03-02T14:01:22+0100')
        self.assertEqual('2015-03-02T14:01:22+0100', lproc.begin_timestamp)
        self.assertNotEqual(None, lproc.hostname)
        self.assertEqual(2, len(doc.linguistic_processors()))

    def test_text(self):
        doc = mk_two_sentence_doc()
        chunk = doc.annotations(AnnotationType.CHUNK)[0]
        self.assertEqual('the cat', doc.text(chunk))

    def test_split_in_sentences(self):
        doc = mk_two_sentence_doc()
        chunk1, chunk2 = doc.annotations(AnnotationType.CHUNK)
        parts = doc.split_in_sentences()
        self.assertEqual(2, len(parts))
        self.assertEqual([chunk1], parts[0].annotations(AnnotationType.CHUNK))
        self.assertEqual([chunk2], parts[1].annotations(AnnotationType.CHUNK))
        self.assertEqual('c1', chunk2.id)
        self.assertEqual(['w1'],
                         [x.id for x in parts[1].annotations(Layer.TEXT)])
        self.assertEqual('en', parts[1].lang)
        self.assertEqual('the cat sat', parts[1].raw_text)

    def test_split_in_paragraphs(self):
        doc = mk_two_sentence_doc()
        parts = doc.split_in_paragraphs()
        self.assertEqual(1, len(parts))
        self.assertEqual(2, len(parts[0].annotations(Layer.CHUNKS)))

    def test_join(self):
        parts = mk_two_sentence_doc().split_in_sentences()
        joined = Document.join(parts)
        self.assertEqual(['w1', 'w2', 'w3'],
                         [x.id for x in joined.annotations(Layer.TEXT)])
        self.assertEqual(['c1', 'c2'],
                         [x.id for x in joined.annotations(Layer.CHUNKS)])
        self.assertEqual(2, joined.num_sentences())

    def test_split_nested(self):
        doc = mk_nested_doc()
        tree2 = doc.annotations(AnnotationType.TREE)[1]
        pred2 = doc.annotations(AnnotationType.PREDICATE)[1]
        self.assertEqual('tree2', tree2.id)
        self.assertEqual('rl2', pred2.roles[0].id)
        part = doc.split_in_sentences()[1]
        self.assertEqual([tree2], part.annotations(AnnotationType.TREE))
        self.assertEqual('tree1', tree2.id)
        self.assertEqual(['nter1', 'nter2', 'ter1'],
                         [x.id for x in tree2.nodes()])
        self.assertEqual([None, 'tre1', 'tre2'],
                         [x.edge_id for x in tree2.nodes()])
        self.assertIs(tree2.root, part.annotation_by_id('nter1'))
        self.assertEqual('pr1', pred2.id)
        self.assertEqual('rl1', pred2.roles[0].id)
        self.assertIs(pred2.roles[0], part.annotation_by_id('rl1'))
        self.assertEqual([pred2],
                         part.annotations_by(part.annotation_by_id('w1'),
                                             AnnotationType.PREDICATE))

    def test_join_nested(self):
        joined = Document.join(mk_nested_doc().split_in_sentences())
        trees = joined.annotations(AnnotationType.TREE)
        preds = joined.annotations(AnnotationType.PREDICATE)
        self.assertEqual(['tree1', 'tree2'], [x.id for x in trees])
        nodes = [x for tree in trees for x in tree.nodes()]
        self.assertEqual(['nter1', 'nter2', 'ter1', 'nter3', 'ter2',
                          'nter4', 'nter5', 'ter3'],
                         [x.id for x in nodes])
        self.assertEqual(['tre%d' % i for i in range(1, 7)],
                         [x.edge_id for x in nodes if x.edge_id is not None])
        self.assertEqual(['pr1', 'pr2'], [x.id for x in preds])
        self.assertEqual(['rl1', 'rl2'], [x.roles[0].id for x in preds])
        self.assertEqual(preds[1:],
                         joined.annotations_by(joined.annotation_by_id('t3'),
                                               AnnotationType.PREDICATE))

    def test_add_existing_annotation(self):
        doc = mk_two_sentence_doc()
        term = doc.annotations(AnnotationType.TERM)[0]
        self.assertIs(term, doc.add_existing_annotation(term))
        self.assertEqual('t1', term.id)


# ---------------------------------------------------------------------
# dependencies
# ---------------------------------------------------------------------


class DepGraphTest(unittest.TestCase):
    """
    t2 governs t1 (nsubj) and t3 (obj)
    """
    def setUp(self):
        reset_dep_path_alphabet()
        self.doc = Document()
        wfs = [self.doc.add(mk_wf(1, 0, 'John', 1)),
               self.doc.add(mk_wf(2, 5, 'eats', 1)),
               self.doc.add(mk_wf(3, 10, 'apples', 1))]
        self.t1, self.t2, self.t3 = [self.doc.add(Term(span=[x]))
                                     for x in wfs]
        self.d1 = self.doc.add(Dep(self.t2, self.t1, 'nsubj'))
        self.d2 = self.doc.add(Dep(self.t2, self.t3, 'obj'))

    def tearDown(self):
        reset_dep_path_alphabet()

    def test_navigation(self):
        doc = self.doc
        self.assertEqual([self.d1, self.d2], doc.deps_from_term(self.t2))
        self.assertIs(self.d1, doc.dep_to_term(self.t1))
        self.assertEqual(None, doc.dep_to_term(self.t2))
        self.assertEqual([self.d1, self.d2], doc.deps_by_term(self.t2))
        self.assertIs(self.t2, doc.terms_head([self.t1, self.t2, self.t3]))
        self.assertEqual(None, doc.terms_head([self.t1, self.t3]))

    def test_dep_path(self):
        doc = self.doc
        path = doc.dep_path(self.t1, self.t3)
        self.assertEqual([self.d1, self.d2], path)
        self.assertEqual([], doc.dep_path(self.t1, self.t1))
        self.assertEqual([self.d1], doc.dep_path(self.t2, self.t1))
        self.assertEqual([self.d1], doc.dep_path(self.t1, self.t2))
        letter_a = dep_path_char('nsubj')
        letter_b = dep_path_char('obj')
        self.assertEqual('_-%s_+%s_' % (letter_a, letter_b),
                         encode_dep_path(self.t1, path))
        self.assertTrue(doc.match_dep_path(self.t1, path,
                                           '-%s %s' % (letter_a, letter_b)))
        self.assertTrue(doc.match_dep_path(self.t1, path, '-nsubj obj'))
        self.assertFalse(doc.match_dep_path(self.t1, path, 'nsubj obj'))
        self.assertFalse(doc.match_dep_path(self.t1, None, '-nsubj obj'))

    def test_encoding_matches_itself(self):
        path = self.doc.dep_path(self.t3, self.t1)
        encoded = encode_dep_path(self.t3, path)
        pattern = ' '.join(x.replace('+', '') for x in encoded.split('_')
                           if x)
        self.assertTrue(self.doc.match_dep_path(self.t3, path, pattern))

    def test_multi_label_encoding(self):
        w4 = self.doc.add(mk_wf(4, 17, 'pears', 1))
        t4 = self.doc.add(Term(span=[w4]))
        dep = self.doc.add(Dep(self.t3, t4, 'obj-coord'))
        self.assertEqual('a', dep_path_char('nsubj'))
        path = self.doc.dep_path(t4, self.t3)
        self.assertEqual([dep], path)
        self.assertEqual('_-b-c_', encode_dep_path(t4, path))
        self.assertEqual('_+b+c_', encode_dep_path(self.t3, path))
        self.assertTrue(self.doc.match_dep_path(t4, path, '-obj'))
        self.assertTrue(self.doc.match_dep_path(t4, path, '-coord'))
        self.assertFalse(self.doc.match_dep_path(t4, path, 'coord'))

    def test_pattern_operators(self):
        doc = self.doc
        path = doc.dep_path(self.t1, self.t3)
        for pattern in ('-nsubj+ obj',
                        '-nsubj* obj',
                        '(-nsubj|-obj) obj',
                        '-nsubj obj?',
                        '-nsubj .*'):
            self.assertTrue(doc.match_dep_path(self.t1, path, pattern),
                            pattern)
        for pattern in ('-obj+ obj',
                        'obj*',
                        '(nsubj|obj) obj'):
            self.assertFalse(doc.match_dep_path(self.t1, path, pattern),
                             pattern)

    def test_letter_runs_are_labels(self):
        self.assertEqual('a', dep_path_char('nsubj'))
        self.assertEqual('b', dep_path_char('obj'))
        path = self.doc.dep_path(self.t1, self.t3)
        self.assertTrue(self.doc.match_dep_path(self.t1, path, '-a b'))
        self.assertFalse(self.doc.match_dep_path(self.t1, path, '-ab'))

    def test_alphabet(self):
        letter = dep_path_char('nsubj')
        self.assertEqual(letter, dep_path_char('NSUBJ'))
        self.assertNotEqual(letter, dep_path_char('dobj'))

    def test_descendants(self):
        doc = self.doc
        self.assertEqual([self.t2, self.t1, self.t3],
                         doc.terms_by_dep_ancestors([self.t2]))
        self.assertEqual([self.t3],
                         doc.terms_by_dep_ancestors([self.t2], 'obj'))

    def test_dot_graph(self):
        graph = DepDotGraph(self.doc.depgraph())
        dot = graph.to_string()
        self.assertIn('nsubj', dot)
        self.assertIn('"t3"', dot)
        partial = DepDotGraph(self.doc.depgraph(), terms=[self.t1, self.t2])
        self.assertNotIn('obj', partial.to_string())
