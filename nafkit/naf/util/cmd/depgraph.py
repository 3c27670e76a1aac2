# Author: Eric Kow
# License: BSD3

"""
Write the dependency graph of a NAF document in dot format
"""

from nafkit.depgraph import DepDotGraph
from nafkit.layers import AnnotationType
from nafkit.naf.nafx import read_naf
from ..args import (add_usual_output_args, get_output_dir,
                    announce_output_dir, output_path)


NAME = 'depgraph'


def config_argparser(parser):
    """
    Subcommand flags.

    You should create and pass in the subparser to which the flags
    are to be added.
    """
    parser.add_argument('input', metavar='FILE', help='NAF file')
    parser.add_argument('--sentence', type=int, metavar='N',
                        help='only draw this sentence')
    add_usual_output_args(parser)
    parser.set_defaults(func=main)


def main(args):
    """
    Subcommand main.

    You shouldn't need to call this yourself if you're using
    `config_argparser`
    """
    doc = read_naf(args.input)
    if args.sentence is None:
        terms = None
        suffix = '.dot'
    else:
        terms = doc.annotations_by_sent(args.sentence, AnnotationType.TERM)
        suffix = '.s%d.dot' % args.sentence
    graph = DepDotGraph(doc.depgraph(), terms=terms)
    output_dir = get_output_dir(args)
    with open(output_path(output_dir, args.input, suffix), 'w') as ofile:
        ofile.write(graph.to_string())
    announce_output_dir(output_dir)
