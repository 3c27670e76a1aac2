# Author: Eric Kow
# License: BSD3

"""
Join several NAF documents into a single one

The result has the header and raw text of the first document.
Identifiers are renumbered.
"""

import sys

from nafkit.document import Document
from nafkit.naf.nafx import write_naf
from ..args import add_usual_input_args, read_inputs


NAME = 'join'


def config_argparser(parser):
    """
    Subcommand flags.

    You should create and pass in the subparser to which the flags
    are to be added.
    """
    add_usual_input_args(parser)
    parser.add_argument('--output', '-o', metavar='FILE', required=True,
                        help='output file')
    parser.set_defaults(func=main)


def main(args):
    """
    Subcommand main.

    You shouldn't need to call this yourself if you're using
    `config_argparser`
    """
    docs = [doc for _, doc in read_inputs(args)]
    joined = Document.join(docs)
    joined.add_linguistic_processors(docs[0].lps)
    write_naf(joined, args.output)
    print("Output written to", args.output, file=sys.stderr)
