# Author: Eric Kow
# License: BSD3

"""
Split NAF documents into one document per sentence or paragraph

Each part keeps the header (language, version, linguistic processors)
and raw text of the original document. Identifiers are renumbered.
"""

from nafkit.naf.nafx import write_naf
from ..args import (add_usual_input_args, add_usual_output_args,
                    read_inputs, get_output_dir, announce_output_dir,
                    output_path)


NAME = 'split'


def config_argparser(parser):
    """
    Subcommand flags.

    You should create and pass in the subparser to which the flags
    are to be added.
    """
    add_usual_input_args(parser)
    add_usual_output_args(parser)
    parser.add_argument('--by', choices=['sentence', 'paragraph'],
                        default='sentence',
                        help='unit to split on (default: sentence)')
    parser.set_defaults(func=main)


def split_doc(doc, unit):
    """
    Parts of a document (see `Document.split_in_sentences`), each with
    a copy of the linguistic processors of the whole
    """
    if unit == 'paragraph':
        parts = doc.split_in_paragraphs()
    else:
        parts = doc.split_in_sentences()
    for part in parts:
        part.add_linguistic_processors(doc.lps)
    return parts


def main(args):
    """
    Subcommand main.

    You shouldn't need to call this yourself if you're using
    `config_argparser`
    """
    output_dir = get_output_dir(args)
    for filename, doc in read_inputs(args):
        for i, part in enumerate(split_doc(doc, args.by), 1):
            suffix = '.%s%d.naf' % (args.by, i)
            write_naf(part, output_path(output_dir, filename, suffix))
    announce_output_dir(output_dir)
