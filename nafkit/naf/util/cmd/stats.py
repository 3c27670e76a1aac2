# Author: Eric Kow
# License: BSD3

"""
Show number of sentences, paragraphs and annotations per layer
"""

from collections import OrderedDict, defaultdict

from tabulate import tabulate

from nafkit.layers import Layer
from nafkit.util import concat
from ..args import add_usual_input_args, read_inputs


NAME = 'stats'


def config_argparser(parser):
    """
    Subcommand flags.

    You should create and pass in the subparser to which the flags
    are to be added.
    """
    add_usual_input_args(parser)
    parser.set_defaults(func=main)


def layer_counts(doc):
    """
    Number of annotations in each non-empty layer of a document
    (keyed by layer name)
    """
    counts = OrderedDict()
    counts['sentences'] = doc.num_sentences()
    counts['paragraphs'] = doc.num_paragraphs()
    for layer in Layer:
        num = len(doc.annotations(layer))
        if num:
            counts[layer.value] = num
    return counts


def wide_summary(f_counts):
    """
    Return a table of counts for each file, with a total row
    """
    keys = []
    for key in concat(x.keys() for x in f_counts.values()):
        if key not in keys:
            keys.append(key)
    rows = []
    total = defaultdict(int)
    for filename, counts in f_counts.items():
        row = [filename]
        for key in keys:
            row.append(counts.get(key, 0))
            total[key] += counts.get(key, 0)
        rows.append(row)
    rows.append(["all together"] + [total[x] for x in keys])
    headers = ["file"] + keys
    return tabulate(rows, headers=headers)


def main(args):
    """
    Subcommand main.

    You shouldn't need to call this yourself if you're using
    `config_argparser`
    """
    f_counts = OrderedDict((filename, layer_counts(doc))
                           for filename, doc in read_inputs(args))
    print(wide_summary(f_counts))
