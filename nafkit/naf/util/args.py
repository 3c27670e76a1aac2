# Author: Eric Kow
# License: BSD3

"""
Command line options shared by the `naf-util` subcommands
"""

import os
import sys
import tempfile

from ..nafx import read_naf


def add_usual_input_args(parser):
    """
    Augment a subcommand argparser with the NAF files it works on
    """
    parser.add_argument('inputs', nargs='+', metavar='FILE',
                        help='NAF file(s)')


def add_usual_output_args(parser):
    """
    Augment a subcommand argparser with typical output arguments
    """
    parser.add_argument('--output', '-o', metavar='DIR',
                        help='output directory (default mktemp)')


def read_inputs(args, verbose=True):
    """
    Read the NAF files given on the command line, as (file name,
    document) pairs
    """
    res = []
    for filename in args.inputs:
        if verbose:
            print("Reading", filename, file=sys.stderr)
        res.append((filename, read_naf(filename)))
    return res


def get_output_dir(args):
    """Return the output dir specified or inferred from command
    line args.

    If `--output` is given explicitly, we use (and create) that;
    otherwise we just make a temporary directory. Later on, you'll
    probably want to call `announce_output_dir`.
    """
    if args.output:
        if os.path.isfile(args.output):
            oops = "Sorry, %s already exists and is not a directory" %\
                args.output
            sys.exit(oops)
        elif not os.path.isdir(args.output):
            os.makedirs(args.output)
        return args.output
    else:
        return tempfile.mkdtemp()


def announce_output_dir(output_dir):
    """
    Tell the user where we saved the output
    """
    print("Output files written to", output_dir, file=sys.stderr)


def output_path(output_dir, filename, suffix=''):
    """
    Where to write a file derived from the given input file
    """
    stem = os.path.splitext(os.path.basename(filename))[0]
    return os.path.join(output_dir, stem + suffix)
