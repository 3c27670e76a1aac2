# Author: Eric Kow
# License: BSD3

"""
Subcommands for the naf-util utility
"""

from . import depgraph, join, split, stats

SUBCOMMANDS = [stats,
               split,
               join,
               depgraph]
