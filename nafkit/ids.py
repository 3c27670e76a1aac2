# Author: Eric Kow
# License: BSD3

"""
Identifier generation.

Identifiers look like `<prefix><n>`, the prefix being fixed per
annotation type (see `nafkit.layers.ID_PREFIXES`).
"""

import re

from .layers import ID_PREFIXES

_NUMERIC_TAIL = re.compile(r'(\d+)$')


def numeric_tail(anno_id):
    """
    The trailing run of decimal digits of an identifier, as an int
    (None if the identifier does not end in a digit)
    """
    match = _NUMERIC_TAIL.search(anno_id)
    return int(match.group(1)) if match else None


class IdManager(object):
    """
    One counter per annotation type.

    Generated identifiers never collide with ones that were
    `reconcile`d beforehand, whatever order they were seen in
    """
    def __init__(self):
        self._counters = {}

    def next_id(self, atype):
        """
        Return a fresh identifier for the annotation type
        """
        counter = self._counters.get(atype, 0) + 1
        self._counters[atype] = counter
        return ID_PREFIXES[atype] + str(counter)

    def reconcile(self, atype, anno_id):
        """
        Take note of an identifier we did not generate ourselves,
        so that we never generate it later.

        Identifiers without a numeric tail are not a problem: they
        just leave the counter where it is
        """
        num = numeric_tail(anno_id)
        if num is not None and num > self._counters.get(atype, 0):
            self._counters[atype] = num

    def counter(self, atype):
        "Current value of the counter for the type"
        return self._counters.get(atype, 0)
