# Author: Eric Kow
# License: BSD3

"""
nafkit is a library for building, navigating and querying documents in
the KAF/NAF linguistic annotation format.

A NAF document is raw text progressively enriched with layers of
analysis (word forms, terms, chunks, entities, dependency and
constituency parses, semantic roles, time expressions, opinions...).
Annotations of one layer point into the layers below; nafkit keeps
track of these references so that one can ask, for example, which
entities fall in some paragraph, or what terms an opinion covers.

Modules
-------
* `nafkit.layers`: the catalog of layers and annotation types
* `nafkit.annotation`, `nafkit.lexical`, `nafkit.syntax`,
  `nafkit.semantics`, `nafkit.temporal`, `nafkit.opinion`: the
  annotations themselves
* `nafkit.container`: where the annotations of a document live, and
  how to query them
* `nafkit.document`: documents (container plus header)
* `nafkit.depgraph`: dependency graph view, paths and path patterns
* `nafkit.naf`: NAF XML input/output and command line tool
"""

__version__ = '0.1'
