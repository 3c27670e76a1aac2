# Author: Eric Kow
# License: BSD3

"""
Internals of the `naf-util` command line tool
"""
