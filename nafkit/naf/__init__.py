# Author: Eric Kow
# License: BSD3

"""
Reading and writing NAF documents, and the `naf-util` command line
tool built over them
"""
