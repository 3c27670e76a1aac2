# Author: Eric Kow
# License: BSD3

"""
Utility functions which are meant to be used by nafkit but aren't expected
to be too useful outside of it
"""


class NafXmlException(Exception):
    """
    The XML we were given is not NAF we can make sense of
    """
    def __init__(self, *args, **kw):
        Exception.__init__(self, *args, **kw)


def on_single_element(root, default, f, name):
    """
    Return

       * the default if no elements
       * f(the node) if one element
       * an exception if more than one

    A default of None means the element is mandatory
    """
    nodes = root.findall(name)
    if not nodes:
        if default is None:
            raise NafXmlException("Expected but did not find any nodes "
                                  "with name %s" % name)
        else:
            return default
    elif len(nodes) > 1:
        raise NafXmlException("Found more than one node with "
                              "name %s" % name)
    else:
        return f(nodes[0])


def required_attr(elem, name):
    """
    Value of an attribute that the element must have
    """
    val = elem.get(name)
    if val is None:
        raise NafXmlException("<%s> element without a %s attribute" %
                              (elem.tag, name))
    return val


def int_attr(elem, name):
    """
    Value of an optional integer attribute (None if absent)
    """
    val = elem.get(name)
    if val is None:
        return None
    try:
        return int(val)
    except ValueError:
        raise NafXmlException("%s attribute of <%s> is not a number: %s" %
                              (name, elem.tag, val))


def indent_xml(elem, level=0):
    """
    Indent an element tree in place, two spaces per level.
    Mixed content (text with child elements) is left alone

    WARNING: destructive
    """
    i = "\n" + level*"  "
    if len(elem):
        if not elem.text or not elem.text.strip():
            elem.text = i + "  "
        if not elem.tail or not elem.tail.strip():
            elem.tail = i
        for kid in elem:
            indent_xml(kid, level+1)
        if not kid.tail or not kid.tail.strip():
            kid.tail = i
    else:
        if level and (not elem.tail or not elem.tail.strip()):
            elem.tail = i
