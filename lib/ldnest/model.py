"""
Property objects of a linked-data graph.

A resource maps each property name to an ordered list of property
objects. In a flattened graph a property object is either a Literal or a
Reference to another resource; once framed (or when the input was already
nested) it may also be a Resource.

.. module:: ldnest.model
  :synopsis: Literal, Reference and Resource types
"""
from collections import namedtuple

# Blank node identifier prefix
BNODE_PREFIX = '_:'

# Field names encoding resource identity and type in a document
Labels = namedtuple('Labels', ['id', 'type'])

DEFAULT_LABELS = Labels('@id', '@type')


class Literal(namedtuple('Literal', ['value', 'datatype', 'language'])):
    """
    An immutable scalar value, optionally tagged with a datatype or a
    language.
    """
    __slots__ = ()

    def __new__(cls, value, datatype=None, language=None):
        return super(Literal, cls).__new__(cls, value, datatype, language)

    @property
    def is_plain(self):
        return self.datatype is None and self.language is None


class Reference(namedtuple('Reference', ['target_id'])):
    """
    An immutable pointer to a resource by its identifier. The target may
    be absent from the graph.
    """
    __slots__ = ()


class Resource(object):
    """
    A named or blank node with its ordered properties.
    """

    def __init__(self, id_, properties=None):
        """
        Initializes a resource.

        :param id_: the resource identifier, '_:' prefixed for blank nodes.
        :param [properties]: ordered dict of property name to list of
          property objects.
        """
        self.id = id_
        self.properties = dict(properties) if properties else {}

    @property
    def is_blank(self):
        return is_bnode(self.id)

    def get_values(self, property):
        """
        Gets the property objects of the given property.

        :param property: the property name.

        :return: the list of property objects, empty if absent.
        """
        return self.properties.get(property, [])

    def type_names(self, labels=DEFAULT_LABELS):
        """
        Gets the names of the types declared by this resource.

        :param labels: the Labels in use.

        :return: the list of type names, in declaration order.
        """
        return [o.value for o in self.get_values(labels.type)
                if isinstance(o, Literal)]

    def __eq__(self, other):
        if not isinstance(other, Resource):
            return NotImplemented
        return (self.id == other.id and
                list(self.properties.items()) ==
                list(other.properties.items()))

    def __ne__(self, other):
        rval = self.__eq__(other)
        return rval if rval is NotImplemented else not rval

    __hash__ = None

    def __repr__(self):
        return 'Resource(%r, %r)' % (self.id, self.properties)


def is_bnode(id_):
    """
    Returns True if the given identifier names a blank node.

    :param id_: the identifier to check.

    :return: True if the identifier is a blank node identifier.
    """
    return isinstance(id_, str) and id_.startswith(BNODE_PREFIX)
