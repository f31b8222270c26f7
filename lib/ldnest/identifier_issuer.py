from .model import BNODE_PREFIX


class IdentifierIssuer(object):
    """
    An IdentifierIssuer names anonymous resources of a document with blank
    node identifiers that do not clash with identifiers already in use.
    """

    def __init__(self, prefix=BNODE_PREFIX + 'b', reserved=()):
        """
        Initializes a new IdentifierIssuer.

        :param prefix: the prefix to use ('<prefix><counter>').
        :param reserved: identifiers present in the document, never issued.
        """
        self.prefix = prefix
        self.counter = 0
        self.reserved = set(reserved)

    def get_id(self):
        """
        Issues the next free blank node identifier.

        :return: the new identifier.
        """
        while True:
            id_ = self.prefix + str(self.counter)
            self.counter += 1
            if id_ not in self.reserved:
                break
        self.reserved.add(id_)
        return id_
