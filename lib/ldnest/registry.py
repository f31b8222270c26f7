"""
Loading of a flattened graph into a registry of resources.

.. module:: ldnest.registry
  :synopsis: Graph registry and loader
"""
import logging

from .errors import MalformedGraph
from .identifier_issuer import IdentifierIssuer
from .model import DEFAULT_LABELS, Labels, Literal, Reference, Resource

log = logging.getLogger(__name__)

__all__ = ['Registry', 'load', 'detect_labels']


class Registry(object):
    """
    The resources of one flattened document indexed by identifier, in
    document order.
    """

    def __init__(self, labels=DEFAULT_LABELS, header=None):
        """
        Initializes an empty registry.

        :param labels: the Labels of the document.
        :param [header]: the top-level fields of the document other than
          '@graph', restored around the framed output.
        """
        self.labels = labels
        self.header = dict(header) if header else {}
        self.resources = {}

    def add(self, resource):
        """
        Adds a resource, replacing any resource with the same identifier.

        :param resource: the Resource to add.
        """
        if resource.id in self.resources:
            log.warning('duplicate resource %r, keeping the last one',
                        resource.id)
        self.resources[resource.id] = resource

    def get(self, id_):
        return self.resources.get(id_)

    def __contains__(self, id_):
        return id_ in self.resources

    def __iter__(self):
        return iter(self.resources.values())

    def __len__(self):
        return len(self.resources)


def detect_labels(context):
    """
    Finds the aliases a context gives to '@id' and '@type'.

    :param context: the @context of a document: a dict, a list of dicts and
      URLs, a URL or None.

    :return: the Labels in use, '@id' and '@type' when not aliased.
    """
    id_label, type_label = DEFAULT_LABELS
    if isinstance(context, dict):
        contexts = [context]
    elif isinstance(context, list):
        contexts = [c for c in context if isinstance(c, dict)]
    else:
        contexts = []
    for ctx in contexts:
        for term, definition in ctx.items():
            if isinstance(definition, dict):
                definition = definition.get('@id')
            if definition == '@id':
                id_label = term
            elif definition == '@type':
                type_label = term
    return Labels(id_label, type_label)


def load(doc, options=None):
    """
    Loads a flattened document into a new Registry.

    :param doc: the document, a dict with an optional '@context' and a
      '@graph' list of resource records.
    :param [options]: the options to use.
      [idLabel] the field holding resource identifiers (default: the
        '@id' alias declared in the context, else '@id').
      [typeLabel] the field holding resource types (default: the '@type'
        alias declared in the context, else '@type').
      [onlyFlattened] True to reject records embedding other resources
        (default: False).

    :return: the Registry.
    """
    options = options.copy() if options else {}
    if not isinstance(doc, dict) or '@graph' not in doc:
        raise MalformedGraph(
            "Invalid graph; the '@graph' field is missing.",
            {'keys': sorted(doc) if isinstance(doc, dict) else None})
    records = doc['@graph']
    if not isinstance(records, list):
        raise MalformedGraph(
            "Invalid graph; '@graph' must be a list of resources.",
            {'@graph': records})

    labels = detect_labels(doc.get('@context'))
    options.setdefault('idLabel', labels.id)
    options.setdefault('typeLabel', labels.type)
    options.setdefault('onlyFlattened', False)
    labels = Labels(options['idLabel'], options['typeLabel'])

    reserved = set()
    _collect_ids(records, labels.id, reserved)
    loader = _GraphLoader(
        labels, IdentifierIssuer(reserved=reserved), options['onlyFlattened'])

    registry = Registry(
        labels, {k: v for k, v in doc.items() if k != '@graph'})
    for record in records:
        if not isinstance(record, dict):
            raise MalformedGraph(
                'Invalid graph; a resource must be an object.',
                {'resource': record})
        if labels.id not in record:
            raise MalformedGraph(
                'Invalid graph; a resource has no "%s" field.' % labels.id,
                {'resource': record})
        registry.add(loader.to_resource(record))
    log.debug('loaded %d resources (id: %r, type: %r)',
              len(registry), labels.id, labels.type)
    return registry


def _collect_ids(value, id_label, ids):
    """Adds every identifier used in value to the set ids."""
    if isinstance(value, list):
        for item in value:
            _collect_ids(item, id_label, ids)
    elif isinstance(value, dict):
        if isinstance(value.get(id_label), str):
            ids.add(value[id_label])
        for key, item in value.items():
            if key != id_label:
                _collect_ids(item, id_label, ids)


class _GraphLoader(object):
    """
    Converts the records of one document into Resources.
    """

    def __init__(self, labels, issuer, only_flattened):
        self.labels = labels
        self.issuer = issuer
        self.only_flattened = only_flattened

    def to_resource(self, record):
        id_ = record.get(self.labels.id)
        if id_ is None:
            id_ = self.issuer.get_id()
        properties = {}
        for property, value in record.items():
            if property == self.labels.id:
                continue
            values = value if isinstance(value, list) else [value]
            properties[property] = [
                self.to_object(v) for v in values if v is not None]
        return Resource(id_, properties)

    def to_object(self, value):
        if isinstance(value, (str, bool, int, float)):
            return Literal(value)
        if not isinstance(value, dict):
            raise MalformedGraph(
                'Invalid graph; unsupported property value.',
                {'value': value})
        if '@value' in value and self._is_value_object(value):
            if not isinstance(value['@value'], (str, bool, int, float)):
                raise MalformedGraph(
                    'Invalid graph; "@value" must be a string, number or '
                    'boolean.', {'value': value})
            return Literal(
                value['@value'],
                value.get(self.labels.type, value.get('@type')),
                value.get('@language'))
        if len(value) == 1 and self.labels.id in value:
            return Reference(value[self.labels.id])
        if self.only_flattened:
            raise MalformedGraph(
                'Invalid graph; the graph is not flattened.',
                {'value': value})
        return self.to_resource(value)

    def _is_value_object(self, value):
        allowed = ('@value', '@type', '@language', self.labels.type)
        return all(key in allowed for key in value)
