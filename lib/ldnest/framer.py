"""
Framing of a flattened graph into a nested document.

Resources referenced by no other resource become the roots of the output;
every reference met below a root is replaced by a framed copy of its
target, so a resource referenced from several places is repeated at each
of them.

.. module:: ldnest.framer
  :synopsis: Framer and nested document serializer
"""
import copy
import logging

from .errors import CycleDetected, DepthExceeded
from .model import DEFAULT_LABELS, Literal, Reference, Resource

log = logging.getLogger(__name__)

__all__ = ['DEFAULT_MAX_DEPTH', 'Framer', 'frame', 'serialize']

# Nesting ceiling, reached only by very deep or cyclic graphs
DEFAULT_MAX_DEPTH = 100


class Framer(object):
    """
    Nests the resources of a registry below its roots.
    """

    def __init__(self, registry, counts, options=None):
        """
        Initializes a framer.

        :param registry: the Registry to frame.
        :param counts: the reference counts of the registry.
        :param [options]: the options to use.
          [maxDepth] the depth at which inlining fails with DepthExceeded
            (default: 100).
          [detectCycles] True to fail with CycleDetected as soon as a
            resource would be inlined inside itself, False to rely on
            maxDepth only (default: True).
        """
        options = options.copy() if options else {}
        options.setdefault('maxDepth', DEFAULT_MAX_DEPTH)
        options.setdefault('detectCycles', True)
        self.registry = registry
        self.counts = counts
        self.max_depth = options['maxDepth']
        self.detect_cycles = options['detectCycles']

    def roots(self):
        """
        Gets the resources no other resource references, in registry order.
        """
        return [r for r in self.registry if self.counts.get(r.id, 0) == 0]

    def frame(self):
        """
        Frames every root.

        :return: the list of framed root Resources.
        """
        roots = self.roots()
        log.debug('framing %d roots out of %d resources',
                  len(roots), len(self.registry))
        return [self.frame_resource(root) for root in roots]

    def frame_resource(self, resource, depth=0, path=()):
        """
        Builds a copy of a resource in which references to known resources
        are replaced by framed copies of their targets.

        :param resource: the Resource to frame.
        :param depth: the nesting depth of the resource, 0 for a root.
        :param path: the identifiers of the resources being framed above
          this one.

        :return: the framed Resource.
        """
        if depth >= self.max_depth:
            raise DepthExceeded(
                'Maximum nesting depth exceeded while framing.',
                {'id': resource.id, 'depth': depth,
                 'maxDepth': self.max_depth})
        path = path + (resource.id,)
        properties = {}
        for property, objects in resource.properties.items():
            properties[property] = [
                self._frame_object(o, depth, path) for o in objects]
        return Resource(resource.id, properties)

    def _frame_object(self, object_, depth, path):
        if isinstance(object_, Literal):
            return object_
        if isinstance(object_, Reference):
            target = self.registry.get(object_.target_id)
            if target is None:
                # dangling
                return object_
            if self.detect_cycles and target.id in path:
                raise CycleDetected(
                    'Cyclic reference to "%s" while framing.' % target.id,
                    path + (target.id,))
            return self.frame_resource(target, depth + 1, path)
        if isinstance(object_, Resource):
            return self.frame_resource(object_, depth + 1, path)
        raise TypeError('Unexpected property object %r' % (object_,))


def serialize(object_, labels=DEFAULT_LABELS, depth=0):
    """
    Converts a property object into plain dicts, lists and scalars.

    :param object_: the Literal, Reference or Resource to convert.
    :param labels: the Labels to write identifiers and types with.
    :param depth: the nesting depth of object_, 0 for a root.

    :return: the plain value.
    """
    if isinstance(object_, Literal):
        if object_.is_plain:
            return object_.value
        rval = {}
        if object_.datatype is not None:
            rval[labels.type] = object_.datatype
        if object_.language is not None:
            rval['@language'] = object_.language
        rval['@value'] = object_.value
        return rval
    if isinstance(object_, Reference):
        return {labels.id: object_.target_id}
    if isinstance(object_, Resource):
        # nested blank node identifiers carry no meaning
        rval = {} if depth and object_.is_blank else {labels.id: object_.id}
        for property, objects in object_.properties.items():
            values = [serialize(o, labels, depth + 1) for o in objects]
            rval[property] = values[0] if len(values) == 1 else values
        return rval
    raise TypeError('Unexpected property object %r' % (object_,))


def to_document(registry, resources):
    """
    Builds the output document from serialized top-level resources.

    A single resource is merged into the document header (no '@graph');
    otherwise the header is kept with '@graph' listing the resources.

    :param registry: the Registry the resources come from.
    :param resources: the top-level Resources.

    :return: the plain document.
    """
    header = copy.deepcopy(registry.header)
    rval = {}
    if '@context' in header:
        rval['@context'] = header.pop('@context')
    rval.update(header)
    graph = [serialize(r, registry.labels) for r in resources]
    if len(graph) == 1:
        rval.update(graph[0])
    else:
        rval['@graph'] = graph
    return rval


def frame(registry, counts, options=None):
    """
    Frames a loaded graph into a nested document.

    :param registry: the Registry to frame.
    :param counts: the reference counts of the registry.
    :param [options]: the Framer options.

    :return: the nested document.
    """
    return to_document(registry, Framer(registry, counts, options).frame())
