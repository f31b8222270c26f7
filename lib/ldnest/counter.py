"""
Reference counting over a graph registry.

.. module:: ldnest.counter
  :synopsis: Incoming reference counts used to find graph roots
"""
import logging

from .model import Reference, Resource

log = logging.getLogger(__name__)


def count_references(registry):
    """
    Counts, for every resource of the registry, the references targeting
    it.

    Each registry resource is visited once. References held by resources
    embedded in the input are counted too; resources produced by framing
    never are, since framing works on copies.

    :param registry: the Registry to count.

    :return: a dict of identifier to count; every registry identifier is
      present. Targets absent from the registry are counted as well.
    """
    counts = dict.fromkeys(registry.resources, 0)
    for resource in registry:
        _count_objects(resource, counts)
    log.debug('counted references over %d resources', len(counts))
    return counts


def _count_objects(resource, counts):
    for objects in resource.properties.values():
        for object_ in objects:
            if isinstance(object_, Reference):
                counts[object_.target_id] = (
                    counts.get(object_.target_id, 0) + 1)
            elif isinstance(object_, Resource):
                _count_objects(object_, counts)
