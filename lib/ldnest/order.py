"""
Type-driven ordering of resource properties.

An order table lists, for each type name, the properties to show first.
Properties not listed keep their original relative order after them.

.. module:: ldnest.order
  :synopsis: Property ordering tables and reordering of framed resources
"""
import logging
import os

import yaml

from .errors import NestError
from .model import DEFAULT_LABELS, Resource

log = logging.getLogger(__name__)

__all__ = ['PropOrder', 'reorder']


class PropOrder(object):
    """
    Ordered property names per type name.
    """

    def __init__(self, order):
        """
        Initializes a PropOrder.

        :param order: a mapping {'classes': {type: [property, ...]}}, a bare
          mapping {type: [property, ...]}, or the path of a YAML file
          holding either.
        """
        if isinstance(order, str):
            order = self.load_file(order)
        if isinstance(order, dict) and 'classes' in order:
            classes = order['classes']
        else:
            classes = order
        if not isinstance(classes, dict):
            raise NestError(
                'Invalid property order; expected a mapping of types.',
                'ldnest.PropOrderError', {'order': order})
        self.classes = {
            type_: list(properties or [])
            for type_, properties in classes.items()}

    @staticmethod
    def load_file(path):
        """
        Reads a property order from a YAML file.

        :param path: the file path.

        :return: the parsed mapping.
        """
        if not os.path.isfile(path):
            raise NestError(
                'Property order file "%s" does not exist.' % path,
                'ldnest.PropOrderError', {'path': path})
        with open(path, encoding='utf-8') as f:
            try:
                return yaml.safe_load(f)
            except yaml.YAMLError as cause:
                raise NestError(
                    'Could not parse property order file "%s".' % path,
                    'ldnest.PropOrderError', {'path': path}, cause=cause)

    def properties_for(self, type_names):
        """
        Gets the property list of the first type having a non-empty one.

        :param type_names: the type names of a resource, in order.

        :return: the ordered property names, empty if no type matches.
        """
        for type_name in type_names:
            properties = self.classes.get(type_name)
            if properties:
                return properties
        return []


def reorder(resource, prop_order, labels=DEFAULT_LABELS):
    """
    Reorders the properties of a resource and of every resource nested in
    it.

    :param resource: the Resource to reorder.
    :param prop_order: the PropOrder to apply.
    :param labels: the Labels giving the type property.

    :return: a new Resource with reordered properties.
    """
    listed = prop_order.properties_for(resource.type_names(labels))
    properties = {}
    for property in listed:
        if property in resource.properties:
            properties[property] = resource.properties[property]
    for property, objects in resource.properties.items():
        if property not in properties:
            properties[property] = objects
    if listed:
        log.debug('reordered %s after %r', resource.id, listed)

    return Resource(resource.id, {
        property: [
            reorder(o, prop_order, labels) if isinstance(o, Resource) else o
            for o in objects]
        for property, objects in properties.items()})
