"""
Nesting of flattened JSON-LD and YAML-LD graphs for display.

A flattened graph lists every resource on its own and links resources by
identifier only. Nesting inlines the referenced resources below the
resources nobody references, drops blank node identifiers that have no
meaning once inlined and can reorder properties per type.

.. module:: ldnest.nest
  :synopsis: Public API of LDNest
"""
import copy
import logging

import yaml
from pyld import jsonld

from ldnest.__about__ import (__copyright__, __license__, __version__)
from .counter import count_references
from .errors import CycleDetected, DepthExceeded, MalformedGraph, NestError
from .framer import DEFAULT_MAX_DEPTH, Framer, serialize, to_document
from .order import PropOrder, reorder
from .registry import detect_labels, load

log = logging.getLogger(__name__)

__all__ = [
    '__copyright__', '__license__', '__version__',
    'nest', 'frame_graph', 'sort_properties', 'extract_types', 'as_yaml',
    'flatten', 'NestProcessor', 'NestError', 'MalformedGraph',
    'DepthExceeded', 'CycleDetected', 'PropOrder', 'DEFAULT_MAX_DEPTH'
]


def nest(input_, ctx=None, options=None):
    """
    Flattens and compacts any JSON-LD input, then frames it.

    :param input_: the JSON-LD input (document, list of nodes or URL).
    :param ctx: the JSON-LD context to compact with (default: None, the
      input is then expected to be flattened already).
    :param [options]: the options to use.
      [contextUrl] a URL replacing the context of the output.
      [propOrder] a PropOrder, mapping or YAML path ordering properties.
      [maxDepth] the nesting depth ceiling (default: 100).
      [detectCycles] fail on cyclic references (default: True).
      [base] the base IRI to use when flattening.
      [documentLoader(url)] the PyLD document loader used when flattening.

    :return: the nested document.
    """
    return NestProcessor().nest(input_, ctx, options)


def frame_graph(doc, options=None):
    """
    Frames a flattened document.

    :param doc: the flattened document with '@context' and '@graph'.
    :param [options]: the options to use.
      [idLabel] the identifier field (default: from the context).
      [typeLabel] the type field (default: from the context).
      [onlyFlattened] reject embedded resources (default: False).
      [maxDepth] the nesting depth ceiling (default: 100).
      [detectCycles] fail on cyclic references (default: True).
      [propOrder] a PropOrder, mapping or YAML path ordering properties.

    :return: the nested document.
    """
    return NestProcessor().frame_graph(doc, options)


def sort_properties(doc, prop_order, options=None):
    """
    Reorders the properties of every resource of a document without
    framing it.

    :param doc: the document with '@context' and '@graph'.
    :param prop_order: a PropOrder, mapping or YAML path.
    :param [options]: the options to use.
      [idLabel] the identifier field (default: from the context).
      [typeLabel] the type field (default: from the context).

    :return: the document with reordered resources.
    """
    return NestProcessor().sort_properties(doc, prop_order, options)


def extract_types(doc, options=None):
    """
    Lists the types of the top-level resources of a document.

    :param doc: the document with '@context' and '@graph'.
    :param [options]: the options to use.
      [typeLabel] the type field (default: from the context).

    :return: the distinct type names in first-seen order.
    """
    return NestProcessor().extract_types(doc, options)


def as_yaml(doc, options=None):
    """
    Renders a document as YAML-LD.

    :param doc: the document.
    :param [options]: the options to use.
      [contextUrl] a URL replacing the context.
      [propOrder] a PropOrder, mapping or YAML path ordering properties.

    :return: the YAML text.
    """
    return NestProcessor().as_yaml(doc, options)


def flatten(input_, ctx=None, options=None):
    """
    Flattens and compacts JSON-LD input with PyLD.

    :param input_: the JSON-LD input.
    :param ctx: the context to compact with (default: None, an empty
      context).
    :param [options]: the PyLD options to use.

    :return: the flattened document with '@context' and '@graph'.
    """
    return NestProcessor().flatten(input_, ctx, options)


class NestProcessor(object):
    """
    A processor nesting linked-data graphs.

    Nothing is kept between calls: every call loads its own registry.
    """

    def nest(self, input_, ctx, options):
        """
        Flattens, compacts and frames JSON-LD input.

        :param input_: the JSON-LD input.
        :param ctx: the context to compact with, None if input_ is a
          flattened document already.
        :param options: the options to use, see ldnest.nest.nest().

        :return: the nested document.
        """
        options = options.copy() if options else {}
        options.setdefault('contextUrl', None)

        if ctx is None:
            flattened = input_
        else:
            flattened = self.flatten(input_, ctx, options)

        # labels come from the full context, before it is replaced
        labels = detect_labels(_get_context(flattened))
        options.setdefault('idLabel', labels.id)
        options.setdefault('typeLabel', labels.type)
        if options['contextUrl'] and isinstance(flattened, dict):
            flattened = dict(flattened)
            flattened['@context'] = options['contextUrl']

        return self.frame_graph(flattened, options)

    def flatten(self, input_, ctx, options):
        """
        Flattens and compacts JSON-LD input with PyLD.

        :param input_: the JSON-LD input.
        :param ctx: the context to compact with, None for an empty one.
        :param options: the options to use.
          [base] the base IRI to use.
          [documentLoader(url)] the PyLD document loader.

        :return: the flattened document with '@context' and '@graph'.
        """
        options = options.copy() if options else {}
        pyld_options = {'graph': True}
        for key in ('base', 'documentLoader', 'expandContext'):
            if options.get(key) is not None:
                pyld_options[key] = options[key]
        if ctx is None:
            ctx = {}

        try:
            flattened = jsonld.flatten(input_, ctx, pyld_options)
        except jsonld.JsonLdError as cause:
            raise NestError(
                'Could not flatten and compact input before nesting.',
                'ldnest.CompactError', cause=cause)
        flattened.setdefault('@graph', [])
        log.debug('flattened input into %d nodes', len(flattened['@graph']))
        return flattened

    def frame_graph(self, doc, options):
        """
        Frames a flattened document.

        :param doc: the flattened document.
        :param options: the options to use, see ldnest.nest.frame_graph().

        :return: the nested document.
        """
        options = options.copy() if options else {}
        options.setdefault('maxDepth', DEFAULT_MAX_DEPTH)
        options.setdefault('detectCycles', True)
        options.setdefault('propOrder', None)

        registry = load(doc, options)
        counts = count_references(registry)
        roots = Framer(registry, counts, options).frame()

        if options['propOrder'] is not None:
            prop_order = _to_prop_order(options['propOrder'])
            roots = [reorder(r, prop_order, registry.labels) for r in roots]
        return to_document(registry, roots)

    def sort_properties(self, doc, prop_order, options):
        """
        Reorders the properties of every resource of a document.

        :param doc: the document.
        :param prop_order: a PropOrder, mapping or YAML path.
        :param options: the options to use.

        :return: the document, '@graph' kept as a list.
        """
        registry = load(doc, options)
        prop_order = _to_prop_order(prop_order)
        rval = copy.deepcopy(registry.header)
        rval['@graph'] = [
            serialize(reorder(r, prop_order, registry.labels), registry.labels)
            for r in registry]
        return rval

    def extract_types(self, doc, options):
        """
        Lists the types of the top-level resources of a document.

        :param doc: the document.
        :param options: the options to use.

        :return: the distinct type names in first-seen order.
        """
        registry = load(doc, options)
        types = []
        for resource in registry:
            for type_name in resource.type_names(registry.labels):
                if type_name not in types:
                    types.append(type_name)
        return types

    def as_yaml(self, doc, options):
        """
        Renders a document as YAML-LD, collapsing a single-resource graph.

        :param doc: the document.
        :param options: the options to use.

        :return: the YAML text.
        """
        options = options.copy() if options else {}
        options.setdefault('contextUrl', None)
        options.setdefault('propOrder', None)

        if options['propOrder'] is not None:
            if '@graph' not in doc:
                # a collapsed document is sorted as a graph of one resource
                doc = _to_graph(doc)
            doc = self.sort_properties(doc, options['propOrder'], options)
        graph = doc.get('@graph')
        if isinstance(graph, list) and len(graph) == 1:
            rval = {k: v for k, v in doc.items() if k != '@graph'}
            rval.update(graph[0])
        else:
            rval = dict(doc)
        if options['contextUrl'] and '@context' in rval:
            rval['@context'] = options['contextUrl']
        return yaml.safe_dump(
            rval, default_flow_style=False, sort_keys=False,
            allow_unicode=True, indent=2)


def _get_context(doc):
    return doc.get('@context') if isinstance(doc, dict) else None


def _to_graph(doc):
    rval = {k: v for k, v in doc.items() if k == '@context'}
    rval['@graph'] = [{k: v for k, v in doc.items() if k != '@context'}]
    return rval


def _to_prop_order(value):
    if isinstance(value, PropOrder):
        return value
    return PropOrder(value)
