#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
ldnest - CLI script for LDNest
"""
import codecs
import json
import logging
import os
import sys

import yaml
from pyld import jsonld

import ldnest
from ldnest.errors import NestError

log = logging.getLogger()

YAML_EXTENSIONS = ('.yaml', '.yml', '.yamlld')


def read_document(path):
    """
    Read a JSON-LD or YAML-LD document

    :param path: path to a .json, .jsonld, .yaml, .yml or .yamlld file
    :returns: the parsed document
    """
    log.debug("read_document: %r" % path)
    with codecs.open(path, 'r', encoding='utf8') as f:
        if os.path.splitext(path)[1].lower() in YAML_EXTENSIONS:
            return yaml.safe_load(f)
        return json.load(f)


def nest_file(path, options):
    """
    Read a document and nest, sort or list its resources

    :param path: path to the input document
    :param options: options dict
    :returns: output text
    :rtype: str
    """
    log.debug("nest_file: %r, %r" % (path, options))
    doc = read_document(path)

    compact = options.get('compact')
    if compact:
        if os.path.exists(compact):
            compact = read_document(compact)
        doc = ldnest.nest.flatten(doc, compact, options)

    if options.get('types'):
        return '\n'.join(ldnest.nest.extract_types(doc, options)) + '\n'

    if options.get('sort_only'):
        output = ldnest.nest.sort_properties(
            doc, options.get('propOrder') or {}, options)
        if options.get('contextUrl') and '@context' in output:
            output['@context'] = options['contextUrl']
    else:
        output = ldnest.nest.nest(doc, None, options)

    if options.get('yaml'):
        return ldnest.nest.as_yaml(output, {
            'contextUrl': options.get('contextUrl')})
    out_str = json.dumps(
        output, indent=options.get('indent', 1), ensure_ascii=False)
    log.debug("nest_file: len(output): %d" % len(out_str))
    return out_str + '\n'


def main(*argv):
    import argparse

    prs = argparse.ArgumentParser(
        prog='ldnest',
        description='Nest a flattened JSON-LD or YAML-LD graph')

    prs.add_argument('input',
                     help='JSON-LD or YAML-LD file to read')

    prs.add_argument('--compact',
                     help=('Flatten and compact the input with the given '
                           '@context file or URI first'),
                     dest='compact',
                     action='store')
    prs.add_argument('--loader',
                     help=('Remote context loader used by --compact: '
                           'requests, aiohttp [default: PyLD default]'),
                     dest='loader',
                     choices=['requests', 'aiohttp'],
                     action='store')
    prs.add_argument('--context-url',
                     help='Replace the output @context by this URL',
                     dest='contextUrl',
                     action='store')
    prs.add_argument('--prop-order',
                     help='YAML file ordering the properties of each type',
                     dest='propOrder',
                     action='store')

    prs.add_argument('--sort-only',
                     help='ACTION: Sort properties without nesting',
                     dest='sort_only',
                     action='store_true')
    prs.add_argument('--types',
                     help='ACTION: List the types of the top-level resources',
                     dest='types',
                     action='store_true')

    prs.add_argument('--max-depth',
                     help='Maximum nesting depth [default: %d]' % (
                         ldnest.nest.DEFAULT_MAX_DEPTH),
                     dest='maxDepth',
                     action='store',
                     type=int,
                     default=ldnest.nest.DEFAULT_MAX_DEPTH)
    prs.add_argument('--no-cycle-check',
                     help='Only rely on --max-depth to stop cyclic graphs',
                     dest='detectCycles',
                     action='store_false',
                     default=True)
    prs.add_argument('--only-flattened',
                     help='Reject resources embedded in other resources',
                     dest='onlyFlattened',
                     action='store_true',
                     default=False)

    prs.add_argument('--yaml',
                     help='Write YAML-LD instead of JSON-LD',
                     dest='yaml',
                     action='store_true')
    prs.add_argument('--indent',
                     help='Indent json with n spaces [default: 1]',
                     dest='indent',
                     action='store',
                     type=int,
                     default=1)

    prs.add_argument('-v', '--verbose',
                     dest='verbose',
                     action='store_true',)
    prs.add_argument('-q', '--quiet',
                     dest='quiet',
                     action='store_true',)
    if not argv:
        _argv = sys.argv[1:]
    else:
        _argv = list(argv)
    opts = prs.parse_args(args=_argv)

    if not opts.quiet:
        logging.basicConfig()

        if opts.verbose:
            logging.getLogger().setLevel(logging.DEBUG)

    options = {
        'compact': opts.compact,
        'contextUrl': opts.contextUrl,
        'propOrder': opts.propOrder,
        'sort_only': opts.sort_only,
        'types': opts.types,
        'maxDepth': opts.maxDepth,
        'detectCycles': opts.detectCycles,
        'onlyFlattened': opts.onlyFlattened,
        'yaml': opts.yaml,
        'indent': opts.indent,
    }
    if opts.loader == 'requests':
        options['documentLoader'] = jsonld.requests_document_loader()
    elif opts.loader == 'aiohttp':
        options['documentLoader'] = jsonld.aiohttp_document_loader()

    try:
        sys.stdout.write(nest_file(opts.input, options))
    except NestError as e:
        log.error("ldnest: %s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main(*sys.argv[1:]))
