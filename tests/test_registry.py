import pytest

from ldnest.errors import MalformedGraph
from ldnest.identifier_issuer import IdentifierIssuer
from ldnest.model import Labels, Literal, Reference, Resource
from ldnest.registry import Registry, detect_labels, load


class TestDetectLabels:
    def test_defaults(self):
        assert detect_labels(None) == Labels('@id', '@type')
        assert detect_labels('https://example.org/context.jsonld') == (
            Labels('@id', '@type'))

    def test_aliases(self):
        context = {'$id': '@id', 'isA': '@type', 'title': 'dct:title'}
        assert detect_labels(context) == Labels('$id', 'isA')

    def test_aliases_in_context_list(self):
        context = [
            'https://example.org/base.jsonld',
            {'id': {'@id': '@id'}},
            {'type': '@type'},
        ]
        assert detect_labels(context) == Labels('id', 'type')


class TestLoad:
    def test_missing_graph(self):
        with pytest.raises(MalformedGraph) as exc:
            load({'@context': {}, 'name': 'no graph'})
        assert exc.value.type == 'ldnest.MalformedGraph'

    def test_not_a_document(self):
        with pytest.raises(MalformedGraph):
            load([{'@id': 'a'}])

    def test_graph_not_a_list(self):
        with pytest.raises(MalformedGraph):
            load({'@graph': {'@id': 'a'}})

    def test_record_without_id(self):
        with pytest.raises(MalformedGraph):
            load({'@graph': [{'name': 'anonymous'}]})

    def test_record_not_an_object(self):
        with pytest.raises(MalformedGraph):
            load({'@graph': ['a']})

    def test_property_objects(self):
        registry = load({'@graph': [{
            '@id': 'a',
            'name': 'A',
            'size': 3,
            'open': True,
            'issued': {'@type': 'xsd:date', '@value': '2024-05-01'},
            'label': {'@language': 'fr', '@value': 'Routes'},
            'next': {'@id': 'b'},
            'seeAlso': [{'@id': 'c'}, 'd', None],
        }]})
        a = registry.get('a')
        assert a.properties == {
            'name': [Literal('A')],
            'size': [Literal(3)],
            'open': [Literal(True)],
            'issued': [Literal('2024-05-01', 'xsd:date')],
            'label': [Literal('Routes', language='fr')],
            'next': [Reference('b')],
            'seeAlso': [Reference('c'), Literal('d')],
        }

    def test_property_order_is_kept(self):
        registry = load({'@graph': [
            {'@id': 'a', 'z': 1, 'b': 2, 'm': 3}]})
        assert list(registry.get('a').properties) == ['z', 'b', 'm']

    def test_registry_order_and_header(self):
        doc = {
            '@context': {'isA': '@type'},
            'name': 'catalog',
            '@graph': [{'@id': 'b'}, {'@id': 'a'}],
        }
        registry = load(doc)
        assert [r.id for r in registry] == ['b', 'a']
        assert registry.header == {
            '@context': {'isA': '@type'}, 'name': 'catalog'}
        assert 'a' in registry
        assert len(registry) == 2

    def test_aliased_labels(self, catalog):
        registry = load(catalog)
        assert registry.labels == Labels('id', 'isA')
        dataset = registry.get('https://example.org/catalog/roads')
        assert dataset.get_values('distribution') == [
            Reference('_:b0'), Reference('_:b1')]
        assert dataset.type_names(registry.labels) == ['Dataset']

    def test_labels_from_options(self):
        registry = load(
            {'@graph': [{'$id': 'a', 'isA': 'T', 'p': {'$id': 'b'}}]},
            {'idLabel': '$id', 'typeLabel': 'isA'})
        assert registry.get('a').properties == {
            'isA': [Literal('T')], 'p': [Reference('b')]}

    def test_typed_literal_with_aliased_type(self):
        registry = load({
            '@context': {'isA': '@type'},
            '@graph': [{'@id': 'a', 'd': {'isA': 'xsd:date', '@value': 'x'}}],
        })
        assert registry.get('a').get_values('d') == [
            Literal('x', 'xsd:date')]

    def test_list_value_is_rejected(self):
        with pytest.raises(MalformedGraph) as exc:
            load({'@graph': [{'@id': 'a', 'd': {'@value': [1, 2]}}]})
        assert exc.value.code == 'malformed graph'

    def test_embedded_resource(self):
        registry = load({'@graph': [
            {'@id': 'a', 'p': {'@id': 'e', 'q': 'x'}}]})
        assert registry.get('a').get_values('p') == [
            Resource('e', {'q': [Literal('x')]})]
        assert 'e' not in registry

    def test_embedded_blank_node_gets_free_id(self):
        registry = load({'@graph': [
            {'@id': 'a', 'p': {'q': 'x'}},
            {'@id': '_:b0', 'v': 1},
        ]})
        embedded = registry.get('a').get_values('p')[0]
        assert embedded.is_blank
        assert embedded.id == '_:b1'

    def test_only_flattened(self):
        with pytest.raises(MalformedGraph):
            load({'@graph': [{'@id': 'a', 'p': {'q': 'x'}}]},
                 {'onlyFlattened': True})

    def test_unsupported_value(self):
        with pytest.raises(MalformedGraph):
            load({'@graph': [{'@id': 'a', 'p': [['nested', 'list']]}]})

    def test_duplicate_id_last_wins(self):
        registry = load({'@graph': [
            {'@id': 'a', 'v': 1}, {'@id': 'a', 'v': 2}]})
        assert len(registry) == 1
        assert registry.get('a').get_values('v') == [Literal(2)]


class TestRegistry:
    def test_independent_registries(self):
        first = load({'@graph': [{'@id': 'a'}]})
        second = load({'@graph': [{'@id': 'b'}]})
        assert [r.id for r in first] == ['a']
        assert [r.id for r in second] == ['b']

    def test_empty(self):
        registry = Registry()
        assert len(registry) == 0
        assert registry.get('a') is None


class TestIdentifierIssuer:
    def test_skips_reserved(self):
        issuer = IdentifierIssuer(reserved=['_:b0', '_:b2'])
        assert issuer.get_id() == '_:b1'
        assert issuer.get_id() == '_:b3'
        assert issuer.reserved == {'_:b0', '_:b1', '_:b2', '_:b3'}

    def test_prefix(self):
        issuer = IdentifierIssuer('_:n')
        assert [issuer.get_id(), issuer.get_id()] == ['_:n0', '_:n1']
