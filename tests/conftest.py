import os
import sys

import pytest

# Run the tests against the source tree when the package is not installed.
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'lib'))

DATA_DIR = os.path.join(os.path.dirname(__file__), 'data')


@pytest.fixture
def data_path():
    """Returns the path of a file of tests/data."""
    def path(name):
        return os.path.join(DATA_DIR, name)
    return path


@pytest.fixture
def catalog():
    """A flattened catalog record: one dataset, two distributions, a theme."""
    return {
        '@context': {'id': '@id', 'isA': '@type'},
        '@graph': [
            {
                'id': 'https://example.org/catalog/roads',
                'isA': 'Dataset',
                'theme': {'id': 'https://example.org/themes/transport'},
                'distribution': [{'id': '_:b0'}, {'id': '_:b1'}],
                'title': 'Road network',
                'abstract': 'Roads of the region',
            },
            {
                'id': '_:b0',
                'isA': 'Distribution',
                'accessURL': 'https://example.org/roads.geojson',
                'format': 'GeoJSON',
            },
            {
                'id': '_:b1',
                'isA': 'Distribution',
                'accessURL': 'https://example.org/roads.gpkg',
                'format': 'GeoPackage',
            },
            {
                'id': 'https://example.org/themes/transport',
                'isA': 'Theme',
                'prefLabel': {'@language': 'en', '@value': 'Transport'},
            },
        ],
    }
