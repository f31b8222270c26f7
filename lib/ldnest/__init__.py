""" The LDNest module is used to nest flattened JSON-LD graphs. """
from . import nest
from .errors import CycleDetected, DepthExceeded, MalformedGraph, NestError

__all__ = [
    'nest', 'NestError', 'MalformedGraph', 'DepthExceeded', 'CycleDetected'
]
