"""
Errors raised while loading, framing and ordering linked-data graphs.

.. module:: ldnest.errors
  :synopsis: Error hierarchy for LDNest
"""
import sys
import traceback


class NestError(Exception):
    """
    Base class for LDNest errors.
    """

    def __init__(self, message, type_, details=None, code=None, cause=None):
        Exception.__init__(self, message)
        self.type = type_
        self.details = details
        self.code = code
        self.cause = cause
        self.causeTrace = traceback.extract_tb(*sys.exc_info()[2:])

    def __str__(self):
        rval = str(self.args)
        rval += '\nType: ' + self.type
        if self.code:
            rval += '\nCode: ' + self.code
        if self.details:
            rval += '\nDetails: ' + repr(self.details)
        if self.cause:
            rval += '\nCause: ' + str(self.cause)
            rval += ''.join(traceback.format_list(self.causeTrace))
        return rval


class MalformedGraph(NestError):
    """
    The input document lacks a structural field needed to build the graph.
    """

    def __init__(self, message, details=None, cause=None):
        NestError.__init__(
            self, message, 'ldnest.MalformedGraph', details,
            code='malformed graph', cause=cause)


class DepthExceeded(NestError):
    """
    Inlining went deeper than the configured ceiling.
    """

    def __init__(self, message, details=None, type_='ldnest.DepthExceeded',
                 code='depth exceeded'):
        NestError.__init__(self, message, type_, details, code=code)


class CycleDetected(DepthExceeded):
    """
    A resource was about to be inlined inside itself.

    Subclass of DepthExceeded so callers guarding against runaway nesting
    catch both.
    """

    def __init__(self, message, path):
        DepthExceeded.__init__(
            self, message, {'path': list(path)},
            type_='ldnest.CycleDetected', code='cyclic reference')
        self.path = list(path)
