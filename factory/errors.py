# factory/errors.py
"""Exceptions raised by the graph model and the requirement solver."""


class FactoryError(Exception):
    """Base class for every error raised by this package."""


class GraphError(FactoryError):
    """A precondition of the production graph was violated."""


class DuplicateResourceError(GraphError):
    def __init__(self, resource):
        super().__init__(f"resource {resource!r} is already registered")
        self.resource = resource


class UnknownResourceError(GraphError, KeyError):
    def __init__(self, resource):
        super().__init__(f"resource {resource!r} is not registered")
        self.resource = resource

    def __str__(self):
        # KeyError would repr() the message otherwise
        return self.args[0]


class DuplicateEdgeError(GraphError):
    def __init__(self, source, target):
        super().__init__(f"edge {source!r} -> {target!r} already exists")
        self.source = source
        self.target = target


class InvalidRateError(GraphError, ValueError):
    pass


class SingularSystemError(FactoryError):
    """The coefficient matrix is not invertible, so there is no unique answer."""
