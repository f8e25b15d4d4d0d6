# client/app/services/slots/errors.py
"""
Errors raised by the slot grid.

An empty window and a rejected selection are not errors: the first yields an
empty grid, the second leaves the selection unchanged.
"""


class ConfigurationError(ValueError):
    """Business hours or slot duration cannot produce a grid."""
