"""Exception types raised by the titration engine.

All three describe defects in catalog data or in the caller, not runtime
states of a titration. They are raised at load or construction time and are
expected to be caught by the test suite, never by the game loop.
"""

from __future__ import annotations


class PreconditionViolation(ValueError):
    """A record, indicator or argument breaks a data-model invariant.

    Examples: a non-positive molarity, a polyprotic record with the wrong
    number of equivalence points, or a negative titrant volume.
    """


class DomainError(ValueError):
    """A logarithm was requested for a non-positive or non-finite quantity."""


class UnreachableTopology(TypeError):
    """The solver received an object that is not a known titration record."""
