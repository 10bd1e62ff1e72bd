"""
Core protocols for pyresampling.

Structural interfaces that backends satisfy. Protocol (structural typing)
is used rather than ABC so that third-party backends need not inherit
from anything in this package.
"""

from typing import Protocol, TypeVar, runtime_checkable

from pyresampling.core.result import Result

D = TypeVar('D', contravariant=True)  # Design type
P = TypeVar('P', covariant=True)      # Parameter payload type


@runtime_checkable
class Backend(Protocol[D, P]):
    """
    Protocol for computational backends.

    A backend takes a frozen design and produces a Result envelope.
    Backends are stateless: all configuration arrives via the design.

    Type Parameters:
        D: The design type this backend accepts
        P: The parameter payload type this backend produces
    """

    @property
    def name(self) -> str:
        """
        Backend identifier.

        Convention: '{device}_{algorithm}', e.g. 'cpu_replicate'.
        """
        ...

    def solve(self, design: D) -> Result[P]:
        """
        Execute the computation.

        Raises:
            ValidationError: If the design is invalid for this backend
        """
        ...
