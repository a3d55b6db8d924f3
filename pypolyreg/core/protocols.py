"""
Core protocols for pypolyreg.

Structural interfaces that backends must satisfy.
"""

from typing import Protocol, TypeVar, runtime_checkable

from pypolyreg.core.result import Result

D = TypeVar('D', contravariant=True)  # Design type
P = TypeVar('P', covariant=True)      # Parameter payload type


@runtime_checkable
class Backend(Protocol[D, P]):
    """
    Protocol for computational backends.

    A backend takes a design holding accumulated sufficient statistics and
    produces a parameter payload. Backends are stateless: everything they
    need comes from the design and the requested coefficient count, and
    they never mutate the design.

    Type Parameters:
        D: The design type this backend accepts
        P: The parameter payload type this backend produces
    """

    @property
    def name(self) -> str:
        """
        Backend identifier.

        Convention: '{device}_{algorithm}', e.g. 'cpu_gauss_jordan'.
        """
        ...

    def solve(self, design: D, n_coefficients: int) -> 'Result[P]':
        """
        Execute the computation.

        Args:
            design: Design with accumulated power sums
            n_coefficients: Number of coefficients to solve for

        Returns:
            Result envelope containing parameter payload and metadata

        Raises:
            SingularMatrixError: If the normal equations have no unique solution
            OutOfRangeError: If the design cannot supply the requested count
        """
        ...
