"""
Gauss-Jordan elimination on decimal augmented matrices.

The normal equations of a polynomial fit are small (one row per
coefficient) but their entries span many orders of magnitude, so they are
reduced exactly in decimal.Decimal rather than handed to LAPACK.

Pivots are taken in free order: the pivot for column k is the first
unreduced row with a non-zero entry in that column, which need not be row
k. The column -> row mapping found by the forward pass drives the backward
pass and is returned alongside the solution.
"""

import decimal
from dataclasses import dataclass
from decimal import Decimal

from pypolyreg.core.exceptions import DimensionError, SingularMatrixError


@dataclass(frozen=True)
class GaussJordanResult:
    """
    Result of Gauss-Jordan elimination.

    Attributes:
        solution: Unknowns in column order (solution[k] solves column k)
        order: order[k] is the row that served as pivot for column k
    """
    solution: tuple[Decimal, ...]
    order: tuple[int, ...]


def gauss_jordan_solve(
    augmented: list[list[Decimal]],
    context: decimal.Context | None = None,
    matrix_name: str = 'augmented matrix',
) -> GaussJordanResult:
    """
    Solve an n x (n+1) augmented system by Gauss-Jordan elimination.

    The matrix is reduced IN PLACE; pass a copy if the caller still needs
    the original entries.

    Algorithm:
        1. Forward pass: for each column pick the first row that is not yet
           done and has a non-zero entry there, normalise it so the pivot
           is 1, then eliminate the column from every other unfinished row.
        2. Backward pass: walk the columns from last to first, eliminating
           each pivot row's column from all rows not yet visited. The right
           hand side of each pivot row is then that column's unknown.

    Args:
        augmented: n rows of n+1 Decimals; the last column is the RHS
        context: Decimal context for the arithmetic (current context if None)
        matrix_name: Used in error messages

    Returns:
        GaussJordanResult with the solution in ascending column order

    Raises:
        DimensionError: If the matrix is not n x (n+1)
        SingularMatrixError: If some column has no pivot row
    """
    n = len(augmented)
    for r, row in enumerate(augmented):
        if len(row) != n + 1:
            raise DimensionError(
                f"{matrix_name}: row {r} has {len(row)} entries, expected {n + 1}"
            )

    if context is None:
        context = decimal.getcontext()

    with decimal.localcontext(context):
        order = _forward_pass(augmented, matrix_name)
        solution = _backward_pass(augmented, order)

    return GaussJordanResult(solution=tuple(solution), order=tuple(order))


def _forward_pass(matrix: list[list[Decimal]], matrix_name: str) -> list[int]:
    """Reduce below each pivot; returns the column -> pivot row mapping."""
    n = len(matrix)
    is_done = [False] * n
    order: list[int] = []

    for column in range(n):
        pivot_row = next(
            (r for r in range(n) if not is_done[r] and matrix[r][column] != 0),
            None,
        )
        if pivot_row is None:
            raise SingularMatrixError(
                f"{matrix_name}: no pivot for column {column} "
                f"(rank {column} of {n} found so far)",
                matrix_name=matrix_name,
                column=column,
                rank=column,
                expected_rank=n,
            )
        order.append(pivot_row)

        pivot = matrix[pivot_row]
        first = pivot[column]
        for c in range(column, n + 1):
            pivot[c] = pivot[c] / first

        is_done[pivot_row] = True

        for r in range(n):
            row = matrix[r]
            if is_done[r] or row[column] == 0:
                continue
            factor = row[column]
            for c in range(column, n + 1):
                row[c] = row[c] - factor * pivot[c]

    return order


def _backward_pass(matrix: list[list[Decimal]], order: list[int]) -> list[Decimal]:
    """Reduce above each pivot; returns the unknowns in column order."""
    n = len(matrix)
    is_done = [False] * n
    solution: list[Decimal] = [Decimal(0)] * n

    for column in reversed(range(n)):
        pivot_row = order[column]
        pivot = matrix[pivot_row]
        is_done[pivot_row] = True

        for r in range(n):
            if is_done[r]:
                continue
            row = matrix[r]
            factor = row[column]
            for c in range(column, n + 1):
                row[c] = row[c] - factor * pivot[c]

        solution[column] = pivot[n]

    return solution
