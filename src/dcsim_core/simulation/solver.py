# src/dcsim_core/simulation/solver.py
import logging

import numpy as np

from ..constants import PIVOT_TOLERANCE
from .exceptions import SingularMatrixError

logger = logging.getLogger(__name__)


def solve_linear_system(
    matrix: np.ndarray, rhs: np.ndarray, pivot_tolerance: float = PIVOT_TOLERANCE
) -> np.ndarray:
    """
    Solves `matrix @ x = rhs` by Gaussian elimination with partial pivoting.

    At each step the row at or below the pivot with the largest magnitude in the
    pivot column is swapped into place (the first such row on ties). The inputs are
    not modified.

    Args:
        matrix: Square M x M coefficient matrix.
        rhs: Right-hand side vector of length M.
        pivot_tolerance: Smallest accepted pivot magnitude.

    Returns:
        The solution vector as a float64 array of length M.

    Raises:
        SingularMatrixError: If a pivot falls below the tolerance or the solution
                             contains NaN/Inf.
        ValueError: If the shapes are inconsistent.
    """
    matrix = np.asarray(matrix, dtype=np.float64)
    rhs = np.asarray(rhs, dtype=np.float64)
    if matrix.ndim != 2 or matrix.shape[0] != matrix.shape[1]:
        raise ValueError(f"Coefficient matrix must be square, got shape {matrix.shape}.")
    size = matrix.shape[0]
    if rhs.shape != (size,):
        raise ValueError(f"Right-hand side must have shape ({size},), got {rhs.shape}.")

    logger.debug(f"Solving {size}x{size} system by Gaussian elimination...")
    augmented = np.hstack([matrix, rhs.reshape(size, 1)])

    for col in range(size):
        pivot_row = col + int(np.argmax(np.abs(augmented[col:, col])))
        if pivot_row != col:
            augmented[[col, pivot_row]] = augmented[[pivot_row, col]]

        pivot = augmented[col, col]
        # Written so that a NaN pivot is also rejected.
        if not abs(pivot) >= pivot_tolerance:
            logger.error(f"Pivot {pivot:.3e} in column {col} is below tolerance {pivot_tolerance:.1e}; matrix is singular.")
            raise SingularMatrixError(
                details=f"Pivot magnitude {abs(pivot):.3e} is below the tolerance {pivot_tolerance:.1e}.",
                pivot_column=col,
                matrix_size=size,
            )

        factors = augmented[col + 1:, col] / pivot
        augmented[col + 1:, col:] -= np.outer(factors, augmented[col, col:])

    solution = np.zeros(size, dtype=np.float64)
    for row in range(size - 1, -1, -1):
        residual = augmented[row, size] - augmented[row, row + 1:size] @ solution[row + 1:]
        solution[row] = residual / augmented[row, row]

    if not np.all(np.isfinite(solution)):
        logger.error("NaN or Inf detected in MNA solution vector.")
        raise SingularMatrixError(details="Solution contains NaN/Inf values.", matrix_size=size)

    logger.debug("Linear solve successful.")
    return solution
