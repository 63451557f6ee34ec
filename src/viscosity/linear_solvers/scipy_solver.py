"""Scipy-based linear solver using preconditioned conjugate gradient (cg)."""

import numpy as np
from scipy.sparse import csr_matrix, diags
from scipy.sparse.linalg import cg

SOLVER_SUCCESS = 0
SOLVER_BUILD_FAILED = -1


def jacobi_preconditioner(A_csr: csr_matrix):
    """Inverse-diagonal preconditioner. Zero diagonal entries are left at 1."""
    diagonal = A_csr.diagonal()
    inv_diagonal = np.ones_like(diagonal)
    nonzero = diagonal != 0.0
    inv_diagonal[nonzero] = 1.0 / diagonal[nonzero]
    return diags(inv_diagonal)


def is_system_valid(A_csr: csr_matrix, b_np: np.ndarray, x0: np.ndarray = None):
    """Check that A x = b can be handed to the solver at all."""
    n_rows, n_cols = A_csr.shape
    if n_rows != n_cols or b_np.shape != (n_rows,):
        return False
    if x0 is not None and x0.shape != (n_rows,):
        return False
    return bool(np.all(np.isfinite(A_csr.data)) and np.all(np.isfinite(b_np)))


def relative_residual(A_csr: csr_matrix, b_np: np.ndarray, x: np.ndarray):
    """||b - A x|| / ||b||, 0 for a zero right-hand side and exact solution."""
    b_norm = np.linalg.norm(b_np)
    r_norm = np.linalg.norm(b_np - A_csr @ x)
    if b_norm == 0.0:
        return r_norm
    return r_norm / b_norm


def scipy_solver(A_csr: csr_matrix, b_np: np.ndarray, x0: np.ndarray = None,
                 tolerance: float = 1e-3, max_iterations: int = None):
    """Solve the symmetric system A x = b with Jacobi-preconditioned CG.

    Parameters
    ----------
    A_csr : csr_matrix
        Symmetric positive (semi-)definite matrix.
    b_np : ndarray
        Right-hand side.
    x0 : ndarray, optional
        Initial guess.
    tolerance : float
        Relative residual tolerance ||b - A x|| / ||b||.
    max_iterations : int, optional
        Iteration cap. Defaults to twice the system size.

    Returns
    -------
    x : ndarray or None
        Solution, None when the system could not be built.
    info : int
        SOLVER_SUCCESS, SOLVER_BUILD_FAILED, or the positive iteration count
        at which scipy gave up.
    iterations : int
        Number of CG iterations performed.
    residual : float
        Relative residual of the returned solution.
    """
    if not is_system_valid(A_csr, b_np, x0):
        return None, SOLVER_BUILD_FAILED, 0, float("inf")

    n = A_csr.shape[0]
    if max_iterations is None:
        max_iterations = 2 * n

    iterations = 0

    def count_iteration(xk):
        nonlocal iterations
        iterations += 1

    x, info = cg(
        A_csr,
        b_np,
        x0=x0,
        rtol=tolerance,
        maxiter=max_iterations,
        M=jacobi_preconditioner(A_csr),
        callback=count_iteration,
    )
    return x, info, iterations, float(relative_residual(A_csr, b_np, x))
