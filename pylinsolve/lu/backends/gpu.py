"""
GPU backend for LU factorization using PyTorch.

Performance path for large systems, validated against the CPU reference.
Supports CUDA (FP64) and MPS (FP32, Apple Silicon has no double precision).

Only the row-update of each elimination step runs in parallel; the loop
over steps stays sequential because step k needs the fully updated
matrix of step k-1. Triangular solves use torch.linalg.solve_triangular.
Residual and condition number are computed on the CPU in float64.
"""

from __future__ import annotations

from typing import Any, TYPE_CHECKING
import numpy as np

from pylinsolve.core.exceptions import ValidationError, SingularPivotError
from pylinsolve.core.result import Result
from pylinsolve.core.compute.timing import Timer
from pylinsolve.core.compute.device import DeviceInfo
from pylinsolve.core.compute.linalg.spectral import condition_number_svd
from pylinsolve.lu.design import SystemDesign
from pylinsolve.lu.solution import LUParams, SolveParams
from pylinsolve.lu._common import condition_warnings

if TYPE_CHECKING:
    import torch


def _lu_pivoted_torch(A: 'torch.Tensor') -> tuple['torch.Tensor', 'torch.Tensor', 'torch.Tensor']:
    """Same elimination as lu._factorize.lu_pivoted, on a torch device."""
    import torch

    n = A.shape[0]
    Ak = A.clone()
    L = torch.zeros_like(A)
    U = torch.zeros_like(A)
    p = torch.zeros(n, dtype=torch.long, device=A.device)

    for k in range(n):
        # torch.argmax returns the first maximal index on ties
        row = int(torch.argmax(torch.abs(Ak[:, k])).item())
        if Ak[row, k].item() == 0.0:
            raise SingularPivotError(
                f"A is singular: no nonzero pivot in column {k} at elimination "
                f"step {k}, no LU factorization exists",
                step=k,
                matrix_name='A',
                expected_rank=n,
            )
        p[k] = row
        if k == n - 1:
            U[k, k] = Ak[row, k]
            L[:, k] = Ak[:, k] / U[k, k]
            break
        U[k, :] = Ak[row, :]
        L[:, k] = Ak[:, k] / U[k, k]
        Ak -= torch.outer(L[:, k], U[k, :])

    return torch.tril(L[p, :]), torch.triu(U), p


class GPULUBackend:
    """
    GPU backend for LU factorization using PyTorch.

    Returns FP64 numpy arrays for consistency with the CPU reference
    backend, whatever precision was used on the device.
    """

    def __init__(self, device: DeviceInfo | None = None):
        """
        Initialize GPU backend.

        Parameters
        ----------
        device : DeviceInfo, optional
            Device info from select_device(). If None, auto-selects.
        """
        import torch

        if device is not None:
            if device.device_type == 'cuda':
                self.device = torch.device(f'cuda:{device.device_index or 0}')
                self.dtype = torch.float64
            elif device.device_type == 'mps':
                self.device = torch.device('mps')
                self.dtype = torch.float32
            else:
                raise ValueError(f"GPULUBackend requires GPU device, got {device.device_type}")
        else:
            if torch.cuda.is_available():
                self.device = torch.device('cuda')
                self.dtype = torch.float64
            elif hasattr(torch.backends, 'mps') and torch.backends.mps.is_available():
                self.device = torch.device('mps')
                self.dtype = torch.float32
            else:
                raise RuntimeError(
                    "No GPU available. Use backend='cpu' instead."
                )

    @property
    def name(self) -> str:
        import torch
        precision = 'fp64' if self.dtype == torch.float64 else 'fp32'
        return f'gpu_lu_{precision}'

    def _to_device(self, array: np.ndarray) -> 'torch.Tensor':
        import torch
        return torch.from_numpy(array).to(device=self.device, dtype=self.dtype)

    def factorize(self, design: SystemDesign) -> Result[LUParams]:
        """
        Factor PA = LU on the device.

        Raises
        ------
        SingularPivotError
            If the matrix is exactly singular.
        """
        timer = Timer(sync_cuda=True)
        timer.start()

        with timer.section('transfer'):
            A_dev = self._to_device(design.A)

        with timer.section('factorization'):
            L, U, p = _lu_pivoted_torch(A_dev)

        with timer.section('transfer'):
            params = LUParams(
                L=L.cpu().numpy().astype(np.float64),
                U=U.cpu().numpy().astype(np.float64),
                p=p.cpu().numpy().astype(np.intp),
            )

        timer.stop()

        info: dict[str, Any] = {
            'method': 'lu_partial_pivoting',
            'n': design.n,
            'device': str(self.device),
        }

        return Result(
            params=params,
            info=info,
            timing=timer.result(),
            backend_name=self.name,
        )

    def solve(self, design: SystemDesign, *, check_condition: bool = True) -> Result[SolveParams]:
        """
        Solve Ax = b on the device.

        Raises
        ------
        ValidationError
            If the design has no right-hand side.
        SingularPivotError
            If A is exactly singular.
        """
        import torch

        if not design.has_rhs:
            raise ValidationError("b: design has no right-hand side")

        timer = Timer(sync_cuda=True)
        timer.start()

        with timer.section('transfer'):
            A_dev = self._to_device(design.A)
            b_dev = self._to_device(design.b)

        with timer.section('factorization'):
            L, U, p = _lu_pivoted_torch(A_dev)

        with timer.section('substitution'):
            b_perm = b_dev[p].unsqueeze(1)
            z = torch.linalg.solve_triangular(L, b_perm, upper=False, unitriangular=True)
            x_dev = torch.linalg.solve_triangular(U, z, upper=True)

        with timer.section('transfer'):
            x = x_dev.squeeze(1).cpu().numpy().astype(np.float64)
            factors = LUParams(
                L=L.cpu().numpy().astype(np.float64),
                U=U.cpu().numpy().astype(np.float64),
                p=p.cpu().numpy().astype(np.intp),
            )

        with timer.section('residual'):
            residual = design.b - design.A @ x

        kappa = None
        if check_condition:
            with timer.section('condition_number'):
                kappa = condition_number_svd(design.A)

        timer.stop()

        info: dict[str, Any] = {
            'method': 'lu_partial_pivoting',
            'n': design.n,
            'device': str(self.device),
            'condition_number': kappa,
        }

        return Result(
            params=SolveParams(x=x, residual=residual, factors=factors, condition_number=kappa),
            info=info,
            timing=timer.result(),
            backend_name=self.name,
            warnings=condition_warnings(kappa),
        )
