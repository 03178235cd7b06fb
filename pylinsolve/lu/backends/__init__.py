"""
LU backends.

Available backends:
    CPULUBackend: CPU reference implementation in NumPy float64
    GPULUBackend: GPU implementation using PyTorch (imported lazily)
"""

from pylinsolve.lu.backends.cpu import CPULUBackend

__all__ = [
    "CPULUBackend",
]
