"""
Shared compute infrastructure for pylinsolve.

This module provides hardware detection, timing utilities, precision
constants and tolerance tiers that are shared by every backend.

IMPORTANT: This is NOT where the factorization backends live. Those go in
lu/backends/. This module contains shared NUMERIC infrastructure.

Submodules:
    device: Hardware detection and device selection
    timing: Execution timing utilities
    precision: Machine epsilon constants
    tolerances: Tolerance tiers and the ill-conditioning threshold
"""

from pylinsolve.core.compute.device import (
    DeviceInfo,
    detect_gpu,
    get_cpu_info,
    select_device,
)
from pylinsolve.core.compute.timing import Timer, timed
from pylinsolve.core.compute.precision import EPSILON_32, EPSILON_64, machine_epsilon
from pylinsolve.core.compute.tolerances import (
    ToleranceTier,
    CPU_FP64,
    ILL_CONDITIONED_THRESHOLD,
    select_tolerance,
)

__all__ = [
    # Device detection
    "DeviceInfo",
    "detect_gpu",
    "get_cpu_info",
    "select_device",
    # Timing
    "Timer",
    "timed",
    # Precision
    "EPSILON_32",
    "EPSILON_64",
    "machine_epsilon",
    # Tolerances
    "ToleranceTier",
    "CPU_FP64",
    "ILL_CONDITIONED_THRESHOLD",
    "select_tolerance",
]
