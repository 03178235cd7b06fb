"""
Tolerance tiers for numerical validation.

Defines precision expectations for different compute paths:
- CPU FP64 (reference): residuals at the level of machine precision
- GPU FP64: same as CPU
- GPU FP32: relaxed for single-precision arithmetic (MPS is always FP32)

Used by the test suite, the solver's residual report, and the condition
number trust check.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ToleranceTier:
    """Tolerance specification for numerical comparison."""
    rtol: float
    atol: float
    name: str
    description: str


# CPU reference: ‖Ax - b‖ <= rtol ‖b‖ for well-conditioned A
CPU_FP64 = ToleranceTier(
    rtol=1e-10,
    atol=1e-12,
    name='cpu_fp64',
    description='CPU double precision reference',
)

# CPU reference, ill-conditioned problems (cond > 1e4)
CPU_FP64_ILL_CONDITIONED = ToleranceTier(
    rtol=1e-4,
    atol=1e-6,
    name='cpu_fp64_ill_conditioned',
    description='CPU double precision, ill-conditioned (cond > 1e4)',
)

GPU_FP64 = ToleranceTier(
    rtol=1e-10,
    atol=1e-12,
    name='gpu_fp64',
    description='GPU double precision, matches CPU reference',
)

GPU_FP32 = ToleranceTier(
    rtol=1e-4,
    atol=1e-5,
    name='gpu_fp32',
    description='GPU single precision',
)

# Condition number above which a solution is reported as untrustworthy.
# With ε ≈ 1e-16 the relative error bound κ·ε exceeds 1e-8: fewer than
# eight significant digits survive.
ILL_CONDITIONED_THRESHOLD = 1e8


def select_tolerance(
    backend_name: str,
    is_ill_conditioned: bool = False,
) -> ToleranceTier:
    """Select appropriate tolerance tier for a given backend."""
    if 'gpu' in backend_name:
        if 'fp64' in backend_name:
            return GPU_FP64
        return GPU_FP32
    if is_ill_conditioned:
        return CPU_FP64_ILL_CONDITIONED
    return CPU_FP64
