"""
Helpers shared by the LU backends.
"""

import numpy as np

from pylinsolve.core.compute.tolerances import ILL_CONDITIONED_THRESHOLD


def condition_warnings(kappa: float | None) -> tuple[str, ...]:
    """Warning messages for a condition number, empty if it is trustworthy."""
    if kappa is None or kappa <= ILL_CONDITIONED_THRESHOLD:
        return ()
    if np.isinf(kappa):
        return ("A is numerically singular (condition number is infinite); x cannot be trusted",)
    return (
        f"A is ill-conditioned (condition number {kappa:.3e} > "
        f"{ILL_CONDITIONED_THRESHOLD:.0e}); up to {np.log10(kappa):.1f} "
        f"significant digits of x may be lost",
    )
