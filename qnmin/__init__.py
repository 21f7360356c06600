"""qnmin - derivative-free quasi-Newton minimization with pluggable linear algebra."""

__version__ = "0.1.0"

# Diagnostics
from .diagnostics import (
    assert_bracketed,
    assert_finite,
    assert_symmetric,
    debug_context,
    is_debug_enabled,
    is_symmetric,
    set_debug_enabled,
)

# Linear algebra providers
from .linalg import (
    Device,
    LinearAlgebra,
    NumpyLinearAlgebra,
    TorchLinearAlgebra,
    Workspace,
    default_device,
    device,
    get_backend,
    torch_backend,
)

# Logging
from .logging import configure_logging, get_logger, set_log_level

# Minimization
from .optimize import (
    ATOL,
    RTOL,
    Bracket,
    IterationLimitError,
    MinimizeError,
    OptimizeResult,
    PreconditionError,
    Tolerance,
    bfgs,
    bracket_minimum,
    curve_fit,
    gradient_probe,
    least_squares,
    line_search,
    minimize,
    minimize2,
    minimize_bracketed,
    minimize_brent,
    minimize_scalar,
    tol,
)

__all__ = [
    "__version__",
    # Diagnostics
    "assert_bracketed",
    "assert_finite",
    "assert_symmetric",
    "debug_context",
    "is_debug_enabled",
    "is_symmetric",
    "set_debug_enabled",
    # Linear algebra
    "Device",
    "LinearAlgebra",
    "NumpyLinearAlgebra",
    "TorchLinearAlgebra",
    "Workspace",
    "default_device",
    "device",
    "get_backend",
    "torch_backend",
    # Logging
    "configure_logging",
    "get_logger",
    "set_log_level",
    # Minimization
    "ATOL",
    "RTOL",
    "Bracket",
    "IterationLimitError",
    "MinimizeError",
    "OptimizeResult",
    "PreconditionError",
    "Tolerance",
    "bfgs",
    "bracket_minimum",
    "curve_fit",
    "gradient_probe",
    "least_squares",
    "line_search",
    "minimize",
    "minimize2",
    "minimize_bracketed",
    "minimize_brent",
    "minimize_scalar",
    "tol",
]
