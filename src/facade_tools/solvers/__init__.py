"""Host-facing solvers.

Import all solver modules to trigger registration via @register_solver.
"""

from facade_tools.solvers import louvers  # noqa: F401
from facade_tools.solvers import windows  # noqa: F401
