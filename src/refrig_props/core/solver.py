"""
EOSSolver - lazily loaded wrapper around CoolProp's PropsSI

The solver runtime is loaded once, on a background thread, and signals
readiness through a threading.Event. Calls made before readiness fail fast.
Any ValueError raised by CoolProp (unknown fluid, state outside the
equation of state's domain) is logged and reported as +inf, which is the
only failure signal the solver contract provides.

Author: RefrigProps Project
Date: 2026-10-17
"""

import logging
import math
import threading
from typing import Callable, Optional

from refrig_props.core.errors import InitializationTimeoutError, SolverUnavailableError


DEFAULT_INIT_TIMEOUT = 5.0  # seconds

# Output / input codes understood by the solver
TEMPERATURE = "T"
PRESSURE = "P"
DENSITY = "D"
ENTHALPY = "H"
ENTROPY = "S"
QUALITY = "Q"
CONDUCTIVITY = "L"
VISCOSITY = "V"
SPECIFIC_HEAT = "C"

PropsFunction = Callable[[str, str, float, str, float, str], float]


def load_coolprop() -> PropsFunction:
    """Import CoolProp and return its PropsSI function."""
    from CoolProp.CoolProp import PropsSI
    return PropsSI


class EOSSolver:
    """
    Equation-of-state solver with one-time, single-flight initialization.

    Concurrent callers of start() / wait_ready() share one loader thread.
    """

    def __init__(self, loader: Optional[Callable[[], PropsFunction]] = None,
                 timeout: float = DEFAULT_INIT_TIMEOUT):
        """
        Args:
            loader: Callable returning the PropsSI-like function (default: CoolProp)
            timeout: Default readiness wait [s]
        """
        self.logger = logging.getLogger(__name__)
        self.timeout = timeout
        self._loader = loader or load_coolprop
        self._props_si: Optional[PropsFunction] = None
        self._load_error: Optional[BaseException] = None
        self._ready = threading.Event()
        self._lock = threading.Lock()
        self._thread: Optional[threading.Thread] = None

    @property
    def is_ready(self) -> bool:
        return self._ready.is_set() and self._props_si is not None

    def start(self) -> None:
        """Launch the loader thread unless it is already running or done."""
        with self._lock:
            if self._thread is not None:
                return
            self._thread = threading.Thread(
                target=self._run_loader, name="eos-solver-init", daemon=True
            )
            self._thread.start()

    def _run_loader(self) -> None:
        try:
            self._props_si = self._loader()
            self.logger.debug("EOS solver runtime ready")
        except Exception as e:
            self._load_error = e
            self.logger.error(f"EOS solver runtime failed to load: {e}")
        finally:
            self._ready.set()

    def wait_ready(self, timeout: Optional[float] = None) -> None:
        """
        Block until the solver runtime is ready.

        Args:
            timeout: Maximum wait [s], defaults to the solver's timeout

        Raises:
            InitializationTimeoutError: If readiness is not signalled in time
            SolverUnavailableError: If the loader raised
        """
        self.start()
        wait = self.timeout if timeout is None else timeout
        if not self._ready.wait(wait):
            raise InitializationTimeoutError(
                f"EOS solver initialization timed out after {wait * 1000:.0f} ms"
            )
        if self._load_error is not None:
            raise SolverUnavailableError(
                f"EOS solver failed to load: {self._load_error}"
            ) from self._load_error

    def solve(self, output: str, input1_name: str, input1_val: float,
              input2_name: str, input2_val: float, fluid: str) -> float:
        """
        Evaluate one property for a fluid at a state given by two inputs.

        Args:
            output: Output property code (e.g. 'T', 'P', 'H')
            input1_name: First input property code
            input1_val: First input value (SI)
            input2_name: Second input property code
            input2_val: Second input value (SI)
            fluid: Solver fluid name

        Returns:
            Property value (SI), +inf when the solver cannot evaluate the state

        Raises:
            SolverUnavailableError: If called before the runtime is ready
        """
        if not self.is_ready:
            raise SolverUnavailableError("EOS solver not initialized. Call init() first")
        try:
            return float(self._props_si(output, input1_name, input1_val,
                                        input2_name, input2_val, fluid))
        except ValueError as e:
            self.logger.error(
                f"CoolProp error: {output} | "
                f"{input1_name}={input1_val:.2e}, {input2_name}={input2_val:.2e} | "
                f"fluid={fluid} | Error: {str(e)}"
            )
            return math.inf
