"""Error kinds raised by the simulator.

All errors are local and recoverable: they are raised synchronously at the
call that caused them and leave the simulator in its previous state.

Classes
-------
ShearBoxError
    Base class for every error raised by the package.
InvalidConfig
    Parameter values that violate their documented constraints.
InvalidCategory
    Unrecognised soil category or saturation state.
InvalidTransition
    Control call not allowed in the current run phase.
ConcurrentTickRejected
    ``tick()`` re-entered while a previous tick is still in progress.
"""


class ShearBoxError(Exception):
    """Base class for pyshearbox errors."""


class InvalidConfig(ShearBoxError, ValueError):
    """Raised when soil or test parameters are out of range."""


class InvalidCategory(ShearBoxError, ValueError):
    """Raised for an unknown soil category or saturation state."""


class InvalidTransition(ShearBoxError, RuntimeError):
    """Raised when a control call is not valid in the current phase."""


class AlreadyRunning(InvalidTransition):
    """Raised by ``start()`` on a runner that is already running."""


class NotRunning(InvalidTransition):
    """Raised by ``pause()`` on a runner that is not running."""


class ConcurrentTickRejected(ShearBoxError, RuntimeError):
    """Raised when ``tick()`` is called while another tick is in progress."""
