# medroute/domain/errors.py
from numbers import Integral


class MedRouteError(Exception):
    """Base for precondition failures raised by the routing and dispatch core."""


class InvalidSize(MedRouteError, ValueError):
    """A structure was constructed with a negative size."""


class OutOfRange(MedRouteError, IndexError):
    """A node, index or task id lies outside the structure's bounds."""


class InvalidWeight(MedRouteError, ValueError):
    """An edge weight is negative or not finite."""


class InvalidPriority(MedRouteError, TypeError):
    """A priority or counter delta is not an integer."""


class CapacityExceeded(MedRouteError):
    """Every dense slot is already bound to a task key."""


def check_index(value: int, lo: int, hi: int, what: str) -> int:
    """Return value if lo <= value <= hi, else raise OutOfRange."""
    if not lo <= value <= hi:
        raise OutOfRange(f"{what} {value} outside [{lo}, {hi}]")
    return value


def check_integral(value, what: str):
    # numpy integer types register as Integral; bool does too but is rejected
    if isinstance(value, bool) or not isinstance(value, Integral):
        raise InvalidPriority(f"{what} must be an integer, got {value!r}")
    return value
