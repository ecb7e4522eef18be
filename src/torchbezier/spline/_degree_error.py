from ._spline_error import SplineError


class DegreeError(SplineError):
    """Raised when a curve has a degree the evaluator does not support."""

    pass
