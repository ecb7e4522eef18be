from ._spline_error import SplineError


class ControlPointIndexError(SplineError, IndexError):
    """Raised for a control point or joint index outside the spline."""

    pass
