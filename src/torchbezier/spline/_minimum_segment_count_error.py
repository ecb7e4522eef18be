from ._spline_error import SplineError


class MinimumSegmentCountError(SplineError):
    """Raised when an edit would leave a spline without any segment."""

    pass
