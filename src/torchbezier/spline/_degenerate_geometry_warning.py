class DegenerateGeometryWarning(UserWarning):
    """Warning for zero-length splines or coincident control points."""

    pass
