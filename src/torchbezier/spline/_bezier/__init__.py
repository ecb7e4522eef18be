from ._bezier import (
    BezierCurve,
    bezier,
)
from ._bezier_basis import (
    cubic_bezier_position,
    cubic_bezier_tangent,
    quadratic_bezier_position,
    quadratic_bezier_tangent,
)
from ._bezier_derivative import bezier_derivative_evaluate
from ._bezier_evaluate import bezier_evaluate
from ._bezier_length import DEFAULT_LENGTH_PRECISION, bezier_length

__all__ = [
    "BezierCurve",
    "DEFAULT_LENGTH_PRECISION",
    "bezier",
    "bezier_derivative_evaluate",
    "bezier_evaluate",
    "bezier_length",
    "cubic_bezier_position",
    "cubic_bezier_tangent",
    "quadratic_bezier_position",
    "quadratic_bezier_tangent",
]
