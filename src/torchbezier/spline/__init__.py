"""Composite cubic Bezier splines for PyTorch tensors.

A spline is a chain of cubic Bezier segments sharing their end points
(joints). Control points are edited through the spline so that the
continuity mode of every joint and the closure of looped splines hold.

Bezier Segments
---------------
bezier
    Create a quadratic or cubic Bezier curve (callable).
bezier_evaluate
    Evaluate a quadratic or cubic Bezier curve.
bezier_derivative_evaluate
    Evaluate the first derivative of a quadratic or cubic Bezier curve.
bezier_length
    Fixed-subdivision arc length of a cubic Bezier curve.

Splines
-------
bezier_spline
    Create a Bezier spline from raw arrays (callable).
bezier_spline_evaluate, bezier_spline_velocity, bezier_spline_direction
    Segment-linear evaluation.
bezier_spline_evaluate_uniform, bezier_spline_velocity_uniform,
bezier_spline_direction_uniform
    Arc-length-uniform evaluation.
bezier_spline_nearest_parameter, bezier_spline_nearest_point
    Nearest point search.

Data Types
----------
BezierCurve
    Single quadratic or cubic segment.
BezierSpline
    Editable chain of cubic segments.
ContinuityMode
    Joint constraint: FREE, ALIGNED or MIRRORED.
NearestPoint
    Nearest point query result.

Exceptions
----------
SplineError
    Base exception for spline operations.
ControlPointIndexError
    Control point or joint index outside the spline.
MinimumSegmentCountError
    Edit would remove the last segment.
DegreeError
    Unsupported Bezier degree.
DegenerateGeometryWarning
    Zero-length spline.
"""

from ._bezier import (
    DEFAULT_LENGTH_PRECISION,
    BezierCurve,
    bezier,
    bezier_derivative_evaluate,
    bezier_evaluate,
    bezier_length,
    cubic_bezier_position,
    cubic_bezier_tangent,
    quadratic_bezier_position,
    quadratic_bezier_tangent,
)
from ._bezier_spline import (
    DEFAULT_NEAREST_PRECISION,
    DEFAULT_SPACING,
    BezierSpline,
    ContinuityMode,
    JointIndex,
    NearestPoint,
    SegmentIndex,
    bezier_spline,
    bezier_spline_direction,
    bezier_spline_direction_uniform,
    bezier_spline_evaluate,
    bezier_spline_evaluate_uniform,
    bezier_spline_nearest_parameter,
    bezier_spline_nearest_point,
    bezier_spline_segment_parameter,
    bezier_spline_uniform_segment_parameter,
    bezier_spline_velocity,
    bezier_spline_velocity_uniform,
    is_joint,
    joint_index,
    joint_point_index,
    segment_point_index,
    wrap_handle_index,
)
from ._control_point_index_error import ControlPointIndexError
from ._degenerate_geometry_warning import DegenerateGeometryWarning
from ._degree_error import DegreeError
from ._minimum_segment_count_error import MinimumSegmentCountError
from ._spline_error import SplineError

__all__ = [
    "BezierCurve",
    "BezierSpline",
    "ContinuityMode",
    "ControlPointIndexError",
    "DEFAULT_LENGTH_PRECISION",
    "DEFAULT_NEAREST_PRECISION",
    "DEFAULT_SPACING",
    "DegenerateGeometryWarning",
    "DegreeError",
    "JointIndex",
    "MinimumSegmentCountError",
    "NearestPoint",
    "SegmentIndex",
    "SplineError",
    "bezier",
    "bezier_derivative_evaluate",
    "bezier_evaluate",
    "bezier_length",
    "bezier_spline",
    "bezier_spline_direction",
    "bezier_spline_direction_uniform",
    "bezier_spline_evaluate",
    "bezier_spline_evaluate_uniform",
    "bezier_spline_nearest_parameter",
    "bezier_spline_nearest_point",
    "bezier_spline_segment_parameter",
    "bezier_spline_uniform_segment_parameter",
    "bezier_spline_velocity",
    "bezier_spline_velocity_uniform",
    "cubic_bezier_position",
    "cubic_bezier_tangent",
    "is_joint",
    "joint_index",
    "joint_point_index",
    "quadratic_bezier_position",
    "quadratic_bezier_tangent",
    "segment_point_index",
    "wrap_handle_index",
]
