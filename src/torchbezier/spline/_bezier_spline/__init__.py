from ._bezier_spline import DEFAULT_SPACING, BezierSpline, bezier_spline
from ._bezier_spline_evaluate import (
    bezier_spline_direction,
    bezier_spline_evaluate,
    bezier_spline_segment_parameter,
    bezier_spline_velocity,
)
from ._bezier_spline_evaluate_uniform import (
    bezier_spline_direction_uniform,
    bezier_spline_evaluate_uniform,
    bezier_spline_uniform_segment_parameter,
    bezier_spline_velocity_uniform,
)
from ._bezier_spline_nearest import (
    DEFAULT_NEAREST_PRECISION,
    NearestPoint,
    bezier_spline_nearest_parameter,
    bezier_spline_nearest_point,
)
from ._continuity_mode import ContinuityMode
from ._indexing import (
    JointIndex,
    SegmentIndex,
    is_joint,
    joint_index,
    joint_point_index,
    segment_point_index,
    wrap_handle_index,
)

__all__ = [
    "DEFAULT_NEAREST_PRECISION",
    "DEFAULT_SPACING",
    "BezierSpline",
    "ContinuityMode",
    "JointIndex",
    "NearestPoint",
    "SegmentIndex",
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
    "is_joint",
    "joint_index",
    "joint_point_index",
    "segment_point_index",
    "wrap_handle_index",
]
