"""Bezier segment first derivative."""

from __future__ import annotations

from typing import TYPE_CHECKING, Union

from torch import Tensor

from .._degree_error import DegreeError
from ._bezier_basis import cubic_bezier_tangent, quadratic_bezier_tangent
from ._bezier_evaluate import _expand_parameter

if TYPE_CHECKING:
    from ._bezier import BezierCurve


def bezier_derivative_evaluate(
    curve: BezierCurve,
    t: Union[float, Tensor],
) -> Tensor:
    """
    Evaluate the first derivative of a Bezier curve at parameter values.

    Parameters
    ----------
    curve : BezierCurve
        Bezier curve with 3 or 4 control points
    t : float or Tensor
        Parameter values, shape (*query_shape). Values are clamped into
        [0, 1].

    Returns
    -------
    derivative_values : Tensor
        Tangent vectors, shape (*query_shape, *value_shape). They are not
        normalized; the magnitude is the local parametric speed.

    Raises
    ------
    DegreeError
        If the curve is neither quadratic nor cubic.

    Notes
    -----
    The derivative of a degree-n Bezier curve is

    B'(t) = n * Σ (P_{i+1} - P_i) b_{i,n-1}(t)
    """
    control_points = curve.control_points
    t_exp = _expand_parameter(control_points, t)

    if curve.degree == 3:
        return cubic_bezier_tangent(*control_points.unbind(0), t_exp)

    if curve.degree == 2:
        return quadratic_bezier_tangent(*control_points.unbind(0), t_exp)

    raise DegreeError(
        f"Bezier derivative supports degree 2 or 3, got {curve.degree}"
    )
