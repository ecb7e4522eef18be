"""Bezier segment evaluation in the Bernstein basis."""

from __future__ import annotations

from typing import TYPE_CHECKING, Union

import torch
from torch import Tensor

from .._degree_error import DegreeError
from ._bezier_basis import cubic_bezier_position, quadratic_bezier_position

if TYPE_CHECKING:
    from ._bezier import BezierCurve


def _expand_parameter(
    control_points: Tensor,
    t: Union[float, Tensor],
) -> Tensor:
    # Append one singleton dimension per value dimension so that t
    # broadcasts against a single control point.
    if not isinstance(t, Tensor):
        t = torch.tensor(
            t, dtype=control_points.dtype, device=control_points.device
        )

    value_shape = control_points.shape[1:]

    return t.reshape(tuple(t.shape) + (1,) * len(value_shape))


def bezier_evaluate(
    curve: BezierCurve,
    t: Union[float, Tensor],
) -> Tensor:
    """
    Evaluate a quadratic or cubic Bezier curve at parameter values.

    Parameters
    ----------
    curve : BezierCurve
        Bezier curve with 3 or 4 control points
    t : float or Tensor
        Parameter values, shape (*query_shape). Values are clamped into
        [0, 1] before evaluation.

    Returns
    -------
    points : Tensor
        Evaluated points, shape (*query_shape, *value_shape)

    Raises
    ------
    DegreeError
        If the curve is neither quadratic nor cubic.

    Notes
    -----
    For control points P_0, ..., P_n the curve is

    B(t) = Σ P_i b_{i,n}(t),  b_{i,n}(t) = C(n, i) t^i (1-t)^(n-i)

    written out explicitly for n = 2 and n = 3.
    """
    control_points = curve.control_points
    t_exp = _expand_parameter(control_points, t)

    if curve.degree == 3:
        return cubic_bezier_position(*control_points.unbind(0), t_exp)

    if curve.degree == 2:
        return quadratic_bezier_position(*control_points.unbind(0), t_exp)

    raise DegreeError(
        f"Bezier evaluation supports degree 2 or 3, got {curve.degree}"
    )
