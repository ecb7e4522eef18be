"""Fixed-subdivision arc length of a cubic Bezier segment."""

from __future__ import annotations

from typing import TYPE_CHECKING

import torch
from torch import Tensor

from .._degree_error import DegreeError
from ._bezier_basis import cubic_bezier_position

if TYPE_CHECKING:
    from ._bezier import BezierCurve

DEFAULT_LENGTH_PRECISION = 2


def bezier_length(
    curve: BezierCurve,
    precision: int = DEFAULT_LENGTH_PRECISION,
) -> Tensor:
    """
    Approximate the arc length of a cubic Bezier curve.

    Parameters
    ----------
    curve : BezierCurve
        Cubic Bezier curve, control points of shape (4, *value_shape).
    precision : int
        Number of chords per unit of rough length. Default is 2.

    Returns
    -------
    length : Tensor
        0-dim tensor with the approximate length.

    Raises
    ------
    DegreeError
        If the curve is not cubic.
    ValueError
        If precision < 1.

    Notes
    -----
    The rough length is the length of the control polygon. The curve is
    sampled at ``passes + 1`` evenly spaced parameters, with
    ``passes = round(rough_length) * precision`` (at least 1), and the
    chord lengths between consecutive samples are summed.

    The walk includes the end point ``t = 1``, unlike a walk over
    ``t = i / passes`` for ``i < passes`` that stops one chord short, so a
    straight segment measures its full chord length.

    The sample count is fixed by the control polygon, not by an error
    bound, so the cost of the approximation is predictable.
    """
    if curve.degree != 3:
        raise DegreeError(
            f"Bezier length requires a cubic curve, got degree {curve.degree}"
        )

    if precision < 1:
        raise ValueError(f"precision must be at least 1, got {precision}")

    control_points = curve.control_points
    p0, p1, p2, p3 = control_points.unbind(0)

    polygon = control_points.reshape(control_points.shape[0], -1)
    rough_length = (
        torch.linalg.vector_norm(polygon[1:] - polygon[:-1], dim=-1)
        .sum()
        .item()
    )

    passes = max(round(rough_length) * precision, 1)

    t = torch.linspace(
        0.0,
        1.0,
        passes + 1,
        dtype=control_points.dtype,
        device=control_points.device,
    )
    t = t.reshape(-1, *([1] * (control_points.dim() - 1)))

    samples = cubic_bezier_position(p0, p1, p2, p3, t)
    samples = samples.reshape(passes + 1, -1)

    return torch.linalg.vector_norm(samples[1:] - samples[:-1], dim=-1).sum()
