"""Arc-length-uniform evaluation of a Bezier spline."""

from __future__ import annotations

from typing import TYPE_CHECKING, Tuple, Union

import torch
from torch import Tensor

from .._bezier import cubic_bezier_position, cubic_bezier_tangent
from ._bezier_spline_evaluate import (
    _as_parameter,
    _evaluate_segments,
    _transform_position,
    _transform_velocity,
)
from ._vector import normalize

if TYPE_CHECKING:
    from ._bezier_spline import BezierSpline


def bezier_spline_uniform_segment_parameter(
    spline: BezierSpline,
    t: Union[float, Tensor],
) -> Tuple[Tensor, Tensor]:
    """
    Map spline parameters to segments by travelled distance.

    Parameters
    ----------
    spline : BezierSpline
        The spline. Its cached lengths are used as they are; call
        ``spline.recalculate_lengths()`` after editing points.
    t : float or Tensor
        Spline parameters, shape (*query_shape).

    Returns
    -------
    index : Tensor
        Segment index per query, int64, shape (*query_shape).
    u : Tensor
        Local segment parameter, shape (*query_shape).

    Notes
    -----
    The target distance is ``t * total_length``. Every segment whose
    cumulative range ``[start, start + length]`` contains it is a match and
    the last match wins, so at a shared boundary, or across zero-length
    segments, the later segment is used. A query that matches no segment
    keeps segment 0 with ``u = t``.
    """
    t = _as_parameter(spline, t)
    position = t * spline.total_length

    index = torch.zeros(t.shape, dtype=torch.int64, device=t.device)
    u = t.clone()

    start = 0

    for segment, length in enumerate(spline.segment_lengths.unbind(0)):
        end = start + length
        match = (start <= position) & (position <= end)

        if length > 0:
            local = (position - start) / length
        else:
            local = torch.zeros_like(position)

        u = torch.where(match, local, u)
        index = torch.where(match, torch.full_like(index, segment), index)

        start = end

    return index, u


def bezier_spline_evaluate_uniform(
    spline: BezierSpline,
    t: Union[float, Tensor],
) -> Tensor:
    """
    Evaluate a Bezier spline with the arc-length-uniform parameterization.

    Equal increments of t cover approximately equal distances along the
    whole spline.

    Parameters
    ----------
    spline : BezierSpline
        The spline, with up to date cached lengths.
    t : float or Tensor
        Spline parameters, shape (*query_shape), in [0, 1].

    Returns
    -------
    points : Tensor
        Positions, shape (*query_shape, D).
    """
    index, u = bezier_spline_uniform_segment_parameter(spline, t)
    position = _evaluate_segments(spline, index, u, cubic_bezier_position)

    return _transform_position(spline, position)


def bezier_spline_velocity_uniform(
    spline: BezierSpline,
    t: Union[float, Tensor],
) -> Tensor:
    """Unnormalized tangent of the arc-length-uniform spline."""
    index, u = bezier_spline_uniform_segment_parameter(spline, t)
    velocity = _evaluate_segments(spline, index, u, cubic_bezier_tangent)

    return _transform_velocity(spline, velocity)


def bezier_spline_direction_uniform(
    spline: BezierSpline,
    t: Union[float, Tensor],
) -> Tensor:
    return normalize(bezier_spline_velocity_uniform(spline, t))
