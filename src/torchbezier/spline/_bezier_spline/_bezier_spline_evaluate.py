"""Segment-linear evaluation of a Bezier spline."""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Tuple, Union

import torch
from torch import Tensor

from .._bezier import cubic_bezier_position, cubic_bezier_tangent
from ._vector import normalize

if TYPE_CHECKING:
    from ._bezier_spline import BezierSpline


def _as_parameter(spline: BezierSpline, t: Union[float, Tensor]) -> Tensor:
    if not isinstance(t, Tensor):
        t = torch.tensor(t, dtype=spline.dtype, device=spline.device)

    return t


def _evaluate_segments(
    spline: BezierSpline,
    index: Tensor,
    u: Tensor,
    kernel: Callable[..., Tensor],
) -> Tensor:
    # One segment per query: gather its four control points and evaluate
    # them all in one broadcast kernel call.
    points = spline._points
    start = index * 3

    return kernel(
        points[start],
        points[start + 1],
        points[start + 2],
        points[start + 3],
        u.unsqueeze(-1),
    )


def _transform_position(spline: BezierSpline, position: Tensor) -> Tensor:
    if spline.transform is None:
        return position

    return spline.transform(position)


def _transform_velocity(spline: BezierSpline, velocity: Tensor) -> Tensor:
    if spline.transform is None:
        return velocity

    origin = torch.zeros_like(velocity)

    return spline.transform(velocity) - spline.transform(origin)


def bezier_spline_segment_parameter(
    spline: BezierSpline,
    t: Union[float, Tensor],
) -> Tuple[Tensor, Tensor]:
    """
    Map spline parameters to segments, spending an equal share of t on each.

    Parameters
    ----------
    spline : BezierSpline
        The spline.
    t : float or Tensor
        Spline parameters, shape (*query_shape). Clamped into [0, 1].

    Returns
    -------
    index : Tensor
        Segment index per query, int64, shape (*query_shape).
    u : Tensor
        Local segment parameter in [0, 1], shape (*query_shape).

    Notes
    -----
    ``scaled = t * K``, ``index = floor(scaled)``, ``u = scaled - index``,
    except that ``t >= 1`` is the end of the last segment (``u = 1``).
    """
    t = _as_parameter(spline, t)
    count = spline.segment_count

    scaled = t.clamp(0.0, 1.0) * count
    index = torch.floor(scaled).to(torch.int64)
    u = scaled - index

    at_end = t >= 1.0
    index = torch.where(at_end, torch.full_like(index, count - 1), index)
    u = torch.where(at_end, torch.ones_like(u), u)

    return index, u


def bezier_spline_evaluate(
    spline: BezierSpline,
    t: Union[float, Tensor],
) -> Tensor:
    """
    Evaluate a Bezier spline with the segment-linear parameterization.

    Fast, but the traversal speed is not uniform: every segment gets the
    same share of t whatever its length.

    Parameters
    ----------
    spline : BezierSpline
        The spline.
    t : float or Tensor
        Spline parameters, shape (*query_shape). Clamped into [0, 1].

    Returns
    -------
    points : Tensor
        Positions, shape (*query_shape, D), in the frame of
        ``spline.transform`` when one is set.
    """
    index, u = bezier_spline_segment_parameter(spline, t)
    position = _evaluate_segments(spline, index, u, cubic_bezier_position)

    return _transform_position(spline, position)


def bezier_spline_velocity(
    spline: BezierSpline,
    t: Union[float, Tensor],
) -> Tensor:
    """
    First derivative of the segment-linear spline with respect to the local
    segment parameter.

    The result is not normalized; see :func:`bezier_spline_direction`.
    """
    index, u = bezier_spline_segment_parameter(spline, t)
    velocity = _evaluate_segments(spline, index, u, cubic_bezier_tangent)

    return _transform_velocity(spline, velocity)


def bezier_spline_direction(
    spline: BezierSpline,
    t: Union[float, Tensor],
) -> Tensor:
    """Unit tangent of the segment-linear spline. Zero where it stalls."""
    return normalize(bezier_spline_velocity(spline, t))
