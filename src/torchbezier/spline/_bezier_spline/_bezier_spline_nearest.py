"""Nearest point on a Bezier spline."""

from __future__ import annotations

import math
import warnings
from typing import TYPE_CHECKING, Sequence, Union

import torch
from tensordict import tensorclass
from torch import Tensor

from .._degenerate_geometry_warning import DegenerateGeometryWarning
from ._bezier_spline_evaluate_uniform import bezier_spline_evaluate_uniform

if TYPE_CHECKING:
    from ._bezier_spline import BezierSpline

DEFAULT_NEAREST_PRECISION = 10


@tensorclass
class NearestPoint:
    """Nearest point query result.

    Attributes
    ----------
    parameter : Tensor
        Arc-length-uniform spline parameter of the nearest point, 0-dim.
    point : Tensor
        Spline position at ``parameter``, shape (D,).
    distance : Tensor
        Distance from the query point to ``point``, 0-dim.
    """

    parameter: Tensor
    point: Tensor
    distance: Tensor


def bezier_spline_nearest_parameter(
    spline: BezierSpline,
    point: Union[Tensor, Sequence[float]],
    precision: int = DEFAULT_NEAREST_PRECISION,
) -> Tensor:
    """
    Find the uniform spline parameter closest to a query point.

    Parameters
    ----------
    spline : BezierSpline
        The spline, with up to date cached lengths.
    point : Tensor or sequence
        Query point, shape (D,), in the same frame as the evaluated
        positions (``spline.transform`` applies).
    precision : int
        Number of bracket halvings after the coarse scan. Default is 10.

    Returns
    -------
    parameter : Tensor
        0-dim tensor, the parameter for
        :func:`bezier_spline_evaluate_uniform`.

    Raises
    ------
    ValueError
        If precision is negative.

    Warns
    -----
    DegenerateGeometryWarning
        If the spline has zero total length.

    Notes
    -----
    The coarse scan samples ``t = i / L`` for every integer ``0 <= i < L``
    where ``L`` is the total length, about one sample per unit of length.
    The bracket of one step around the best sample is then halved
    ``precision`` times, always dropping the half on the side of the end
    point that is farther from the query. The result is a local minimum
    near the best coarse sample, not necessarily the global one.
    """
    if precision < 0:
        raise ValueError(f"precision must be non-negative, got {precision}")

    point = torch.as_tensor(point, dtype=spline.dtype, device=spline.device)

    def squared_distance(t: Tensor) -> Tensor:
        difference = bezier_spline_evaluate_uniform(spline, t) - point
        return (difference * difference).sum(dim=-1)

    total_length = spline.total_length.item()

    if total_length > 0:
        step = 1.0 / total_length

        samples = (
            torch.arange(
                math.ceil(total_length),
                dtype=spline.dtype,
                device=spline.device,
            )
            * step
        )

        # argmin keeps the first of equal minima.
        best = samples[torch.argmin(squared_distance(samples))].item()
    else:
        warnings.warn(
            "Nearest point search on a spline of zero length; "
            "call recalculate_lengths() after editing points.",
            DegenerateGeometryWarning,
            stacklevel=2,
        )

        step = math.inf
        best = 0.0

    lower = min(max(best - step / 2, 0.0), 1.0)
    upper = min(max(best + step / 2, 0.0), 1.0)

    for _ in range(precision):
        bracket = torch.tensor(
            [lower, upper], dtype=spline.dtype, device=spline.device
        )
        lower_distance, upper_distance = squared_distance(bracket).tolist()

        if lower_distance > upper_distance:
            lower += (upper - lower) / 2
        else:
            upper -= (upper - lower) / 2

    return torch.tensor(
        (lower + upper) / 2, dtype=spline.dtype, device=spline.device
    )


def bezier_spline_nearest_point(
    spline: BezierSpline,
    point: Union[Tensor, Sequence[float]],
    precision: int = DEFAULT_NEAREST_PRECISION,
) -> NearestPoint:
    """
    Find the point of a spline closest to a query point.

    See :func:`bezier_spline_nearest_parameter` for the search itself.

    Returns
    -------
    nearest : NearestPoint
        Parameter, position and distance of the nearest point.
    """
    point = torch.as_tensor(point, dtype=spline.dtype, device=spline.device)

    parameter = bezier_spline_nearest_parameter(spline, point, precision)
    position = bezier_spline_evaluate_uniform(spline, parameter)
    distance = torch.linalg.vector_norm(position - point)

    return NearestPoint(
        parameter=parameter,
        point=position,
        distance=distance,
        batch_size=[],
    )
