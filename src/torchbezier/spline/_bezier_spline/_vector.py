import torch
from torch import Tensor


def normalize(vector: Tensor) -> Tensor:
    """Scale vectors along the last dimension to unit length.

    Zero vectors are returned as zero vectors.
    """
    norm = torch.linalg.vector_norm(vector, dim=-1, keepdim=True)
    nonzero = norm > 0
    safe_norm = torch.where(nonzero, norm, torch.ones_like(norm))

    return torch.where(nonzero, vector / safe_norm, torch.zeros_like(vector))
