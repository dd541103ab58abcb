"""Packed RGB colors.

Colors travel as integers laid out ``0xRRGGBB`` (any alpha byte above is
ignored) and are unpacked into normalized channels for the vertex data.
"""

from __future__ import annotations

from typing import NamedTuple, Optional

import numpy as np
from numpy.typing import DTypeLike

from tessermath.primitives import scalar_type


class Rgb(NamedTuple):
    """Normalized color channels, each between 0 and 1."""

    red: float
    green: float
    blue: float


def decode_rgb(code: int, dtype: Optional[DTypeLike] = None) -> Rgb:
    """Decode a serialized color integer into normalized channels.

    Args:
        code: Integer whose last three bytes are red, green and blue
        dtype: Floating-point type of the channels

    Returns:
        Each channel as ``byte / 255``
    """
    dtype = scalar_type(dtype)
    return Rgb(
        dtype.type((code >> 16) & 0xFF) / dtype.type(255),
        dtype.type((code >> 8) & 0xFF) / dtype.type(255),
        dtype.type(code & 0xFF) / dtype.type(255),
    )


def encode_rgb(rgb: Rgb) -> int:
    """Pack normalized channels back into ``0xRRGGBB``, clamping out-of-range values."""
    red, green, blue = (int(round(float(np.clip(c, 0.0, 1.0)) * 255)) for c in rgb)
    return (red << 16) | (green << 8) | blue
