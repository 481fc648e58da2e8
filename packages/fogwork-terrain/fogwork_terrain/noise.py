"""Deterministic hashing and value noise.

Nothing here touches Python's ``hash()``, so results do not depend on
``PYTHONHASHSEED``.
"""
from __future__ import annotations

import math

_MASK32 = 0xFFFFFFFF
_SALT_MUL = 2246822519


def stable_hash(text: str) -> int:
    """Non-negative 32-bit string hash (h * 31 + ord(ch), wrapped signed)."""
    h = 0
    for ch in text:
        h = (h * 31 + ord(ch)) & _MASK32
    if h >= 0x80000000:
        h -= 0x100000000
    return abs(h)


def _corner(a: int, b: int, salt: int) -> float:
    h = (a * 374761393 + b * 668265263 + salt * _SALT_MUL + 1234567) & 0x7FFFFFFF
    return (h % 1000) / 1000


def _smooth(t: float) -> float:
    return t * t * (3 - 2 * t)


def value_noise(x: float, z: float, scale: float, salt: int = 0) -> float:
    """Smoothstep-interpolated lattice noise in [0, 1)."""
    gx, gz = x / scale, z / scale
    sx, sz = math.floor(gx), math.floor(gz)
    fx, fz = _smooth(gx - sx), _smooth(gz - sz)
    v00 = _corner(sx, sz, salt)
    v10 = _corner(sx + 1, sz, salt)
    v01 = _corner(sx, sz + 1, salt)
    v11 = _corner(sx + 1, sz + 1, salt)
    top = v00 * (1 - fx) + v10 * fx
    bottom = v01 * (1 - fx) + v11 * fx
    return top * (1 - fz) + bottom * fz


def hex_distance(dx: float, dz: float, radius: float) -> float:
    """Normalized flat-top hex distance: 0 at center, 1 on the outline."""
    nx, nz = dx / radius, dz / radius
    a = abs(nz) * 1.1547
    b = abs(nx + nz * 0.57735)
    c = abs(nx - nz * 0.57735)
    return max(a, b, c)
