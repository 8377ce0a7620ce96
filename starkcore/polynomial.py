"""Polynomial evaluation and division helpers over a field."""

from __future__ import annotations

import functools
import operator
from collections.abc import Sequence
from typing import Any


def horner_evaluate(coeffs: Sequence[Any], point: Any) -> Any:
    """Evaluates the polynomial with the given coefficients (lowest first) at a point."""
    zero = point - point
    return functools.reduce(lambda acc, coeff: acc * point + coeff, reversed(coeffs), zero)


def _quotient(coeffs: Sequence[Any], z: Any, c: Any) -> list[Any]:
    remainder = z - z
    quotient = []
    for coeff in reversed(coeffs):
        quotient.append(remainder * c)
        remainder = remainder * z + coeff
    quotient.reverse()
    return quotient


def divide_out_point(
    dst_coeffs: Sequence[Any], src_coeffs: Sequence[Any], z: Any, c: Any
) -> list[Any]:
    """Returns ``dst + c * (P(X) - P(z)) / (X - z)`` where P has ``src_coeffs``.

    Only as many coefficients as the shorter sequence holds take part; any
    further destination coefficients are returned unchanged.
    """
    n = min(len(dst_coeffs), len(src_coeffs))
    quotient = _quotient(src_coeffs[:n], z, c)
    return [target + q for target, q in zip(dst_coeffs, quotient)] + list(dst_coeffs[n:])


def divide_out_point_into(coeffs: Sequence[Any], z: Any, c: Any) -> list[Any]:
    """Returns the coefficients of ``c * (P(X) - P(z)) / (X - z)``."""
    return _quotient(coeffs, z, c)


def divide_out_points_into(coeffs: Sequence[Any], zs: Sequence[Any], cs: Sequence[Any]) -> list[Any]:
    """Returns the coefficients of ``sum(c_i * (P(X) - P(z_i)) / (X - z_i))``."""
    if len(zs) != len(cs):
        raise ValueError(f"got {len(zs)} points but {len(cs)} coefficients")
    if not coeffs:
        return []
    zero = coeffs[0] - coeffs[0]
    remainders = [zero] * len(zs)
    result = []
    for coeff in reversed(coeffs):
        result.append(functools.reduce(operator.add, (c * r for r, c in zip(remainders, cs)), zero))
        remainders = [z * r + coeff for r, z in zip(remainders, zs)]
    result.reverse()
    return result


def evaluate_vanishing_polynomial(tau: Any, domain_size: int, coset_offset: Any) -> Any:
    """Evaluates the vanishing polynomial ``X^n - offset^n`` of a coset domain at ``tau``."""
    return tau ** domain_size - coset_offset ** domain_size


def fill_vanishing_polynomial(
    count: int,
    vanish_size: int,
    vanish_offset: Any,
    eval_offset: Any,
    eval_generator: Any,
) -> list[Any]:
    """Evaluates a domain's vanishing polynomial over the first ``count`` points of another.

    The vanishing domain has ``vanish_size`` elements and coset offset
    ``vanish_offset``; the evaluation points are ``eval_offset * eval_generator^i``.
    """
    scaled_generator = eval_generator ** vanish_size
    shift = vanish_offset ** vanish_size
    acc = eval_offset ** vanish_size
    values = []
    for _ in range(count):
        values.append(acc - shift)
        acc = acc * scaled_generator
    return values