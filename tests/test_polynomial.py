import pytest
from hypothesis import given
from hypothesis import strategies as st

from starkcore.field import FieldElement
from starkcore.polynomial import (
    divide_out_point,
    divide_out_point_into,
    divide_out_points_into,
    evaluate_vanishing_polynomial,
    fill_vanishing_polynomial,
    horner_evaluate,
)

P = 18446744069414584321
GENERATOR = FieldElement(7, P)


def fe(value):
    return FieldElement(value, P)


def root_of_unity(order):
    return GENERATOR.pow((P - 1) // order)


field_values = st.integers(min_value=0, max_value=P - 1)
polys = st.lists(field_values, min_size=1, max_size=8)


def test_horner_small_polynomial():
    assert horner_evaluate([fe(1), fe(2), fe(3)], fe(2)) == 17


def test_horner_empty_is_zero():
    assert horner_evaluate([], fe(5)).is_zero()


def test_horner_constant():
    assert horner_evaluate([fe(9)], fe(123456)) == fe(9)


@given(polys, field_values, field_values, field_values)
def test_divide_out_point_into_identity(coeffs, z_value, c_value, x_value):
    poly = [fe(v) for v in coeffs]
    z, c, x = fe(z_value), fe(c_value), fe(x_value)
    quotient = divide_out_point_into(poly, z, c)
    assert len(quotient) == len(poly)
    assert quotient[-1].is_zero()
    lhs = horner_evaluate(quotient, x) * (x - z)
    rhs = c * (horner_evaluate(poly, x) - horner_evaluate(poly, z))
    assert lhs == rhs


@given(polys, polys, field_values, field_values)
def test_divide_out_point_adds_into_destination(src_values, dst_values, z_value, c_value):
    src = [fe(v) for v in src_values]
    dst = [fe(v) for v in dst_values]
    z, c = fe(z_value), fe(c_value)
    result = divide_out_point(dst, src, z, c)
    n = min(len(src), len(dst))
    quotient = divide_out_point_into(src[:n], z, c)
    assert len(result) == len(dst)
    assert [r - d for r, d in zip(result[:n], dst[:n])] == quotient
    assert result[n:] == dst[n:]


@given(polys, st.lists(st.tuples(field_values, field_values), max_size=4))
def test_divide_out_points_is_sum_of_single_divisions(coeffs, pairs):
    poly = [fe(v) for v in coeffs]
    zs = [fe(z) for z, _ in pairs]
    cs = [fe(c) for _, c in pairs]
    combined = divide_out_points_into(poly, zs, cs)
    expected = [fe(0)] * len(poly)
    for z, c in zip(zs, cs):
        expected = divide_out_point(expected, poly, z, c)
    assert combined == expected


def test_divide_out_points_length_mismatch():
    with pytest.raises(ValueError):
        divide_out_points_into([fe(1)], [fe(1), fe(2)], [fe(1)])


def test_divide_out_points_empty_polynomial():
    assert divide_out_points_into([], [fe(1)], [fe(2)]) == []


def test_vanishing_polynomial_zero_on_subgroup():
    w = root_of_unity(8)
    assert w.pow(8) == 1
    assert not (w.pow(4) - 1).is_zero()
    for i in range(8):
        assert evaluate_vanishing_polynomial(w.pow(i), 8, fe(1)).is_zero()


def test_vanishing_polynomial_zero_on_coset():
    w = root_of_unity(4)
    offset = GENERATOR
    for i in range(4):
        assert evaluate_vanishing_polynomial(offset * w.pow(i), 4, offset).is_zero()
    assert not evaluate_vanishing_polynomial(w, 4, offset).is_zero()


def test_fill_vanishing_matches_pointwise_evaluation():
    vanish_size = 8
    eval_generator = root_of_unity(32)
    eval_offset = GENERATOR
    vanish_offset = fe(1)
    values = fill_vanishing_polynomial(32, vanish_size, vanish_offset, eval_offset, eval_generator)
    assert len(values) == 32
    for i, value in enumerate(values):
        point = eval_offset * eval_generator.pow(i)
        assert value == evaluate_vanishing_polynomial(point, vanish_size, vanish_offset)


def test_fill_vanishing_over_own_domain_is_zero():
    w = root_of_unity(16)
    values = fill_vanishing_polynomial(16, 16, fe(1), fe(1), w)
    assert all(v.is_zero() for v in values)