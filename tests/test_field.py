import functools

import pytest
from hypothesis import given
from hypothesis import strategies as st

from starkcore.field import FieldElement, FieldType, FieldVariant

P = 18446744069414584321


def fp(value):
    return FieldVariant.fp(FieldElement(value, P))


def test_constraint_with_challenges():
    challenges = [FieldVariant.one(P)]
    col_values = [FieldVariant.one(P), fp(100)]
    result = (challenges[0] - col_values[0]) * col_values[1]
    assert result.is_zero()


def _between_0_and_10(val):
    one = FieldVariant.one(P)
    constants = []
    current = one
    for _ in range(9):
        constants.append(current)
        current = current + one
    return functools.reduce(lambda acc, k: acc * (val - k), constants[1:], val - constants[0])


@pytest.mark.parametrize("value", [1, 2, 3, 4, 5, 6, 7, 8, 9])
def test_constraint_multiplication_zero_in_range(value):
    assert _between_0_and_10(fp(value)).is_zero()


@pytest.mark.parametrize("value", [-2, -1, 0, 10, 11, 12])
def test_constraint_multiplication_nonzero_outside_range(value):
    assert not _between_0_and_10(fp(value)).is_zero()


def test_negation_of_variant():
    two = FieldVariant.one(P) + FieldVariant.one(P)
    assert (-two).element == P - 2
    assert (-two).kind is FieldType.FP


def test_element_inverse():
    three = FieldElement(3, P)
    assert three * three.inverse() == 1


def test_zero_inverse_raises():
    with pytest.raises(ZeroDivisionError):
        FieldElement(0, P).inverse()


def test_negative_pow_is_inverse():
    five = FieldElement(5, P)
    assert five.pow(-2) == (five * five).inverse()


def test_pow_matches_repeated_multiplication():
    x = FieldElement(12345, P)
    assert x.pow(3) == x * x * x
    assert x ** 0 == 1


def test_modulus_mismatch_raises():
    with pytest.raises(ValueError):
        FieldElement(1, P) + FieldElement(1, 7)


def test_invalid_modulus():
    with pytest.raises(ValueError):
        FieldElement(0, 1)


def test_element_reduced_and_equal_to_int():
    assert FieldElement(P + 4, P) == 4
    assert FieldElement(-1, P).value == P - 1


def test_mixed_kinds_promote_to_fq():
    a = fp(3)
    b = FieldVariant.fq(FieldElement(4, P))
    assert (a + b).kind is FieldType.FQ
    assert (b * a).kind is FieldType.FQ
    assert (a * b).element == 12
    assert (a * a).kind is FieldType.FP


def test_variant_division():
    six = fp(6)
    three = fp(3)
    assert (six / three).element == 2


def test_variant_division_by_zero():
    with pytest.raises(ZeroDivisionError):
        fp(1) / FieldVariant.zero(P)


def test_zero_and_one():
    assert FieldVariant.zero(P).is_zero()
    assert FieldVariant.one(P).kind is FieldType.FP
    assert FieldVariant.one(P).element == 1


def test_variant_pow_and_inverse():
    x = fp(9)
    assert (x.pow(2) * x.inverse()).element == 9
    assert x.inverse().kind is FieldType.FP


def test_as_fq():
    assert fp(42).as_fq() == FieldElement(42, P)


def test_display():
    assert str(fp(17)) == "17"


def test_to_bytes_layout():
    value = FieldVariant.fq(FieldElement(1, P))
    assert value.to_bytes() == b"\x01\x01" + b"\x00" * 7


def test_from_bytes_unknown_tag():
    with pytest.raises(ValueError):
        FieldVariant.from_bytes(b"\x02" + b"\x00" * 8, P)


def test_from_bytes_wrong_length():
    with pytest.raises(ValueError):
        FieldVariant.from_bytes(b"\x00\x01", P)


def test_from_bytes_empty():
    with pytest.raises(ValueError):
        FieldVariant.from_bytes(b"", P)


def test_from_bytes_unreduced_value():
    with pytest.raises(ValueError):
        FieldVariant.from_bytes(b"\x00" + b"\xff" * 8, P)


@given(st.integers(min_value=0, max_value=P - 1), st.sampled_from(list(FieldType)))
def test_bytes_round_trip(value, kind):
    original = FieldVariant(kind, FieldElement(value, P))
    assert FieldVariant.from_bytes(original.to_bytes(), P) == original


@given(st.integers(min_value=1, max_value=P - 1))
def test_inverse_property(value):
    x = FieldElement(value, P)
    assert x * x.inverse() == 1


@given(st.integers(), st.integers())
def test_add_sub_round_trip(a, b):
    x = FieldElement(a, P)
    y = FieldElement(b, P)
    assert (x + y) - y == x