"""Prime field elements and the tagged base/extension field value."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Union

IntoElement = Union["FieldElement", int]


@dataclass(frozen=True, eq=False)
class FieldElement:
    """An element of the prime field of integers modulo ``modulus``."""

    value: int
    modulus: int

    def __post_init__(self) -> None:
        if self.modulus < 2:
            raise ValueError(f"modulus must be at least 2, got {self.modulus}")
        object.__setattr__(self, "value", self.value % self.modulus)

    def _coerce(self, other: object) -> FieldElement | None:
        if isinstance(other, FieldElement):
            if other.modulus != self.modulus:
                raise ValueError(
                    f"cannot combine elements of fields with moduli "
                    f"{self.modulus} and {other.modulus}"
                )
            return other
        if isinstance(other, int):
            return FieldElement(other, self.modulus)
        return None

    def _make(self, value: int) -> FieldElement:
        return FieldElement(value, self.modulus)

    def is_zero(self) -> bool:
        """Returns true if this is the additive identity."""
        return self.value == 0

    def inverse(self) -> FieldElement:
        """Returns the multiplicative inverse; raises ZeroDivisionError for zero."""
        if self.value == 0:
            raise ZeroDivisionError("zero has no multiplicative inverse")
        return self._make(pow(self.value, -1, self.modulus))

    def pow(self, exponent: int) -> FieldElement:
        """Raises this element to an integer power."""
        if exponent < 0:
            return self.inverse().pow(-exponent)
        return self._make(pow(self.value, exponent, self.modulus))

    def __pow__(self, exponent: int) -> FieldElement:
        return self.pow(exponent)

    def __add__(self, other: object) -> FieldElement:
        rhs = self._coerce(other)
        if rhs is None:
            return NotImplemented
        return self._make(self.value + rhs.value)

    __radd__ = __add__

    def __sub__(self, other: object) -> FieldElement:
        rhs = self._coerce(other)
        if rhs is None:
            return NotImplemented
        return self._make(self.value - rhs.value)

    def __rsub__(self, other: object) -> FieldElement:
        lhs = self._coerce(other)
        if lhs is None:
            return NotImplemented
        return self._make(lhs.value - self.value)

    def __mul__(self, other: object) -> FieldElement:
        rhs = self._coerce(other)
        if rhs is None:
            return NotImplemented
        return self._make(self.value * rhs.value)

    __rmul__ = __mul__

    def __truediv__(self, other: object) -> FieldElement:
        rhs = self._coerce(other)
        if rhs is None:
            return NotImplemented
        return self * rhs.inverse()

    def __rtruediv__(self, other: object) -> FieldElement:
        lhs = self._coerce(other)
        if lhs is None:
            return NotImplemented
        return lhs * self.inverse()

    def __neg__(self) -> FieldElement:
        return self._make(-self.value)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, FieldElement):
            return self.modulus == other.modulus and self.value == other.value
        if isinstance(other, int):
            return self.value == other % self.modulus
        return NotImplemented

    def __hash__(self) -> int:
        return hash((self.value, self.modulus))

    def __int__(self) -> int:
        return self.value

    def __str__(self) -> str:
        return str(self.value)


class FieldType(enum.IntEnum):
    """Tag distinguishing base field values from extension field values."""

    FP = 0
    FQ = 1


@dataclass(frozen=True)
class FieldVariant:
    """A value tagged as belonging to the base field (Fp) or the extension (Fq).

    Mixing an Fp value with an Fq value yields an Fq value.
    """

    kind: FieldType
    element: FieldElement

    @classmethod
    def fp(cls, element: FieldElement) -> FieldVariant:
        return cls(FieldType.FP, element)

    @classmethod
    def fq(cls, element: FieldElement) -> FieldVariant:
        return cls(FieldType.FQ, element)

    @classmethod
    def zero(cls, modulus: int) -> FieldVariant:
        """The additive identity, tagged as a base field value."""
        return cls.fp(FieldElement(0, modulus))

    @classmethod
    def one(cls, modulus: int) -> FieldVariant:
        """The multiplicative identity, tagged as a base field value."""
        return cls.fp(FieldElement(1, modulus))

    def is_zero(self) -> bool:
        return self.element.is_zero()

    def inverse(self) -> FieldVariant:
        """Multiplicative inverse; raises ZeroDivisionError for zero."""
        return FieldVariant(self.kind, self.element.inverse())

    def pow(self, exponent: int) -> FieldVariant:
        return FieldVariant(self.kind, self.element.pow(exponent))

    def as_fq(self) -> FieldElement:
        """The value lifted into the extension field."""
        return self.element

    def _combine(self, other: FieldVariant, element: FieldElement) -> FieldVariant:
        kind = FieldType.FQ if FieldType.FQ in (self.kind, other.kind) else FieldType.FP
        return FieldVariant(kind, element)

    def __add__(self, other: object) -> FieldVariant:
        if not isinstance(other, FieldVariant):
            return NotImplemented
        return self._combine(other, self.element + other.element)

    def __sub__(self, other: object) -> FieldVariant:
        if not isinstance(other, FieldVariant):
            return NotImplemented
        return self._combine(other, self.element - other.element)

    def __mul__(self, other: object) -> FieldVariant:
        if not isinstance(other, FieldVariant):
            return NotImplemented
        return self._combine(other, self.element * other.element)

    def __truediv__(self, other: object) -> FieldVariant:
        if not isinstance(other, FieldVariant):
            return NotImplemented
        return self * other.inverse()

    def __neg__(self) -> FieldVariant:
        return FieldVariant(self.kind, -self.element)

    def __pow__(self, exponent: int) -> FieldVariant:
        return self.pow(exponent)

    def __str__(self) -> str:
        return str(self.element)

    def to_bytes(self) -> bytes:
        """Serialises as one tag byte followed by the little-endian value."""
        size = _element_size(self.element.modulus)
        return bytes([self.kind]) + self.element.value.to_bytes(size, "little")

    @classmethod
    def from_bytes(cls, data: bytes, modulus: int) -> FieldVariant:
        """Parses the output of :meth:`to_bytes`."""
        if not data:
            raise ValueError("no data to deserialise")
        try:
            kind = FieldType(data[0])
        except ValueError:
            raise ValueError(f"unknown field type tag {data[0]}") from None
        size = _element_size(modulus)
        payload = data[1:]
        if len(payload) != size:
            raise ValueError(f"expected {size} value bytes, got {len(payload)}")
        value = int.from_bytes(payload, "little")
        if value >= modulus:
            raise ValueError("serialised value is not reduced modulo the field modulus")
        return cls(kind, FieldElement(value, modulus))


def _element_size(modulus: int) -> int:
    return (modulus.bit_length() + 7) // 8