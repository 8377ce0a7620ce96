"""Fiat-Shamir public coin that derives verifier randomness from a hash chain."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any, Protocol

from starkcore.field import FieldElement

_U64_MAX = (1 << 64) - 1


class ElementHasher(Protocol):
    """Hash function interface the public coin relies on."""

    collision_resistance: int

    def merge(self, left: Any, right: Any) -> Any: ...

    def merge_with_int(self, seed: Any, value: int) -> Any: ...

    def hash_elements(self, elements: Iterable[Any]) -> Any: ...


def leading_zeros(data: bytes) -> int:
    """Counts the leading zero bits of a byte string."""
    zeros = 0
    for byte in data:
        byte_zeros = 8 - byte.bit_length()
        zeros += byte_zeros
        if byte_zeros != 8:
            break
    return zeros


class PublicCoin:
    """Deterministic source of challenges seeded by a digest.

    Random bytes are produced from ``merge_with_int(seed, counter)`` digests,
    consumed from the last byte of each digest towards the first.
    """

    def __init__(self, hasher: ElementHasher, seed: Any, modulus: int) -> None:
        if modulus < 2:
            raise ValueError(f"modulus must be at least 2, got {modulus}")
        self.hasher = hasher
        self.seed = seed
        self.modulus = modulus
        self.counter = 0
        self._bytes: list[int] = []

    def __repr__(self) -> str:
        return (
            f"PublicCoin(seed={self.seed!r}, counter={self.counter}, "
            f"bytes={bytes(self._bytes)!r})"
        )

    def _reset(self, seed: Any) -> None:
        self.seed = seed
        self.counter = 0
        self._bytes = []

    def reseed_with_digest(self, digest: Any) -> None:
        """Mixes a digest into the seed."""
        self._reset(self.hasher.merge(self.seed, digest))

    def _reseed_with_field_element(self, value: FieldElement) -> None:
        value_digest = self.hasher.hash_elements([value])
        self._reset(self.hasher.merge(self.seed, value_digest))

    def reseed_with_field_elements(self, values: Iterable[FieldElement]) -> None:
        """Mixes field elements into the seed, one at a time."""
        for value in values:
            self._reseed_with_field_element(value)

    def reseed_with_field_element_vector(self, vector: Sequence[FieldElement]) -> None:
        """Mixes a vector of field elements into the seed."""
        self.reseed_with_field_elements(vector)

    def reseed_with_int(self, value: int) -> None:
        """Mixes an unsigned 64-bit integer into the seed."""
        if not 0 <= value <= _U64_MAX:
            raise ValueError(f"value must fit in 64 unsigned bits, got {value}")
        self._reset(self.hasher.merge_with_int(self.seed, value))

    def _gen_next(self) -> bytes:
        self.counter += 1
        self._bytes = []
        return bytes(self.hasher.merge_with_int(self.seed, self.counter))

    def _next_byte(self) -> int:
        if not self._bytes:
            self._bytes = list(self._gen_next())
        return self._bytes.pop()

    def fill_bytes(self, count: int) -> bytes:
        """Returns the next ``count`` random bytes."""
        if count < 0:
            raise ValueError(f"count must be non-negative, got {count}")
        return bytes(self._next_byte() for _ in range(count))

    def next_u32(self) -> int:
        """Returns the next four bytes as a big-endian integer."""
        return int.from_bytes(self.fill_bytes(4), "big")

    def next_u64(self) -> int:
        """Returns the next eight bytes as a big-endian integer."""
        return int.from_bytes(self.fill_bytes(8), "big")

    def draw(self) -> FieldElement:
        """Draws a uniformly random field element.

        Limbs of 64 bits are drawn least significant first, the top limb is
        shaved to the modulus width and candidates not below the modulus are
        rejected. The accepted integer is read as a Montgomery representation.
        """
        bits = self.modulus.bit_length()
        num_limbs = (bits + 63) // 64
        shave = 64 * num_limbs - bits
        while True:
            limbs = [self.next_u64() for _ in range(num_limbs)]
            limbs[-1] &= _U64_MAX >> shave
            candidate = sum(limb << (64 * i) for i, limb in enumerate(limbs))
            if candidate < self.modulus:
                r_inverse = pow(1 << (64 * num_limbs), -1, self.modulus)
                return FieldElement(candidate * r_inverse, self.modulus)

    def _gen_range(self, domain_size: int) -> int:
        if domain_size <= 0:
            raise ValueError("cannot sample from an empty range")
        if domain_size > 1 << 64:
            raise ValueError("domain size must fit in 64 bits")
        range_size = domain_size & _U64_MAX
        if range_size == 0:
            return self.next_u64()
        shift = 64 - range_size.bit_length()
        zone = ((range_size << shift) - 1) & _U64_MAX
        while True:
            product = self.next_u64() * range_size
            high, low = product >> 64, product & _U64_MAX
            if low <= zone:
                return high

    def draw_queries(self, max_n: int, domain_size: int) -> list[int]:
        """Draws at most ``max_n`` unique positions in ``[0, domain_size)``, sorted."""
        return sorted({self._gen_range(domain_size) for _ in range(max_n)})

    def verify_proof_of_work(self, proof_of_work_bits: int, nonce: int) -> bool:
        """Checks that ``merge_with_int(seed, nonce)`` has enough leading zero bits."""
        digest = bytes(self.hasher.merge_with_int(self.seed, nonce))
        return leading_zeros(digest) >= proof_of_work_bits

    def grind_proof_of_work(self, proof_of_work_bits: int) -> int | None:
        """Finds the smallest positive nonce satisfying the proof of work."""
        return next(
            (
                nonce
                for nonce in range(1, _U64_MAX)
                if self.verify_proof_of_work(proof_of_work_bits, nonce)
            ),
            None,
        )

    def security_level_bits(self) -> int:
        return self.hasher.collision_resistance


def draw_multiple(public_coin: PublicCoin, n: int) -> list[FieldElement]:
    """Draws ``n`` field elements from the coin."""
    return [public_coin.draw() for _ in range(n)]