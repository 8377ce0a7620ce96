"""Conjectured security level of a STARK proof from its parameters."""

from __future__ import annotations

from dataclasses import dataclass


def _ilog2(value: int, name: str) -> int:
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}")
    return value.bit_length() - 1


def security_level_bits(
    trace_len: int,
    lde_blowup_factor: int,
    grinding_factor: int,
    num_queries: int,
    field_bits: int,
    merkle_tree_bits: int,
    public_coin_bits: int,
) -> int:
    """Returns the minimum of field, FRI query, Merkle tree and public coin security."""
    lde_domain_size = trace_len * lde_blowup_factor
    field_security = field_bits - _ilog2(lde_domain_size, "LDE domain size")
    if field_security < 0:
        raise ValueError("field is too small for the LDE domain")
    security_per_query = _ilog2(lde_blowup_factor, "LDE blowup factor")
    if grinding_factor < 0 or num_queries < 0:
        raise ValueError("grinding factor and number of queries must be non-negative")
    fri_query_security = security_per_query * num_queries + grinding_factor
    return min(field_security, fri_query_security, merkle_tree_bits, public_coin_bits)


@dataclass(frozen=True)
class ProofParameters:
    """The parameters of a proof that determine its security level."""

    trace_len: int
    lde_blowup_factor: int
    grinding_factor: int
    num_queries: int
    field_bits: int
    merkle_tree_bits: int
    public_coin_bits: int

    def security_level_bits(self) -> int:
        return security_level_bits(
            self.trace_len,
            self.lde_blowup_factor,
            self.grinding_factor,
            self.num_queries,
            self.field_bits,
            self.merkle_tree_bits,
            self.public_coin_bits,
        )