# starkcore

Pure-Python building blocks for STARK proof systems. It has no
dependencies outside the standard library.

## Modules

- `starkcore.field`: `FieldElement`, an integer modulo a prime with the
  usual arithmetic operators, `inverse()` and `pow()`; `FieldVariant`, a
  value tagged by `FieldType.FP` (base field) or `FieldType.FQ`
  (extension field), where combining an `FP` value with an `FQ` value
  gives an `FQ` value. `FieldVariant.to_bytes()` writes one tag byte
  followed by the little-endian value, and `FieldVariant.from_bytes()`
  reads it back.
- `starkcore.polynomial`: `horner_evaluate`, synthetic division by
  `(X - z)` (`divide_out_point`, `divide_out_point_into`,
  `divide_out_points_into`) and vanishing polynomial evaluation over
  cosets (`evaluate_vanishing_polynomial`, `fill_vanishing_polynomial`).
  All of them return new lists rather than changing their arguments.
- `starkcore.utils`: `interleave`, `ceil_power_of_two`,
  `reduce_lde_blowup_factor`, `field_bits`, and `Timer`, a context
  manager that prints `"<name> in <duration>"` when its block ends.
- `starkcore.merkle`: `MerkleTree` over a power-of-two number of leaves
  with batched multi-leaf proofs (`MerkleView`), pluggable hashing through
  `MerkleTreeConfig` / `HashedLeafConfig`, and `MatrixMerkleTree`, which
  commits to the rows of a column-major matrix.
- `starkcore.random`: `PublicCoin`, a hash-chain source of Fiat-Shamir
  challenges: field elements (`draw`, `draw_multiple`), sorted unique
  query positions (`draw_queries`) and proof-of-work grinding
  (`grind_proof_of_work`, `verify_proof_of_work`, `leading_zeros`).
- `starkcore.security`: the conjectured security level of a proof
  (`security_level_bits`, `ProofParameters`).

## Installation

```
pip install starkcore
```

To run the test suite:

```
pip install "starkcore[test]"
pytest
```

## Supplying a hash function

The package does not ship a hash function. `MatrixMerkleTree`,
`HashedLeafConfig` and `PublicCoin` take a hasher object with:

- `collision_resistance`: the hash's security in bits;
- `merge(left, right)`: the digest of two digests;
- `hash_elements(elements)`: the digest of an iterable of field elements;
- `merge_with_int(seed, value)`: the digest of a digest and an unsigned
  integer (used by `PublicCoin` only; its result must convert with
  `bytes()`).

For example:

```python
import hashlib


class Sha256Hasher:
    collision_resistance = 128

    def merge(self, left, right):
        return hashlib.sha256(left + right).digest()

    def merge_with_int(self, seed, value):
        return hashlib.sha256(seed + value.to_bytes(8, "big")).digest()

    def hash_elements(self, elements):
        h = hashlib.sha256()
        for element in elements:
            h.update(int(element).to_bytes(32, "little"))
        return h.digest()
```

## Example: committing to matrix rows

```python
from starkcore.field import FieldElement
from starkcore.merkle import MatrixMerkleTree

p = 2**64 - 2**32 + 1
columns = [
    [FieldElement(v, p) for v in (1, 2, 3, 4)],
    [FieldElement(v, p) for v in (5, 6, 7, 8)],
]
hasher = Sha256Hasher()

tree = MatrixMerkleTree.from_matrix(hasher, columns)
root = tree.root()

row_ids = [0, 3]
rows = [[column[i] for column in columns] for i in row_ids]
proof = tree.prove_rows(row_ids)
MatrixMerkleTree.verify_rows(hasher, root, row_ids, rows, proof)
```

`verify_rows` returns `None` when the opening is valid and raises
`InvalidProofError` when it is not. Out-of-range indices raise
`LeafIndexOutOfBoundsError`. Trees built from fewer than two leaves raise
`TooFewLeavesError`, and trees whose leaf count is not a power of two
raise `NumberOfLeavesNotPowerOfTwoError`. All of them derive from
`MerkleError`. Duplicate indices are allowed and proved once.

## Example: drawing challenges

```python
from starkcore.random import PublicCoin, draw_multiple

coin = PublicCoin(hasher, seed=bytes(32), modulus=p)
coin.reseed_with_digest(root)
challenges = draw_multiple(coin, 3)         # list of FieldElement
positions = coin.draw_queries(30, 1 << 13)  # sorted, at most 30 positions
nonce = coin.grind_proof_of_work(8)
assert coin.verify_proof_of_work(8, nonce)
```

## Example: estimating security

```python
from starkcore.security import security_level_bits

bits = security_level_bits(
    trace_len=1024,
    lde_blowup_factor=8,
    grinding_factor=16,
    num_queries=30,
    field_bits=192,
    merkle_tree_bits=128,
    public_coin_bits=128,
)
assert bits == 106
```

The result is the smallest of the field security
(`field_bits - log2(trace_len * lde_blowup_factor)`), the query security
(`log2(lde_blowup_factor) * num_queries + grinding_factor`), the Merkle
tree security and the public coin security.

## What it does not do

starkcore provides the pieces, not a proof system. It has no trace
generation, constraint system, FRI layers, prover or verifier, no proof
serialisation beyond `FieldVariant.to_bytes()`, no built-in hash
functions, and no command-line tool.