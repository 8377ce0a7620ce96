"""Binary Merkle trees with batched multi-leaf proofs."""

from __future__ import annotations

import abc
from collections import deque
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any, Protocol


class MerkleError(Exception):
    """Base class for Merkle tree errors."""


class TooFewLeavesError(MerkleError):
    def __init__(self, minimum: int, actual: int) -> None:
        super().__init__(
            f"tree must contain `{minimum}` leaves, but `{actual}` were provided"
        )
        self.min = minimum
        self.actual = actual


class NumberOfLeavesNotPowerOfTwoError(MerkleError):
    def __init__(self, n: int) -> None:
        super().__init__(
            f"number of leaves must be a power of two, but `{n}` were provided"
        )
        self.n = n


class LeafIndexOutOfBoundsError(MerkleError):
    def __init__(self, i: int, n: int) -> None:
        super().__init__(f"leaf index `{i}` cannot exceed the number of leaves (`{n}`)")
        self.i = i
        self.n = n


class InvalidProofError(MerkleError):
    def __init__(self) -> None:
        super().__init__("proof is invalid")


class _ElementHasher(Protocol):
    collision_resistance: int

    def merge(self, left: Any, right: Any) -> Any: ...

    def hash_elements(self, elements: Iterable[Any]) -> Any: ...


_MIN_LEAVES = 2


def _is_power_of_two(n: int) -> bool:
    return n > 0 and n & (n - 1) == 0


@dataclass
class MerkleView:
    """Everything needed to check several Merkle paths at once."""

    nodes: list[Any] = field(default_factory=list)
    initial_leaves: list[Any] = field(default_factory=list)
    sibling_leaves: list[Any] = field(default_factory=list)
    height: int = 0


class MerkleTreeConfig(abc.ABC):
    """How leaves and inner nodes are hashed together."""

    @property
    @abc.abstractmethod
    def collision_resistance(self) -> int:
        """Security of the hash in bits."""

    @abc.abstractmethod
    def hash_leaves(self, depth: int, left: Any, right: Any) -> Any:
        """Hashes two sibling leaves into their parent node."""

    @abc.abstractmethod
    def hash_nodes(self, depth: int, left: Any, right: Any) -> Any:
        """Hashes two sibling inner nodes into their parent node."""


class HashedLeafConfig(MerkleTreeConfig):
    """Configuration whose leaves are already digests of the given hasher."""

    def __init__(self, hasher: _ElementHasher) -> None:
        self.hasher = hasher

    @property
    def collision_resistance(self) -> int:
        return self.hasher.collision_resistance

    def hash_leaves(self, depth: int, left: Any, right: Any) -> Any:
        return self.hasher.merge(left, right)

    def hash_nodes(self, depth: int, left: Any, right: Any) -> Any:
        return self.hasher.merge(left, right)


def build_merkle_nodes(config: MerkleTreeConfig, leaves: Sequence[Any]) -> list[Any]:
    """Builds the inner nodes; index 1 is the root and index 0 is unused."""
    n = len(leaves)
    if n < _MIN_LEAVES or not _is_power_of_two(n):
        raise ValueError(f"number of leaves must be a power of two of at least 2, got {n}")
    nodes: list[Any] = [None] * n
    half = n // 2
    depth = half.bit_length() - 1
    for i in range(half):
        nodes[half + i] = config.hash_leaves(depth, leaves[2 * i], leaves[2 * i + 1])
    for depth in reversed(range(half.bit_length() - 1)):
        size = 1 << depth
        for i in range(size, 2 * size):
            nodes[i] = config.hash_nodes(depth, nodes[2 * i], nodes[2 * i + 1])
    return nodes


def _check_indices(indices: Iterable[int], num_leaves: int) -> list[int]:
    indices = list(indices)
    for i in indices:
        if not 0 <= i < num_leaves:
            raise LeafIndexOutOfBoundsError(i, num_leaves)
    return sorted(set(indices))


class MerkleTree:
    """Full binary Merkle tree over a power-of-two number of leaves."""

    def __init__(self, config: MerkleTreeConfig, leaves: Iterable[Any]) -> None:
        leaves = list(leaves)
        n = len(leaves)
        if n < _MIN_LEAVES:
            raise TooFewLeavesError(_MIN_LEAVES, n)
        if not _is_power_of_two(n):
            raise NumberOfLeavesNotPowerOfTwoError(n)
        self.config = config
        self.leaves = leaves
        self.nodes = build_merkle_nodes(config, leaves)

    def root(self) -> Any:
        return self.nodes[1]

    def height(self) -> int:
        """Number of levels above the leaves."""
        return len(self.leaves).bit_length() - 1

    def prove(self, indices: Iterable[int]) -> MerkleView:
        """Builds a combined proof for the leaves at the given indices."""
        num_leaves = len(self.leaves)
        leaf_queue = deque(_check_indices(indices, num_leaves))

        initial_leaves: list[Any] = []
        sibling_leaves: list[Any] = []
        node_queue: deque[int] = deque()
        while leaf_queue:
            index = leaf_queue.popleft()
            initial_leaves.append(self.leaves[index])
            node_queue.append((num_leaves + index) >> 1)
            if leaf_queue and leaf_queue[0] == index ^ 1:
                initial_leaves.append(self.leaves[leaf_queue.popleft()])
                continue
            sibling_leaves.append(self.leaves[index ^ 1])

        nodes: list[Any] = []
        while node_queue:
            index = node_queue.popleft()
            if index > 2:
                node_queue.append(index >> 1)
            if node_queue and node_queue[0] == index ^ 1:
                node_queue.popleft()
                continue
            nodes.append(self.nodes[index ^ 1])

        return MerkleView(nodes, initial_leaves, sibling_leaves, self.height())

    @classmethod
    def verify(
        cls,
        config: MerkleTreeConfig,
        root: Any,
        proof: MerkleView,
        indices: Iterable[int],
    ) -> None:
        """Checks a proof against a root; raises a MerkleError if it fails."""
        height = proof.height
        num_leaves = 1 << height
        sorted_indices = _check_indices(indices, num_leaves)
        if height < 1:
            raise InvalidProofError()

        node_queue: deque[tuple[int, Any]] = deque()
        siblings = deque(proof.sibling_leaves)
        leaf_queue = deque(zip(sorted_indices, proof.initial_leaves))
        while leaf_queue:
            index, leaf = leaf_queue.popleft()
            node_index = (num_leaves + index) >> 1
            if leaf_queue and leaf_queue[0][0] == index ^ 1:
                _, next_leaf = leaf_queue.popleft()
                node_queue.append((node_index, config.hash_leaves(height - 1, leaf, next_leaf)))
                continue
            if not siblings:
                raise InvalidProofError()
            sibling = siblings.popleft()
            pair = (leaf, sibling) if index % 2 == 0 else (sibling, leaf)
            node_queue.append((node_index, config.hash_leaves(height - 1, *pair)))
        if siblings:
            raise InvalidProofError()

        nodes = deque(proof.nodes)
        while node_queue:
            index, digest = node_queue.popleft()
            depth = index.bit_length() - 1
            if depth == 0:
                if node_queue or digest != root:
                    raise InvalidProofError()
                return
            if node_queue and node_queue[0][0] == index ^ 1:
                _, next_digest = node_queue.popleft()
                node_queue.append(
                    (index >> 1, config.hash_nodes(depth - 1, digest, next_digest))
                )
                continue
            if not nodes:
                raise InvalidProofError()
            sibling = nodes.popleft()
            pair = (digest, sibling) if index % 2 == 0 else (sibling, digest)
            node_queue.append((index >> 1, config.hash_nodes(depth - 1, *pair)))

    def security_level_bits(self) -> int:
        return self.config.collision_resistance


def hash_rows(hasher: _ElementHasher, columns: Sequence[Sequence[Any]]) -> list[Any]:
    """Hashes each row of a column-major matrix into one digest."""
    if not columns:
        return []
    return [hasher.hash_elements(row) for row in zip(*columns, strict=True)]


class MatrixMerkleTree:
    """Merkle tree committing to the rows of a matrix."""

    def __init__(self, hasher: _ElementHasher, leaf_digests: Iterable[Any]) -> None:
        self.hasher = hasher
        self.tree = MerkleTree(HashedLeafConfig(hasher), leaf_digests)

    @classmethod
    def from_matrix(cls, hasher: _ElementHasher, columns: Sequence[Sequence[Any]]) -> MatrixMerkleTree:
        """Commits to a column-major matrix, one leaf per row."""
        return cls(hasher, hash_rows(hasher, columns))

    def root(self) -> Any:
        return self.tree.root()

    def prove(self, indices: Iterable[int]) -> MerkleView:
        return self.tree.prove(indices)

    def prove_rows(self, row_ids: Iterable[int]) -> MerkleView:
        return self.prove(row_ids)

    @classmethod
    def verify(
        cls,
        hasher: _ElementHasher,
        root: Any,
        proof: MerkleView,
        indices: Iterable[int],
    ) -> None:
        MerkleTree.verify(HashedLeafConfig(hasher), root, proof, indices)

    @classmethod
    def verify_rows(
        cls,
        hasher: _ElementHasher,
        root: Any,
        row_ids: Iterable[int],
        rows: Iterable[Sequence[Any]],
        proof: MerkleView,
    ) -> None:
        """Checks that the given rows sit at the given positions under ``root``."""
        instances = sorted(zip(row_ids, rows), key=lambda item: item[0])
        unique: dict[int, Sequence[Any]] = {}
        for index, row in instances:
            unique.setdefault(index, row)
        initial_leaves = [hasher.hash_elements(row) for row in unique.values()]
        if list(proof.initial_leaves) != initial_leaves:
            raise InvalidProofError()
        cls.verify(hasher, root, proof, list(unique))

    def security_level_bits(self) -> int:
        return self.hasher.collision_resistance