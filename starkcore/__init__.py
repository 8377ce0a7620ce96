"""Building blocks for STARK proof systems: fields, polynomials, Merkle trees, public coins."""

__version__ = "0.1.0"
__all__ = ["field", "polynomial", "utils", "merkle", "random", "security"]