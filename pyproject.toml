[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "starkcore"
version = "0.1.0"
description = "Building blocks for STARK proof systems: prime field arithmetic, polynomial helpers, Merkle commitments, a Fiat-Shamir public coin and security estimates"
requires-python = ">=3.10"
dependencies = []
keywords = ["stark", "zero-knowledge", "merkle", "fiat-shamir", "finite-field", "cryptography"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Security :: Cryptography",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = ["pytest", "hypothesis"]

[tool.hatch.build.targets.wheel]
packages = ["starkcore"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
