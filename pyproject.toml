[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gfcrypt"
version = "0.1.0"
description = "GF(2^128) arithmetic, polynomial factoring and block-cipher modes driven by JSON testcase files"
requires-python = ">=3.10"
keywords = ["gf128", "galois-field", "gcm", "xex", "aes", "polynomial-factoring", "cryptanalysis"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Education",
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
dependencies = [
    "cryptography",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
gfcrypt = "gfcrypt.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["gfcrypt"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
