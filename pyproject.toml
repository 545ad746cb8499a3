[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pgpkit"
version = "0.1.0"
description = "OpenPGP cryptographic building blocks: symmetric CFB modes, AES key wrap, RSA, hashing, checksums and line handling"
requires-python = ">=3.10"
keywords = ["openpgp", "pgp", "cryptography", "cfb", "aes-kw", "rsa"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Security :: Cryptography",
]
dependencies = [
    "pycryptodome",
    "cryptography",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["pgpkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
