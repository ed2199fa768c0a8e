[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ecvrf"
version = "0.1.0"
description = "Elliptic Curve Verifiable Random Function (ECVRF) with secp256k1 and P-256 try-and-increment suites"
requires-python = ">=3.10"
dependencies = []
keywords = ["vrf", "ecvrf", "elliptic-curve", "secp256k1", "p256", "rfc6979", "cryptography"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Security :: Cryptography",
]

[project.optional-dependencies]
test = ["pytest", "hypothesis"]

[tool.hatch.build.targets.wheel]
packages = ["ecvrf"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
