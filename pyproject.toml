[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "dynamicnft"
version = "0.1.0"
description = "An in-memory non-fungible token collection with role-based minting and burning and scheduled rotation of token media."
requires-python = ">=3.10"
keywords = ["nft", "token", "ledger", "metadata", "roles"]
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
    "Topic :: Office/Business :: Financial",
]
dependencies = []

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["dynamicnft"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
