[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "membuiltins"
version = "0.1.0"
description = "Reference implementations of low-level memory builtins and software multiplication over a simulated byte-addressed memory"
requires-python = ">=3.10"
dependencies = []
keywords = ["memcpy", "memmove", "memset", "memcmp", "strlen", "builtins", "multiplication"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest", "hypothesis"]

[tool.hatch.build.targets.wheel]
packages = ["membuiltins"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
strict = true
