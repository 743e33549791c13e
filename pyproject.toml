[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cardhall"
version = "0.1.0"
description = "A four-player, five-card hand-ranking game server with account storage and client helpers"
requires-python = ">=3.10"
dependencies = [
    "psutil",
]
keywords = ["cards", "game", "hand evaluator", "multiplayer", "tcp server"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
cardhall-server = "cardhall.server:main"

[tool.hatch.build.targets.wheel]
packages = ["cardhall"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
