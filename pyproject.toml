[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "lurepot"
version = "0.1.0"
description = "A low-interaction honeypot that imitates HTTP, SSH and Telnet services and logs what visitors send."
requires-python = ">=3.10"
dependencies = []
keywords = ["honeypot", "security", "intrusion-detection", "ssh", "telnet", "http", "logging"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: System Administrators",
    "Intended Audience :: Information Technology",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Security",
    "Topic :: System :: Networking :: Monitoring",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
lurepot = "lurepot.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["lurepot"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
