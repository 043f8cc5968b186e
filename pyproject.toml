[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "logweave"
version = "0.1.0"
description = "Logging building blocks: records, filters, text and binary layouts, stream, syslog and time-rolling file appenders"
requires-python = ">=3.10"
dependencies = []
keywords = ["logging", "layout", "appender", "rolling", "syslog", "filter"]
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
    "Topic :: System :: Logging",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["logweave"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
