[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "schedulerx_worker"
version = "0.0.1"
description = "Worker-side toolkit for a distributed job scheduler: task registry, job models, server discovery and management API client"
requires-python = ">=3.10"
dependencies = []
keywords = ["scheduler", "worker", "distributed", "jobs", "cron", "tasks"]
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
    "Topic :: System :: Distributed Computing",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["schedulerx_worker"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]
