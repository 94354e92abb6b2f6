[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "itemapi"
version = "0.1.0"
description = "A small JSON HTTP API serving an in-memory collection of items"
requires-python = ">=3.10"
dependencies = []
keywords = ["http", "json", "api", "rest", "server", "domain"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Environment :: Web Environment",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
itemapi = "itemapi.server:main"

[tool.hatch.build.targets.wheel]
packages = ["itemapi"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
