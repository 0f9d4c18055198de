[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "booklog"
version = "0.1.0"
description = "A small book-lookup WSGI service that logs structured JSON to stdout and Elasticsearch, plus a traffic seeder."
requires-python = ">=3.10"
keywords = ["wsgi", "logging", "json", "elasticsearch", "books"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Web Environment",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: WSGI :: Application",
    "Topic :: System :: Logging",
]
dependencies = [
    "python-dotenv",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
booklog-server = "booklog.server:main"
booklog-seeder = "booklog.seeder:main"

[tool.hatch.build.targets.wheel]
packages = ["booklog"]

[tool.pytest.ini_options]
addopts = "-ra"
