[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "jctl2gray"
version = "0.2.3"
description = "Read systemd journal records from stdin or journalctl and ship them to Graylog as GELF over UDP"
requires-python = ">=3.10"
dependencies = []
keywords = ["gelf", "graylog", "journald", "journalctl", "systemd", "logging", "udp"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX :: Linux",
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

[project.scripts]
jctl2gray = "jctl2gray.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["jctl2gray"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
