[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "xbchat"
version = "0.1.0"
description = "Client-side core of a small instant-messaging application: user data, framed TCP protocol, input checks and toolkit-free widget state."
requires-python = ">=3.10"
dependencies = []
keywords = ["chat", "messaging", "client", "tcp", "protocol", "friends"]
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
    "Topic :: Communications :: Chat",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["xbchat"]

[tool.hatch.build.targets.sdist]
include = ["xbchat", "tests", "README.md", "pyproject.toml"]

[tool.pytest.ini_options]
addopts = "-ra"
