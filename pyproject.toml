[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "htmltoadf"
version = "0.1.10"
description = "An HTML to Atlassian Document Format (ADF) converter"
requires-python = ">=3.10"
keywords = ["html", "adf", "atlassian", "converter", "cli"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Text Processing :: Markup :: HTML",
]
dependencies = [
    "html5lib>=1.1",
]

[project.optional-dependencies]
test = [
    "pytest>=7",
]

[project.scripts]
html2adf = "htmltoadf.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["htmltoadf"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
