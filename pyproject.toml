[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "langselect"
version = "0.1.0"
description = "Runtime language switching for applications, with user-editable text translation files"
requires-python = ">=3.10"
dependencies = []
keywords = ["i18n", "translation", "localization", "language", "menu"]
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
    "Topic :: Software Development :: Internationalization",
    "Topic :: Software Development :: Localization",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["langselect"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
