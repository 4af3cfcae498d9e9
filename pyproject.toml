[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "phaserunner_modbus"
version = "0.1.0"
description = "Modbus RTU master and command layer for Phaserunner motor controllers"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "modbus",
    "modbus-rtu",
    "phaserunner",
    "motor-controller",
    "serial",
    "crc16",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Interface Engine/Protocol Translator",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["phaserunner_modbus"]

[tool.pytest.ini_options]
addopts = "-ra"
