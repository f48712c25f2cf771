[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tmp451"
version = "0.3.0"
description = "Driver for the TMP451 remote and local temperature sensor over an I2C bus."
requires-python = ">=3.10"
dependencies = []
keywords = ["tmp451", "i2c", "sensor", "temperature", "driver", "asyncio"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Framework :: AsyncIO",
    "Topic :: System :: Hardware :: Hardware Drivers",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
]

[tool.hatch.build.targets.wheel]
packages = ["tmp451"]

[tool.pytest.ini_options]
addopts = "-ra"
