[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "iotlink"
version = "0.1.0"
description = "Device-side building blocks for a cloud-connected IoT client: UTC time values, time-input decoding, periodic timers, CRC-checked OTA updates, a TCP transport and virtual-pin handlers."
requires-python = ">=3.10"
dependencies = []
keywords = ["iot", "home-automation", "ota", "crc32", "virtual-pins", "periodic-timer"]
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
    "Topic :: Home Automation",
    "Topic :: Software Development :: Embedded Systems",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["iotlink"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
