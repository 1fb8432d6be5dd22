[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gpumon"
version = "0.1.0"
description = "Building blocks for GPU monitoring on Linux: device and process records, DRM fdinfo sweeping, procfs readers, INI parsing and history buffers"
requires-python = ">=3.10"
dependencies = []
keywords = ["gpu", "monitoring", "drm", "fdinfo", "procfs", "mali", "ini"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Monitoring",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["gpumon"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
