[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "analysis_pipeline"
version = "0.1.0"
description = "Stage-based analysis pipeline core with a thread-safe, tag-aware data product store"
requires-python = ">=3.10"
dependencies = []
keywords = ["analysis", "pipeline", "histogram", "data products", "physics"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Physics",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["analysis_pipeline"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
