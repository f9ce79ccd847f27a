[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "brushkit"
version = "0.8.1"
description = "Convex brush geometry, Quake map class metadata and BSP lighting helpers"
requires-python = ">=3.10"
dependencies = []
keywords = ["quake", "brush", "bsp", "trenchbroom", "fgd", "lightmap", "irradiance", "geometry"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics :: 3D Modeling",
    "Topic :: Games/Entertainment",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest", "hypothesis"]

[tool.hatch.build.targets.wheel]
packages = ["brushkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
