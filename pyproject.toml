[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gvins"
version = "0.1.0"
description = "Geodesy, rotation, camera and feature-tracking building blocks for GNSS-visual-inertial navigation"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = [
    "navigation",
    "ins",
    "gnss",
    "visual odometry",
    "geodesy",
    "rotation",
    "camera",
    "triangulation",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["gvins"]

[tool.pytest.ini_options]
addopts = "-ra"
