[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "oslabkit"
version = "0.1.0"
description = "Operating-systems lab exercises: CPU scheduling, page replacement, the banker's algorithm, pipes, processes, threads and a student record file."
requires-python = ">=3.10"
dependencies = []
keywords = [
    "operating systems",
    "cpu scheduling",
    "page replacement",
    "bankers algorithm",
    "pipes",
    "fork",
    "threads",
    "education",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Education",
    "Topic :: System :: Operating System",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
oslabkit-schedule = "oslabkit.scheduling:main"
oslabkit-pipes = "oslabkit.pipes:main"
oslabkit-paging = "oslabkit.paging:main"
oslabkit-banker = "oslabkit.banker:main"
oslabkit-students = "oslabkit.students:main"
oslabkit-processes = "oslabkit.processes:main"
oslabkit-threads = "oslabkit.threads:main"

[tool.hatch.build.targets.wheel]
packages = ["oslabkit"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]
