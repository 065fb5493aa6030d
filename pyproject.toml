[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "petweb"
version = "0.1.0"
description = "Small HTTP/1.0 file servers and client, with a chained hash table and linked-list helpers"
requires-python = ">=3.10"
dependencies = []
keywords = ["http", "server", "client", "select", "hashtable", "linked-list"]
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
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
petweb-client = "petweb.client:main"
petweb-server1 = "petweb.server1:main"
petweb-server2 = "petweb.server2:main"
petweb-server3 = "petweb.server3:main"
petweb-hashtable-demo = "petweb.hashtable_demo:main"
petweb-list-demo = "petweb.list_demo:main"

[tool.hatch.build.targets.wheel]
packages = ["petweb"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
