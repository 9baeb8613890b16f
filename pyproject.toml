[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rawnet"
version = "0.1.0"
description = "Build and parse Ethernet, ARP, IPv4, ICMP, TCP, DNS, HTTP/1.1 and HTTP/2 data by hand, and derive TLS 1.2 keys"
requires-python = ">=3.10"
dependencies = [
    "cryptography",
]
keywords = ["networking", "packets", "tcp/ip", "arp", "icmp", "dns", "hpack", "http2", "tls", "prf"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Networking",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["rawnet"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
strict = true
