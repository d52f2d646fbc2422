"""Setup module for zigattr"""

import pathlib

from setuptools import find_packages, setup

import zigattr

REQUIRES = [
    "attrs",
    "typing_extensions",
    "voluptuous",
]

setup(
    name="zigattr",
    version=zigattr.__version__,
    description="Zigbee attribute and vendor TLV codec with per-device registries",
    long_description=(pathlib.Path(__file__).parent / "README.md").read_text(),
    long_description_content_type="text/markdown",
    license="GPL-3.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=REQUIRES,
    extras_require={"testing": ["pytest"]},
    python_requires=">=3.10",
)
