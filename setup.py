#!/usr/bin/env python3
#
# Copyright (c)  2023  Xiaomi Corporation (author: Wei Kang)

import os
import re

import setuptools

cur_dir = os.path.dirname(os.path.abspath(__file__))


def get_package_version():
    with open(os.path.join(cur_dir, "textesa/python/textesa/__init__.py")) as f:
        content = f.read()

    latest_version = re.search(r"__version__ = (.*)", content).group(1)
    latest_version = latest_version.strip().strip("\"'")
    return latest_version


setuptools.setup(
    name="textesa",
    version=get_package_version(),
    description="Enhanced suffix arrays for counting repeated substrings",
    package_dir={
        "textesa": "textesa/python/textesa",
    },
    packages=["textesa"],
    python_requires=">=3.8",
    install_requires=["numpy"],
    extras_require={"test": ["pytest"]},
)
