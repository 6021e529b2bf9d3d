#!/usr/bin/env python

"""
Install ldprep with:
 `pip install .`

Or, for developers, install with the test dependencies:
 `pip install -e .[test]`
"""

import re
from setuptools import setup, find_packages


# Fetch version from ldprep/__init__.py
INITFILE = "ldprep/__init__.py"
CUR_VERSION = re.search(r"^__version__ = ['\"]([^'\"]*)['\"]",
                        open(INITFILE, "r").read(),
                        re.M).group(1)

setup(
    name="ldprep",
    version=CUR_VERSION,
    author="ldprep developers",
    description="Convert FASTA-style alignments to LDhat sites and locs files",
    long_description=open('README.rst').read(),
    long_description_content_type='text/x-rst',
    packages=find_packages(),
    python_requires=">=3.9",
    install_requires=[
        "numpy",
        "numba",
        "pandas",
        "pydantic>=2",
        "loguru",
        "ipython",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={'console_scripts': ['ldprep = ldprep.__main__:main']},
    license='GPL',
    classifiers=[
        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
    ],
)
