#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""Installation driver (and development utility entry point) for vcf-reannotator
"""

import os
import sys

from setuptools import find_packages, setup


def parse_requirements(path):
    """Parse ``requirements.txt`` at ``path``."""
    requirements = []
    with open(path, "rt") as reqs_f:
        for line in reqs_f:
            line = line.strip()
            if line.startswith("-r"):
                fname = line.split()[1]
                inner_path = os.path.join(os.path.dirname(path), fname)
                requirements += parse_requirements(inner_path)
            elif line != "" and not line.startswith("#"):
                requirements.append(line)
    return requirements


# Enforce python version >=3.11 (``enum.StrEnum``)
if sys.version_info < (3, 11):
    print("At least Python 3.11 is required.\n", file=sys.stderr)
    sys.exit(1)

with open("README.md") as readme_file:
    readme = readme_file.read()

with open("CHANGELOG.md") as history_file:
    history = history_file.read()

# Get requirements
requirements = parse_requirements("requirements/base.txt")

test_requirements = [
    req for req in parse_requirements("requirements/test.txt") if req not in requirements
]

# Name of the apps
APPS = ("vcf_reannotate", "vcf_reannotate_pipeline")


def console_scripts_entry_points(names):
    """Yield entries for the 'console_scripts' entry points"""
    for name in names:
        yield "{script} = vcf_reannotator.apps.{name}:main".format(
            script=name.replace("_", "-"), name=name
        )


package_root = os.path.abspath(os.path.dirname(__file__))

version = {}
with open(os.path.join(package_root, "vcf_reannotator/_version.py")) as fp:
    exec(fp.read(), version)
version = version["__version__"]

setup(
    name="vcf-reannotator",
    version=version,
    description="Re-annotation of cancer variant VCF files with gnomAD and CIViC data",
    long_description=readme + "\n\n" + history,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=("tests", "tests.*")),
    entry_points={"console_scripts": list(console_scripts_entry_points(APPS))},
    include_package_data=True,
    install_requires=requirements,
    extras_require={"test": test_requirements},
    license="MIT license",
    zip_safe=False,
    keywords="bioinformatics",
    classifiers=[
        "Development Status :: 2 - Pre-Alpha",
        "Intended Audience :: Science/Research",
        "License :: OSI Approved :: MIT License",
        "Natural Language :: English",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    test_suite="tests",
    tests_require=test_requirements,
)
