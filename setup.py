from setuptools import find_packages, setup
import re
import os

here = os.path.abspath(os.path.dirname(__file__))

# read the version without importing the package
with open(os.path.join(here, "ligplot3d", "_version.py")) as f:
    version = re.search(r'^__version__ = "(.+)"$', f.read(), re.M).group(1)

with open(os.path.join(here, "README.md"), encoding="utf-8") as f:
    long_description = f.read()

setup(
    name="ligplot3d",
    version=version,
    description="Protein-ligand interactions detected from 3D coordinates",
    long_description=long_description,
    long_description_content_type="text/markdown",
    license="Apache License 2.0",
    packages=find_packages(include=["ligplot3d", "ligplot3d.*"]),
    python_requires=">=3.10",
    install_requires=[
        "numpy",
        "scipy",
        "pandas",
        "rdkit>=2022.09",
        "MDAnalysis>=2.2.0,<3.0",
    ],
    extras_require={
        "tests": ["pytest"],
    },
    entry_points={
        "console_scripts": ["ligplot3d=ligplot3d.command_line:main"],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Topic :: Scientific/Engineering :: Chemistry",
    ],
)
