"""Packaging information for cachewarm."""

import sys

import setuptools

from cachewarm.constants import VERSION

if sys.version_info[:3] < (3, 8, 0):
    print("cachewarm requires Python 3.8 to run.")
    sys.exit(1)

install_requires = [
    "rich>=12.0.0",
]

extras_require = {
    "dev": [
        "flake8>=3.7.9",
        "flake8-docstrings>=1.5.0",
        "flake8-import-order>=0.18.1",
        "black>=19.10b0",
        "mypy>=0.770",
        "pytest>=5.4.1",
        "pytest-cov>=2.8.1",
    ]
}


def _long_description():
    with open("README.md") as f:
        return f.read()


setuptools.setup(
    name="cachewarm",
    version=VERSION,
    description="Build cache for target directories/files of a mounted file system.",
    long_description=_long_description(),
    long_description_content_type="text/markdown",
    license="Apache",
    packages=setuptools.find_packages(exclude=["cachewarm.tests", "cachewarm.tests.*"]),
    entry_points={"console_scripts": ["cachewarm = cachewarm.__main__:main"]},
    install_requires=install_requires,
    extras_require=extras_require,
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Environment :: Console",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Intended Audience :: System Administrators",
        "License :: OSI Approved :: Apache Software License",
        "Operating System :: POSIX :: Linux",
        "Topic :: System :: Filesystems",
    ],
    python_requires=">=3.8",
)
