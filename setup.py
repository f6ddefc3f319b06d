""" hdkeychain build script for setuptools.

"""

from setuptools import find_packages, setup  # type: ignore

import hdkeychain

with open("README.md", "r", encoding="ascii") as file_:
    longdescription = file_.read()

setup(
    name=hdkeychain.name,
    version=hdkeychain.__version__,
    license=hdkeychain.__license__,
    author=hdkeychain.__author__,
    author_email=hdkeychain.__author_email__,
    description="BIP32 hierarchical deterministic key derivation",
    long_description=longdescription,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    include_package_data=True,
    install_requires=["dataclasses_json"],
    extras_require={
        "secp256k1": ["btclib_libsecp256k1"],
        "test": ["pytest"],
        "docs": ["sphinx", "sphinx_rtd_theme", "myst_parser"],
    },
    keywords="bitcoin bip32 hd-wallet key-derivation secp256k1 base58",
    python_requires=">=3.8",
    classifiers=[
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Natural Language :: English",
        "Operating System :: OS Independent",
        "Topic :: Security :: Cryptography",
        "Topic :: Software Development :: Libraries :: Python Modules",
    ],
)
