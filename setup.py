from setuptools import setup, find_packages

import os

install_requires = [
    "colorama",
    "packageurl-python",
    "pyyaml",
    "python-dateutil",
    "stevedore>1.20.0",
    "tomlkit",
    "typeguard>=4",
]

extras_require = {"test": ["pytest"]}

# Get openvex version from the VERSION file.
version_file = os.path.join(os.path.dirname(__file__), "VERSION")
with open(version_file) as f:
    openvex_version = f.read().strip()

with open(os.path.join(os.path.dirname(__file__), "README.md")) as f:
    long_description = f.read()

setup(
    name="openvex",
    version=openvex_version,
    description="OpenVEX documents and canonical document identification",
    long_description=long_description,
    long_description_content_type="text/markdown",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Security",
    ],
    python_requires=">=3.9",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    package_data={"openvex": ["py.typed"]},
    install_requires=install_requires,
    extras_require=extras_require,
    entry_points={
        "openvex.id_generator": [
            "canonical = openvex.canonical:CanonicalDocumentIdGenerator",
        ],
        "console_scripts": ["openvex = openvex.cli:main"],
    },
)
