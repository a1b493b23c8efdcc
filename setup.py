from setuptools import find_packages, setup

setup(
    name="s3-build-cache",
    version="1.0.0",
    packages=find_packages(include=["s3cache", "s3cache.*"]),
    install_requires=[line for line in open("requirements-core.txt").read().splitlines() if line],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    python_requires=">=3.11",
    entry_points={
        "console_scripts": [
            "s3-build-cache=s3cache.cli:main",
        ],
    },
)
