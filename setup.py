from setuptools import setup, find_packages

setup(
    name="hostsan",
    version="1.0.0",
    description="Host normalization and public-suffix boundary detection for URL/host lists",
    packages=find_packages(include=["hostsan", "hostsan.*"]),
    install_requires=[
        "idna>=3.7",
        "requests>=2.31.0",
        "validators>=0.28.0",
        "pyyaml>=6.0.1",
        "click>=8.2.1",
        "rich>=13.0.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "hostsan=hostsan.cli:cli",
        ],
    },
    python_requires=">=3.10",
)
