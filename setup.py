from setuptools import setup, find_namespace_packages

setup(
    name="showenv",
    version="1.0.0",
    description="argparse usage help with pluggable sections, including an Environment Variables section",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["showenv*"]),
    install_requires=[],
    extras_require={
        "test": ["pytest>=7", "pytest-cov"],
    },
    entry_points={
        "console_scripts": [
            "showenv=showenv.cli:main",
        ],
    },
    classifiers=[
        "Development Status :: 5 - Production/Stable",
        "Intended Audience :: Developers",
        "Environment :: Console",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    python_requires=">=3.10",
)
