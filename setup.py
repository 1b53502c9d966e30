from setuptools import setup, find_packages

setup(
    name="geneopt",
    version="0.1.0",
    packages=find_packages(exclude=["tests"]),
    include_package_data=True,
    install_requires=[
        "click>=8.0.0",
        "numpy>=1.20.0",
        "matplotlib>=3.4.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "geneopt=geneopt.cli.commands:main",
        ],
    },
    python_requires=">=3.9",
    description="A genetic optimizer for fixed-length real-valued vectors",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Science/Research",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
    ],
)
