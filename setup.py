from setuptools import setup, find_packages

setup(
    name="storelens",
    version="1.2.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "pandas>=2.0",
        "matplotlib>=3.7",
        "seaborn>=0.12",
        "python-dateutil>=2.8",
        "PyYAML>=6.0",
        "openpyxl>=3.1",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "storelens=storelens.cli:main",
        ],
    },
    python_requires=">=3.8",
    description="Store lifecycle funnel, order heatmap and install cohort reporting engine",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
    ]
)
