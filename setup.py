from setuptools import setup, find_packages

setup(
    name="workout_mapper",
    version="1.0.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "pandas>=2.0.0",
        "numpy>=1.24.0",
        "plotly>=5.24.0",
        "dash>=2.16.0",
        "dash-bootstrap-components>=1.4.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "workout-mapper=workout_mapper.cli:main",
        ],
    },
    python_requires=">=3.8",
)
