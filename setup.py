from setuptools import setup, find_namespace_packages

setup(
    name="golftrack",
    version="0.1.0",
    description="GPS shot tracking and shot analytics for golf rounds",
    author="GolfTrack",
    packages=find_namespace_packages(include=["golftrack", "golftrack.*"]),
    package_data={"golftrack.database": ["schema.sql"]},
    python_requires=">=3.11",
    install_requires=[
        "PyQt6>=6.6.0",
        "numpy>=1.26.0",
    ],
    extras_require={
        "test": ["pytest>=7.4.0", "pytest-qt>=4.2.0"],
    },
    entry_points={
        "console_scripts": [
            "golftrack=golftrack.main:main",
        ],
    },
)
