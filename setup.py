"""Setup script for the color tracking vision project."""

from setuptools import find_namespace_packages, setup

setup(
    name="color-tracking-vision",
    version="0.1.0",
    description="Per-frame color segmentation and target tracking for a robot webcam",
    author="VIP Research Team",
    packages=find_namespace_packages(include=["src", "src.*"]),
    package_data={"src": ["configs/*.yaml"]},
    python_requires=">=3.10",
    install_requires=[
        "numpy>=2.0.0",
        "opencv-python>=4.12.0",
        "PyYAML>=6.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
            "black>=23.0.0",
            "ruff>=0.1.0",
            "mypy>=1.0.0",
        ],
    },
)
