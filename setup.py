from pathlib import Path

from setuptools import find_packages, setup

NAME = "ublcsv"
README = Path("README.md")

setup(
    name=NAME,
    version="0.1.0",
    description="Convert UBL e-invoice XML documents into linked invoice, party and line tables.",
    long_description=README.read_text(encoding="utf-8") if README.exists() else "",
    long_description_content_type="text/markdown",
    python_requires=">=3.10",
    package_dir={"": "src"},
    packages=find_packages("src"),
    install_requires=[
        "lxml>=4.9",
        "openpyxl>=3.1",
        "pandas>=1.5",
    ],
    extras_require={
        "test": ["pytest>=7"],
    },
    entry_points={
        "console_scripts": [
            "ublcsv=ublcsv.cli:main",
        ],
    },
)
