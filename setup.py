from __future__ import annotations

from setuptools import find_packages, setup

# pandas is only needed for reading mixed-type CSV records into a DataFrame.
# Keep regular pip installs lightweight.
setup(
    name="scifile",
    version="0.1.0",
    description="Structured-data file helpers (JSON, JSONL, CSV) and piecewise-linear interpolation tables.",
    license="AGPL-3.0-or-later",
    package_dir={"": "src"},
    packages=find_packages("src"),
    python_requires=">=3.10",
    install_requires=["numpy>=1.23"],
    extras_require={
        "dataframe": ["pandas"],
        "test": ["pandas", "pytest"],
    },
    entry_points={"console_scripts": ["scifile=scifile.cli:main"]},
)
