from setuptools import setup, find_namespace_packages


setup(
    name="wastewater-hospitalizations",
    version="0.1",
    description=(
        "Aligns COVID-NET hospitalization rates with NWSS wastewater viral activity levels "
        "and reports their correlation."
    ),
    python_requires=">=3.9",
    install_requires=[
        "Click>=8.0",
        "matplotlib",
        "numpy",
        "pandas>=2.0",
        "pydantic>=2.0",
        "scipy>=1.9",
        "structlog>=21.2",
    ],
    extras_require={"test": ["pytest>=7.0"]},
    entry_points="""
        [console_scripts]
        wastewater-report=run:entry_point
    """,
    package_data={
        # Package data suffixes to include when installing from git:
        "": ["*.csv"]
    },
    packages=find_namespace_packages(include=["cli", "datapublic", "libs", "libs.*"]),
    py_modules=["run"],
)
