from setuptools import find_packages, setup


setup(
    name="gerberforge",
    version="0.1.0",
    description="Compile 2D shapes and vector text into Gerber (RS-274X) and Excellon files",
    package_dir={"": "src"},
    packages=find_packages("src"),
    install_requires=[
        "matplotlib>=3.5",
        "numpy",
        "shapely>=2.0",
    ],
    extras_require={
        "test": [
            "pytest",
            "pcb-tools==0.1.6",
        ],
    },
    python_requires=">=3.10",
    entry_points={
        "console_scripts": [
            "gerberforge=gerberforge.cli:main",
        ]
    },
)
