from setuptools import find_packages, setup

setup(
    name="flexbar",
    version="0.1.0",
    description="Self-adjusting single-line terminal progress bar",
    packages=find_packages(include=["flexbar", "flexbar.*"]),
    python_requires=">=3.10",
    install_requires=[
        "numpy",
        "tracerite",
        "wcwidth",
    ],
    extras_require={"test": ["pytest"]},
    entry_points={"console_scripts": ["flexbar-demo=flexbar.cli:main"]},
)
