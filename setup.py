from setuptools import setup

setup(
    name="lpexpr",
    version="0.1.0",
    description="Linear expressions, constraints and LP text output",
    license="MIT",
    packages=["lpexpr", "lpexpr.solver"],
    python_requires=">=3.10",
    install_requires=["typeguard", "pydantic>=2", "scipy>=1.9", "numpy"],
    extras_require={"test": ["pytest"]},
)
