import setuptools

setuptools.setup(
    name="confz",
    version="0.1.0",
    description="layered configuration and typed command line options",
    license="Apache Software License",
    packages=setuptools.find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.6",
    extras_require={
        "test": ["pytest"],
    },
)
