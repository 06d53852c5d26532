from setuptools import find_packages
from setuptools import setup


setup(
    name="datadog-tracking-http-client",
    version="1.0.0",
    description="Distributed tracing header propagation and RUM resource tracking for httpx clients",
    license="Apache-2.0",
    packages=find_packages(exclude=["tests*"]),
    python_requires=">=3.8",
    zip_safe=False,
    install_requires=[
        "attrs>=20",
        "httpx>=0.24",
        "pydantic>=2",
        "pydantic-settings>=2",
    ],
    extras_require={
        "test": [
            "mock",
            "pytest",
            "pytest-asyncio",
        ],
    },
    classifiers=[
        "Programming Language :: Python",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
)
