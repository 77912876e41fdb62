from setuptools import setup, find_packages

setup(
    name="vhsa-screening",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "fastapi",
        "uvicorn",
        "sqlalchemy>=2.0",
        "alembic",
        "psycopg2-binary",
        "python-dotenv",
        "pydantic>=2",
        "pydantic-settings>=2.7",
    ],
    extras_require={
        "test": [
            "pytest",
            "httpx",
        ],
    },
)
