from setuptools import setup, find_packages

setup(
    name="skillswap",
    version="0.1",
    packages=find_packages(exclude=["tests", "tests.*", "alembic", "alembic.*"]),
    install_requires=[
        "fastapi<0.137",  # 0.137+ registers included routers lazily in app.routes
        "uvicorn",
        "sqlalchemy",
        "psycopg2-binary",
        "python-jose[cryptography]",
        "passlib[bcrypt]",
        "bcrypt<5",  # passlib self-test fails on bcrypt 5
        "pydantic[email]",
        "pydantic-settings",
        "python-dotenv",
        "alembic"
    ],
    extras_require={
        "test": ["pytest", "httpx"],
    },
)
