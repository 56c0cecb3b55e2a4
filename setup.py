from setuptools import setup, find_namespace_packages

setup(
    name="accounts-api",
    version="0.1.0",
    packages=find_namespace_packages(include=["accounts", "accounts.*"]),
    python_requires=">=3.9",
    install_requires=[
        "fastapi>=0.100.0",
        "uvicorn>=0.15.0",
        "python-dotenv>=0.19.0",
        "pydantic>=2.0",
        "pydantic-settings>=2.0",
        "email-validator>=2.0",
        "PyMySQL>=1.0.2",
        "redis>=4.0.0",
        "sqlalchemy>=1.4.0",
        "passlib[argon2]>=1.7.4",
        "PyJWT>=2.4.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
            "httpx>=0.23.0",
        ],
    },
)
