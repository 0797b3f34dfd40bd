from setuptools import setup, find_packages

setup(
    name="tropipay-mcp",
    version="0.1.0",
    description="A Model Context Protocol server for the TropiPay payments API",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    author="TropiPay MCP Contributors",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "mcp>=1.10.0,<2",
        "anyio>=4.0.0",
        "rich>=10.0.0",
        "python-dotenv>=0.19.0",
        "requests>=2.26.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
            "pytest-asyncio>=0.21.0",
        ],
    },
    python_requires=">=3.10",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Office/Business :: Financial",
    ],
    entry_points={
        "console_scripts": [
            "tropipay-mcp=tropipay_mcp.run:main",
        ],
    },
)
