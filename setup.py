"""
Setup script for the chart indicator engine.
"""

from setuptools import setup, find_packages
import os

# Read README file
def read_readme():
    if not os.path.exists("README.md"):
        return ""
    with open("README.md", "r", encoding="utf-8") as fh:
        return fh.read()

# Read requirements
def read_requirements():
    requirements = []
    if os.path.exists("requirements.txt"):
        with open("requirements.txt", "r", encoding="utf-8") as fh:
            requirements = [line.strip() for line in fh if line.strip() and not line.startswith("#")]
    return requirements

# Package metadata
setup(
    name="chart-indicators",
    version="1.0.0",
    author="Chart Indicators Team",
    description="Technical indicator engine (SMA, EMA, MACD, RSI, KDJ, Bollinger) for candlestick charts",
    long_description=read_readme(),
    long_description_content_type="text/markdown",
    packages=find_packages(include=["chart_indicators", "chart_indicators.*"]),
    classifiers=[
        "Development Status :: 5 - Production/Stable",
        "Intended Audience :: Developers",
        "Intended Audience :: Financial and Insurance Industry",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Office/Business :: Financial :: Investment",
        "Topic :: Scientific/Engineering :: Information Analysis",
        "Topic :: Software Development :: Libraries :: Python Modules",
    ],
    python_requires=">=3.9",
    install_requires=read_requirements(),
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
            "black>=22.0.0",
            "flake8>=5.0.0",
            "mypy>=1.0.0",
        ],
    },
    include_package_data=True,
    package_data={
        "chart_indicators": ["py.typed"],  # For type checking support
    },
    keywords=[
        "technical-analysis",
        "indicators",
        "trading",
        "candlestick",
        "macd",
        "rsi",
        "kdj",
        "bollinger-bands",
    ],
    zip_safe=False,  # For better compatibility
)
