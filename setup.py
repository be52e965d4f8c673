from setuptools import setup, find_packages

setup(
    name="draw_attributes",
    version="0.1.0",
    description="Draw number attribute classification and caching engine",
    author="Lottery Prediction Team",
    author_email="info@lotteryprediction.com",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        # Transport
        "requests>=2.28.0",
        
        # Data processing
        "numpy>=1.21.0",
        "pandas>=1.3.0,<3",
        
        # Utility packages
        "tqdm>=4.62.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "black>=22.0.0",
            "flake8>=5.0.0",
        ],
    },
    python_requires=">=3.8",
    entry_points={
        "console_scripts": [
            "draw-attributes=scripts.main:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
    ],
)
