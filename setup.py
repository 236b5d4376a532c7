from setuptools import setup, find_packages

setup(
    name="messagebar",
    version="0.1.0",
    description="Transient success/error message bar with timed auto-hide",
    author="mseibert",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    package_data={"messagebar": ["default.yaml"]},
    python_requires=">=3.10",
    install_requires=[
        "Pillow>=10.1.0",
        "PyYAML>=6.0",
        "python-dotenv>=1.0.0",
        "pyperclip>=1.8.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
            "anyio>=4.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "messagebar-demo=messagebar.main:main",
        ],
    },
)
