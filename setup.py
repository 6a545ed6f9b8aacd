from setuptools import setup, find_packages

setup(
    name="parpass",
    version="0.1.0",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    package_data={"parpass": ["py.typed"]},
    python_requires=">=3.10",
    install_requires=[
        'requests>=2.31.0',
        'urllib3>=2.0.0',
        'PyYAML>=6.0',
        'tabulate>=0.9.0',
        'typing_extensions>=4.7.0',
        'tzdata'
    ],
    extras_require={
        'test': [
            'pytest>=7.4.0'
        ]
    },
    entry_points={
        'console_scripts': [
            'parpass=parpass.cli:main'
        ]
    }
)
