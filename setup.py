from setuptools import setup, find_packages
import re

# Read version from ctccalc/__init__.py
with open('ctccalc/__init__.py') as f:
    version = re.search(r'^__version__ = ["\']([^"\']+)["\']', f.read(), re.MULTILINE).group(1)

setup(
    name='ctc-calc',
    version=version,
    packages=find_packages(include=['ctccalc', 'ctccalc.*']),
    install_requires=[
        'PyYAML>=6.0',
        'click>=8.0',
        'pydantic>=2.0.0',
        'rich>=13.0',
    ],
    extras_require={
        'test': [
            'pytest>=7.0',
        ],
    },
    entry_points={
        'console_scripts': [
            'ctc-calc=ctccalc.cli.__main__:main',
        ],
    },
    author='Personal',
    description='Cost-to-company breakdown and assignment tools.',
    python_requires='>=3.10',
)
