"""
Setup script for Host Monitor.

Usage:
    pip install -e .[test]
    host-monitor
"""
from setuptools import setup

setup(
    name='host-monitor',
    version='1.0.0',
    description='Tracks hosts on the local network and reports presence changes',
    python_requires='>=3.8',
    packages=[
        'config',
        'monitor',
    ],
    py_modules=['host_monitor'],
    install_requires=[
        'psutil',
    ],
    extras_require={
        'test': [
            'pytest',
        ],
    },
    entry_points={
        'console_scripts': [
            'host-monitor=host_monitor:main',
        ],
    },
)
