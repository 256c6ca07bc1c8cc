# setup.py
from setuptools import setup, find_packages

setup(
    name="discrete_pid",
    version="0.1.0",
    description="Discrete-time PID controller with sample-rate gain scaling and integral anti-windup",
    author="Kayode Olalere",
    author_email="kayode.olalere@example.com",
    packages=find_packages(exclude=["tests", "tests.*", "benchmarks", "benchmarks.*"]),
    install_requires=[
        'numpy>=1.21.0',
        'scipy>=1.7.0',
        'matplotlib>=3.4.0'
    ],
    extras_require={
        'test': ['pytest>=7.0']
    },
    python_requires='>=3.8',
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ]
)
