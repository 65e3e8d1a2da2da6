"""
Setup script for kmeans-engine package
"""

# Always prefer setuptools over distutils
from setuptools import setup, find_packages
# To use a consistent encoding
from codecs import open
from os import path

here = path.abspath(path.dirname(__file__))

# Get the long description from the relevant file
try:
    with open(path.join(here, 'README.md'), encoding='utf-8') as f:
        long_description = f.read()
        long_description_content_type = 'text/markdown'
except FileNotFoundError:
    long_description = ''
    long_description_content_type = 'text/plain'

# Get the code version
version = {}
with open(path.join(here, "kmeans_engine/version.py")) as fp:
    exec(fp.read(), version)
__version__ = version['__version__']
# now we have a `__version__` variable

setup(
    name='kmeans-engine',
    version=__version__,
    description="Lloyd's algorithm k-means engine for N-dimensional numeric data",
    long_description=long_description,
    long_description_content_type=long_description_content_type,
    license='MIT',
    classifiers=[
        'Development Status :: 4 - Beta',
        'Intended Audience :: Developers',
        'Intended Audience :: Science/Research',
        'Topic :: Scientific/Engineering :: Information Analysis',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python :: 3.9',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
    ],
    keywords='kmeans clustering lloyd unsupervised-learning',
    packages=find_packages(include=['kmeans_engine*']),
    python_requires='>=3.9',
    install_requires=[
        'numpy>=1.17',
        'scikit-learn>=0.24',  # make_blobs for synthetic data, reference KMeans
    ],
    extras_require={
        'test': [
            'pytest',
        ],
    },
)
