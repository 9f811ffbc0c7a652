from setuptools import setup, find_packages
import clustfit


def _load_readme():
    with open("README.md", "r") as file:
        readme = file.read()
    return readme


setup(
    name='clustfit',
    version=clustfit.__version__,
    packages=find_packages(exclude=["*tests"]),
    license='BSD-3-Clause License',
    description='kd-tree accelerated k-means and X-means clustering',
    long_description=_load_readme(),
    long_description_content_type="text/markdown",
    python_requires='>=3.10',
    install_requires=['numpy',
                      'scipy',
                      'scikit-learn>=1.6'],
    extras_require={
        'test': ['pytest']
    }
)
