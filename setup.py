from setuptools import setup, find_packages

setup(
    name='epigrid',
    version='0.0.0',
    description="Stochastic cellular automaton for contagion spread on a population grid",
    package_dir={'': '.'},
    packages=find_packages('.', include=['epigrid', 'epigrid.*']),
    install_requires=[
        'numpy',
        'pandas',
        'pyyaml',
        'h5py>=3'
    ],
    extras_require={
        'test': ['pytest']
    }
)
