from setuptools import setup, find_packages
import os

# Read the long description from README.md if it exists
long_description = ""
if os.path.isfile("README.md"):
    with open("README.md", "r", encoding="utf-8") as f:
        long_description = f.read()

setup(
    name='grating_sim',
    version='0.1.0',
    packages=find_packages(include=['grating_sim', 'grating_sim.*']),
    description=(
        'Fourier coefficients of the gravity and Van der Waals phase shifts '
        'imparted on a particle beam by a tilted diffraction grating'
    ),
    long_description=long_description,
    long_description_content_type='text/markdown',
    license='GPLv3',
    keywords=['interferometry', 'diffraction grating', 'Van der Waals', 'gravity', 'Fourier'],

    # These are the runtime dependencies for your package:
    install_requires=[
        'numpy>=1.18.0',
        'numba>=0.50.0',
        'PyYAML>=5.1',
        'matplotlib>=3.0.0',
    ],
    extras_require={
        'test': [
            'pytest>=6.0',
        ],
    },
    entry_points={
        'console_scripts': [
            'grating-sim=grating_sim.cli:main',
        ],
    },

    classifiers=[
        'Development Status :: 3 - Alpha',
        'Intended Audience :: Science/Research',
        'License :: OSI Approved :: GNU General Public License v3 (GPLv3)',
        'Programming Language :: Python :: 3',
        'Topic :: Scientific/Engineering :: Physics',
    ],

    python_requires='>=3.9',
    include_package_data=True,
    zip_safe=False,
)
