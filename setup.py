import setuptools

with open('README.md', 'r') as fh:
    long_description = fh.read()

setuptools.setup(
    name='seglab',
    version='0.1.0',
    author='SegLab Developers',
    description='Python tools for reading SEG-Y seismic data',
    long_description=long_description,
    long_description_content_type='text/markdown',
    packages=setuptools.find_packages(include=['seglab', 'seglab.*']),
    classifiers=[
        'Programming Language :: Python :: 3',
        'License :: OSI Approved :: GNU Affero General Public License v3',
        'Operating System :: OS Independent',
        'Topic :: Scientific/Engineering',
        'Intended Audience :: Science/Research'
    ],
    python_requires='>=3.8',
    install_requires=[
        'setuptools',
        'numpy'
    ],
    extras_require={
        'test': ['pytest']
    }
)
