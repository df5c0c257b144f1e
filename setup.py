import setuptools

with open('README.md', 'rt') as f:
    long_description = f.read()

setuptools.setup(
    name='ivfp',
    version='0.1.0',
    description='IEEE 1788 numeric functions (mid, rad, wid, mag, mig) for intervals over emulated floating-point formats',
    long_description=long_description,
    long_description_content_type='text/markdown',
    license='MIT',
    python_requires='>=3.8',
    install_requires=['numpy>=1.23.0', 'gmpy2>=2.1.2'],
    extras_require={
        'test': ['pytest>=7.0'],
    },
    packages=['ivfp', 'ivfp.titanic', 'ivfp.arithmetic'],
    classifiers=[
        'Development Status :: 3 - Alpha',
        'Operating System :: POSIX :: Linux',
        'License :: OSI Approved :: MIT License',
    ],
)
