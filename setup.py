from setuptools import setup

setup(
    name='txoauth2clients',
    version='1.0.0',
    author='Sebastian Scholz',
    author_email='abestanis.gc@gmail.com',
    description='Issues and authenticates the credentials of OAuth2 clients',
    long_description='A module that generates, stores and authenticates OAuth2 client '
                     'credentials with pluggable secret hashing and cascading revocation '
                     'of the tokens and grants of a client.',
    license='MIT',
    keywords=['OAuth2', 'twisted', 'client credentials'],
    url='https://github.com/Abestanis/TxOauth2',
    packages=['txoauth2clients'],
    python_requires='>=3.6',
    install_requires=['twisted'],
    extras_require={
        'bcrypt': [
            'bcrypt',
        ],
        'test': [
            'bcrypt',
        ],
    },
    classifiers=[
        'Development Status :: 4 - Beta',
        'Intended Audience :: Developers',
        'Topic :: Security',
        'License :: OSI Approved :: MIT License',
        'Operating System :: OS Independent',
        'Framework :: Twisted',
        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
    ],
)
