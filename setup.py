# !/usr/bin/env python

from setuptools import setup, find_packages

setup(
    name='inbox-models',
    packages=find_packages(exclude=['tests', 'tests.*']),
    install_requires=[
      'attrs>=19.1.0',
      'marshmallow>=3.0.0',
      'python-dotenv',
    ],
    extras_require={
      'test': ['pytest'],
    },
    version='0.1.0',
    description='Model layer for the Inbox API',
    author='inbox-models developers',
    license='BSD',
    keywords=['email', 'inbox', 'api'],
    classifiers=[
        'Development Status :: 4 - Beta',
        'Intended Audience :: Developers',
        'Natural Language :: English',
        'License :: OSI Approved :: BSD License',
        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: Implementation :: CPython',
        'Programming Language :: Python :: Implementation :: PyPy',
        'Topic :: Software Development',
    ],
)
