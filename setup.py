#!/usr/bin/env python3

from setuptools import setup

setup(
    name="lexsolve",
    version="0.1",
    description=("Play, solve and analyze a word-guessing game like Wordle"),
    long_description=open('README.md').read(),
    long_description_content_type='text/markdown',
    license='GPL v3 or later',
    python_requires='>=3.7',
    install_requires=open('requirements.txt').readlines(),
    extras_require={
        'unidecode': ['unidecode'],
        'test': open('requirements-test.txt').readlines(),
    },
    packages=["lexsolve"],
    entry_points={'console_scripts': ['lexsolve=lexsolve.__main__:main']},
    classifiers=[
        'Environment :: Console',
        'Topic :: Games/Entertainment :: Puzzle Games',
        'Operating System :: POSIX',
        'License :: OSI Approved :: GNU General Public License v3 or later (GPLv3+)',
    ],
)
