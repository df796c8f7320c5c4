#!/usr/bin/env python

'''
warcseek setup
'''

from setuptools import setup

setup(
    classifiers=[
        'License :: OSI Approved :: MIT License',
        'Operating System :: OS Independent',
        'Programming Language :: Python :: 3',
        'Topic :: System :: Archiving',
    ],
    description='Read, write and randomly access record-at-time compressed WARC files, with offset indexes',
    entry_points="""
        [console_scripts]
        warcdump=warcseek.warcdump:run
        warcindex=warcseek.warcindex:run
    """,
    name='warcseek',
    packages=['warcseek', 'warcseek.archive'],
    python_requires='>=3.5',
    extras_require={
        'test': ['pytest'],
    },
    version='0.1.0',
)
