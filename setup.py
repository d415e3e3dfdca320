#!/usr/bin/python3

from setuptools import setup

setup(name='a2h', version='0.1',
      description='ANSI colored text to HTML converter',
      packages=['a2h'],
      package_data={'a2h': ['templates/*.html', 'templates/*.bash']},
      python_requires='>=3.7',
      install_requires=[
        'docopt',
        'Jinja2',
      ],
      extras_require={
        'test': ['pytest'],
      },
      entry_points={
        'console_scripts': ['a2h = a2h.tool:run'],
      })
