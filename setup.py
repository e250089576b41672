#!/usr/bin/env python3

from setuptools import setup, find_packages

requires = [
    "discord.py (>=2.0,<3.0)",
    "sqlalchemy (>=1.4,<3.0)",
]

extras = {
    "postgres": ["psycopg2-binary (>=2.7,<3.0)"],
    "test": ["pytest"],
}

setup(name='Calc-bot',
      version='1.0.0',
      description='Discord bot for evaluating arithmetic expressions',
      python_requires='>=3.8',
      install_requires=requires,
      extras_require=extras,
      scripts=['calc-bot.py'],
      packages=find_packages(exclude=['tests']))
