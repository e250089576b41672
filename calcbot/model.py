#!/usr/bin/env python3

from sqlalchemy import (
    Column,
    String,
)
from sqlalchemy.orm import declarative_base


Base = declarative_base()


class Config (Base):
    '''
    Stores the configuration values for the application in key value pairs
    '''
    __tablename__ = 'configuration'

    name = Column(
        String(64),
        primary_key=True,
        doc="The setting's name")
    value = Column(
        'setting', String,
        doc="The setting's value")


class Prefix (Base):
    '''
    Stores the prefixes for servers
    '''
    __tablename__ = 'prefixes'

    server = Column(
        String(64),
        primary_key=True,
        doc='The server id for the prefix')
    prefix = Column(
        String(64),
        doc='The prefix for the server')


def load_config(session, defaults):
    '''
    Reads configuration values from the database

    Settings missing from the database are added with their default values
    Returns a dict with the same keys as defaults
    '''
    config = defaults.copy()
    for name in config:
        key = session.get(Config, name)
        if key is not None:
            config[name] = key.value
        else:
            session.add(Config(name=name, value=config[name]))
            session.commit()
    return config
