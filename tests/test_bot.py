'''
Tests for the bot's error reporting and server prefixes.
'''

import asyncio
from contextlib import closing
from types import SimpleNamespace

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

import calcbot
from calcbot import model as m
from calcbot.cogs import util
from calcbot.util import equations


def caught(expression):
    with pytest.raises(equations.EquationError) as info:
        equations.solve(expression)
    return info.value


class TestEquationMessage:
    '''Tests for describing evaluation failures.'''

    def test_invalid_character(self):
        message = calcbot.equation_message(caught('1+a'))
        assert message == 'Invalid character `a` at position 3 in `1+a`'

    def test_empty(self):
        assert calcbot.equation_message(caught('')) == 'There is nothing to evaluate'

    def test_unbalanced(self):
        assert calcbot.equation_message(caught('(1+2')) == 'Unbalanced parentheses in `(1+2`'

    def test_malformed(self):
        assert calcbot.equation_message(caught('1+')) == 'Missing a number or an operator in `1+`'

    def test_division_by_zero(self):
        assert calcbot.equation_message(caught('5/0')) == 'Division by zero in `5/0`'


class TestCommandError:
    '''Tests for the command error handler.'''

    def test_equation_error(self, ctx):
        asyncio.run(calcbot.on_command_error(ctx, caught('5/0')))
        assert ctx.sent == ['Invalid expression: Division by zero in `5/0`']

    def test_bot_error(self, ctx):
        asyncio.run(calcbot.on_command_error(ctx, util.BotError('Nothing to delete')))
        assert ctx.sent == ['Error: Nothing to delete']

    def test_value_error(self, ctx):
        asyncio.run(calcbot.on_command_error(ctx, ValueError('Not a calculator key: %')))
        assert ctx.sent == ['Invalid parameter: Not a calculator key: %']

    def test_unknown_error_is_raised(self, ctx):
        ctx.command = None
        with pytest.raises(KeyError):
            asyncio.run(calcbot.on_command_error(ctx, KeyError('x')))
        assert ctx.sent == ["Error: 'x'"]


class TestExtensions:
    '''Tests for the command categories.'''

    def test_calculator_loaded(self):
        assert calcbot.extensions == ['calculator']
        assert calcbot.defaults['precision'] == '8'


@pytest.fixture
def Session():
    engine = create_engine('sqlite://')
    m.Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)


@pytest.fixture
def guild_ctx(ctx, Session):
    ctx.guild = SimpleNamespace(id=7)
    ctx.session = Session()
    yield ctx
    ctx.session.close()


def stored_prefixes(Session):
    with closing(Session()) as session:
        return {p.server: p.prefix for p in session.query(m.Prefix)}


def message(content, guild=None):
    return SimpleNamespace(content=content, guild=guild)


class TestPrefixes:
    '''Tests for per-server command prefixes.'''

    def test_set_prefix(self, guild_ctx, Session):
        asyncio.run(calcbot.setprefix.callback(guild_ctx, '!'))
        assert stored_prefixes(Session) == {'7': '!'}
        assert guild_ctx.sent == ['Prefix changed to `!`']

    def test_change_prefix(self, guild_ctx, Session):
        asyncio.run(calcbot.setprefix.callback(guild_ctx, '!'))
        asyncio.run(calcbot.setprefix.callback(guild_ctx, '$'))
        assert stored_prefixes(Session) == {'7': '$'}

    def test_reset_prefix_deletes_row(self, guild_ctx, Session):
        asyncio.run(calcbot.setprefix.callback(guild_ctx, '!'))
        asyncio.run(calcbot.setprefix.callback(guild_ctx, calcbot.default_prefix))
        assert stored_prefixes(Session) == {}
        assert guild_ctx.sent[-1] == 'Prefix changed to `;`'

    def test_direct_message_uses_default(self, Session):
        bot = SimpleNamespace(user=SimpleNamespace(mention='<@42>'), Session=Session)
        assert asyncio.run(calcbot.get_prefix(bot, message('!calc 1'))) == calcbot.default_prefix

    def test_stored_prefix(self, Session):
        with closing(Session()) as session:
            session.add(m.Prefix(server='7', prefix='!'))
            session.commit()
        bot = SimpleNamespace(user=SimpleNamespace(mention='<@42>'), Session=Session)
        guild = SimpleNamespace(id=7)
        assert asyncio.run(calcbot.get_prefix(bot, message('!calc 1', guild))) == '!'
        other = SimpleNamespace(id=8)
        assert asyncio.run(calcbot.get_prefix(bot, message('!calc 1', other))) == calcbot.default_prefix

    def test_mention_prefix(self, Session):
        bot = SimpleNamespace(user=SimpleNamespace(mention='<@42>'), Session=Session)
        guild = SimpleNamespace(id=7)
        assert asyncio.run(calcbot.get_prefix(bot, message('<@42> calc 1', guild))) == '<@42> '
