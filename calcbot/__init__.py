'''Calculator bot for discord

Evaluates arithmetic expressions and keeps a calculator for every user

Note:
Any parameter value that has spaces in it needs to be wrapped in quotes "
Parameters marked with a * may omit the quotes

Certain commands are only usable by administrators
'''

import re
import logging
from collections import OrderedDict
from contextlib import closing

import discord
from discord.ext import commands
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.exc import IntegrityError

from . import display
from . import model as m
from .cogs.util import BotError
from .util import equations

logger = logging.getLogger(__name__)

default_prefix = ';'


async def get_prefix(bot: commands.Bot, message: discord.Message):
    match = re.match(r'^({}\s+)'.format(re.escape(bot.user.mention)), message.content)
    if match:
        return match.group(1)
    if message.guild is None:
        return default_prefix
    with closing(bot.Session()) as session:
        item = session.get(m.Prefix, str(message.guild.id))
        prefix = default_prefix if item is None else item.prefix
    return prefix


intents = discord.Intents.default()
intents.message_content = True

bot = commands.Bot(
    command_prefix=get_prefix,
    description=__doc__,
    intents=intents)


@bot.event
async def setup_hook():
    '''
    Loads the command categories
    '''
    for extension in extensions:
        await bot.load_extension(prefix + extension)


@bot.event
async def on_ready():
    '''
    Sets up the bot
    '''
    logger.info('Logged in as %s (%s)', bot.user.name, bot.user.id)
    game = 'Type `@{} help` for command list'.format(bot.user.name)
    if bot.config['url']:
        game = bot.config['url'] + ' | ' + game
    await bot.change_presence(activity=discord.Game(name=game))


@bot.before_invoke
async def before_any_command(ctx):
    '''
    Set up database connection
    '''
    ctx.session = bot.Session()


@bot.after_invoke
async def after_any_command(ctx):
    '''
    Tear down database connection
    '''
    ctx.session.close()
    ctx.session = None


def equation_message(error: equations.EquationError):
    '''
    Describes why an expression could not be evaluated
    '''
    if isinstance(error, equations.EmptyExpression):
        message = 'There is nothing to evaluate'
    elif isinstance(error, equations.InvalidCharacter):
        message = 'Invalid character `{}` at position {}'.format(error.character, error.position + 1)
    elif isinstance(error, equations.UnbalancedParentheses):
        message = 'Unbalanced parentheses'
    elif isinstance(error, equations.MalformedPostfix):
        message = 'Missing a number or an operator'
    elif isinstance(error, equations.DivisionByZero):
        message = 'Division by zero'
    else:
        message = 'Could not evaluate'
    if error.expression:
        message += ' in `{}`'.format(error.expression)
    return message


@bot.event
async def on_command_error(ctx, error: Exception):
    if (isinstance(error, commands.CommandInvokeError)):
        error = error.original

    if isinstance(error, commands.NoPrivateMessage):
        message = 'This command can only be used in a server'
    elif isinstance(error, commands.CheckFailure):
        message = 'Error: You do not meet the requirements to use this command'
    elif isinstance(error, commands.CommandNotFound):
        if error.args:
            message = error.args[0]
        else:
            message = 'Error: command not found'
    elif isinstance(error, commands.BadArgument):
        message = '{}\nSee the help text for valid parameters'.format(error)
    elif isinstance(error, commands.MissingRequiredArgument):
        message = 'Missing parameter: {}\nSee the help text for valid parameters'.format(error.param.name)
    elif isinstance(error, commands.TooManyArguments):
        message = 'Too many parameters\nSee the help text for valid parameters'
    elif isinstance(error, equations.EquationError):
        message = 'Invalid expression: {}'.format(equation_message(error))
    elif isinstance(error, BotError):
        message = 'Error: {}'.format(error)
    elif isinstance(error, ValueError):
        if error.args:
            message = 'Invalid parameter: {}'.format(error.args[0])
        else:
            message = 'Invalid parameter'
    else:
        message = 'Error: {}'.format(error)
        await ctx.send(message)
        logger.error('Unhandled error in %s', ctx.command, exc_info=error)
        raise error

    await ctx.send(message)


# ----#-   Commands


@bot.command(ignore_extra=False)
@commands.guild_only()
@commands.has_permissions(administrator=True)
async def setprefix(ctx, prefix: str = default_prefix):
    '''
    Sets the prefix for the server

    Parameters:
    [prefix] the new prefix for the server
        leave blank to reset
    '''
    guild_id = str(ctx.guild.id)
    item = ctx.session.get(m.Prefix, guild_id)
    if prefix == default_prefix:
        if item is not None:
            ctx.session.delete(item)
    else:
        if item is None:
            item = m.Prefix(server=guild_id)
            ctx.session.add(item)
        item.prefix = prefix
    try:
        ctx.session.commit()
    except IntegrityError:
        ctx.session.rollback()
        raise BotError('Could not change prefix, an unknown error occured')
    else:
        await ctx.send('Prefix changed to `{}`'.format(prefix))


prefix = __name__ + '.cogs.'
extensions = [
    'calculator',
]


# ----#-


defaults = OrderedDict([
    ('token', None),
    ('url', None),
    ('precision', str(display.default_precision)),
])


def main(database: str):
    engine = create_engine(database)
    m.Base.metadata.create_all(engine)
    bot.Session = sessionmaker(bind=engine)
    with closing(bot.Session()) as session:
        bot.config = m.load_config(session, defaults)

    bot.run(bot.config['token'], log_handler=None)
