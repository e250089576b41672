from collections import OrderedDict

from discord.ext import commands

from . import util
from .. import display

# displays kept before the least recently used is dropped
max_displays = 1000


class CalculatorCog (util.Cog):
    def __init__(self, bot):
        super().__init__(bot)
        self.displays = OrderedDict()

    def get_display(self, ctx):
        '''
        Gets the display of the user in the current channel
        '''
        key = (ctx.channel.id, ctx.author.id)
        if key in self.displays:
            self.displays.move_to_end(key)
        else:
            precision = int(self.bot.config.get('precision') or display.default_precision)
            self.displays[key] = display.Display(precision=precision)
            if len(self.displays) > max_displays:
                self.displays.popitem(last=False)
        return self.displays[key]

    async def show(self, ctx, screen):
        await util.send_embed(ctx, author=ctx.author, fields=[
            ('Expression', '`{}`'.format(screen.text or ' ')),
            ('Result', '`{}`'.format(screen.output or ' ')),
        ])

    @commands.group('calc', aliases=['c'], invoke_without_command=True)
    async def group(self, ctx, *, expression: str):
        '''
        Evaluates an arithmetic expression
        The result replaces the last result of your calculator

        Parameters:
        [expression*] the expression to evaluate

        Operations from highest precedence to lowest:

        ^ : exponentiation, grouped right to left

        * : multiplication
        / : division

        + : addition
        - : subtraction

        A minus sign in front of a number negates it at the start of the
        expression, after an operator or after an opening parenthesis
        The labels `×` `÷` `−` may be used for `* / -`
        '''
        expression = util.strip_quotes(expression)

        screen = self.get_display(ctx)
        screen.enter(expression)
        await util.send_embed(ctx, description='`{}` = {}'.format(expression, screen.output))

    @group.command(aliases=['type', 'p'])
    async def press(self, ctx, *, keys: str):
        '''
        Presses keys on your calculator

        Parameters:
        [keys*] the keys to press
            digits, `.`, `+ - * / ^ ( )` and the labels `×` `÷` `−`
            Pressing a key while a result is shown continues from that result
        '''
        screen = self.get_display(ctx)
        screen.press(util.strip_quotes(keys))
        await self.show(ctx, screen)

    @group.command(aliases=['backspace', 'bksp'], ignore_extra=False)
    async def back(self, ctx):
        '''
        Deletes the last key pressed on your calculator
        '''
        screen = self.get_display(ctx)
        if not screen.expression:
            raise util.BotError('Nothing to delete')
        screen.backspace()
        await self.show(ctx, screen)

    @group.command(aliases=['ac'], ignore_extra=False)
    async def clear(self, ctx):
        '''
        Clears your calculator
        '''
        screen = self.get_display(ctx)
        screen.clear()
        await self.show(ctx, screen)

    @group.command('eval', aliases=['equals', '='], ignore_extra=False)
    async def equals(self, ctx):
        '''
        Evaluates the expression on your calculator
        '''
        screen = self.get_display(ctx)
        screen.evaluate()
        await self.show(ctx, screen)

    @group.command('show', ignore_extra=False)
    async def check(self, ctx):
        '''
        Shows your calculator
        '''
        await self.show(ctx, self.get_display(ctx))


async def setup(bot):
    await bot.add_cog(CalculatorCog(bot))
