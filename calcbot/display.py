'''
Calculator display state for a single user
'''

import math

from .util import equations

default_precision = 8

# key value -> label shown on the display
keys = {c: c for c in '0123456789.+-*/^()'}
keys['*'] = '×'
keys['/'] = '÷'

# labels accepted in place of key values
labels = {label: value for value, label in keys.items()}
labels['−'] = '-'


def round_result(value, precision=default_precision):
    if not math.isfinite(value):
        return value
    value = round(value, precision)
    # no negative zero
    return value + 0.0


def format_result(value, precision=default_precision):
    '''
    Formats a value for display without trailing zeros
    '''
    if math.isnan(value):
        return 'nan'
    if math.isinf(value):
        return 'inf' if value > 0 else '-inf'
    text = '{:.{}f}'.format(round_result(value, precision), precision)
    if '.' in text:
        text = text.rstrip('0').rstrip('.')
    if text == '-0':
        text = '0'
    return text


class Display:
    '''
    The expression being typed and the last result

    expression holds the key values that get evaluated
    text holds the matching labels that are shown
    '''

    def __init__(self, precision=default_precision):
        self.precision = precision
        self.expression = ''
        self.text = ''
        self.result = 0.0
        self.shown = False

    def reset(self, initial=''):
        self.expression = initial
        self.text = initial
        self.shown = False

    def press(self, keys_pressed):
        '''
        Appends keys to the expression

        If a result is shown the expression restarts from that result
        '''
        values = []
        for key in keys_pressed:
            if key.isspace():
                continue
            if key in keys:
                values.append(key)
            elif key in labels:
                values.append(labels[key])
            else:
                raise ValueError('Not a calculator key: {}'.format(key))

        if self.shown:
            if math.isfinite(self.result):
                self.reset(format_result(self.result, self.precision))
            else:
                self.reset()

        for value in values:
            self.expression += value
            self.text += keys[value]

    def backspace(self):
        self.shown = False
        self.expression = self.expression[:-1]
        self.text = self.text[:-1]

    def clear(self):
        self.reset()

    def evaluate(self):
        '''
        Solves the expression and shows the rounded result
        '''
        result = equations.solve(self.expression)
        self.result = round_result(result, self.precision)
        self.shown = True
        return self.result

    def enter(self, expression):
        '''
        Solves a whole expression and shows it with its result

        Labels are read as their key values
        The display only changes when the expression can be solved
        '''
        expression = ''.join(labels.get(c, c) for c in expression)
        result = equations.solve(expression)
        self.expression = expression
        self.text = ''.join(keys.get(c, c) for c in expression)
        self.result = round_result(result, self.precision)
        self.shown = True
        return self.result

    @property
    def output(self):
        '''
        The displayed result, empty while no result is shown
        '''
        if not self.shown:
            return ''
        return format_result(self.result, self.precision)

    def __str__(self):
        if self.shown:
            return '{}\n= {}'.format(self.text, self.output)
        return self.text
