'''
Evaluation of arithmetic expressions through postfix notation

An expression is tokenized, converted to postfix with the shunting-yard
algorithm and then reduced on a stack
'''

import logging
import math
import operator
import re
from collections import namedtuple
from types import MappingProxyType

logger = logging.getLogger(__name__)

NUMBER = 'NUMBER'
OPERATOR = 'OPERATOR'
PAREN_OPEN = 'PAREN_OPEN'
PAREN_CLOSE = 'PAREN_CLOSE'

LEFT = 'LEFT'
RIGHT = 'RIGHT'


class Token (namedtuple('Token', ['type', 'value'])):
    __slots__ = ()

    def __str__(self):
        if self.type == NUMBER:
            return '{:g}'.format(self.value)
        return self.value


Operator = namedtuple('Operator', ['precedence', 'associativity', 'function'])


class EquationError (Exception):
    def __init__(self, *args, expression=None):
        super().__init__(*args)
        self.expression = expression


class InvalidCharacter (EquationError):
    def __init__(self, character=None, position=None, *, expression=None):
        super().__init__(character, position, expression=expression)
        self.character = character
        self.position = position


class EmptyExpression (InvalidCharacter):
    pass


class UnbalancedParentheses (EquationError):
    def __init__(self, position=None, *, expression=None):
        super().__init__(position, expression=expression)
        self.position = position


class MalformedPostfix (EquationError):
    pass


class DivisionByZero (EquationError):
    pass


def divide(a, b):
    if b == 0:
        raise DivisionByZero()
    return a / b


def power(a, b):
    '''
    Exponentiation with IEEE-754 results for overflow and domain errors
    '''
    if a == 0 and b < 0:
        raise DivisionByZero()
    try:
        return math.pow(a, b)
    except OverflowError:
        if a < 0 and b % 2 == 1:
            return -math.inf
        return math.inf
    except ValueError:
        # negative base with a fractional exponent
        return math.nan


operators = MappingProxyType({
    '^': Operator(3, RIGHT, power),
    '/': Operator(2, LEFT, divide),
    '*': Operator(2, LEFT, operator.mul),
    '+': Operator(1, LEFT, operator.add),
    '-': Operator(1, LEFT, operator.sub),
})

number = r'-?\d+\.?\d*'


def tokenize(expression, operators=operators):
    '''
    Parses a mathematic expression into tokens

    A minus sign directly in front of a number is part of the number only at
    the start of the expression or after an operator or an opening parenthesis
    '''
    def token(t):
        def callback(scanner, match):
            return t, match
        return callback
    scanner = re.Scanner([
        (r'\s+', None),
        (number, token(NUMBER)),
        (r'|'.join(map(re.escape, operators)), token(OPERATOR)),
        (r'\(', token(PAREN_OPEN)),
        (r'\)', token(PAREN_CLOSE)),
    ])
    out, rest = scanner.scan(expression)
    if rest:
        position = len(expression) - len(rest)
        raise InvalidCharacter(rest[0], position, expression=expression)
    if not out:
        raise EmptyExpression(expression=expression)

    tokens = []
    for type, match in out:
        if type == NUMBER:
            if match.startswith('-') and tokens and tokens[-1].type in (NUMBER, PAREN_CLOSE):
                tokens.append(Token(OPERATOR, '-'))
                match = match[1:]
            tokens.append(Token(NUMBER, float(match)))
        else:
            tokens.append(Token(type, match))
    return tokens


def infix2postfix(tokens, operators=operators):
    '''
    Converts an infix token list to a postfix token list
    '''
    # (position, token) pairs so a stray parenthesis can be reported
    stack = []
    output = []

    for position, item in enumerate(tokens):
        if item.type == NUMBER:
            output.append(item)
        elif item.type == PAREN_OPEN:
            stack.append((position, item))
        elif item.type == PAREN_CLOSE:
            while stack and stack[-1][1].type != PAREN_OPEN:
                output.append(stack.pop()[1])
            if not stack:
                raise UnbalancedParentheses(position)
            stack.pop()
        elif item.type == OPERATOR:
            op = operators[item.value]
            while stack and stack[-1][1].type == OPERATOR:
                top = operators[stack[-1][1].value]
                if top.precedence > op.precedence or \
                        (top.precedence == op.precedence and op.associativity == LEFT):
                    output.append(stack.pop()[1])
                else:
                    break
            stack.append((position, item))
        else:
            raise EquationError('Invalid token: {}'.format(item))

    while stack:
        position, item = stack.pop()
        if item.type == PAREN_OPEN:
            raise UnbalancedParentheses(position)
        output.append(item)

    return output


def evaluate(postfix, operators=operators):
    '''
    Reduces a postfix token list to a single value
    '''
    stack = []

    for item in postfix:
        if item.type == NUMBER:
            stack.append(item.value)
        elif item.type == OPERATOR:
            if len(stack) < 2:
                raise MalformedPostfix('Not enough operands for {}'.format(item.value))
            b, a = stack.pop(), stack.pop()
            stack.append(operators[item.value].function(a, b))
        else:
            raise MalformedPostfix('Unexpected {} in postfix'.format(item.value))

    if len(stack) != 1:
        raise MalformedPostfix('Expected one value, found {}'.format(len(stack)))

    return stack[0]


def solve(expression, operators=operators):
    '''
    Solves an infix expression

    Operators maps each operator symbol to an Operator of
        its precedence (higher binds tighter)
        its associativity (LEFT or RIGHT)
        a binary function to apply to the operands
    Raises a subclass of EquationError from the first stage that fails
    '''
    try:
        infix = tokenize(expression, operators=operators)
        logger.debug('Infix: %s', ' '.join(map(str, infix)))
        postfix = infix2postfix(infix, operators=operators)
        logger.debug('Postfix: %s', ' '.join(map(str, postfix)))
        result = evaluate(postfix, operators=operators)
    except EquationError as e:
        if e.expression is None:
            e.expression = expression
        raise
    logger.debug('Result: %s', result)
    return result


if __name__ == '__main__':
    print(solve(input('Eq: ')))
