"""Tree-walking interpreter for the Yap language.

Statements execute to a control signal (normal completion, break,
continue or return) which is handed back up the Python call stack.
Loops intercept break and continue, function calls intercept return.
Errors are raised as :class:`~yap.errors.YapError` subclasses and abort
the whole run.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Callable, List, Optional, TextIO

from .ast import (
    Program, Block, FunctionDeclaration, VariableDeclaration, If, For, While,
    Break, Continue, Return, ExpressionStatement, Literal, StringLiteral,
    Identifier, Binary, Logical, Unary, Assignment, Update, Call, Member,
    Array, Node,
)
from .builtin_function import NativeFunction
from .environment import Environment
from .errors import (
    YapTypeError, YapRuntimeError, ArityError,
    ControlSignal, ReturnSignal, BreakSignal, ContinueSignal,
    NORMAL, BREAK, CONTINUE,
)
from .parser import parse_program
from .std import create_global_environment
from .types import (
    UNDEFINED, ArrayVal, NamespaceVal, FunctionValue,
    is_number, is_truthy, loose_equals, strict_equals, to_number, to_string,
    type_name,
)

logger = logging.getLogger(__name__)


def describe(node: Node) -> str:
    """Short source-like name of an expression, for error messages."""
    if isinstance(node, Identifier):
        return node.name
    if isinstance(node, Member):
        if node.computed:
            return f"{describe(node.object)}[...]"
        return f"{describe(node.object)}.{node.property.name}"
    if isinstance(node, Call):
        return f"{describe(node.callee)}(...)"
    return type(node).__name__.lower()


class Interpreter:
    """Core interpreter that executes a Yap AST."""
    def __init__(self, debug_level: int = 0, stdout: Optional[Callable[[], TextIO]] = None,
                 global_env: Optional[Environment] = None):
        self.debug_level = debug_level
        self.global_env = global_env if global_env is not None else create_global_environment(stdout)

    def debug(self, level: int, msg: str, *values: Any):
        # values are rendered only when the level is enabled
        if self.debug_level >= level:
            logger.debug(msg, *(to_string(v) for v in values))

    # Public API
    def run(self, program: Program, env: Optional[Environment] = None) -> Any:
        """Execute a program and return the value of a top-level `return`."""
        if env is None:
            env = self.global_env
        self.debug(1, "run: %s top-level statements", len(program.body))
        try:
            signal = self.execute_block(program.body, env)
        except RecursionError:
            raise YapRuntimeError('maximum call stack size exceeded') from None
        if isinstance(signal, (BreakSignal, ContinueSignal)):
            raise YapRuntimeError(f"'{signal.name}' outside of a loop")
        self.debug(1, "run: finished with %s", signal)
        if isinstance(signal, ReturnSignal):
            return signal.value
        return UNDEFINED

    # Statements

    def execute_block(self, statements: List[Node], env: Environment) -> ControlSignal:
        for stmt in statements:
            signal = self.execute(stmt, env)
            if signal is not NORMAL:
                return signal
        return NORMAL

    def execute(self, node: Node, env: Environment) -> ControlSignal:
        if isinstance(node, ExpressionStatement):
            self.evaluate(node.expr, env)
            return NORMAL
        if isinstance(node, VariableDeclaration):
            value = self.evaluate(node.init, env) if node.init is not None else UNDEFINED
            env.declare(node.name, value)
            self.debug(2, "declare %s = %s", node.name, value)
            return NORMAL
        if isinstance(node, FunctionDeclaration):
            env.declare(node.name, FunctionValue(node.name, node.params, node.body, env))
            self.debug(2, "define function %s(%s)", node.name, ', '.join(node.params))
            return NORMAL
        if isinstance(node, Block):
            return self.execute_block(node.body, env.child())
        if isinstance(node, If):
            test = self.evaluate(node.test, env)
            truthy = is_truthy(test)
            self.debug(3, "if condition %s -> %s", test, truthy)
            if truthy:
                return self.execute(node.consequent, env)
            if node.alternate is not None:
                return self.execute(node.alternate, env)
            return NORMAL
        if isinstance(node, While):
            while is_truthy(self.evaluate(node.test, env)):
                signal = self.execute(node.body, env)
                if isinstance(signal, BreakSignal):
                    break
                if isinstance(signal, ReturnSignal):
                    return signal
            return NORMAL
        if isinstance(node, For):
            # the init binding is shared by every iteration
            loop_env = env.child()
            if isinstance(node.init, VariableDeclaration):
                self.execute(node.init, loop_env)
            elif node.init is not None:
                self.evaluate(node.init, loop_env)
            while node.test is None or is_truthy(self.evaluate(node.test, loop_env)):
                signal = self.execute(node.body, loop_env)
                if isinstance(signal, BreakSignal):
                    break
                if isinstance(signal, ReturnSignal):
                    return signal
                if node.update is not None:
                    self.evaluate(node.update, loop_env)
            return NORMAL
        if isinstance(node, Return):
            value = self.evaluate(node.argument, env) if node.argument is not None else UNDEFINED
            return ReturnSignal(value)
        if isinstance(node, Break):
            return BREAK
        if isinstance(node, Continue):
            return CONTINUE
        raise YapRuntimeError(f"cannot execute {type(node).__name__} node")

    # Expressions

    def evaluate(self, node: Node, env: Environment) -> Any:
        if isinstance(node, Literal):
            return float(node.value)
        if isinstance(node, StringLiteral):
            return node.value
        if isinstance(node, Identifier):
            return env.get(node.name)
        if isinstance(node, Binary):
            left = self.evaluate(node.left, env)
            right = self.evaluate(node.right, env)
            return self.apply_binary_op(node.op, left, right)
        if isinstance(node, Logical):
            left = self.evaluate(node.left, env)
            if node.op == '&&':
                return self.evaluate(node.right, env) if is_truthy(left) else left
            if node.op == '||':
                return left if is_truthy(left) else self.evaluate(node.right, env)
            raise YapRuntimeError(f'unsupported logical operator {node.op}')
        if isinstance(node, Unary):
            return self.apply_unary_op(node.op, self.evaluate(node.operand, env))
        if isinstance(node, Assignment):
            value = self.evaluate(node.value, env)
            return env.set(node.target.name, value)
        if isinstance(node, Update):
            # written postfix, but yields the updated value
            value = to_number(env.get(node.target.name))
            if node.op == '++':
                value += 1
            elif node.op == '--':
                value -= 1
            else:
                raise YapRuntimeError(f'unsupported update operator {node.op}')
            return env.set(node.target.name, value)
        if isinstance(node, Call):
            callee = self.evaluate(node.callee, env)
            args = [self.evaluate(arg, env) for arg in node.args]
            return self.call_function(callee, args, describe(node.callee))
        if isinstance(node, Member):
            target = self.evaluate(node.object, env)
            if node.computed:
                key = self.evaluate(node.property, env)
            else:
                key = node.property.name
            return self.get_member(target, key)
        if isinstance(node, Array):
            return ArrayVal([self.evaluate(el, env) for el in node.elements])
        raise YapRuntimeError(f"cannot evaluate {type(node).__name__} node")

    def call_function(self, func: Any, args: List[Any], name: str = 'value') -> Any:
        if isinstance(func, NativeFunction):
            if func.arity is not None and len(args) != func.arity:
                raise ArityError(f"{func.name} expects {func.arity} arguments but got {len(args)}")
            self.debug(3, "call native %s", func.name)
            return func.fn(args)
        if isinstance(func, FunctionValue):
            if len(args) != len(func.params):
                raise ArityError(
                    f"{func.name} expects {len(func.params)} arguments but got {len(args)}")
            self.debug(3, "call %s(%s)", func.name, ArrayVal(args))
            # lexical scoping: the new frame hangs off the closure, not the caller
            call_env = Environment(parent=func.closure)
            for param, arg in zip(func.params, args):
                call_env.declare(param, arg)
            signal = self.execute_block(func.body.body, call_env)
            if isinstance(signal, ReturnSignal):
                return signal.value
            if isinstance(signal, (BreakSignal, ContinueSignal)):
                raise YapRuntimeError(f"'{signal.name}' outside of a loop in {func.name}")
            return UNDEFINED
        raise YapTypeError(f"{name} is not a function")

    def get_member(self, target: Any, key: Any) -> Any:
        if target is UNDEFINED:
            raise YapTypeError(f"cannot read property '{to_string(key)}' of undefined")
        if isinstance(target, (ArrayVal, str)) and is_number(key):
            items = target.items if isinstance(target, ArrayVal) else target
            index = float(key)
            if index.is_integer() and 0 <= index < len(items):
                return items[int(index)]
            return UNDEFINED
        prop = to_string(key)
        if isinstance(target, ArrayVal):
            return self.array_member(target, prop)
        if isinstance(target, str):
            if prop == 'length':
                return float(len(target))
            return UNDEFINED
        if isinstance(target, NamespaceVal):
            return target.members.get(prop, UNDEFINED)
        return UNDEFINED

    def array_member(self, array: ArrayVal, prop: str) -> Any:
        if prop == 'length':
            return float(len(array.items))
        if prop == 'push':
            def push(args: List[Any]) -> Any:
                array.items.extend(args)
                return float(len(array.items))
            return NativeFunction('push', None, push)
        if prop == 'pop':
            def pop(args: List[Any]) -> Any:
                return array.items.pop() if array.items else UNDEFINED
            return NativeFunction('pop', 0, pop)
        if prop == 'join':
            def join(args: List[Any]) -> Any:
                sep = to_string(args[0]) if args and args[0] is not UNDEFINED else ','
                return sep.join('' if item is UNDEFINED else to_string(item, {id(array)})
                                for item in array.items)
            return NativeFunction('join', None, join)
        if prop == 'indexOf':
            def index_of(args: List[Any]) -> Any:
                for i, item in enumerate(array.items):
                    if strict_equals(item, args[0]):
                        return float(i)
                return -1.0
            return NativeFunction('indexOf', 1, index_of)
        return UNDEFINED

    def apply_unary_op(self, op: str, operand: Any) -> Any:
        if op == '!':
            return not is_truthy(operand)
        if op == '-':
            return -to_number(operand)
        if op == '+':
            return to_number(operand)
        raise YapRuntimeError(f'unsupported unary operator {op}')

    def apply_binary_op(self, op: str, a: Any, b: Any) -> Any:
        if op == '+':
            # strings (and arrays, via their string form) concatenate
            if isinstance(a, (str, ArrayVal)) or isinstance(b, (str, ArrayVal)):
                return to_string(a) + to_string(b)
            return to_number(a) + to_number(b)
        if op == '-':
            return to_number(a) - to_number(b)
        if op == '*':
            x, y = to_number(a), to_number(b)
            if math.isinf(x) and y == 0 or math.isinf(y) and x == 0:
                return math.nan
            return x * y
        if op == '/':
            x, y = to_number(a), to_number(b)
            if y == 0:
                if x == 0 or math.isnan(x):
                    return math.nan
                return math.copysign(math.inf, x) * math.copysign(1.0, y)
            return x / y
        if op == '%':
            x, y = to_number(a), to_number(b)
            if y == 0 or math.isinf(x) or math.isnan(x) or math.isnan(y):
                return math.nan
            if math.isinf(y):
                return x
            return math.fmod(x, y)
        if op == '==':
            return loose_equals(a, b)
        if op == '!=':
            return not loose_equals(a, b)
        if op == '===':
            return strict_equals(a, b)
        if op == '!==':
            return not strict_equals(a, b)
        if op in ('<', '>', '<=', '>='):
            if isinstance(a, str) and isinstance(b, str):
                x, y = a, b
            else:
                x, y = to_number(a), to_number(b)
            if op == '<':
                return x < y
            if op == '>':
                return x > y
            if op == '<=':
                return x <= y
            return x >= y
        raise YapRuntimeError(f'unsupported operator {op} for {type_name(a)} and {type_name(b)}')


def run_program(source: str, debug_level: int = 0,
                stdout: Optional[Callable[[], TextIO]] = None) -> Any:
    """Convenience function to parse and run a Yap program from source."""
    ast_program = parse_program(source)
    interpreter = Interpreter(debug_level=debug_level, stdout=stdout)
    return interpreter.run(ast_program)


def run_file(file_path: str, debug_level: int = 0) -> Interpreter:
    """Parse and run a Yap file, returning the interpreter instance."""
    with open(file_path, 'r', encoding='utf-8') as f:
        source = f.read()
    interpreter = Interpreter(debug_level=debug_level)
    interpreter.run(parse_program(source))
    return interpreter
