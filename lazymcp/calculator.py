# ABOUTME: Arithmetic for the calculator tools: a restricted expression evaluator and fixed operations.
# ABOUTME: Expressions are parsed with ast and walked against a fixed table of constants and functions.

import ast
import math
import operator
from collections.abc import Callable
from enum import Enum

from lazymcp.errors import DomainError, InvalidExpression

Number = int | float


def _sqrt(x: float) -> float:
    if x < 0:
        raise DomainError(f"square root of negative number: {x:g}")
    return math.sqrt(x)


def _log10(x: float) -> float:
    if x <= 0:
        raise DomainError(f"logarithm of non-positive number: {x:g}")
    return math.log10(x)


def _ln(x: float) -> float:
    if x <= 0:
        raise DomainError(f"logarithm of non-positive number: {x:g}")
    return math.log(x)


def _asin(x: float) -> float:
    if not -1 <= x <= 1:
        raise DomainError(f"asin is only defined on [-1, 1], got {x:g}")
    return math.asin(x)


def _acos(x: float) -> float:
    if not -1 <= x <= 1:
        raise DomainError(f"acos is only defined on [-1, 1], got {x:g}")
    return math.acos(x)


def _round(x: float) -> float:
    """Round half away from zero."""
    return math.copysign(math.floor(abs(x) + 0.5), x)


def _divide(a: Number, b: Number) -> float:
    if b == 0:
        raise DomainError("division by zero")
    return a / b


def _modulo(a: Number, b: Number) -> Number:
    """Remainder with the sign of the dividend."""
    if b == 0:
        raise DomainError("modulo by zero")
    if isinstance(a, int) and isinstance(b, int):
        remainder = abs(a) % abs(b)
        return remainder if a >= 0 else -remainder
    return math.fmod(a, b)


def _power(a: Number, b: Number) -> float:
    try:
        result = math.pow(a, b)
    except OverflowError as e:
        raise DomainError("result too large") from e
    except ValueError as e:
        raise DomainError(f"power undefined for {a:g} ^ {b:g}") from e
    return result


CONSTANTS: dict[str, float] = {
    "pi": math.pi,
    "e": math.e,
}

FUNCTIONS: dict[str, Callable[..., Number]] = {
    "sqrt": _sqrt,
    "sin": math.sin,
    "cos": math.cos,
    "tan": math.tan,
    "asin": _asin,
    "acos": _acos,
    "atan": math.atan,
    "log": _log10,
    "ln": _ln,
    "abs": abs,
    "ceil": lambda x: float(math.ceil(x)),
    "floor": lambda x: float(math.floor(x)),
    "round": _round,
    "pow": _power,
}

FUNCTION_ARITY = {name: 2 if name == "pow" else 1 for name in FUNCTIONS}

_BINARY_OPS: dict[type, Callable[[Number, Number], Number]] = {
    ast.Add: operator.add,
    ast.Sub: operator.sub,
    ast.Mult: operator.mul,
    ast.Div: _divide,
    ast.Mod: _modulo,
    ast.Pow: _power,
}

_UNARY_OPS: dict[type, Callable[[Number], Number]] = {
    ast.USub: operator.neg,
    ast.UAdd: operator.pos,
}


def evaluate_expression(expression: str) -> Number:
    """Evaluate an arithmetic expression.

    Supports numbers, ``+ - * / %``, ``^`` or ``**`` for powers, parentheses, the
    constants in CONSTANTS and the functions in FUNCTIONS. Integer arithmetic stays
    integral except for division and powers.

    Raises InvalidExpression for anything that does not parse or is not supported,
    and DomainError when an operation is undefined for its inputs.
    """
    if not expression or not expression.strip():
        raise InvalidExpression("Expression compilation error: expression is empty")
    try:
        tree = ast.parse(expression.replace("^", "**").strip(), mode="eval")
    except SyntaxError as e:
        raise InvalidExpression(f"Expression compilation error: {e.msg}") from e

    try:
        result = _eval_node(tree.body)
    except (ArithmeticError, ValueError) as e:
        # math.* raising on its own, e.g. a float overflow in multiplication
        raise DomainError(f"Expression evaluation error: {e}") from e
    # float multiplication overflows to inf without raising
    if isinstance(result, float) and not math.isfinite(result):
        raise DomainError("Expression evaluation error: result is not a finite number")
    return result


def _eval_node(node: ast.AST) -> Number:
    if isinstance(node, ast.Constant) and type(node.value) in (int, float):
        return node.value
    if isinstance(node, ast.Name):
        if node.id not in CONSTANTS:
            raise InvalidExpression(f"Expression compilation error: unknown name '{node.id}'")
        return CONSTANTS[node.id]
    if isinstance(node, ast.BinOp) and type(node.op) in _BINARY_OPS:
        return _BINARY_OPS[type(node.op)](_eval_node(node.left), _eval_node(node.right))
    if isinstance(node, ast.UnaryOp) and type(node.op) in _UNARY_OPS:
        return _UNARY_OPS[type(node.op)](_eval_node(node.operand))
    if isinstance(node, ast.Call):
        return _eval_call(node)
    raise InvalidExpression(f"Expression compilation error: unsupported syntax {type(node).__name__}")


def _eval_call(node: ast.Call) -> Number:
    if not isinstance(node.func, ast.Name) or node.func.id not in FUNCTIONS:
        name = node.func.id if isinstance(node.func, ast.Name) else type(node.func).__name__
        raise InvalidExpression(f"Expression compilation error: unknown function '{name}'")
    if node.keywords:
        raise InvalidExpression("Expression compilation error: keyword arguments are not supported")
    name = node.func.id
    if len(node.args) != FUNCTION_ARITY[name]:
        raise InvalidExpression(
            f"Expression compilation error: {name}() takes {FUNCTION_ARITY[name]} argument(s), got {len(node.args)}"
        )
    return FUNCTIONS[name](*(_eval_node(arg) for arg in node.args))


def format_number(value: Number) -> str:
    """Integers print as-is, floats with six significant digits."""
    if isinstance(value, int):
        return str(value)
    return f"{value:.6g}"


def calculate(expression: str) -> str:
    """Evaluate an expression and format the result for display."""
    return format_number(evaluate_expression(expression))


class Operation(str, Enum):
    """Operations accepted by the fixed-operation calculator."""

    ADD = "add"
    SUBTRACT = "subtract"
    MULTIPLY = "multiply"
    DIVIDE = "divide"
    MODULO = "modulo"
    POWER = "power"
    SQRT = "sqrt"
    SIN = "sin"
    COS = "cos"
    TAN = "tan"
    ASIN = "asin"
    ACOS = "acos"
    ATAN = "atan"
    LOG = "log"
    LN = "ln"
    ABS = "abs"


BINARY_OPERATIONS: dict[Operation, Callable[[float, float], Number]] = {
    Operation.ADD: operator.add,
    Operation.SUBTRACT: operator.sub,
    Operation.MULTIPLY: operator.mul,
    Operation.DIVIDE: _divide,
    Operation.MODULO: _modulo,
    Operation.POWER: _power,
}


def apply_operation(operation: Operation, x: float, y: float | None = None) -> float:
    """Apply a fixed operation. Binary operations need ``y``; unary ones ignore it."""
    try:
        operation = Operation(operation)
    except ValueError as e:
        raise InvalidExpression(f"unknown operation '{operation}'") from e
    if operation in BINARY_OPERATIONS:
        if y is None:
            raise InvalidExpression(f"operation '{operation.value}' requires both x and y")
        result = BINARY_OPERATIONS[operation](x, y)
    else:
        result = FUNCTIONS[operation.value](x)
    if isinstance(result, float) and not math.isfinite(result):
        raise DomainError(f"operation '{operation.value}' produced a non-finite result")
    return float(result)


def calculate_operation(operation: Operation, x: float, y: float | None = None) -> str:
    """Apply a fixed operation and format the result with two decimals."""
    return f"{apply_operation(operation, x, y):.2f}"
