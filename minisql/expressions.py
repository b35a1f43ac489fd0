"""Expression trees evaluated against rows.

A row is any indexable sequence of field values, with ``None`` standing for
SQL NULL. Boolean results (from comparisons and logic operators) are integer
fields: 1 for true, 0 for false and ``None`` for an unknown result.
"""

import operator
from abc import ABC, abstractmethod
from enum import Enum


class TypeId(Enum):
    INVALID = 0
    INT = 1
    FLOAT = 2
    CHAR = 3


class CmpBool(Enum):
    FALSE = 0
    TRUE = 1
    NULL = 2

    @classmethod
    def of(cls, flag):
        return cls.TRUE if flag else cls.FALSE


class ExpressionType(Enum):
    LOGIC = 0
    COMPARISON = 1
    COLUMN = 2
    CONSTANT = 3


class LogicType(Enum):
    AND = 0
    OR = 1


def _as_field(result):
    """Turn a three-valued comparison result into an integer field."""
    if result is CmpBool.NULL:
        return None
    return result.value


def _as_cmp_bool(value):
    if value is None:
        return CmpBool.NULL
    return CmpBool.of(value == 1)


def _infer_type(value):
    if value is None:
        return TypeId.INVALID
    if isinstance(value, bool):
        return TypeId.INT
    if isinstance(value, int):
        return TypeId.INT
    if isinstance(value, float):
        return TypeId.FLOAT
    if isinstance(value, (str, bytes)):
        return TypeId.CHAR
    raise TypeError(f"cannot infer a column type for {value!r}")


class AbstractExpression(ABC):
    """Node of an expression tree with ordered children and a result type."""

    def __init__(self, children, return_type, expression_type):
        self.children = tuple(children)
        self.return_type = return_type
        self.expression_type = expression_type

    def child_at(self, index):
        return self.children[index]

    @abstractmethod
    def evaluate(self, row):
        """Value of the expression for one row."""

    @abstractmethod
    def evaluate_join(self, left_row, right_row):
        """Value of the expression for a pair of joined rows."""


class ColumnValueExpression(AbstractExpression):
    """Reference to a column of the left (row_idx 0) or right row of a join."""

    def __init__(self, row_idx, col_idx, return_type):
        super().__init__((), return_type, ExpressionType.COLUMN)
        self.row_idx = row_idx
        self.col_idx = col_idx

    def evaluate(self, row):
        return row[self.col_idx]

    def evaluate_join(self, left_row, right_row):
        row = left_row if self.row_idx == 0 else right_row
        return row[self.col_idx]


class ConstantValueExpression(AbstractExpression):
    """A fixed value; its type is inferred unless given."""

    def __init__(self, value, return_type=None):
        if return_type is None:
            return_type = _infer_type(value)
        super().__init__((), return_type, ExpressionType.CONSTANT)
        self.value = value

    def evaluate(self, row):
        return self.value

    def evaluate_join(self, left_row, right_row):
        return self.value


_ORDERED_OPERATORS = {
    "=": operator.eq,
    "<>": operator.ne,
    "<": operator.lt,
    "<=": operator.le,
    ">": operator.gt,
    ">=": operator.ge,
}
_NULL_TESTS = {
    "is": lambda value: value is None,
    "not": lambda value: value is not None,
}


class ComparisonExpression(AbstractExpression):
    """Comparison of two sub-expressions: =, <>, <, <=, >, >=, is (null), not (null)."""

    def __init__(self, left, right, comp_type):
        if comp_type not in _ORDERED_OPERATORS and comp_type not in _NULL_TESTS:
            raise ValueError(f"unsupported comparison type {comp_type!r}")
        super().__init__((left, right), TypeId.INT, ExpressionType.COMPARISON)
        self.comp_type = comp_type

    def _compare(self, lhs, rhs):
        null_test = _NULL_TESTS.get(self.comp_type)
        if null_test is not None:
            return CmpBool.of(null_test(lhs))
        if lhs is None or rhs is None:
            return CmpBool.NULL
        return CmpBool.of(_ORDERED_OPERATORS[self.comp_type](lhs, rhs))

    def evaluate(self, row):
        lhs = self.child_at(0).evaluate(row)
        rhs = self.child_at(1).evaluate(row)
        return _as_field(self._compare(lhs, rhs))

    def evaluate_join(self, left_row, right_row):
        lhs = self.child_at(0).evaluate_join(left_row, right_row)
        rhs = self.child_at(1).evaluate_join(left_row, right_row)
        return _as_field(self._compare(lhs, rhs))


class LogicExpression(AbstractExpression):
    """Three-valued AND / OR of two boolean sub-expressions."""

    def __init__(self, left, right, logic_type):
        if left.return_type is not TypeId.INT or right.return_type is not TypeId.INT:
            raise TypeError("expect boolean from either side")
        super().__init__((left, right), TypeId.INT, ExpressionType.LOGIC)
        self.logic_type = logic_type

    @staticmethod
    def parse_type(value):
        """Map the keyword "and" or "or" to a LogicType."""
        if value == "and":
            return LogicType.AND
        if value == "or":
            return LogicType.OR
        raise ValueError(f"unsupported logic type {value!r}")

    def _compute(self, lhs, rhs):
        left, right = _as_cmp_bool(lhs), _as_cmp_bool(rhs)
        if self.logic_type is LogicType.AND:
            if CmpBool.FALSE in (left, right):
                return CmpBool.FALSE
            if left is CmpBool.TRUE and right is CmpBool.TRUE:
                return CmpBool.TRUE
            return CmpBool.NULL
        if self.logic_type is LogicType.OR:
            if left is CmpBool.FALSE and right is CmpBool.FALSE:
                return CmpBool.FALSE
            if CmpBool.TRUE in (left, right):
                return CmpBool.TRUE
            return CmpBool.NULL
        raise ValueError(f"unsupported logic type {self.logic_type!r}")

    def evaluate(self, row):
        lhs = self.child_at(0).evaluate(row)
        rhs = self.child_at(1).evaluate(row)
        return _as_field(self._compute(lhs, rhs))

    def evaluate_join(self, left_row, right_row):
        lhs = self.child_at(0).evaluate_join(left_row, right_row)
        rhs = self.child_at(1).evaluate_join(left_row, right_row)
        return _as_field(self._compute(lhs, rhs))