import math
import numpy as np
import pytest
import sympy as sp

from symbolic_diff import (
    Expression, Node, VariableNode, ConstantNode, NegateNode, BinaryOpNode, UnaryOpNode, OpType,
    as_binary_op, as_function, make_binary, make_function,
    X, const, neg, add, sub, mul, div, power, exp, log, sin, cos
)


def test_structural_equality_and_hash():
    """Trees built separately compare and hash by shape and leaf values"""
    a = add(mul(const(2), X), sin(X))
    b = BinaryOpNode(OpType.ADD,
                     BinaryOpNode(OpType.MUL, ConstantNode(2.0), VariableNode()),
                     UnaryOpNode(OpType.SIN, VariableNode()))
    assert a == b
    assert hash(a) == hash(b)
    assert a != add(mul(const(3), X), sin(X))
    assert sin(X) != cos(X)
    assert neg(X) != X
    assert len({a, b}) == 1


def test_nan_constants_are_equal():
    assert const(float('nan')) == const(float('nan'))
    assert hash(const(float('nan'))) == hash(const(float('nan')))
    assert const(0.0) == const(-0.0)


def test_nodes_are_immutable():
    node = add(X, const(1))
    with pytest.raises(AttributeError):
        node.left = const(2)
    with pytest.raises(AttributeError):
        const(1).value = 2.0
    assert node == add(X, const(1))


def test_invalid_operator_tags_are_rejected():
    with pytest.raises(ValueError):
        BinaryOpNode(OpType.SIN, X, X)
    with pytest.raises(ValueError):
        UnaryOpNode(OpType.ADD, X)


def test_operator_view():
    assert as_binary_op(mul(X, const(2))) == (OpType.MUL, X, const(2))
    assert as_binary_op(sin(X)) is None
    assert as_binary_op(neg(X)) is None
    assert as_binary_op(X) is None


def test_function_view():
    assert as_function(log(add(X, const(1)))) == (OpType.LOG, add(X, const(1)))
    assert as_function(power(X, const(2))) is None
    assert as_function(const(3)) is None


def test_builders_rebuild_the_same_kind():
    for node in [add(X, X), sub(X, X), mul(X, X), div(X, X), power(X, X)]:
        op, left, right = as_binary_op(node)
        assert make_binary(op, left, right) == node
    for node in [exp(X), log(X), sin(X), cos(X)]:
        op, argument = as_function(node)
        assert make_function(op, argument) == node


def test_size_and_repr():
    node = add(X, mul(const(2), X))
    assert node.size() == 5
    assert repr(mul(const(2), X)) == "Mul(Const(2.0), X)"
    assert repr(neg(exp(X))) == "Neg(Exp(X))"


def test_evaluate():
    expr = Expression(add(mul(const(2), X), const(1)))
    np.testing.assert_allclose(expr.evaluate([0.0, 1.0, 2.0]), [1.0, 3.0, 5.0])

    expr = Expression(mul(sin(X), exp(neg(X))))
    values = np.linspace(0.1, 2.0, 7)
    np.testing.assert_allclose(expr.evaluate(values), np.sin(values) * np.exp(-values))


def test_evaluate_follows_ieee_semantics():
    assert math.isinf(Expression(div(const(1), X)).evaluate(0.0)[0])
    assert math.isnan(Expression(log(X)).evaluate(-1.0)[0])
    assert math.isnan(Expression(power(X, const(0.5))).evaluate(-4.0)[0])


def test_to_sympy():
    x = sp.Symbol('x')
    node = sub(power(X, const(2)), div(sin(X), const(4)))
    assert sp.simplify(node.to_sympy() - (x**2 - sp.sin(x) / 4)) == 0
    assert const(3).to_sympy() == sp.Integer(3)


def test_expression_wrapper():
    expr = Expression.from_string("x ^ 2")
    assert expr == Expression(power(X, const(2)))
    assert expr.differentiate().simplify().to_string() == "2 * x"
    assert expr.size() == 3
    assert isinstance(expr.root, Node)
