import pytest

from asl_types import INT, FLOAT
from ast_nodes import Ident
from decorations import TreeDecoration


def test_put_and_get():
    deco = TreeDecoration()
    node = Ident('x')
    deco.put_type(node, INT)
    deco.put_is_lvalue(node, True)
    deco.put_scope(node, 3)
    assert deco.get_type(node) is INT
    assert deco.get_is_lvalue(node) is True
    assert deco.get_scope(node) == 3
    assert node in deco
    assert len(deco) == 1


def test_keyed_by_identity():
    deco = TreeDecoration()
    a, b = Ident('x'), Ident('x')
    deco.put_type(a, INT)
    deco.put_type(b, FLOAT)
    assert deco.get_type(a) is INT
    assert deco.get_type(b) is FLOAT


def test_false_lvalue_is_a_fact():
    deco = TreeDecoration()
    node = Ident('f')
    deco.put_is_lvalue(node, False)
    assert deco.get_is_lvalue(node) is False
    assert not deco.has_type(node)


def test_reading_before_writing_is_a_caller_bug():
    deco = TreeDecoration()
    node = Ident('x')
    with pytest.raises(KeyError):
        deco.get_type(node)
    deco.put_type(node, INT)
    with pytest.raises(KeyError):
        deco.get_scope(node)


def test_fields_never_regress_to_unset():
    deco = TreeDecoration()
    node = Ident('x')
    deco.put_type(node, INT)
    with pytest.raises(ValueError):
        deco.put_type(node, None)
    assert deco.get_type(node) is INT
