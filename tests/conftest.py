import pytest

from semant import check_source


@pytest.fixture
def check():
    """检查源码，不打印错误"""
    def _check(source, **config):
        config.setdefault("print_errors", False)
        return check_source(source, config)
    return _check


@pytest.fixture
def kinds(check):
    """检查源码，返回错误种类列表（按发现顺序）"""
    def _kinds(source, **config):
        return check(source, **config).errors.kinds()
    return _kinds
