import pytest

from ivfp.arithmetic import evalctx


binary_ctxs = [evalctx.binary16, evalctx.binary32, evalctx.binary64]


@pytest.fixture(params=binary_ctxs, ids=str)
def ctx(request):
    """Each of the binary formats that can hold interval bounds."""
    return request.param
