import importlib
import pytest


@pytest.mark.parametrize("module", [
    "dkmeans",
    "dkmeans.algorithms",
    "dkmeans.accumulators",
    "dkmeans.assignments",
    "dkmeans.base",
    "dkmeans.distances",
    "dkmeans.distributed",
    "dkmeans.initialization",
    "dkmeans.io",
    "dkmeans.spaces",
    "dkmeans.utils",
    "dkmeans.visualization",
    "dkmeans.cli",
])
def test_submodules_exist(module):
    mod = importlib.import_module(module)
    assert mod is not None


def test_public_names():
    import dkmeans
    for name in dkmeans.__all__:
        assert hasattr(dkmeans, name), name
    assert dkmeans.__version__ == "0.1.0"
