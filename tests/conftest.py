import pytest

from grid_dispatch.dispatch_service import DispatchCoordinator


def _heap_is_valid(heap):
    for child in range(1, len(heap)):
        if heap[(child - 1) // 2].priority < heap[child].priority:
            return False
    return True


@pytest.fixture
def heap_is_valid():
    return _heap_is_valid


@pytest.fixture
def coordinator():
    return DispatchCoordinator()


@pytest.fixture
def open_grid():
    return [["." for _ in range(3)] for _ in range(3)]
