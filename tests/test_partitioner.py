import pytest

from dkmeans.distributed import partition_range, partition_all


def test_even_split():
    parts = partition_all(12, 4)
    assert [(p.start, p.end) for p in parts] == [(0, 4), (4, 8), (8, 12)]
    assert [p.rank for p in parts] == [1, 2, 3]


def test_last_worker_takes_remainder():
    parts = partition_all(10, 4)
    assert [(p.start, p.end) for p in parts] == [(0, 3), (3, 6), (6, 10)]


def test_fewer_points_than_workers():
    parts = partition_all(2, 4)
    assert [len(p) for p in parts] == [0, 0, 2]


@pytest.mark.parametrize("n_points,size", [(0, 2), (1, 2), (7, 3), (100, 8), (99, 5)])
def test_partitions_cover_dataset_once(n_points, size):
    parts = partition_all(n_points, size)
    covered = [i for p in parts for i in p.indices().tolist()]
    assert covered == list(range(n_points))


def test_take_slices_rows():
    import torch
    X = torch.arange(10).reshape(5, 2)
    part = partition_range(5, 3, 2)
    assert part.take(X).tolist() == [[4, 5], [6, 7], [8, 9]]


@pytest.mark.parametrize("size,rank", [(1, 1), (3, 0), (3, 3)])
def test_invalid_arguments(size, rank):
    with pytest.raises(ValueError):
        partition_range(10, size, rank)
