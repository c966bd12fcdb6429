import numpy as np
import pytest

from noisyfit.datasets.synthetic import (
    DataSet,
    Sample,
    iter_linear_chunks,
    make_linear_data,
    make_train_test,
    num_chunks,
    split_sizes,
)


@pytest.mark.parametrize(
    "size,expected",
    [(1000, (800, 200)), (1, (0, 1)), (7, (5, 2)), (10, (8, 2)), (0, (0, 0)), (1_000_000_000, (800_000_000, 200_000_000))],
)
def test_split_sizes(size, expected):
    train, test = split_sizes(size)
    assert (train, test) == expected
    assert train + test == size


def test_test_variant_is_noise_free_and_in_range():
    rng = np.random.default_rng(0)
    data = make_linear_data(2.0, 5.0, 500, rng)
    assert len(data) == 500
    assert data.x.min() >= -255.0 and data.x.max() <= 255.0
    assert np.array_equal(data.y, data.x * 2.0 + 5.0)


def test_train_variant_noise_bounded_per_sample():
    rng = np.random.default_rng(1)
    data = make_linear_data(-3.0, 1.5, 2000, rng, input_min=-10.0, input_max=10.0, noise_range=4.0)
    resid = data.y - (data.x * -3.0 + 1.5)
    assert np.all(np.abs(resid) <= 4.0 + 1e-9)
    # independent draws, not a constant offset
    assert resid.std() > 1.0


def test_empty_and_invalid_counts():
    rng = np.random.default_rng(2)
    assert len(make_linear_data(1.0, 1.0, 0, rng, noise_range=3.0)) == 0
    with pytest.raises(ValueError):
        make_linear_data(1.0, 1.0, -1, rng)
    with pytest.raises(ValueError):
        make_linear_data(1.0, 1.0, 5, rng, input_min=1.0, input_max=0.0)


def test_make_train_test_split_and_noise():
    rng = np.random.default_rng(3)
    train, test = make_train_test(2.0, 5.0, 1000, noise_range=2.0, rng=rng)
    assert (len(train), len(test)) == (800, 200)
    assert np.array_equal(test.y, test.x * 2.0 + 5.0)
    assert not np.array_equal(train.y, train.x * 2.0 + 5.0)


def test_chunks_consecutive_last_shorter():
    ds = DataSet(np.arange(25.0), np.arange(25.0) * 2)
    sizes = [len(c) for c in ds.chunks(10)]
    assert sizes == [10, 10, 5]
    assert num_chunks(25, 10) == 3
    assert num_chunks(0, 10) == 0
    assert list(DataSet.empty().chunks(10)) == []
    first = next(ds.chunks(10))
    assert first.x[0] == 0.0 and first.x[-1] == 9.0
    with pytest.raises(ValueError):
        next(ds.chunks(0))


def test_stream_chunks_cover_count():
    rng = np.random.default_rng(4)
    chunks = list(iter_linear_chunks(2.0, 5.0, 95, 10, rng))
    assert [len(c) for c in chunks] == [10] * 9 + [5]
    assert all(np.array_equal(c.y, c.x * 2.0 + 5.0) for c in chunks)


def test_samples_and_shapes():
    ds = DataSet.from_samples([(1.0, 3.0), (2.0, 5.0)])
    assert list(ds) == [Sample(1.0, 3.0), Sample(2.0, 5.0)]
    assert list(ds)[0].input == 1.0
    with pytest.raises(ValueError):
        DataSet(np.zeros(3), np.zeros(2))
