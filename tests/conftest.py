import pytest

from tests import test_helpers


@pytest.fixture
def sample_csv_paths(tmp_path):
    return test_helpers.write_sample_csvs(tmp_path)
