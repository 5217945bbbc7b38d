import pandas as pd
import pytest

from data_import_utility.transformations import TransformationResult


@pytest.fixture
def sample_row() -> dict[str, object]:
    """A source row shaped like the rows produced from an imported table."""
    return {
        "first": "Test Input",
        "second": "Test Input 2",
        "status": "A",
        "amount": "5493.39",
        "code": "280-190533-1",
        "empty": None,
    }


@pytest.fixture
def row_result(sample_row: dict[str, object]) -> TransformationResult:
    return TransformationResult.from_value(None, record=sample_row)


@pytest.fixture
def people_frame() -> pd.DataFrame:
    return pd.DataFrame(
        {
            "First Name": ["Ann", "Bob", "Cy"],
            "AGE": [30, 41, None],
            "Status": ["A", "I", "A"],
        }
    )
