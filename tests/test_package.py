"""Package-level smoke tests."""

import logging

import dsblog
from dsblog.config import BASE_DIR, POSTS_DIR, configure_logging
from dsblog.exceptions import DsblogError, FrontMatterError, MissingColumnError, ModelNotTrainedError


def test_version_is_a_string():
    assert isinstance(dsblog.__version__, str)
    assert dsblog.__version__


def test_paths_point_into_the_repository():
    assert POSTS_DIR.startswith(BASE_DIR)


def test_configure_logging_is_idempotent():
    configure_logging("WARNING")
    configure_logging("WARNING")
    assert logging.getLogger().handlers


def test_exception_hierarchy():
    assert issubclass(FrontMatterError, ValueError)
    assert issubclass(MissingColumnError, KeyError)
    assert issubclass(ModelNotTrainedError, RuntimeError)
    for exc in (FrontMatterError, MissingColumnError, ModelNotTrainedError):
        assert issubclass(exc, DsblogError)


def test_missing_column_message():
    err = MissingColumnError("price", ["id", "room_type"])
    assert str(err) == "Column 'price' not found. Available columns: id, room_type"
