'''
Tests for the shared core: configuration, exceptions, validation, results.
'''

import json
import logging

import numpy as np
import pytest

import garchlik
from garchlik.core.config import (
    ConfigManager, get_config, get_config_manager, reset_config, set_config
)
from garchlik.core.exceptions import (
    ConfigurationError, DataError, DimensionError, GarchLikError, NumericError,
    ParameterError, raise_numeric_error
)
from garchlik.core.results import DCCLikelihoodResult, LikelihoodResult
from garchlik.core.validation import (
    as_float_array, validate_finite, validate_matrix_shape, validate_square_matrix,
    validate_strictly_positive, validate_symmetric, validate_vector
)
from garchlik.version import get_version_components, get_version_info


@pytest.fixture
def fresh_manager(tmp_path, monkeypatch):
    """A configuration manager isolated from the user's home directory."""
    monkeypatch.setenv("GARCHLIK_CONFIG_FILE", str(tmp_path / "config.json"))
    return ConfigManager()


# ---- Configuration ----

def test_config_defaults():
    assert get_config("numerical", "min_lagged_std") == 0.0
    assert get_config("numerical", "dcc_boundary_tol") == 1e-8
    assert get_config("performance", "max_workers") == 1
    assert get_config("logging", "log_level") == "WARNING"
    assert get_config("numerical", "missing", "fallback") == "fallback"
    assert get_config("missing", "option") is None


def test_set_and_reset_config():
    set_config("numerical", "symmetry_tol", 1e-6)
    assert get_config("numerical", "symmetry_tol") == 1e-6
    assert "numerical.symmetry_tol" in get_config_manager().get_modified_options()

    reset_config("numerical", "symmetry_tol")
    assert get_config("numerical", "symmetry_tol") == 1e-10
    assert get_config_manager().get_modified_options() == []


def test_set_config_coerces_type():
    set_config("performance", "max_workers", "4")
    assert get_config("performance", "max_workers") == 4


def test_reset_section():
    set_config("numerical", "min_lagged_std", 1e-3)
    set_config("performance", "max_workers", 3)
    reset_config("numerical")

    assert get_config("numerical", "min_lagged_std") == 0.0
    assert get_config("performance", "max_workers") == 3


@pytest.mark.parametrize("section, option, value", [
    ("numerical", "min_lagged_std", -1.0),
    ("numerical", "dcc_boundary_tol", 1.5),
    ("performance", "max_workers", 0),
    ("logging", "log_level", "VERBOSE"),
    ("numerical", "symmetry_tol", "not a number"),
])
def test_invalid_config_values(section, option, value):
    with pytest.raises(ConfigurationError):
        set_config(section, option, value)


def test_unknown_option():
    with pytest.raises(ConfigurationError):
        set_config("numerical", "does_not_exist", 1.0)

    with pytest.raises(ConfigurationError):
        reset_config("no_such_section")


def test_env_overrides(fresh_manager, monkeypatch):
    monkeypatch.setenv("GARCHLIK_NUMERICAL_DCC_BOUNDARY_TOL", "1e-6")
    monkeypatch.setenv("GARCHLIK_PERFORMANCE_MAX_WORKERS", "8")
    monkeypatch.setenv("GARCHLIK_LOGGING_CONSOLE_LOGGING", "false")
    monkeypatch.setenv("GARCHLIK_UNRELATED", "ignored")

    fresh_manager.initialize()

    assert fresh_manager.get("numerical", "dcc_boundary_tol") == 1e-6
    assert fresh_manager.get("performance", "max_workers") == 8
    assert fresh_manager.get("logging", "console_logging") is False


def test_user_file(fresh_manager, tmp_path, monkeypatch):
    config_file = tmp_path / "config.json"
    config_file.write_text(json.dumps({
        "numerical": {"min_lagged_std": 1e-12, "unknown": 1},
        "performance": {"max_workers": 2},
    }))
    # Environment wins over the file
    monkeypatch.setenv("GARCHLIK_PERFORMANCE_MAX_WORKERS", "5")

    fresh_manager.initialize()

    assert fresh_manager.get("numerical", "min_lagged_std") == 1e-12
    assert fresh_manager.get("performance", "max_workers") == 5


def test_unreadable_user_file(fresh_manager, tmp_path):
    (tmp_path / "config.json").write_text("{not json")
    with pytest.raises(ConfigurationError):
        fresh_manager.initialize()


def test_logging_section_configures_package_logger():
    set_config("logging", "log_level", "DEBUG")
    assert logging.getLogger("garchlik").level == logging.DEBUG

    set_config("logging", "console_logging", False)
    assert logging.getLogger("garchlik").handlers == []


def test_reset_logging_reconfigures_package_logger():
    package_logger = logging.getLogger("garchlik")

    set_config("logging", "log_level", "DEBUG")
    reset_config("logging", "log_level")
    assert package_logger.level == logging.WARNING

    set_config("logging", "log_level", "ERROR")
    set_config("logging", "console_logging", False)
    reset_config("logging")
    assert package_logger.level == logging.WARNING
    assert len(package_logger.handlers) == 1


def test_config_to_dict():
    config = get_config_manager().to_dict()
    assert set(config) == {"numerical", "performance", "logging"}
    assert config["numerical"]["symmetry_tol"] == 1e-10


# ---- Exceptions ----

def test_exception_hierarchy():
    for error_class in (ParameterError, DimensionError, NumericError, DataError, ConfigurationError):
        assert issubclass(error_class, GarchLikError)


def test_exception_context():
    with pytest.raises(NumericError) as exc_info:
        raise_numeric_error("Matrix not positive definite", operation="Cholesky",
                            values=4, error_type="not positive definite",
                            details="leading minor 2 is negative")

    error = exc_info.value
    assert error.values == 4
    assert error.operation == "Cholesky"
    text = str(error)
    assert "Matrix not positive definite" in text
    assert "Operation: Cholesky" in text
    assert "Details: leading minor 2 is negative" in text


def test_context_rendering():
    error = DimensionError("bad", array_name="x", expected_shape=(3,), actual_shape=(100,))
    assert "Array: x" in str(error)
    assert "Actual Shape: (100,)" in str(error)

    error = ParameterError("bad", param_name="p", param_value=np.zeros(50))
    assert "Array with shape (50,)" in str(error)


# ---- Validation ----

def test_validate_vector():
    np.testing.assert_array_equal(validate_vector(np.ones((3, 1))), np.ones(3))
    assert validate_vector([1, 2]).dtype == np.float64

    with pytest.raises(DimensionError):
        validate_vector(np.ones((2, 2)))

    with pytest.raises(DimensionError):
        validate_vector([1.0, 2.0], expected_length=3)


def test_validate_matrix_shape():
    matrix = validate_matrix_shape([[1, 2], [3, 4], [5, 6]], expected_cols=2, min_rows=2)
    assert matrix.shape == (3, 2)

    with pytest.raises(DimensionError):
        validate_matrix_shape(np.ones((3, 2)), expected_rows=4)

    with pytest.raises(DimensionError):
        validate_matrix_shape(np.ones((1, 2)), min_rows=2)

    with pytest.raises(DimensionError):
        validate_square_matrix(np.ones((2, 3)))


def test_validate_values():
    with pytest.raises(DataError) as exc_info:
        validate_finite(np.array([1.0, 2.0, np.inf]))
    assert exc_info.value.index == (2,)

    with pytest.raises(DataError):
        validate_strictly_positive(np.array([1.0, -1.0]))

    validate_symmetric(np.array([[1.0, 0.2], [0.2 + 1e-13, 1.0]]))
    with pytest.raises(DataError):
        validate_symmetric(np.array([[1.0, 0.2], [0.3, 1.0]]))

    with pytest.raises(DataError):
        as_float_array([["a", "b"]])

    with pytest.raises(TypeError):
        as_float_array(None)


# ---- Results ----

def test_result_summary():
    result = LikelihoodResult(model_name="test", loglikelihood=np.array([0.0, -1.0, -2.0]))
    assert result.nobs == 3
    assert result.total_loglikelihood == -3.0
    assert "Model: test" in result.summary()


def test_dcc_result_correlations():
    cov = np.full((2, 2, 2), np.nan)
    cov[:, :, 1] = [[4.0, 1.0], [1.0, 1.0]]
    result = DCCLikelihoodResult(model_name="DCC(1,1)", loglikelihood=np.zeros(2), covariances=cov)

    corr = result.correlations()
    np.testing.assert_allclose(corr[:, :, 1], [[1.0, 0.5], [0.5, 1.0]])


# ---- Package ----

def test_version():
    info = get_version_info()
    assert garchlik.__version__ == info["version"]
    assert ".".join(str(c) for c in get_version_components()) == info["version"]
