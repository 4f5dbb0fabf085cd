# garchlik/core/validation.py

"""
Input validation for the likelihood kernels.

Every kernel validates its inputs completely before the first recursion step,
so shape problems surface as DimensionError and bad values as DataError
rather than as NaN in a likelihood sum. The functions return float64 NumPy
arrays so callers can pass lists, NumPy arrays or Pandas objects alike.
"""

from typing import Any, Optional

import numpy as np
import pandas as pd

from garchlik.core.exceptions import raise_data_error, raise_dimension_error


def as_float_array(data: Any, data_name: str = "data") -> np.ndarray:
    """Convert array-like input (including Pandas objects) to a float64 array.

    Args:
        data: Input to convert
        data_name: Name of the input for error messages

    Returns:
        np.ndarray: float64 copy or view of the input

    Raises:
        TypeError: If data is None
        DataError: If the input cannot be interpreted as numbers
    """
    if data is None:
        raise TypeError(f"{data_name} cannot be None")

    if isinstance(data, (pd.Series, pd.DataFrame)):
        data = data.to_numpy()

    try:
        return np.asarray(data, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise_data_error(
            f"{data_name} could not be converted to a numeric array",
            data_name=data_name,
            issue=str(e)
        )


def validate_vector(
    vector: Any,
    expected_length: Optional[int] = None,
    vector_name: str = "vector"
) -> np.ndarray:
    """Validate that input is a vector with the expected length.

    Column and row vectors are flattened.

    Raises:
        DimensionError: If the input is not 1-dimensional or has the wrong length
    """
    vector = as_float_array(vector, vector_name)

    if vector.ndim == 2 and 1 in vector.shape:
        vector = vector.ravel()
    elif vector.ndim != 1:
        raise_dimension_error(
            f"{vector_name} must be 1-dimensional, got shape {vector.shape}",
            array_name=vector_name,
            expected_shape="1D vector",
            actual_shape=vector.shape
        )

    if expected_length is not None and len(vector) != expected_length:
        raise_dimension_error(
            f"{vector_name} has length {len(vector)}, expected {expected_length}",
            array_name=vector_name,
            expected_shape=f"vector of length {expected_length}",
            actual_shape=vector.shape
        )

    return vector


def validate_matrix_shape(
    matrix: Any,
    expected_rows: Optional[int] = None,
    expected_cols: Optional[int] = None,
    matrix_name: str = "matrix",
    min_rows: Optional[int] = None
) -> np.ndarray:
    """Validate that input is a matrix with the expected dimensions.

    Args:
        matrix: Matrix to validate
        expected_rows: Expected number of rows, or None for any
        expected_cols: Expected number of columns, or None for any
        matrix_name: Name of the matrix for error messages
        min_rows: Minimum number of rows, or None for no minimum

    Returns:
        np.ndarray: The validated float64 matrix

    Raises:
        DimensionError: If the dimensions do not match
    """
    matrix = as_float_array(matrix, matrix_name)

    if matrix.ndim != 2:
        raise_dimension_error(
            f"{matrix_name} must be 2-dimensional, got {matrix.ndim} dimensions",
            array_name=matrix_name,
            expected_shape="2D matrix",
            actual_shape=matrix.shape
        )

    rows, cols = matrix.shape
    if expected_rows is not None and rows != expected_rows:
        raise_dimension_error(
            f"{matrix_name} has {rows} rows, expected {expected_rows}",
            array_name=matrix_name,
            expected_shape=f"({expected_rows}, {expected_cols if expected_cols else 'any'})",
            actual_shape=matrix.shape
        )

    if expected_cols is not None and cols != expected_cols:
        raise_dimension_error(
            f"{matrix_name} has {cols} columns, expected {expected_cols}",
            array_name=matrix_name,
            expected_shape=f"({expected_rows if expected_rows else 'any'}, {expected_cols})",
            actual_shape=matrix.shape
        )

    if min_rows is not None and rows < min_rows:
        raise_dimension_error(
            f"{matrix_name} has {rows} rows, at least {min_rows} are required",
            array_name=matrix_name,
            expected_shape=f"(>= {min_rows}, {cols})",
            actual_shape=matrix.shape
        )

    return matrix


def validate_square_matrix(matrix: Any, matrix_name: str = "matrix") -> np.ndarray:
    """Validate that input is a square matrix.

    Raises:
        DimensionError: If the matrix is not 2-dimensional and square
    """
    matrix = validate_matrix_shape(matrix, matrix_name=matrix_name)
    if matrix.shape[0] != matrix.shape[1]:
        raise_dimension_error(
            f"{matrix_name} must be square, got shape {matrix.shape}",
            array_name=matrix_name,
            expected_shape=f"({matrix.shape[0]}, {matrix.shape[0]})",
            actual_shape=matrix.shape
        )
    return matrix


def validate_finite(array: np.ndarray, data_name: str = "data") -> np.ndarray:
    """Validate that an array contains no NaN or infinite values.

    Raises:
        DataError: If a non-finite value is found
    """
    if np.isnan(array).any():
        raise_data_error(
            f"{data_name} contains NaN values",
            data_name=data_name,
            issue="contains NaN values",
            index=tuple(int(i) for i in np.argwhere(np.isnan(array))[0])
        )
    if np.isinf(array).any():
        raise_data_error(
            f"{data_name} contains infinite values",
            data_name=data_name,
            issue="contains infinite values",
            index=tuple(int(i) for i in np.argwhere(np.isinf(array))[0])
        )
    return array


def validate_strictly_positive(array: np.ndarray, data_name: str = "data") -> np.ndarray:
    """Validate that every element of an array is strictly positive.

    Raises:
        DataError: If a non-positive value is found
    """
    if np.any(array <= 0):
        raise_data_error(
            f"{data_name} must be strictly positive",
            data_name=data_name,
            issue="contains non-positive values",
            index=tuple(int(i) for i in np.argwhere(array <= 0)[0])
        )
    return array


def validate_symmetric(matrix: np.ndarray, matrix_name: str = "matrix", tol: float = 1e-10) -> np.ndarray:
    """Validate that a square matrix is symmetric to within ``tol``.

    Raises:
        DataError: If the largest asymmetry exceeds the tolerance
    """
    asymmetry = float(np.max(np.abs(matrix - matrix.T))) if matrix.size else 0.0
    if asymmetry > tol:
        raise_data_error(
            f"{matrix_name} must be symmetric (max |A - A'| = {asymmetry:.3e})",
            data_name=matrix_name,
            issue="not symmetric"
        )
    return matrix
