'''
Pytest configuration and fixtures for the garchlik test suite.

This module provides seeded random number generators, simulated EGARCH
observation matrices and simulated DCC panels, together with a fixture that
restores the default configuration after every test.
'''

from typing import Dict, Tuple

import numpy as np
import pandas as pd
import pytest

from garchlik.core.config import reset_config


# ---- Simulation helpers ----

def simulate_egarch(rng: np.random.Generator,
                    n_obs: int,
                    mean: np.ndarray,
                    omega: float,
                    alpha: float,
                    beta: float,
                    gamma: float) -> np.ndarray:
    """Simulate an observation matrix [y, 1, x] with EGARCH(1,1) errors."""
    x = np.column_stack([np.ones(n_obs), rng.standard_normal((n_obs, len(mean) - 1))])
    e = rng.standard_normal(n_obs)

    log_sigma2 = np.empty(n_obs)
    log_sigma2[0] = omega / (1 - beta)
    u = np.empty(n_obs)
    u[0] = np.exp(0.5 * log_sigma2[0]) * e[0]
    for t in range(1, n_obs):
        log_sigma2[t] = omega + alpha * np.abs(e[t-1]) + beta * log_sigma2[t-1] + gamma * e[t-1]
        u[t] = np.exp(0.5 * log_sigma2[t]) * e[t]

    y = x @ mean + u
    return np.column_stack([y, x])


def simulate_dcc_panel(rng: np.random.Generator,
                       n_obs: int,
                       corr: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """Simulate correlated standardized residuals and positive variances."""
    n_assets = corr.shape[0]
    std_residuals = rng.multivariate_normal(np.zeros(n_assets), corr, size=n_obs)
    variances = np.exp(0.3 * rng.standard_normal((n_obs, n_assets)))
    return std_residuals, variances


# ---- Basic Fixtures ----

@pytest.fixture(autouse=True)
def default_config():
    """Restore the default configuration after each test."""
    yield
    reset_config()


@pytest.fixture
def rng() -> np.random.Generator:
    """Provide a seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def sample_size() -> int:
    """Default sample size for test data."""
    return 500


# ---- EGARCH Fixtures ----

@pytest.fixture
def egarch_true_params() -> Dict[str, object]:
    """Parameters used to simulate EGARCH data (constant plus one regressor)."""
    return {
        "mean": np.array([0.1, 0.5]),
        "omega": -0.1,
        "alpha": 0.15,
        "beta": 0.9,
        "gamma": -0.08,
    }


@pytest.fixture
def egarch_param_vector(egarch_true_params) -> np.ndarray:
    """Positional parameter vector [b, omega, alpha, beta, gamma]."""
    p = egarch_true_params
    return np.concatenate([p["mean"], [p["omega"], p["alpha"], p["beta"], p["gamma"]]])


@pytest.fixture
def egarch_data(rng, sample_size, egarch_true_params) -> np.ndarray:
    """Simulated (T, 3) observation matrix [y, 1, x]."""
    return simulate_egarch(rng, sample_size, **egarch_true_params)


@pytest.fixture
def egarch_dataframe(egarch_data) -> pd.DataFrame:
    """Simulated observation matrix as a DataFrame with a business-day index."""
    index = pd.date_range("2020-01-01", periods=len(egarch_data), freq="B")
    return pd.DataFrame(egarch_data, index=index, columns=["y", "const", "x"])


@pytest.fixture
def egarch_panel(rng, egarch_true_params):
    """Three simulated series of equal length with their parameter vectors."""
    p = egarch_true_params
    params = np.concatenate([p["mean"], [p["omega"], p["alpha"], p["beta"], p["gamma"]]])
    data_list = [simulate_egarch(rng, 300, **p) for _ in range(3)]
    return [params.copy() for _ in data_list], data_list


# ---- DCC Fixtures ----

@pytest.fixture
def dcc_correlation() -> np.ndarray:
    """Correlation used to simulate DCC panels."""
    return np.array([
        [1.0, 0.5, 0.3],
        [0.5, 1.0, 0.2],
        [0.3, 0.2, 1.0]
    ])


@pytest.fixture
def dcc_panel(rng, sample_size, dcc_correlation):
    """Simulated (std_residuals, variances, qbar) for three assets."""
    std_residuals, variances = simulate_dcc_panel(rng, sample_size, dcc_correlation)
    return std_residuals, variances, dcc_correlation.copy()
