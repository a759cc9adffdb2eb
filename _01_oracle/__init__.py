"""Rules boundary: the oracle contract and shared errors.

The python-chess backed oracle lives in `_01_oracle.chess_oracle` and is
imported on demand so the search core does not depend on it.
"""

from . import exceptions, logging_config, oracle
from .exceptions import (
    IllegalMoveError,
    InvalidConfigError,
    InvalidPositionError,
    OracleContractError,
    SearchEngineError,
)
from .oracle import InPlaceOracle, Outcome, PositionOracle

__all__ = [
    "IllegalMoveError",
    "InPlaceOracle",
    "InvalidConfigError",
    "InvalidPositionError",
    "OracleContractError",
    "Outcome",
    "PositionOracle",
    "SearchEngineError",
    "exceptions",
    "logging_config",
    "oracle",
]
